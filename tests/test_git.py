"""
Tests for git error formatting and the GitRepo port.

Run with:
    pytest tests/test_git.py -v
"""

import shutil
import subprocess

import pytest

from llmc.git import GitError, GitRepo, format_git_error
from llmc.git.repo import NOT_A_REPO_MESSAGE, NOTHING_STAGED_MESSAGE, NOTHING_TO_COMMIT_MESSAGE


# ---------------------------------------------------------------------------
# format_git_error
# ---------------------------------------------------------------------------

class TestFormatGitError:

    @pytest.mark.parametrize("stderr, expected", [
        ("fatal: not a git repository (or any of the parent directories): .git",
         "This directory is not a Git repository. Please run this command from within a Git repository."),
        ("no changes added to commit",
         'No changes have been staged for commit. Use "git add" to stage changes first.'),
        ("nothing to commit, working tree clean",
         "No changes detected. There is nothing to commit."),
        ("fatal: Unable to create '.git/index.lock': File exists",
         "Git index is locked. Another git process may be running. Please wait and try again."),
        ("fatal: refusing to merge unrelated histories",
         "Cannot merge unrelated Git histories. This may require manual intervention."),
        ("error: pathspec 'nope.txt' did not match any files",
         "No files match the specified path. Please check the file paths and try again."),
        ("fatal: unable to read tree 1234abcd",
         "Unable to read Git repository data. The repository may be corrupted."),
    ])
    def test_known_patterns(self, stderr, expected):
        assert format_git_error("git commit", stderr, 128) == expected

    @pytest.mark.parametrize("hook, lead", [
        ("pre-commit", "Commit failed due to a pre-commit hook."),
        ("commit-msg", "Commit failed due to a commit-msg hook."),
        ("prepare-commit-msg", "Commit failed due to a prepare-commit-msg hook."),
        ("post-commit", "Post-commit hook failed, but the commit was successful."),
    ])
    def test_hook_failures_keep_original_output(self, hook, lead):
        stderr = f"{hook} hook failed: lint errors"
        result = format_git_error("git commit", stderr, 1)
        assert result.startswith(lead)
        assert result.endswith(f"Original error: {stderr}")

    def test_hook_path_is_recognised(self):
        result = format_git_error("git commit", "error: .git/hooks/pre-commit exited with 1", 1)
        assert result.startswith("Commit failed due to a pre-commit hook.")

    def test_unknown_error_with_exit_code(self):
        assert format_git_error("git commit", "  something odd  ", 2) == \
            "Git command failed (git commit) with exit code 2: something odd"

    def test_unknown_error_without_exit_code(self):
        assert format_git_error("git status", "weird") == "Git command failed (git status): weird"

    def test_falls_back_to_message(self):
        assert format_git_error("git diff", "", 1, message="spawn failed") == \
            "Git command failed (git diff) with exit code 1: spawn failed"

    def test_no_details(self):
        assert format_git_error("", "", None) == "Git command failed (git command): No error details available"


# ---------------------------------------------------------------------------
# GitRepo.validate_state with scripted git output
# ---------------------------------------------------------------------------

class ScriptedRepo(GitRepo):
    """GitRepo whose git commands answer from a dict instead of a subprocess."""

    def __init__(self, responses):
        super().__init__()
        self.responses = responses
        self.commands = []

    def _run_git(self, *args, input=None):
        self.commands.append((args, input))
        result = self.responses.get(args[0], "")
        if isinstance(result, Exception):
            raise result
        return result


class TestValidateState:

    def test_valid_when_diff_present(self):
        repo = ScriptedRepo({"rev-parse": ".git", "diff": "diff --git a/x b/x\n"})
        result = repo.validate_state()
        assert result.is_valid
        assert result.full_message == ""

    def test_not_a_repository(self):
        repo = ScriptedRepo({"rev-parse": GitError("not a repo", exit_code=128)})
        result = repo.validate_state()
        assert not result.is_valid
        assert result.message == NOT_A_REPO_MESSAGE

    def test_git_missing(self):
        repo = ScriptedRepo({"rev-parse": GitError("Git is not installed or not in PATH")})
        result = repo.validate_state()
        assert not result.is_valid
        assert result.message == "Git is not installed or not in PATH"

    def test_nothing_to_commit(self):
        repo = ScriptedRepo({"rev-parse": ".git", "diff": "", "status": ""})
        result = repo.validate_state()
        assert not result.is_valid
        assert result.message == NOTHING_TO_COMMIT_MESSAGE
        assert result.details == ""

    def test_unstaged_and_untracked_details(self):
        status = " M src/app.py\n D old.py\n?? notes.txt\n"
        repo = ScriptedRepo({"rev-parse": ".git", "diff": "", "status": status})

        result = repo.validate_state()

        assert not result.is_valid
        assert result.message == NOTHING_STAGED_MESSAGE
        assert result.details == (
            "\nUnstaged changes found in 2 file(s):\n  src/app.py\n  old.py"
            "\n\nUntracked files found (1 file(s)):\n  notes.txt"
        )

    def test_long_lists_collapse(self):
        status = "".join(f"?? file{i}.txt\n" for i in range(8))
        repo = ScriptedRepo({"rev-parse": ".git", "diff": "", "status": status})

        details = repo.validate_state().details

        assert "file4.txt" in details
        assert "file5.txt" not in details
        assert details.endswith("  ... and 3 more")

    def test_git_failure_fails_closed(self):
        repo = ScriptedRepo({"rev-parse": ".git", "diff": GitError("Git index is locked.")})
        result = repo.validate_state()
        assert not result.is_valid
        assert result.message == "Git index is locked."

    def test_commit_sends_message_on_stdin(self):
        repo = ScriptedRepo({})
        repo.commit("feat: x\n\n- body")
        assert repo.commands == [(("commit", "-F", "-"), "feat: x\n\n- body")]


# ---------------------------------------------------------------------------
# GitRepo against a real repository
# ---------------------------------------------------------------------------

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


@pytest.fixture
def repo_dir(tmp_path):
    def git(*args):
        subprocess.run(["git", *args], cwd=tmp_path, check=True, capture_output=True)
    git("init", "-q")
    git("config", "user.email", "dev@example.com")
    git("config", "user.name", "Dev")
    git("config", "commit.gpgsign", "false")
    return tmp_path


@requires_git
class TestRealRepository:

    def test_outside_repository(self, tmp_path, monkeypatch):
        outside = tmp_path / "plain"
        outside.mkdir()
        # Stop git from discovering a repository above tmp_path
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
        result = GitRepo(cwd=outside).validate_state()
        assert not result.is_valid
        assert result.message == NOT_A_REPO_MESSAGE

    def test_untracked_file_is_reported(self, repo_dir):
        (repo_dir / "new.txt").write_text("hello\n")
        result = GitRepo(cwd=repo_dir).validate_state()
        assert not result.is_valid
        assert result.message == NOTHING_STAGED_MESSAGE
        assert "new.txt" in result.details

    def test_stage_diff_and_commit(self, repo_dir):
        (repo_dir / "app.py").write_text("x = 1\n")
        subprocess.run(["git", "add", "app.py"], cwd=repo_dir, check=True)
        repo = GitRepo(cwd=repo_dir)

        assert repo.validate_state().is_valid
        assert "+x = 1" in repo.get_staged_diff()

        repo.commit("feat: add app\n\n- first module")

        log = subprocess.run(["git", "log", "--format=%B", "-1"], cwd=repo_dir,
                             capture_output=True, text=True, check=True).stdout
        assert log.strip() == "feat: add app\n\n- first module"
        assert repo.get_staged_diff() == ""

    def test_commit_failure_raises_git_error(self, repo_dir):
        repo = GitRepo(cwd=repo_dir)
        with pytest.raises(GitError) as exc:
            repo.commit("feat: nothing")
        assert exc.value.exit_code
        assert exc.value.command == "git commit -F -"
