"""Git Repository - staged diff, status, commit, and pre-flight validation."""

import subprocess
from dataclasses import dataclass
from pathlib import Path

from llmc.git.errors import GitError, format_git_error

NOT_A_REPO_MESSAGE = (
    'This directory is not a Git repository. '
    'Please run this command from within a Git repository.'
)
NOTHING_STAGED_MESSAGE = 'No changes have been staged for commit. Use "git add <file>" to stage changes first.'
NOTHING_TO_COMMIT_MESSAGE = 'No changes detected. There is nothing to commit.'

# Files listed per category in validation details before collapsing
MAX_LISTED_FILES = 5


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of the pre-flight repository check."""
    is_valid: bool
    message: str = ""
    details: str = ""

    @property
    def full_message(self) -> str:
        return f"{self.message}{self.details}"


def _describe_files(heading: str, lines: list[str]) -> str:
    text = f"\n{heading}"
    for line in lines[:MAX_LISTED_FILES]:
        text += f"\n  {line[3:]}"
    if len(lines) > MAX_LISTED_FILES:
        text += f"\n  ... and {len(lines) - MAX_LISTED_FILES} more"
    return text


class GitRepo:
    """Thin wrapper over the git CLI with user-facing errors."""

    def __init__(self, cwd: str | Path | None = None):
        self.cwd = cwd

    def _run_git(self, *args: str, input: str | None = None) -> str:
        """Run a git command and return stdout."""
        command = f"git {' '.join(args)}"
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.cwd,
                input=input,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            stderr = e.stderr or ''
            # hooks and `nothing to commit` report on stdout
            details = stderr.strip() or (e.stdout or '').strip()
            raise GitError(
                format_git_error(command, details, e.returncode),
                command=command,
                stderr=details,
                exit_code=e.returncode,
            )
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH", command=command)

    def is_repo(self) -> bool:
        """True inside a work tree. Re-raises if git itself is unavailable."""
        try:
            self._run_git('rev-parse', '--git-dir')
            return True
        except GitError as e:
            if e.exit_code is None:
                raise
            return False

    def get_staged_diff(self) -> str:
        return self._run_git('diff', '--cached')

    def get_status(self) -> list[str]:
        """Porcelain status lines: 'XY path'."""
        output = self._run_git('status', '--porcelain')
        return [line for line in output.split('\n') if line.strip()]

    def commit(self, message: str) -> None:
        # -F - keeps multi-line messages intact
        self._run_git('commit', '-F', '-', input=message)

    def validate_state(self) -> ValidationResult:
        """Check that there is a repository with staged changes. Fails closed."""
        try:
            if not self.is_repo():
                return ValidationResult(False, NOT_A_REPO_MESSAGE)

            if self.get_staged_diff():
                return ValidationResult(True)

            status = self.get_status()
            if not status:
                return ValidationResult(False, NOTHING_TO_COMMIT_MESSAGE)

            unstaged = [line for line in status if line.startswith((' M', ' D', ' A'))]
            untracked = [line for line in status if line.startswith('??')]

            details = ''
            if unstaged:
                details += _describe_files(f"Unstaged changes found in {len(unstaged)} file(s):", unstaged)
            if untracked:
                if details:
                    details += '\n'
                details += _describe_files(f"Untracked files found ({len(untracked)} file(s)):", untracked)

            return ValidationResult(False, NOTHING_STAGED_MESSAGE, details)
        except GitError as e:
            return ValidationResult(False, str(e) or 'Unknown git error occurred')
