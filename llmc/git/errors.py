"""Git error types and human-readable error messages."""

# (patterns, message) pairs, checked in order against stderr
_SIMPLE_PATTERNS: list[tuple[tuple[str, ...], str]] = [
    (('not a git repository',),
     'This directory is not a Git repository. '
     'Please run this command from within a Git repository.'),
    (('no changes added to commit',),
     'No changes have been staged for commit. Use "git add" to stage changes first.'),
    (('nothing to commit',),
     'No changes detected. There is nothing to commit.'),
    (('index.lock',),
     'Git index is locked. Another git process may be running. Please wait and try again.'),
    (('refusing to merge unrelated histories',),
     'Cannot merge unrelated Git histories. This may require manual intervention.'),
    (('fatal: could not read', 'fatal: unable to read'),
     'Unable to read Git repository data. The repository may be corrupted.'),
]

# Hook failures keep the original output so the user can act on it
_HOOK_MESSAGES: list[tuple[str, str]] = [
    ('pre-commit',
     'Commit failed due to a pre-commit hook. Please resolve the issues and try again.'),
    ('commit-msg',
     'Commit failed due to a commit-msg hook. Please resolve the issues and try again.'),
    ('prepare-commit-msg',
     'Commit failed due to a prepare-commit-msg hook. Please resolve the issues and try again.'),
    ('post-commit',
     'Post-commit hook failed, but the commit was successful. '
     'You may want to check the hook configuration.'),
]


class GitError(Exception):
    """Raised when git operations fail. The message is already user-facing."""

    def __init__(self, message: str, command: str = "", stderr: str = "", exit_code: int | None = None):
        super().__init__(message)
        self.command = command
        self.stderr = stderr
        self.exit_code = exit_code


def _match_hook(details: str) -> str | None:
    # prepare-commit-msg contains "commit-msg", so test the longest names first
    for hook, text in sorted(_HOOK_MESSAGES, key=lambda h: len(h[0]), reverse=True):
        if f'{hook} hook failed' in details or f'.git/hooks/{hook}' in details:
            return f"{text} Original error: {details}"
    return None


def format_git_error(command: str = "", stderr: str = "", exit_code: int | None = None, message: str = "") -> str:
    """Turn raw git failure output into a message that says what to do next."""
    command = command or 'git command'
    base = (
        f"Git command failed ({command}) with exit code {exit_code}"
        if exit_code else f"Git command failed ({command})"
    )

    details = (stderr or '').strip() or (message or '').strip()
    if not details:
        return f"{base}: No error details available"

    for patterns, text in _SIMPLE_PATTERNS:
        if any(p in details for p in patterns):
            return text

    if 'pathspec' in details and 'did not match any files' in details:
        return 'No files match the specified path. Please check the file paths and try again.'

    hook_message = _match_hook(details)
    if hook_message:
        return hook_message

    return f"{base}: {details}"
