"""Git Operations Package"""

from llmc.git.errors import GitError, format_git_error
from llmc.git.repo import GitRepo, ValidationResult

__all__ = [
    "GitError",
    "GitRepo",
    "ValidationResult",
    "format_git_error",
]
