"""Git Operations Package"""

from smartcommit.git.repository import (
    FileChange,
    GitError,
    HISTORY_FORMAT,
    NothingStagedError,
    Repository,
)

__all__ = [
    "FileChange",
    "GitError",
    "HISTORY_FORMAT",
    "NothingStagedError",
    "Repository",
]
