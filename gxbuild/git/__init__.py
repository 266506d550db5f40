"""Git operations."""

from .repository import GitError, Repository

__all__ = [
    "GitError",
    "Repository",
]
