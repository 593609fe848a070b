"""Utility modules for ktlint-hook."""

from .git import GitRepository, find_repository, relative_prefix

__all__ = [
    "find_repository",
    "relative_prefix",
    "GitRepository",
]
