"""
Git utilities for ktlint-hook.

Locates the repository that owns a project directory: its metadata
directory (where hooks live) and its work tree (where git runs hooks).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from git import InvalidGitRepositoryError, NoSuchPathError, Repo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitRepository:
    """A discovered, non-bare git repository."""

    git_dir: Path
    work_tree: Path

    @property
    def hooks_dir(self) -> Path:
        return self.git_dir / "hooks"


def find_repository(start: Path | str | None = None) -> GitRepository | None:
    """Find the git repository containing a directory.

    Searches from the start directory upward. For linked worktrees the
    shared metadata directory is returned, since git reads hooks from there.

    Args:
        start: Directory to start searching from. Defaults to current working directory.

    Returns:
        The repository, or None when there is no repository with an object
        store, or it has no work tree.
    """
    start_path = Path(start) if start is not None else Path.cwd()

    try:
        repo = Repo(start_path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        logger.debug(f"No git repository found from {start_path}")
        return None

    try:
        git_dir = Path(repo.common_dir).resolve()
        if not (git_dir / "objects").is_dir():
            logger.debug(f"{git_dir} has no object store")
            return None
        if repo.working_tree_dir is None:
            logger.debug(f"{git_dir} is a bare repository")
            return None
        return GitRepository(git_dir=git_dir, work_tree=Path(repo.working_tree_dir).resolve())
    finally:
        repo.close()


class BuildRootError(ValueError):
    """Build root that does not lie inside the repository work tree."""


def relative_prefix(work_tree: Path, root_dir: Path) -> str:
    """Path from the work tree to the build root, '' when they coincide.

    Raises:
        BuildRootError: If root_dir is not inside work_tree.
    """
    try:
        relative = root_dir.resolve().relative_to(work_tree.resolve())
    except ValueError:
        raise BuildRootError(f"{root_dir} is not inside {work_tree}") from None
    prefix = relative.as_posix()
    return "" if prefix == "." else prefix
