"""
Staged-file filter for lint tasks.

The generated pre-commit hook passes the staged file list to Gradle as the
``internalKtlintGitFilter`` build parameter. A lint task that receives the
parameter narrows its file set to those paths; without the parameter the
filter is not engaged and the task lints everything.

Paths are compared by suffix against the absolute file path, so the list
only has to agree with the file system from the build root down.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

from ktlint_hook.core.constants import DEFAULT_EXTENSIONS, FILTER_INCLUDE_PROPERTY_NAME

logger = logging.getLogger(__name__)


def _normalize(path: str) -> str:
    return path.replace("\\", "/")


def parse_build_parameters(values: Iterable[str]) -> dict[str, str]:
    """Parse ``key=value`` build parameters (the ``-P`` form Gradle takes).

    Raises:
        ValueError: If an entry has no '=' or an empty key.
    """
    parameters: dict[str, str] = {}
    for value in values:
        key, sep, rest = value.partition("=")
        if not sep or not key:
            raise ValueError(f"Build parameter must look like key=value, got {value!r}")
        parameters[key] = rest
    return parameters


class StagedFileFilter:
    """
    Include rule built from the staged file list.

    With a non-empty include list every directory is accepted, so traversal
    continues, and a file is accepted when its absolute path ends with one
    of the included paths. With an empty include list nothing is accepted.
    """

    def __init__(self, includes: Iterable[str]) -> None:
        self.includes: tuple[str, ...] = tuple(includes)

    @classmethod
    def from_parameter(
        cls, value: str, root_dir: Path | str, project_dir: Path | str
    ) -> StagedFileFilter:
        """
        Build the filter for one project from the raw parameter value.

        Args:
            value: Newline-separated paths, relative to the build root
            root_dir: Build root
            project_dir: Directory of the project whose task is filtered

        Returns:
            Filter keeping the entries under the project's relative path
        """
        project_relative = Path(project_dir).resolve().relative_to(Path(root_dir).resolve())
        project_prefix = "" if project_relative == Path(".") else project_relative.as_posix()

        includes = [
            _normalize(line.strip())
            for line in value.split("\n")
            if line.strip() and _normalize(line.strip()).startswith(project_prefix)
        ]
        logger.debug(f"Staged file filter for '{project_prefix}': {includes}")
        return cls(includes)

    def accepts(self, path: Path | str, is_dir: bool | None = None) -> bool:
        """Whether the lint task should see this file (or enter this directory)."""
        if not self.includes:
            return False
        entry = Path(path)
        if is_dir is None:
            is_dir = entry.is_dir()
        if is_dir:
            return True
        absolute = _normalize(str(entry.absolute()))
        return any(absolute.endswith(include) for include in self.includes)

    def __repr__(self) -> str:
        return f"StagedFileFilter(includes={list(self.includes)!r})"


def git_filter_from_parameters(
    parameters: Mapping[str, str],
    root_dir: Path | str,
    project_dir: Path | str,
) -> StagedFileFilter | None:
    """Filter for the task, or None when the hook did not pass a file list."""
    value = parameters.get(FILTER_INCLUDE_PROPERTY_NAME)
    if value is None:
        return None
    return StagedFileFilter.from_parameter(value, root_dir, project_dir)


def iter_lint_files(
    project_dir: Path | str,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    file_filter: StagedFileFilter | None = None,
) -> Iterator[Path]:
    """
    Walk a project directory and yield the files a lint task would process.

    Hidden directories (.git, .gradle, .idea) are skipped. When a filter is
    given, directories it rejects are not entered and files it rejects are
    not yielded.
    """
    suffixes = tuple(f".{ext.lstrip('.')}" for ext in extensions)
    for dirpath, dirnames, filenames in os.walk(project_dir):
        current = Path(dirpath)
        dirnames[:] = sorted(
            d
            for d in dirnames
            if not d.startswith(".")
            and (file_filter is None or file_filter.accepts(current / d, is_dir=True))
        )
        for name in sorted(filenames):
            if not name.endswith(suffixes):
                continue
            candidate = current / name
            if file_filter is None or file_filter.accepts(candidate, is_dir=False):
                yield candidate
