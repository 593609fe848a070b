"""
Git hook installer for ktlint-hook.

Writes the generated script into <git-dir>/hooks/<hook-name>. The installer
only ever rewrites the managed region between the marker lines, so content
users keep in the same hook file survives repeated installs.

Implementation:
    - Discovers the repository from the project directory
    - Creates the hooks directory and an executable hook file when missing
    - Computes the build root prefix relative to the work tree
    - Fills an empty file, replaces an existing managed region in place,
      or appends a new region after existing content
"""

from __future__ import annotations

import logging
import stat
from pathlib import Path

from ktlint_hook.core.constants import (
    DEFAULT_EXTENSIONS,
    DEFAULT_WRAPPER,
    END_HOOK_SECTION,
    SH_SHEBANG,
    START_HOOK_SECTION,
)
from ktlint_hook.core.hooks.models import (
    HookInstallResult,
    HookSpec,
    InstallAction,
    check_hook_name,
)
from ktlint_hook.core.hooks.script import generate_git_hook, wrap_managed_region
from ktlint_hook.utils.git import find_repository, relative_prefix

logger = logging.getLogger(__name__)

_EXECUTABLE = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def merge_hook_content(existing: str, script: str) -> tuple[str, InstallAction]:
    """
    Merge a generated script into the current hook file content.

    Args:
        existing: Current hook file content ('' for an empty file)
        script: Generated script body, without markers

    Returns:
        Tuple of (new content, action taken)

    Example:
        >>> content, action = merge_hook_content("", "echo hi\\n")
        >>> action
        <InstallAction.CREATED: 'created'>
    """
    if not existing:
        return SH_SHEBANG + wrap_managed_region(script), InstallAction.CREATED

    start = existing.find(START_HOOK_SECTION)
    if start != -1:
        end = existing.find(END_HOOK_SECTION, start)
        if end == -1:
            # Unterminated region runs to end of file
            return existing[:start] + wrap_managed_region(script), InstallAction.REPLACED
        merged = existing[:start] + START_HOOK_SECTION + script + existing[end:]
        return merged, InstallAction.REPLACED

    separator = "" if existing.endswith("\n") else "\n"
    return existing + separator + wrap_managed_region(script), InstallAction.APPENDED


def _read_hook(path: Path) -> str:
    # Bytes outside UTF-8 in user content round-trip unchanged
    with path.open("r", encoding="utf-8", errors="surrogateescape", newline="") as f:
        return f.read()


def _write_hook(path: Path, content: str) -> None:
    with path.open("w", encoding="utf-8", errors="surrogateescape", newline="") as f:
        f.write(content)


def install_git_hook(
    hook_name: str,
    task_name: str,
    update_commit: bool = False,
    *,
    project_dir: Path | str | None = None,
    root_dir: Path | str | None = None,
    wrapper: str = DEFAULT_WRAPPER,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> HookInstallResult:
    """
    Install or upgrade the ktlint managed region in a git hook.

    A missing repository is not an error: a warning is logged and the
    result is SKIPPED with no file touched. File system errors propagate.

    Args:
        hook_name: Hook file name under <git-dir>/hooks (e.g. pre-commit)
        task_name: Gradle task the hook runs
        update_commit: Re-stage files the task rewrote
        project_dir: Directory repository discovery starts from (defaults to cwd)
        root_dir: Build root, the directory holding the Gradle wrapper
            (defaults to project_dir)
        wrapper: Build wrapper script name
        extensions: Source file extensions the hook lints

    Returns:
        HookInstallResult describing the change

    Raises:
        OSError: If the hooks directory or hook file cannot be created, read or written
        InvalidHookNameError: If hook_name is not a plain file name
        BuildRootError: If root_dir is outside the repository work tree

    Example:
        >>> result = install_git_hook("pre-commit", "ktlintCheck", project_dir=Path("."))
        >>> result.action
        <InstallAction.REPLACED: 'replaced'>
    """
    check_hook_name(hook_name)
    project_path = Path(project_dir) if project_dir is not None else Path.cwd()
    root_path = Path(root_dir) if root_dir is not None else project_path

    repo = find_repository(project_path)
    if repo is None:
        logger.warning("No git folder was found!")
        return HookInstallResult(
            success=False,
            action=InstallAction.SKIPPED,
            message=f"No git repository found from {project_path}",
        )

    logger.info(f".git directory path: {repo.git_dir}")
    if not repo.hooks_dir.exists():
        logger.info("git hooks directory doesn't exist, creating one")
        repo.hooks_dir.mkdir()

    hook_file = repo.hooks_dir / hook_name
    logger.info(f"Hook file: {hook_file}")
    if not hook_file.exists():
        hook_file.touch()
    mode = hook_file.stat().st_mode
    if mode & _EXECUTABLE != _EXECUTABLE:
        hook_file.chmod(mode | _EXECUTABLE)

    spec = HookSpec(
        task_name=task_name,
        update_commit=update_commit,
        prefix=relative_prefix(repo.work_tree, root_path),
        wrapper=wrapper,
        extensions=extensions,
    )
    content, action = merge_hook_content(_read_hook(hook_file), generate_git_hook(spec))
    _write_hook(hook_file, content)
    logger.info(f"Hook {hook_name} {action.value} for task {spec.task_name}")

    return HookInstallResult(
        success=True,
        action=action,
        hook_file=str(hook_file),
        git_dir=str(repo.git_dir),
        prefix=spec.prefix,
        message=f"Installed {hook_name} hook running {spec.task_name}",
    )
