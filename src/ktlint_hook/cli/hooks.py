"""
Hook installation commands.

install-format and install-check install the pre-commit hook for the
configured format and check tasks; install takes the task explicitly.
generate prints the managed-region script without touching any file.
"""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from ktlint_hook.cli.errors import ExitCode, print_error
from ktlint_hook.core.config import HookConfig, load_config
from ktlint_hook.core.hooks import (
    HookSpec,
    InvalidHookNameError,
    generate_git_hook,
    install_git_hook,
)
from ktlint_hook.utils.git import BuildRootError

console = Console()

ProjectDirOption = typer.Option(
    ".",
    "--project-dir",
    "-d",
    help="Directory to search for the git repository from (default: current directory)",
)
RootDirOption = typer.Option(
    None,
    "--root-dir",
    "-r",
    help="Build root holding the Gradle wrapper (default: project directory)",
)


def _load_config(root_path: Path) -> HookConfig:
    try:
        return load_config(root_path)
    except ValidationError as e:
        print_error("Invalid ktlint-hook configuration", reason=str(e))
        raise typer.Exit(ExitCode.USER_ERROR)


def _resolve_paths(project_dir: str, root_dir: str | None) -> tuple[Path, Path]:
    project_path = Path(project_dir).resolve()
    if not project_path.is_dir():
        print_error(f"Not a directory: {project_path}")
        raise typer.Exit(ExitCode.USER_ERROR)
    root_path = Path(root_dir).resolve() if root_dir else project_path
    return project_path, root_path


def _install(
    task_name: str,
    update_commit: bool,
    hook_name: str | None,
    project_path: Path,
    root_path: Path,
    config: HookConfig,
) -> None:
    hook = hook_name or config.hook_name

    try:
        result = install_git_hook(
            hook,
            task_name,
            update_commit,
            project_dir=project_path,
            root_dir=root_path,
            wrapper=config.wrapper,
            extensions=tuple(config.extensions),
        )
    except ValidationError as e:
        print_error("Invalid hook settings", reason=str(e))
        raise typer.Exit(ExitCode.USER_ERROR)
    except InvalidHookNameError as e:
        print_error("Invalid hook name", reason=str(e))
        raise typer.Exit(ExitCode.USER_ERROR)
    except BuildRootError as e:
        print_error(
            "Build root is outside the git work tree",
            reason=str(e),
            solution="pass --root-dir pointing inside the repository",
        )
        raise typer.Exit(ExitCode.USER_ERROR)
    except OSError as e:
        print_error(f"Failed to install {hook} hook", reason=str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if not result.success:
        console.print(f"[yellow]⚠[/yellow] Hook not installed: {result.message}")
        raise typer.Exit(ExitCode.SUCCESS)

    console.print(f"[green]✓[/green] {result.message} ({result.action.value})")
    console.print(f"  Hook file: {result.hook_file}")
    if result.prefix:
        console.print(f"  Build root: ./{result.prefix}")


def install(
    task: str = typer.Option(..., "--task", "-t", help="Gradle task the hook runs"),
    update_commit: bool = typer.Option(
        False,
        "--update-commit/--no-update-commit",
        help="Re-stage files the task modified",
    ),
    hook_name: str | None = typer.Option(
        None, "--hook", help="Git hook to install (default: from config, pre-commit)"
    ),
    project_dir: str = ProjectDirOption,
    root_dir: str | None = RootDirOption,
) -> None:
    """
    Install a git hook that runs TASK over staged Kotlin files.

    Examples:
        ktlint-hook install --task ktlintCheck
        ktlint-hook install --task :app:ktlintFormat --update-commit
    """
    project_path, root_path = _resolve_paths(project_dir, root_dir)
    config = _load_config(root_path)
    _install(task, update_commit, hook_name, project_path, root_path, config)


def install_format(
    project_dir: str = ProjectDirOption,
    root_dir: str | None = RootDirOption,
) -> None:
    """
    Add git hook to run ktlintFormat on changed files.

    Files the format task rewrites are added back to the commit.
    """
    project_path, root_path = _resolve_paths(project_dir, root_dir)
    config = _load_config(root_path)
    _install(config.format_task, True, None, project_path, root_path, config)


def install_check(
    project_dir: str = ProjectDirOption,
    root_dir: str | None = RootDirOption,
) -> None:
    """Add git hook to run ktlintCheck on changed files."""
    project_path, root_path = _resolve_paths(project_dir, root_dir)
    config = _load_config(root_path)
    _install(config.check_task, False, None, project_path, root_path, config)


def generate(
    task: str = typer.Option(..., "--task", "-t", help="Gradle task the hook runs"),
    update_commit: bool = typer.Option(
        False,
        "--update-commit/--no-update-commit",
        help="Re-stage files the task modified",
    ),
    prefix: str = typer.Option(
        "", "--prefix", help="Build root relative to the repository root"
    ),
) -> None:
    """
    Print the hook script for TASK without installing it.

    Examples:
        ktlint-hook generate --task ktlintCheck
        ktlint-hook generate --task ktlintFormat --update-commit --prefix android
    """
    config = _load_config(Path.cwd())
    try:
        spec = HookSpec(
            task_name=task,
            update_commit=update_commit,
            prefix=prefix,
            wrapper=config.wrapper,
            extensions=tuple(config.extensions),
        )
    except ValidationError as e:
        print_error("Invalid hook settings", reason=str(e))
        raise typer.Exit(ExitCode.USER_ERROR)

    typer.echo(generate_git_hook(spec), nl=False)
