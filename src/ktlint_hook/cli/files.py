"""
Lint file set command.

Prints the files a lint task in PROJECT_DIR would process. When the
internalKtlintGitFilter build parameter is supplied (as the pre-commit
hook does) the set is narrowed to the staged files.
"""

import logging
from pathlib import Path

import typer
from pydantic import ValidationError

from ktlint_hook.cli.errors import ExitCode, print_error
from ktlint_hook.core.config import load_config
from ktlint_hook.core.constants import FILTER_INCLUDE_PROPERTY_NAME
from ktlint_hook.core.filter import (
    git_filter_from_parameters,
    iter_lint_files,
    parse_build_parameters,
)

logger = logging.getLogger(__name__)


def files(
    project_dir: str = typer.Argument(".", help="Project whose lint file set is listed"),
    root_dir: str | None = typer.Option(
        None, "--root-dir", "-r", help="Build root (default: project directory)"
    ),
    parameters: list[str] | None = typer.Option(
        None,
        "--param",
        "-P",
        help=f"Build parameter key=value, e.g. {FILTER_INCLUDE_PROPERTY_NAME}=<paths>",
    ),
) -> None:
    """
    List the lint file set, filtered by staged files when requested.

    Examples:
        ktlint-hook files app
        ktlint-hook files app --root-dir . -P "internalKtlintGitFilter=app/src/Main.kt"
    """
    project_path = Path(project_dir).resolve()
    root_path = Path(root_dir).resolve() if root_dir else project_path

    try:
        build_parameters = parse_build_parameters(parameters or [])
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)

    try:
        file_filter = git_filter_from_parameters(build_parameters, root_path, project_path)
    except ValueError:
        print_error(f"Project {project_path} is not inside build root {root_path}")
        raise typer.Exit(ExitCode.USER_ERROR)

    if file_filter is not None:
        logger.info(f"Filtering to {len(file_filter.includes)} staged file(s)")

    try:
        config = load_config(root_path)
    except ValidationError as e:
        print_error("Invalid ktlint-hook configuration", reason=str(e))
        raise typer.Exit(ExitCode.USER_ERROR)

    for path in iter_lint_files(project_path, config.extensions, file_filter):
        typer.echo(path.relative_to(root_path).as_posix())
