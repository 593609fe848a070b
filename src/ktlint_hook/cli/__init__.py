"""
ktlint-hook CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer
from rich.console import Console

from ktlint_hook import __version__
from ktlint_hook.cli import files, hooks
from ktlint_hook.core.config import load_layered_env

app = typer.Typer(
    name="ktlint-hook",
    help="Run ktlint Gradle tasks over staged files from a git pre-commit hook",
    no_args_is_help=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for all commands.

    Args:
        debug: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.callback()
def main(
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    ktlint-hook - staged-file ktlint git hooks.

    Quick Start:
        ktlint-hook install-format   # Format staged files, re-stage them
        ktlint-hook install-check    # Fail the commit on lint errors
    """
    setup_logging(debug)
    load_layered_env()


app.command(name="install")(hooks.install)
app.command(name="install-format")(hooks.install_format)
app.command(name="install-check")(hooks.install_check)
app.command(name="generate")(hooks.generate)
app.command(name="files")(files.files)


@app.command()
def version() -> None:
    """Show ktlint-hook version and exit."""
    console.print(f"ktlint-hook version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
