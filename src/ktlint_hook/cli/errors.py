"""
Standardized error handling and exit codes for the ktlint-hook CLI.
"""

from enum import IntEnum

from rich.console import Console

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for ktlint-hook operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """File system or other unexpected failure."""

    USER_ERROR = 2
    """Invalid configuration or arguments (actionable by user)."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Cannot write hook file",
        ...     reason="Permission denied: .git/hooks/pre-commit",
        ...     solution="chmod u+w .git/hooks/pre-commit",
        ... )
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")
