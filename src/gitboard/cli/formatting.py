"""Console output helpers for the gitboard CLI.

Output goes to stdout. When it is piped, rich drops the ANSI styling.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape


def get_console() -> Console:
    return Console(stderr=False)


def format_error(message: str, console: Console) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)


def format_problems(problems: list[str], console: Console) -> None:
    """List plan problems that would block execution."""
    for problem in problems:
        console.print(f"[yellow]Warning:[/yellow] {escape(problem)}", highlight=False)
    if problems:
        console.print("[dim]This plan cannot be executed until these are fixed.[/dim]")
