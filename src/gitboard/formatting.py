"""Pretty-print support for gitboard objects.

Uses rich for formatted terminal output. All functions accept their
target object and print to a rich Console.

To avoid circular imports, this module does NOT import domain models
at module level. Functions access object attributes dynamically.
"""
from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

_ACTION_STYLES = {
    "pick": "green",
    "reword": "cyan",
    "edit": "yellow",
    "squash": "magenta",
    "fixup": "magenta",
    "drop": "red",
}

_PREVIEW_STYLES = {
    "kept": "green",
    "reworded": "cyan",
    "edited": "yellow",
    "squashed": "magenta",
    "dropped": "red strike",
}

_STATUS_STYLES = {
    "idle": "dim",
    "running": "cyan",
    "paused": "yellow",
    "completed": "green",
    "aborted": "red",
}


def _make_console(file: Any = None) -> Console:
    """Create a Console, optionally writing to a file-like object."""
    if file is not None:
        return Console(file=file, force_terminal=False, width=100)
    return Console()


def _subject(message: str, limit: int = 60) -> str:
    subject = message.split("\n", 1)[0]
    if len(subject) > limit:
        subject = subject[: limit - 3] + "..."
    return subject


def pprint_plan(plan: Any, *, simplified: bool = False, file: Any = None) -> None:
    """Print a rebase plan as a table, one row per entry."""
    console = _make_console(file)
    title = "Rebase plan"
    if getattr(plan, "branch", "") or getattr(plan, "onto", ""):
        title += f" ({escape(plan.branch or '?')} onto {escape(plan.onto or '?')})"

    table = Table(title=title, show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Action")
    table.add_column("Commit", style="yellow", width=8)
    table.add_column("Message")

    for i, entry in enumerate(plan.entries):
        action = entry.action
        label = action.label(simplified=simplified)
        style = _ACTION_STYLES.get(action.value, "white")
        action_cell = f"[{style}]{escape(label)}[/{style}]"
        if entry.coerced:
            action_cell += " [dim](auto)[/dim]"
        table.add_row(str(i + 1), action_cell, entry.short_id, escape(_subject(entry.message)))

    console.print(table)


def pprint_preview(entries: list[Any], final_count: int, *, file: Any = None) -> None:
    """Print the post-rebase preview list."""
    console = _make_console(file)
    plural = "" if final_count == 1 else "s"
    console.print(f"[bold]After rebase ({final_count} commit{plural}):[/bold]")
    for entry in entries:
        status = entry.status.value
        style = _PREVIEW_STYLES.get(status, "white")
        marker = "x" if status == "dropped" else "*"
        note = f" [dim]{escape(entry.note)}[/dim]" if entry.note else ""
        console.print(
            f"  [{style}]{marker}[/{style}] [yellow]{escape(entry.short_id)}[/yellow] "
            f"[{style}]{escape(_subject(entry.message))}[/{style}]{note}"
        )


def pprint_decision(decision: Any, *, file: Any = None) -> None:
    """Print a drag-operation decision."""
    console = _make_console(file)
    if not decision.is_valid:
        console.print(f"[red]Invalid:[/red] {escape(decision.description)}")
        return
    danger = " [bold red](confirm)[/bold red]" if decision.dangerous else ""
    console.print(f"[bold]{escape(decision.operation.value)}[/bold]{danger}: {escape(decision.description)}")
    console.print(f"  [cyan]git {escape(decision.command)}[/cyan]")
    if decision.warning:
        console.print(f"  [yellow]{escape(decision.warning)}[/yellow]")


def pprint_progress(progress: Any, conflict: Any = None, *, file: Any = None) -> None:
    """Print executor progress and, when paused, the conflicted files."""
    console = _make_console(file)
    status = progress.status.value
    style = _STATUS_STYLES.get(status, "white")
    done = min(progress.current_index, progress.total)
    console.print(
        f"[{style}]{status}[/{style}] {done}/{progress.total} "
        f"[dim]({progress.percent:.0f}%)[/dim]"
    )
    if conflict is not None:
        console.print(f"  Conflict applying [yellow]{escape(conflict.commit_id[:8])}[/yellow]:")
        for f in conflict.conflicted_files:
            mark = "[green]resolved[/green]" if f.resolved else "[red]unresolved[/red]"
            console.print(f"    {escape(f.path)}  {mark}")


def pprint_pending(pending: Any, *, file: Any = None) -> None:
    """Print a Pending's header and the object it gates."""
    console = _make_console(file)
    status = pending.status.value
    color = {"pending": "yellow", "approved": "green", "rejected": "red"}.get(status, "white")
    console.print(
        f"[bold]{type(pending).__name__}[/bold] [dim]id={pending.pending_id}[/dim]\n"
        f"  operation: [bold]{escape(pending.operation)}[/bold]  "
        f"status: [{color}]{status}[/{color}]"
    )
    if pending.rejection_reason:
        console.print(f"  rejection_reason: [red]{escape(pending.rejection_reason)}[/red]")
    decision = getattr(pending, "decision", None)
    if decision is not None:
        pprint_decision(decision, file=file)
    plan = getattr(pending, "plan", None)
    if plan is not None:
        pprint_plan(plan, file=file)
