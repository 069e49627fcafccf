"""gitboard preview -- show a plan and the history it produces."""

from __future__ import annotations

import click


@click.command()
@click.argument("plan_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def preview(ctx: click.Context, plan_file: str) -> None:
    """Show the plan in PLAN_FILE and the post-rebase preview."""
    from gitboard.cli import _cli_session
    from gitboard.cli.files import load_plan
    from gitboard.cli.formatting import format_problems
    from gitboard.formatting import pprint_plan, pprint_preview
    from gitboard.operations.preview import final_commit_count, project_preview, summarize

    with _cli_session(ctx) as (config, console):
        plan = load_plan(plan_file, config)
        pprint_plan(plan, simplified=config.simplified_labels, file=console.file)
        console.print()
        pprint_preview(project_preview(plan), final_commit_count(plan), file=console.file)
        counts = ", ".join(f"{n} {name}" for name, n in summarize(plan).items() if n)
        console.print(f"[dim]{counts}[/dim]")
        format_problems(plan.validate(), console)
