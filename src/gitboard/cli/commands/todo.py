"""gitboard todo -- render a plan as a git rebase todo list."""

from __future__ import annotations

import click


@click.command()
@click.argument("plan_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def todo(ctx: click.Context, plan_file: str) -> None:
    """Print PLAN_FILE in ``git rebase -i`` todo format."""
    from gitboard.cli import _cli_session
    from gitboard.cli.files import load_plan
    from gitboard.operations.steps import render_todo

    with _cli_session(ctx) as (config, console):
        plan = load_plan(plan_file, config)
        click.echo(render_todo(plan, comment_char=config.comment_char), nl=False)
