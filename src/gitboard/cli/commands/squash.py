"""gitboard squash-message -- combined message for a squash run."""

from __future__ import annotations

import click


@click.command("squash-message")
@click.argument("plan_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("commit_id")
@click.option("--final", is_flag=True, help="Strip comment lines, as when the editor is saved.")
@click.pass_context
def squash_message(ctx: click.Context, plan_file: str, commit_id: str, final: bool) -> None:
    """Print the combined message for the run folding into COMMIT_ID.

    COMMIT_ID may be the full id or the short id of the fold target.
    """
    from gitboard.cli import _cli_session
    from gitboard.cli.files import load_plan
    from gitboard.operations.squash import compose_squash_message, require_final_message

    with _cli_session(ctx) as (config, console):
        plan = load_plan(plan_file, config)
        groups = {
            plan.entries[g.target_index].commit_id: g for g in plan.fold_groups()
        }
        group = next(
            (g for cid, g in groups.items() if cid == commit_id or cid.startswith(commit_id)),
            None,
        )
        if group is None:
            raise click.ClickException(f"No squash or fixup run folds into {commit_id}")
        entries = [plan.entries[i] for i in group.indices]
        text = compose_squash_message(entries, comment_char=config.comment_char)
        if final:
            text = require_final_message(text, comment_char=config.comment_char)
        click.echo(text)
