"""gitboard classify -- decide what a drag-and-drop gesture would do."""

from __future__ import annotations

import click


@click.command("classify")
@click.argument("gesture_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the decision as JSON.")
@click.pass_context
def classify_cmd(ctx: click.Context, gesture_file: str, as_json: bool) -> None:
    """Classify the drag source and drop target in GESTURE_FILE."""
    from gitboard.cli import _cli_session
    from gitboard.cli.files import load_gesture
    from gitboard.formatting import pprint_decision
    from gitboard.operations.classify import classify

    with _cli_session(ctx) as (config, console):
        gesture = load_gesture(gesture_file)
        decision = classify(
            gesture.source, gesture.target, gesture.current_branch, strict=config.strict
        )
        if as_json:
            click.echo(decision.model_dump_json())
        else:
            pprint_decision(decision, file=console.file)
        if not decision.is_valid:
            raise SystemExit(2)
