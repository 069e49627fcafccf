"""gitboard CLI -- inspect rebase plans and drag gestures from the terminal.

This module is NEVER imported from gitboard/__init__.py.
It is only loaded via the ``gitboard`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

import click

from gitboard.cli.formatting import format_error, get_console
from gitboard.models.config import PlanConfig

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rich.console import Console


@click.group()
@click.option(
    "--strict/--lenient",
    default=True,
    envvar="GITBOARD_STRICT",
    help="Fail on out-of-range plan indices instead of ignoring them.",
)
@click.option(
    "--comment-char",
    default="#",
    envvar="GITBOARD_COMMENT_CHAR",
    help="Marker that starts comment lines in squash messages.",
)
@click.option(
    "--simplified",
    is_flag=True,
    envvar="GITBOARD_SIMPLIFIED_LABELS",
    help="Show plain-language action labels instead of git keywords.",
)
@click.option(
    "--log-level",
    default="WARNING",
    envvar="GITBOARD_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level for gitboard's own log records.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    strict: bool,
    comment_char: str,
    simplified: bool,
    log_level: str,
) -> None:
    """gitboard: plan interactive rebases and classify drag-and-drop gestures."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    ctx.ensure_object(dict)
    ctx.obj["settings"] = {
        "strict": strict,
        "comment_char": comment_char,
        "simplified_labels": simplified,
    }


def _get_config(ctx: click.Context) -> PlanConfig:
    """Build the PlanConfig from the group options (validated by pydantic)."""
    return PlanConfig(**ctx.obj["settings"])


@contextmanager
def _cli_session(ctx: click.Context) -> Iterator[tuple[PlanConfig, Console]]:
    """Yield (config, console) and format any exception as a CLI error."""
    console = get_console()
    try:
        yield _get_config(ctx), console
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None


# Register subcommands after cli group is defined
from gitboard.cli.commands.preview import preview  # noqa: E402
from gitboard.cli.commands.todo import todo  # noqa: E402
from gitboard.cli.commands.squash import squash_message  # noqa: E402
from gitboard.cli.commands.classify import classify_cmd  # noqa: E402

cli.add_command(preview)
cli.add_command(todo)
cli.add_command(squash_message)
cli.add_command(classify_cmd)
