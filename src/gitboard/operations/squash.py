"""Combined commit messages for squash runs.

compose_squash_message() builds the editable text shown when a fold
target and its squash commits become one commit. Lines starting with
the comment marker are informational and are removed again by
extract_final_message() when the user saves.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from gitboard.exceptions import EmptyMessageError

if TYPE_CHECKING:
    from gitboard.models.plan import PlanEntry

DEFAULT_COMMENT_CHAR = "#"


def ordinal(n: int) -> str:
    """English ordinal for a positive integer: 1st, 2nd, 3rd, 4th, 11th, 21st."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def compose_squash_message(
    entries: Sequence[PlanEntry],
    *,
    comment_char: str = DEFAULT_COMMENT_CHAR,
) -> str:
    """Build the combined message for a fold target and its folded commits.

    Args:
        entries: Fold target first, then the folded entries in plan order.
        comment_char: Marker that starts every informational line.

    Returns:
        The target's message, a blank line, a header comment, then one
        commented heading plus message block per entry.

    Raises:
        ValueError: If ``entries`` is empty.
    """
    if not entries:
        raise ValueError("compose_squash_message() needs at least the fold target")

    lines: list[str] = [entries[0].message, ""]
    lines.append(f"{comment_char} This is the combination of {len(entries)} commits.")
    for k, entry in enumerate(entries, start=1):
        lines.append(f"{comment_char} This is the {ordinal(k)} commit message:")
        lines.append("")
        lines.append(entry.message)
        lines.append("")
    return "\n".join(lines)


def extract_final_message(raw: str, *, comment_char: str = DEFAULT_COMMENT_CHAR) -> str:
    """Strip comment lines and surrounding whitespace from an edited message.

    An empty return value means the save is rejected and the user keeps
    editing.
    """
    kept = [line for line in raw.split("\n") if not line.lstrip().startswith(comment_char)]
    return "\n".join(kept).strip()


def require_final_message(raw: str, *, comment_char: str = DEFAULT_COMMENT_CHAR) -> str:
    """Like extract_final_message(), but raise EmptyMessageError on empty text."""
    message = extract_final_message(raw, comment_char=comment_char)
    if not message:
        raise EmptyMessageError()
    return message
