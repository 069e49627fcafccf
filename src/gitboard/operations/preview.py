"""Post-rebase preview of a plan.

project_preview() maps every plan entry to the line the user sees in the
"after rebase" list. Dropped commits stay in the preview so the user can
see what disappears.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from gitboard.models.action import RebaseAction

if TYPE_CHECKING:
    from gitboard.models.plan import PlanEntry, RebasePlan


class PreviewStatus(str, enum.Enum):
    """How a commit appears in the post-rebase history."""

    KEPT = "kept"
    REWORDED = "reworded"
    EDITED = "edited"
    SQUASHED = "squashed"
    DROPPED = "dropped"

    def __str__(self) -> str:
        return self.value


NOTE_REWORDED = "(message will be edited)"
NOTE_EDITED = "(rebase will pause here)"
NOTE_SQUASHED = "(squashed into above, message kept)"
NOTE_FIXED_UP = "(squashed into above, message discarded)"
NOTE_DROPPED = "(will be dropped)"
NOTE_WILL_SQUASH = "(will be squashed)"


@dataclass(frozen=True)
class PreviewEntry:
    short_id: str
    message: str
    status: PreviewStatus
    note: Optional[str] = None


def _preview_entry(entry: PlanEntry, *, has_kept_above: bool = True) -> PreviewEntry:
    action = entry.action
    message = entry.message
    if action.is_fold and not has_kept_above:
        return PreviewEntry(entry.short_id, message, PreviewStatus.SQUASHED, NOTE_WILL_SQUASH)
    if action == RebaseAction.PICK:
        return PreviewEntry(entry.short_id, message, PreviewStatus.KEPT)
    if action == RebaseAction.REWORD:
        return PreviewEntry(entry.short_id, message, PreviewStatus.REWORDED, NOTE_REWORDED)
    if action == RebaseAction.EDIT:
        return PreviewEntry(entry.short_id, message, PreviewStatus.EDITED, NOTE_EDITED)
    if action == RebaseAction.SQUASH:
        return PreviewEntry(entry.short_id, message, PreviewStatus.SQUASHED, NOTE_SQUASHED)
    if action == RebaseAction.FIXUP:
        return PreviewEntry(entry.short_id, message, PreviewStatus.SQUASHED, NOTE_FIXED_UP)
    if action == RebaseAction.DROP:
        return PreviewEntry(entry.short_id, message, PreviewStatus.DROPPED, NOTE_DROPPED)
    raise TypeError(f"Unhandled rebase action: {action!r}")


def project_preview(plan: RebasePlan) -> list[PreviewEntry]:
    """Project a plan onto the list of commits the user will see afterwards.

    One preview entry per plan entry, in plan order. A squash or fixup
    with no pick, reword or edit above it has nothing to fold into yet and
    is shown as "will be squashed".
    """
    preview: list[PreviewEntry] = []
    kept = False
    for e in plan.entries:
        preview.append(_preview_entry(e, has_kept_above=kept))
        kept = kept or e.action.survives
    return preview


def final_commit_count(plan: RebasePlan) -> int:
    """Number of commits the branch will have in the rebased range.

    Every pick, reword and edit counts once. Squash and fixup entries
    add nothing, except that the first one with no kept entry above it
    stands in as a commit of its own.
    """
    return len(plan.base_indices())


def summarize(plan: RebasePlan) -> dict[str, int]:
    """Count of plan entries per action, for status lines."""
    counts = {action.value: 0 for action in RebaseAction}
    for e in plan.entries:
        counts[e.action.value] += 1
    return counts
