"""Rebase action vocabulary.

RebaseAction is the per-commit instruction of an interactive rebase,
spelled the way ``git rebase -i`` spells it. Each action carries a
standard label (the git keyword), a simplified label for users who do
not know git's vocabulary, a tooltip and a single-key shortcut.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class RebaseAction(str, enum.Enum):
    """Action applied to one commit of a rebase plan."""

    PICK = "pick"
    REWORD = "reword"
    EDIT = "edit"
    SQUASH = "squash"
    FIXUP = "fixup"
    DROP = "drop"

    def __repr__(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value

    @property
    def is_fold(self) -> bool:
        """True for actions that meld the commit into the one above it."""
        return self in (RebaseAction.SQUASH, RebaseAction.FIXUP)

    @property
    def survives(self) -> bool:
        """True for actions that keep the commit as its own commit."""
        return self in (RebaseAction.PICK, RebaseAction.REWORD, RebaseAction.EDIT)

    @property
    def keeps_message(self) -> bool:
        """False only for actions whose message is thrown away."""
        return self not in (RebaseAction.FIXUP, RebaseAction.DROP)

    @property
    def info(self) -> ActionInfo:
        return ACTION_INFO[self]

    def label(self, *, simplified: bool = False) -> str:
        """Display label, either the git keyword or the plain-language one."""
        info = ACTION_INFO[self]
        return info.simplified if simplified else info.standard

    @classmethod
    def from_shortcut(cls, key: str) -> Optional[RebaseAction]:
        """Return the action bound to a single-key shortcut, if any."""
        return _BY_SHORTCUT.get(key.lower())


@dataclass(frozen=True)
class ActionInfo:
    """Display metadata for a rebase action."""

    standard: str
    simplified: str
    shortcut: str
    title: str
    description: str


ACTION_INFO: dict[RebaseAction, ActionInfo] = {
    RebaseAction.PICK: ActionInfo(
        standard="pick",
        simplified="Keep",
        shortcut="p",
        title="Keep this commit",
        description="The commit stays exactly as it is. No changes.",
    ),
    RebaseAction.REWORD: ActionInfo(
        standard="reword",
        simplified="Edit Message",
        shortcut="r",
        title="Change the commit message",
        description="Opens an editor to modify the message. Code stays the same.",
    ),
    RebaseAction.EDIT: ActionInfo(
        standard="edit",
        simplified="Edit Code",
        shortcut="e",
        title="Pause to edit this commit",
        description="Rebase will stop here. Make changes, then continue the rebase.",
    ),
    RebaseAction.SQUASH: ActionInfo(
        standard="squash",
        simplified="Merge (keep messages)",
        shortcut="s",
        title="Combine with previous commit",
        description="Merges into the commit above. You'll edit the combined message.",
    ),
    RebaseAction.FIXUP: ActionInfo(
        standard="fixup",
        simplified="Merge (discard message)",
        shortcut="f",
        title="Combine, remove this message",
        description="Merges into the commit above. Only the previous message is kept.",
    ),
    RebaseAction.DROP: ActionInfo(
        standard="drop",
        simplified="Delete",
        shortcut="d",
        title="Remove this commit entirely",
        description="The commit and its changes will be removed from history.",
    ),
}

_BY_SHORTCUT: dict[str, RebaseAction] = {
    info.shortcut: action for action, info in ACTION_INFO.items()
}
