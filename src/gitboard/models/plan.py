"""Rebase plan domain model.

A RebasePlan is an immutable, ordered sequence of PlanEntry values, one
per commit in the rebased range, oldest first. Every edit returns a new
plan. The first-entry rule is applied while the plan is constructed, so
a plan whose first entry squashes or fixes up into nothing cannot exist.

Squash and fixup entries fold into their fold target: the nearest
preceding pick, reword or edit. Dropped entries are skipped. A squash or
fixup with no such entry above it becomes a commit of its own and later
folds meld into it. Folding is derived from the current order only, so
reordering can change which commits end up melded together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Iterable, Iterator, Optional

from gitboard.exceptions import EmptyPlanError, PlanIndexError
from gitboard.models.action import RebaseAction

if TYPE_CHECKING:
    from gitboard.models.commit import CommitRef
    from gitboard.models.config import PlanConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanEntry:
    """One commit of the plan and the action to apply to it."""

    commit: CommitRef
    action: RebaseAction = RebaseAction.PICK
    original_index: int = 0
    new_message: Optional[str] = None  # Replacement text for reword
    coerced: bool = False  # Action was auto-corrected to pick

    @property
    def commit_id(self) -> str:
        return self.commit.commit_id

    @property
    def short_id(self) -> str:
        return self.commit.short_id

    @property
    def message(self) -> str:
        """Message the commit will carry after the rebase."""
        if self.action == RebaseAction.REWORD and self.new_message is not None:
            return self.new_message
        return self.commit.message

    def __repr__(self) -> str:
        flag = " coerced" if self.coerced else ""
        return f"PlanEntry({self.action.value} {self.short_id}{flag})"


@dataclass(frozen=True)
class FoldGroup:
    """A fold target and the squash/fixup entries melded into it."""

    target_index: int
    member_indices: tuple[int, ...]

    @property
    def indices(self) -> tuple[int, ...]:
        """Target followed by members, in plan order."""
        return (self.target_index, *self.member_indices)


@dataclass(frozen=True)
class RebasePlan:
    """Ordered commit+action entries being prepared for a rebase.

    Fields:
        entries: Plan entries, oldest commit first.
        onto: Commit or branch the range is replayed onto (display only).
        branch: Branch being rebased (display only).
        strict: When True, out-of-range indices raise PlanIndexError.
            When False they are logged and the plan is returned as is.
    """

    entries: tuple[PlanEntry, ...]
    onto: str = ""
    branch: str = ""
    strict: bool = field(default=True, compare=False)

    def __post_init__(self) -> None:
        entries = tuple(self.entries)
        if not entries:
            raise EmptyPlanError()
        first = entries[0]
        if first.action.is_fold:
            logger.info(
                "First plan entry %s cannot %s into a previous commit; using pick",
                first.short_id,
                first.action.value,
            )
            entries = (replace(first, action=RebaseAction.PICK, coerced=True),) + entries[1:]
        object.__setattr__(self, "entries", entries)

    # -- Construction ---------------------------------------------------

    @classmethod
    def from_commits(
        cls,
        commits: Iterable[CommitRef],
        *,
        onto: str = "",
        branch: str = "",
        config: PlanConfig | None = None,
    ) -> RebasePlan:
        """Start a plan with every commit picked, in the given (oldest-first) order."""
        entries = tuple(
            PlanEntry(commit=c, action=RebaseAction.PICK, original_index=i)
            for i, c in enumerate(commits)
        )
        strict = config.strict if config is not None else True
        return cls(entries=entries, onto=onto, branch=branch, strict=strict)

    def _with_entries(self, entries: Iterable[PlanEntry]) -> RebasePlan:
        return replace(self, entries=tuple(entries))

    def _index_ok(self, index: int, operation: str, *, size: int | None = None) -> bool:
        size = len(self.entries) if size is None else size
        if 0 <= index < size:
            return True
        if self.strict:
            raise PlanIndexError(index, size, operation)
        logger.warning(
            "Ignoring %s(): index %d out of range for %d entries",
            operation, index, size,
        )
        return False

    # -- Sequence protocol -----------------------------------------------

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[PlanEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> PlanEntry:
        return self.entries[index]

    @property
    def commit_ids(self) -> list[str]:
        return [e.commit_id for e in self.entries]

    @property
    def actions(self) -> list[RebaseAction]:
        return [e.action for e in self.entries]

    # -- Editing ----------------------------------------------------------

    def set_action(self, index: int, action: RebaseAction) -> RebasePlan:
        """Replace the action of one entry.

        Entry 0 is re-checked: a squash or fixup there becomes pick.
        No other entry is touched.
        """
        if not self._index_ok(index, "set_action"):
            return self
        action = RebaseAction(action)
        entries = list(self.entries)
        entries[index] = replace(entries[index], action=action, coerced=False)
        return self._with_entries(entries)

    def reword(self, index: int, message: str) -> RebasePlan:
        """Mark an entry for reword with the given replacement message."""
        if not self._index_ok(index, "reword"):
            return self
        entries = list(self.entries)
        entries[index] = replace(
            entries[index], action=RebaseAction.REWORD, new_message=message, coerced=False
        )
        return self._with_entries(entries)

    def set_all_actions(self, action: RebaseAction) -> RebasePlan:
        action = RebaseAction(action)
        return self._with_entries(
            replace(e, action=action, coerced=False) for e in self.entries
        )

    def move_entry(self, from_index: int, to_index: int) -> RebasePlan:
        """Move one entry with list-splice semantics.

        The entry at ``from_index`` is removed first; ``to_index`` is the
        position in the shortened sequence where it is re-inserted.
        """
        if not self._index_ok(from_index, "move_entry"):
            return self
        if not self._index_ok(to_index, "move_entry"):
            return self
        if from_index == to_index:
            return self
        entries = list(self.entries)
        moved = entries.pop(from_index)
        entries.insert(to_index, moved)
        return self._with_entries(entries)

    def swap(self, first: int, second: int) -> RebasePlan:
        if not (self._index_ok(first, "swap") and self._index_ok(second, "swap")):
            return self
        entries = list(self.entries)
        entries[first], entries[second] = entries[second], entries[first]
        return self._with_entries(entries)

    def move_up(self, index: int) -> RebasePlan:
        """Swap an entry with the one above it; no-op for the first entry."""
        if not self._index_ok(index, "move_up"):
            return self
        if index == 0:
            return self
        return self.swap(index, index - 1)

    def move_down(self, index: int) -> RebasePlan:
        """Swap an entry with the one below it; no-op for the last entry."""
        if not self._index_ok(index, "move_down"):
            return self
        if index == len(self.entries) - 1:
            return self
        return self.swap(index, index + 1)

    # -- Derived views ------------------------------------------------------

    def _fold_targets(self) -> list[Optional[int]]:
        """Fold target for every entry; None for entries that are not folded."""
        targets: list[Optional[int]] = []
        base: Optional[int] = None
        for i, entry in enumerate(self.entries):
            action = entry.action
            if action.is_fold and base is not None:
                targets.append(base)
                continue
            if action != RebaseAction.DROP:
                # Kept entries, and a squash/fixup with nothing kept above it
                base = i
            targets.append(None)
        return targets

    def fold_groups(self) -> list[FoldGroup]:
        """Group every squash/fixup entry with the entry it melds into.

        Dropped entries inside a run are skipped, so ``pick A, drop B,
        fixup C`` melds C into A.
        """
        members: dict[int, list[int]] = {}
        for i, target in enumerate(self._fold_targets()):
            if target is not None:
                members.setdefault(target, []).append(i)
        return [FoldGroup(t, tuple(m)) for t, m in sorted(members.items())]

    def fold_target_of(self, index: int) -> Optional[int]:
        """Index of the entry a squash/fixup entry folds into, else None.

        None is also returned for a squash/fixup with no kept entry above
        it, since that commit becomes the base of its run.
        """
        if not self._index_ok(index, "fold_target_of"):
            return None
        return self._fold_targets()[index]

    def fold_run(self, commit_id: str) -> tuple[str, ...]:
        """Commit ids melded into ``commit_id``, itself first; () if nothing folds into it."""
        ids = self.commit_ids
        for group in self.fold_groups():
            if ids[group.target_index] == commit_id:
                return tuple(ids[i] for i in group.indices)
        return ()

    def base_indices(self) -> list[int]:
        """Indices of the entries that become commits of their own."""
        return [
            i
            for i, (entry, target) in enumerate(zip(self.entries, self._fold_targets()))
            if target is None and entry.action != RebaseAction.DROP
        ]

    def surviving_entries(self) -> list[PlanEntry]:
        """Entries that remain commits of their own (pick, reword, edit)."""
        return [e for e in self.entries if e.action.survives]

    def entry_for(self, commit_id: str) -> Optional[PlanEntry]:
        for e in self.entries:
            if e.commit_id == commit_id:
                return e
        return None

    @property
    def is_noop(self) -> bool:
        """True when the plan would replay every commit unchanged."""
        return all(
            e.action == RebaseAction.PICK and e.original_index == i
            for i, e in enumerate(self.entries)
        )

    def validate(self) -> list[str]:
        """Return problems that block execution. Empty list means runnable."""
        problems: list[str] = []
        if all(e.action == RebaseAction.DROP for e in self.entries):
            problems.append("Cannot drop all commits")
        for e in self.entries:
            if e.action == RebaseAction.REWORD and e.new_message is not None and not e.new_message.strip():
                problems.append(f"Reword message for {e.short_id} is empty")
        return problems

    # -- Display ---------------------------------------------------------

    def __repr__(self) -> str:
        body = ", ".join(f"{e.action.value} {e.short_id}" for e in self.entries)
        return f"RebasePlan([{body}])"

    def pprint(self, *, simplified: bool = False, file: object = None) -> None:
        """Pretty-print this plan as a table using rich formatting."""
        from gitboard.formatting import pprint_plan

        pprint_plan(self, simplified=simplified, file=file)
