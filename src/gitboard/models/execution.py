"""Rebase execution models.

Defines the values exchanged between the RebaseExecutor and the
external step runner: apply steps going out, step outcomes coming back,
and the progress and conflict records the executor exposes.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Optional


class ExecutionStatus(str, enum.Enum):
    """States of the rebase executor."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    ABORTED = "aborted"

    def __str__(self) -> str:
        return self.value

    @property
    def is_terminal(self) -> bool:
        return self in (ExecutionStatus.COMPLETED, ExecutionStatus.ABORTED)


class StepKind(str, enum.Enum):
    """Kind of apply step handed to the runner."""

    PICK = "pick"
    REWORD = "reword"
    EDIT = "edit"
    MELD = "meld"  # Fold target plus its squash/fixup commits, one commit

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ApplyStep:
    """One unit of work for the runner.

    For ``meld`` steps, ``folded_ids`` lists the commits squashed into
    ``target_commit_id`` in plan order and ``new_message`` is the final
    combined message.
    """

    kind: StepKind
    target_commit_id: str
    new_message: Optional[str] = None
    folded_ids: tuple[str, ...] = ()

    @property
    def commit_ids(self) -> tuple[str, ...]:
        """Every commit this step applies."""
        return (self.target_commit_id, *self.folded_ids)

    def to_dict(self) -> dict:
        data: dict = {
            "kind": self.kind.value,
            "target_commit_id": self.target_commit_id,
        }
        if self.new_message is not None:
            data["new_message"] = self.new_message
        if self.folded_ids:
            data["folded_ids"] = list(self.folded_ids)
        return data


@dataclass(frozen=True)
class StepOutcome:
    """Result the runner reports for an apply step.

    Exactly one of three shapes: success, conflict (with the conflicted
    file paths) or failure (unrecoverable, with an error message).
    """

    success: bool
    conflict_files: tuple[str, ...] = ()
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> StepOutcome:
        return cls(success=True)

    @classmethod
    def conflict(cls, files: list[str] | tuple[str, ...]) -> StepOutcome:
        if not files:
            raise ValueError("A conflict outcome needs at least one file")
        return cls(success=False, conflict_files=tuple(files))

    @classmethod
    def failure(cls, error: str) -> StepOutcome:
        return cls(success=False, error=error)

    @property
    def is_conflict(self) -> bool:
        return not self.success and bool(self.conflict_files)

    @property
    def is_failure(self) -> bool:
        return not self.success and not self.conflict_files


@dataclass(frozen=True)
class ConflictFile:
    path: str
    resolved: bool = False


@dataclass(frozen=True)
class ConflictState:
    """Files left conflicted by the step that applied ``commit_id``."""

    commit_id: str
    conflicted_files: tuple[ConflictFile, ...]
    message: str = ""

    @property
    def unresolved_paths(self) -> list[str]:
        return [f.path for f in self.conflicted_files if not f.resolved]

    @property
    def all_resolved(self) -> bool:
        return all(f.resolved for f in self.conflicted_files)

    def has_file(self, path: str) -> bool:
        return any(f.path == path for f in self.conflicted_files)

    def with_resolved(self, path: str) -> ConflictState:
        files = tuple(
            replace(f, resolved=True) if f.path == path else f
            for f in self.conflicted_files
        )
        return replace(self, conflicted_files=files)


@dataclass(frozen=True)
class ExecutionProgress:
    """Single progress record of a rebase run.

    ``current_index`` is the index of the next step to issue (or the
    step in flight). ``completed_ids`` holds every commit applied so
    far, including commits melded into a fold target.
    """

    current_index: int = 0
    total: int = 0
    completed_ids: frozenset[str] = field(default_factory=frozenset)
    skipped_ids: frozenset[str] = field(default_factory=frozenset)
    status: ExecutionStatus = ExecutionStatus.IDLE

    @property
    def percent(self) -> float:
        if self.total <= 0:
            return 0.0
        return min(self.current_index, self.total) / self.total * 100

    def __str__(self) -> str:
        return f"{self.status.value} {min(self.current_index, self.total)}/{self.total}"
