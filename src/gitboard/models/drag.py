"""Drag-and-drop gesture models.

A drag gesture has a typed source (what was picked up) and a typed drop
target (where it was released). Both are discriminated unions keyed by
``kind`` so they can be parsed straight from the board's JSON messages.
The classifier turns a (source, target) pair into an OperationDecision.
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from gitboard.models.commit import BranchRef, CommitRef


class GitOperation(str, enum.Enum):
    """Repository operations a drag gesture can stand for."""

    REBASE = "rebase"
    CHERRY_PICK = "cherry-pick"
    MOVE_BRANCH = "move-branch"
    MERGE = "merge"
    CREATE_BRANCH = "create-branch"
    REORDER_COMMITS = "reorder-commits"
    INVALID = "invalid"

    def __repr__(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value

    @property
    def dangerous(self) -> bool:
        """Operations that rewrite history or force-move refs."""
        return self in _DANGEROUS


_DANGEROUS = frozenset({
    GitOperation.REBASE,
    GitOperation.MOVE_BRANCH,
    GitOperation.REORDER_COMMITS,
})


# ---------------------------------------------------------------------------
# Drag sources
# ---------------------------------------------------------------------------


class CommitSource(BaseModel):
    """A commit node picked up from the graph."""

    kind: Literal["commit"] = "commit"
    commit: CommitRef
    branch_name: Optional[str] = None  # Branch lane the commit was dragged from

    model_config = {"frozen": True}


class BranchSource(BaseModel):
    """A branch label picked up from the sidebar or the graph."""

    kind: Literal["branch"] = "branch"
    branch: BranchRef

    model_config = {"frozen": True}


class BranchPointerSource(BaseModel):
    """The tip marker of a branch, dragged to move where the branch points."""

    kind: Literal["branch-pointer"] = "branch-pointer"
    branch: BranchRef
    commit_id: str  # Commit the branch currently points at

    model_config = {"frozen": True}


class TagSource(BaseModel):
    kind: Literal["tag"] = "tag"
    tag_name: str
    commit_id: str

    model_config = {"frozen": True}


DragSource = Annotated[
    Union[CommitSource, BranchSource, BranchPointerSource, TagSource],
    Field(discriminator="kind"),
]


# ---------------------------------------------------------------------------
# Drop targets
# ---------------------------------------------------------------------------


class CommitTarget(BaseModel):
    kind: Literal["commit"] = "commit"
    commit: CommitRef

    model_config = {"frozen": True}


class BranchTarget(BaseModel):
    kind: Literal["branch"] = "branch"
    branch: BranchRef

    model_config = {"frozen": True}


class EmptySpaceTarget(BaseModel):
    """Blank canvas area; carries the drop coordinates."""

    kind: Literal["empty-space"] = "empty-space"
    x: float = 0.0
    y: float = 0.0

    model_config = {"frozen": True}


class PositionTarget(BaseModel):
    """A slot between two commits of one branch lane."""

    kind: Literal["position"] = "position"
    index: int
    branch_name: str

    model_config = {"frozen": True}


DropTarget = Annotated[
    Union[CommitTarget, BranchTarget, EmptySpaceTarget, PositionTarget],
    Field(discriminator="kind"),
]

drag_source_adapter: TypeAdapter[DragSource] = TypeAdapter(DragSource)
drop_target_adapter: TypeAdapter[DropTarget] = TypeAdapter(DropTarget)


# ---------------------------------------------------------------------------
# Decision
# ---------------------------------------------------------------------------


class OperationDecision(BaseModel):
    """What a drag gesture would do, as shown to the user before dispatch.

    ``command`` is a human-readable rendering of the equivalent command
    line. The classifier never runs it. Dangerous operations must be
    confirmed by the caller before they are forwarded for execution.
    """

    operation: GitOperation
    is_valid: bool
    description: str
    command: str = ""
    dangerous: bool = False
    warning: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def invalid(cls, description: str = "Invalid operation") -> OperationDecision:
        return cls(
            operation=GitOperation.INVALID,
            is_valid=False,
            description=description,
        )

    def __str__(self) -> str:
        if not self.is_valid:
            return f"invalid: {self.description}"
        return f"{self.operation.value}: {self.description}"

    def pprint(self, *, file: object = None) -> None:
        """Pretty-print this decision using rich formatting."""
        from gitboard.formatting import pprint_decision

        pprint_decision(self, file=file)
