"""Drag-to-operation classification.

classify() decides which repository operation a drag gesture stands for.
It is a pure function of the (source, target) pair and the name of the
checked-out branch: it never touches the repository and never runs the
command it describes.

Decision table (first match wins):

| Source         | Target      | Operation       |
|----------------|-------------|-----------------|
| commit         | commit      | rebase          |
| branch         | commit      | rebase          |
| commit         | branch      | cherry-pick     |
| branch pointer | commit      | move-branch     |
| branch         | branch      | merge           |
| commit         | empty space | create-branch   |
| commit         | position    | reorder-commits |

Everything else is invalid.
"""

from __future__ import annotations

import logging
from typing import Optional

from gitboard.models.commit import BranchRef
from gitboard.models.drag import (
    BranchPointerSource,
    BranchSource,
    BranchTarget,
    CommitSource,
    CommitTarget,
    EmptySpaceTarget,
    GitOperation,
    OperationDecision,
    PositionTarget,
    TagSource,
)

logger = logging.getLogger(__name__)

_SOURCE_TYPES = (CommitSource, BranchSource, BranchPointerSource, TagSource)
_TARGET_TYPES = (CommitTarget, BranchTarget, EmptySpaceTarget, PositionTarget)

WARN_REWRITE = "This will rewrite commit history"
WARN_FORCE_MOVE = "This will force-move the branch pointer"
WARN_INTERACTIVE = "This will start an interactive rebase"
WARN_CHECKOUT = "Will checkout to target branch first"
WARN_REMOTE_MERGE = "Merging remote branches may require pulling first"


def _valid(
    operation: GitOperation,
    description: str,
    command: str,
    warning: Optional[str] = None,
) -> OperationDecision:
    return OperationDecision(
        operation=operation,
        is_valid=True,
        description=description,
        command=command,
        dangerous=operation.dangerous,
        warning=warning,
    )


def _needs_checkout(branch: BranchRef, current_branch: Optional[str]) -> bool:
    return not branch.is_current and branch.name != current_branch


# ---------------------------------------------------------------------------
# Per-pair rules
# ---------------------------------------------------------------------------


def _rebase_commit(source: CommitSource, target: CommitTarget) -> OperationDecision:
    if source.commit.commit_id == target.commit.commit_id:
        return OperationDecision.invalid("Cannot rebase commit onto itself")
    return _valid(
        GitOperation.REBASE,
        f"Rebase {source.commit.short_id} onto {target.commit.short_id}",
        f"rebase {target.commit.short_id}",
        WARN_REWRITE,
    )


def _rebase_branch(source: BranchSource, target: CommitTarget) -> OperationDecision:
    if source.branch.is_remote:
        return OperationDecision.invalid("Cannot rebase remote branch directly")
    return _valid(
        GitOperation.REBASE,
        f"Rebase {source.branch.name} onto {target.commit.short_id}",
        f"rebase {target.commit.short_id} {source.branch.name}",
        WARN_REWRITE,
    )


def _cherry_pick(
    source: CommitSource, target: BranchTarget, current_branch: Optional[str]
) -> OperationDecision:
    command = f"cherry-pick {source.commit.short_id}"
    warning = None
    if _needs_checkout(target.branch, current_branch):
        command = f"checkout {target.branch.name} && {command}"
        warning = WARN_CHECKOUT
    return _valid(
        GitOperation.CHERRY_PICK,
        f"Cherry-pick {source.commit.short_id} to {target.branch.name}",
        command,
        warning,
    )


def _move_branch(source: BranchPointerSource, target: CommitTarget) -> OperationDecision:
    if source.branch.is_remote:
        return OperationDecision.invalid("Cannot move remote branch pointer")
    if source.commit_id == target.commit.commit_id:
        return OperationDecision.invalid("Branch already points to this commit")
    return _valid(
        GitOperation.MOVE_BRANCH,
        f"Move {source.branch.name} to {target.commit.short_id}",
        f"branch -f {source.branch.name} {target.commit.short_id}",
        WARN_FORCE_MOVE,
    )


def _merge(
    source: BranchSource, target: BranchTarget, current_branch: Optional[str]
) -> OperationDecision:
    if source.branch.name == target.branch.name:
        return OperationDecision.invalid("Cannot merge branch into itself")
    command = f"merge {source.branch.name}"
    warnings = []
    if _needs_checkout(target.branch, current_branch):
        command = f"checkout {target.branch.name} && {command}"
        warnings.append(WARN_CHECKOUT)
    if source.branch.is_remote or target.branch.is_remote:
        warnings.append(WARN_REMOTE_MERGE)
    return _valid(
        GitOperation.MERGE,
        f"Merge {source.branch.name} into {target.branch.name}",
        command,
        ". ".join(warnings) if warnings else None,
    )


def _create_branch(source: CommitSource) -> OperationDecision:
    return _valid(
        GitOperation.CREATE_BRANCH,
        f"Create new branch at {source.commit.short_id}",
        f"branch <new-branch-name> {source.commit.short_id}",
    )


def _reorder(source: CommitSource, target: PositionTarget) -> OperationDecision:
    source_branch = source.branch_name or source.commit.branch_name
    if source_branch and source_branch != target.branch_name:
        return OperationDecision.invalid("Cannot reorder commits across branches")
    return _valid(
        GitOperation.REORDER_COMMITS,
        f"Reorder {source.commit.short_id} to position {target.index}",
        f"rebase -i {source.commit.short_id}~1",
        WARN_INTERACTIVE,
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def classify(
    source: object,
    target: object,
    current_branch: Optional[str] = None,
    *,
    strict: bool = True,
) -> OperationDecision:
    """Classify a drag gesture into a repository operation.

    Args:
        source: A DragSource variant.
        target: A DropTarget variant.
        current_branch: Name of the checked-out branch, used to decide
            whether cherry-pick and merge need a checkout first.
        strict: When True, a source or target that is not a known
            variant raises TypeError. When False it is logged and
            classified as invalid.

    Returns:
        A fresh OperationDecision. Invalid pairs yield operation
        ``invalid`` with ``is_valid=False``.
    """
    if not isinstance(source, _SOURCE_TYPES) or not isinstance(target, _TARGET_TYPES):
        if strict:
            raise TypeError(
                f"Malformed drag pair: {type(source).__name__} -> {type(target).__name__}"
            )
        logger.warning(
            "Ignoring malformed drag pair %s -> %s",
            type(source).__name__, type(target).__name__,
        )
        return OperationDecision.invalid("Malformed drag gesture")

    if isinstance(source, CommitSource):
        if isinstance(target, CommitTarget):
            return _rebase_commit(source, target)
        if isinstance(target, BranchTarget):
            return _cherry_pick(source, target, current_branch)
        if isinstance(target, EmptySpaceTarget):
            return _create_branch(source)
        if isinstance(target, PositionTarget):
            return _reorder(source, target)
    elif isinstance(source, BranchSource):
        if isinstance(target, CommitTarget):
            return _rebase_branch(source, target)
        if isinstance(target, BranchTarget):
            return _merge(source, target, current_branch)
    elif isinstance(source, BranchPointerSource):
        if isinstance(target, CommitTarget):
            return _move_branch(source, target)

    return OperationDecision.invalid()
