"""gitboard: interactive-rebase planning for a commit-graph board.

Plans interactive rebases as immutable values, previews the resulting
history, composes squash messages, classifies drag-and-drop gestures
into repository operations and drives resumable rebase execution
through a pluggable step runner.
"""

from gitboard._version import __version__

# Session entry point
from gitboard.session import RebaseSession

# Snapshot models
from gitboard.models.commit import BranchRef, CommitRef, RepositorySnapshot

# Actions and plans
from gitboard.models.action import ACTION_INFO, ActionInfo, RebaseAction
from gitboard.models.plan import FoldGroup, PlanEntry, RebasePlan

# Configuration
from gitboard.models.config import PlanConfig

# Drag and drop
from gitboard.models.drag import (
    BranchPointerSource,
    BranchSource,
    BranchTarget,
    CommitSource,
    CommitTarget,
    DragSource,
    DropTarget,
    EmptySpaceTarget,
    GitOperation,
    OperationDecision,
    PositionTarget,
    TagSource,
)
from gitboard.operations.classify import classify

# Preview, squash messages and steps
from gitboard.operations.preview import (
    PreviewEntry,
    PreviewStatus,
    final_commit_count,
    project_preview,
)
from gitboard.operations.squash import (
    compose_squash_message,
    extract_final_message,
    require_final_message,
)
from gitboard.operations.steps import build_steps, render_todo

# Execution
from gitboard.engine.executor import RebaseExecutor
from gitboard.models.execution import (
    ApplyStep,
    ConflictFile,
    ConflictState,
    ExecutionProgress,
    ExecutionStatus,
    StepKind,
    StepOutcome,
)
from gitboard.protocols import StepRunner

# Hooks
from gitboard.hooks import Pending, PendingOperation, PendingRebase, PendingStatus, request_operation

# Exceptions
from gitboard.exceptions import (
    EmptyMessageError,
    EmptyPlanError,
    ExecutionError,
    ExecutionStateError,
    GitBoardError,
    InvalidPlanError,
    PlanError,
    PlanIndexError,
    UnknownConflictFileError,
    UnresolvedConflictsError,
)

__all__ = [
    "__version__",
    # Session
    "RebaseSession",
    # Snapshot
    "BranchRef",
    "CommitRef",
    "RepositorySnapshot",
    # Actions and plans
    "ACTION_INFO",
    "ActionInfo",
    "RebaseAction",
    "FoldGroup",
    "PlanEntry",
    "RebasePlan",
    "PlanConfig",
    # Drag and drop
    "BranchPointerSource",
    "BranchSource",
    "BranchTarget",
    "CommitSource",
    "CommitTarget",
    "DragSource",
    "DropTarget",
    "EmptySpaceTarget",
    "GitOperation",
    "OperationDecision",
    "PositionTarget",
    "TagSource",
    "classify",
    # Preview and messages
    "PreviewEntry",
    "PreviewStatus",
    "final_commit_count",
    "project_preview",
    "compose_squash_message",
    "extract_final_message",
    "require_final_message",
    "build_steps",
    "render_todo",
    # Execution
    "RebaseExecutor",
    "ApplyStep",
    "ConflictFile",
    "ConflictState",
    "ExecutionProgress",
    "ExecutionStatus",
    "StepKind",
    "StepOutcome",
    "StepRunner",
    # Hooks
    "Pending",
    "PendingOperation",
    "PendingRebase",
    "PendingStatus",
    "request_operation",
    # Exceptions
    "EmptyMessageError",
    "EmptyPlanError",
    "ExecutionError",
    "ExecutionStateError",
    "GitBoardError",
    "InvalidPlanError",
    "PlanError",
    "PlanIndexError",
    "UnknownConflictFileError",
    "UnresolvedConflictsError",
]
