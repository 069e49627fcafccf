"""gitboard exception hierarchy.

All gitboard-specific exceptions inherit from GitBoardError.
"""


class GitBoardError(Exception):
    """Base exception for all gitboard errors."""


class PlanError(GitBoardError):
    """Base exception for rebase plan errors."""


class PlanIndexError(PlanError, IndexError):
    """Raised when a plan operation is given an out-of-range index.

    Only raised in strict mode. With ``strict=False`` the operation is
    logged and the plan is returned unchanged.
    """

    def __init__(self, index: int, size: int, operation: str = "") -> None:
        self.index = index
        self.size = size
        self.operation = operation
        where = f" in {operation}()" if operation else ""
        super().__init__(
            f"Plan index {index} out of range{where} (plan has {size} entries)"
        )


class EmptyPlanError(PlanError):
    """Raised when a rebase plan would be built with no entries."""

    def __init__(self) -> None:
        super().__init__("A rebase plan needs at least one commit")


class InvalidPlanError(PlanError):
    """Raised when a plan that fails validation is handed to execution."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("Invalid rebase plan: " + "; ".join(problems))


class EmptyMessageError(GitBoardError):
    """Raised when a squash message is empty once comment lines are stripped."""

    def __init__(self) -> None:
        super().__init__(
            "Commit message is empty after removing comment lines. "
            "Keep editing or abort."
        )


class ExecutionError(GitBoardError):
    """Base exception for rebase execution errors."""


class ExecutionStateError(ExecutionError):
    """Raised when an executor event is not allowed in the current state."""

    def __init__(self, event: str, status: str) -> None:
        self.event = event
        self.status = status
        super().__init__(f"Cannot {event} while rebase is {status}")


class UnresolvedConflictsError(ExecutionError):
    """Raised by continue_() while conflicted files remain unresolved."""

    def __init__(self, paths: list[str]) -> None:
        self.paths = paths
        super().__init__(
            f"Cannot continue rebase: {len(paths)} unresolved file(s): "
            + ", ".join(paths)
        )


class UnknownConflictFileError(ExecutionError):
    """Raised when resolving a path that is not part of the current conflict."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File is not in the current conflict: {path}")
