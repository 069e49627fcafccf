"""Protocol definitions for gitboard.

StepRunner is the pluggable interface to whatever actually mutates the
repository (a git subprocess wrapper, a test double). The executor only
talks to it through these four calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gitboard.models.execution import ApplyStep, ExecutionStatus, StepOutcome


@runtime_checkable
class StepRunner(Protocol):
    """Applies rebase steps to a real repository.

    Calls are strictly sequential: ``apply`` is never invoked before the
    previous step's outcome has been returned.
    """

    def apply(self, step: ApplyStep) -> StepOutcome:
        """Apply one step and report success, conflict or failure."""
        ...

    def commit_resolution(self, step: ApplyStep) -> None:
        """Record the user's conflict resolution for ``step`` (``rebase --continue``)."""
        ...

    def discard(self, step: ApplyStep) -> None:
        """Throw away the conflicting changes of ``step`` (``rebase --skip``)."""
        ...

    def restore(self) -> None:
        """Restore the repository to its pre-rebase state (``rebase --abort``)."""
        ...


StatusListener = Callable[["ExecutionStatus", "ExecutionStatus"], None]
"""Called with (old_status, new_status) on every executor status change."""
