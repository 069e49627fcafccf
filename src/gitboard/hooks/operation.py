"""PendingOperation -- confirmation gate for drag-and-drop operations.

request_operation() wraps a classifier decision. Safe operations are
dispatched immediately, dangerous ones wait for approve(), and invalid
ones come back already rejected so nothing reaches the runner.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from gitboard.hooks.pending import Pending, PendingStatus
from gitboard.models.drag import OperationDecision

logger = logging.getLogger(__name__)


@dataclass(repr=False)
class PendingOperation(Pending):
    """A classified drag operation waiting to be dispatched.

    Fields:
        decision: The classifier's decision, forwarded verbatim on approval.
        source: The drag source the decision was made for.
        target: The drop target the decision was made for.
    """

    decision: Optional[OperationDecision] = None
    source: Any = None
    target: Any = None

    _public_actions: frozenset[str] = field(
        default_factory=lambda: frozenset({"approve", "reject"}),
        repr=False,
    )

    def __post_init__(self) -> None:
        if self.decision is None:
            raise ValueError("PendingOperation requires a decision")
        if not self.operation:
            self.operation = self.decision.operation.value

    def approve(self) -> Any:
        """Dispatch the operation.

        Raises:
            RuntimeError: If status is not "pending" or the decision is invalid.
        """
        assert self.decision is not None
        if not self.decision.is_valid:
            raise RuntimeError(f"Cannot approve an invalid operation: {self.decision.description}")
        return super().approve()

    @property
    def needs_confirmation(self) -> bool:
        return self.status == PendingStatus.PENDING and bool(self.decision and self.decision.dangerous)


def request_operation(
    decision: OperationDecision,
    dispatch: Callable[[OperationDecision], Any],
    *,
    source: Any = None,
    target: Any = None,
) -> PendingOperation:
    """Route a decision through the confirmation gate.

    Args:
        decision: Result of classify() for the drop.
        dispatch: Callable that forwards the decision to the runner.
        source: Optional drag source, kept for display.
        target: Optional drop target, kept for display.

    Returns:
        A PendingOperation that is already approved (safe operations),
        already rejected (invalid decisions) or still pending (dangerous
        operations awaiting the user's confirmation).
    """
    pending = PendingOperation(
        operation=decision.operation.value,
        decision=decision,
        source=source,
        target=target,
    )
    pending._execute_fn = lambda p: dispatch(p.decision)

    if not decision.is_valid:
        pending.reject(decision.description)
    elif not decision.dangerous:
        logger.debug("Dispatching %s without confirmation", decision.operation.value)
        pending.approve()
    else:
        logger.debug("Holding %s for confirmation", decision.operation.value)
    return pending
