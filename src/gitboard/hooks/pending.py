"""Approve/reject container shared by the confirmation hooks.

History-rewriting drops and rebase plans are wrapped in a Pending
instead of being sent to the runner. The board renders it, the user
decides, and approve() runs the callback the creator attached.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class PendingStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    def __str__(self) -> str:
        return self.value


@dataclass(repr=False)
class Pending:
    """Something the user has to confirm before it reaches the runner.

    Fields:
        operation: What is being confirmed, e.g. "rebase" or "move-branch".
        pending_id: Short random hex id the board uses to address it.
        created_at: Creation time, UTC.
        status: PendingStatus; only PENDING items accept edits.
        rejection_reason: Why the user declined, when rejected.

    Internal:
        _execute_fn: Callback run on approval with this object as argument.
        _public_actions: Method names the board may call through apply_decision().
    """

    operation: str
    pending_id: str = field(default_factory=lambda: uuid.uuid4().hex[:16])
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    status: PendingStatus = PendingStatus.PENDING
    rejection_reason: str | None = None

    _execute_fn: Callable[..., Any] | None = field(default=None, repr=False)
    _result: Any = field(default=None, repr=False)
    _public_actions: frozenset[str] = field(
        default_factory=lambda: frozenset({"approve", "reject"}), repr=False
    )

    def _require_pending(self) -> None:
        if self.status != PendingStatus.PENDING:
            raise RuntimeError(
                f"{type(self).__name__} for {self.operation!r} is already "
                f"{self.status.value}; it can no longer be changed."
            )

    @property
    def result(self) -> Any:
        """Whatever approve() returned, or None before approval."""
        return self._result

    # -- Confirmation -----------------------------------------------------

    def approve(self) -> Any:
        """Confirm and run the callback.

        Returns:
            The callback's return value (also kept in ``result``).

        Raises:
            RuntimeError: If already approved/rejected, or no callback is set.
        """
        self._require_pending()
        if self._execute_fn is None:
            raise RuntimeError(f"{type(self).__name__} has nothing to run on approval.")
        self.status = PendingStatus.APPROVED
        self._result = self._execute_fn(self)
        return self._result

    def reject(self, reason: str = "") -> None:
        """Decline; the callback never runs."""
        self._require_pending()
        self.status = PendingStatus.REJECTED
        self.rejection_reason = reason

    # -- Board messages ---------------------------------------------------

    def apply_decision(self, decision: dict) -> Any:
        """Run the method named by a board message.

        Messages look like ``{"action": "reject", "args": {"reason": "..."}}``.
        Only names in ``_public_actions`` are accepted.

        Raises:
            ValueError: If the name is private or not accepted here.
            KeyError: If the message has no "action".
        """
        name = decision["action"]
        args = decision.get("args") or {}
        if name.startswith("_") or name not in self._public_actions:
            raise ValueError(
                f"{type(self).__name__} does not accept {name!r}; "
                f"expected one of {sorted(self._public_actions)}"
            )
        return getattr(self, name)(**args)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}: {self.operation}, {self.status}, id={self.pending_id[:8]}>"

    def pprint(self, *, file: Any = None) -> None:
        from gitboard.formatting import pprint_pending

        pprint_pending(self, file=file)
