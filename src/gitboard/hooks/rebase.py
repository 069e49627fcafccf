"""PendingRebase -- confirmation object for executing a rebase plan.

Created by RebaseSession.review(). Holds the plan, its preview and the
edited squash messages. Handlers can drop commits or set a meld message
before approving; approve() hands everything to the executor.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from gitboard.hooks.pending import Pending
from gitboard.models.action import RebaseAction
from gitboard.operations.preview import final_commit_count, project_preview
from gitboard.operations.squash import DEFAULT_COMMENT_CHAR, require_final_message

if TYPE_CHECKING:
    from gitboard.models.plan import RebasePlan
    from gitboard.operations.preview import PreviewEntry


@dataclass(repr=False)
class PendingRebase(Pending):
    """A rebase plan that has been reviewed but not yet executed.

    Fields:
        plan: The plan that approve() will execute.
        messages: Final meld messages keyed by fold-target commit id.
        comment_char: Comment marker stripped from edited messages.
    """

    plan: Optional[RebasePlan] = None
    messages: dict[str, str] = field(default_factory=dict)
    comment_char: str = DEFAULT_COMMENT_CHAR

    _public_actions: frozenset[str] = field(
        default_factory=lambda: frozenset({"approve", "reject", "exclude", "set_message"}),
        repr=False,
    )

    def __post_init__(self) -> None:
        if self.plan is None:
            raise ValueError("PendingRebase requires a plan")
        if not self.operation:
            self.operation = "rebase"

    @property
    def preview(self) -> list[PreviewEntry]:
        assert self.plan is not None
        return project_preview(self.plan)

    @property
    def final_count(self) -> int:
        assert self.plan is not None
        return final_commit_count(self.plan)

    # -- Editing methods ------------------------------------------------

    def exclude(self, commit_id: str) -> None:
        """Drop a commit from the plan before executing it.

        Saved messages for runs that change as a result are discarded.

        Raises:
            ValueError: If the commit is not part of the plan.
            RuntimeError: If status is not "pending".
        """
        self._require_pending()
        assert self.plan is not None
        ids = self.plan.commit_ids
        if commit_id not in ids:
            raise ValueError(f"Commit {commit_id!r} is not in the rebase plan.")
        before = self.plan
        self.plan = before.set_action(ids.index(commit_id), RebaseAction.DROP)
        for target in list(self.messages):
            if self.plan.fold_run(target) != before.fold_run(target):
                # Written for a run this exclusion changed
                del self.messages[target]

    def set_message(self, commit_id: str, raw_text: str) -> str:
        """Save an edited squash message for the run melding into ``commit_id``.

        Comment lines are stripped first.

        Returns:
            The stored final message.

        Raises:
            EmptyMessageError: If nothing remains after stripping; the
                previous message (if any) is kept.
        """
        self._require_pending()
        message = require_final_message(raw_text, comment_char=self.comment_char)
        self.messages[commit_id] = message
        return message

    def __repr__(self) -> str:
        n = len(self.plan) if self.plan is not None else 0
        return f"<PendingRebase: {n} commits -> {self.final_count}, {self.status}>"
