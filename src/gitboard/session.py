"""Interactive rebase session.

RebaseSession is the entry point the board talks to while the rebase
dialog is open. It owns the current plan value, the plan as it was when
the session started (for reset), an undo stack of earlier plan values and
the squash messages the user saved. When the user commits to the plan
it hands everything to a RebaseExecutor.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional

from gitboard.engine.executor import RebaseExecutor
from gitboard.exceptions import ExecutionStateError, InvalidPlanError
from gitboard.hooks.rebase import PendingRebase
from gitboard.models.action import RebaseAction
from gitboard.models.config import DEFAULT_CONFIG
from gitboard.models.execution import ExecutionStatus
from gitboard.models.plan import FoldGroup, RebasePlan
from gitboard.operations.preview import final_commit_count, project_preview
from gitboard.operations.squash import compose_squash_message, extract_final_message
from gitboard.operations.steps import render_todo

if TYPE_CHECKING:
    from gitboard.models.commit import CommitRef
    from gitboard.models.config import PlanConfig
    from gitboard.operations.preview import PreviewEntry
    from gitboard.protocols import StatusListener, StepRunner

logger = logging.getLogger(__name__)


class RebaseSession:
    """Editing and execution of one interactive rebase.

    Usage::

        session = RebaseSession.start(commits, onto="main", branch="feature")
        session.set_action(1, RebaseAction.SQUASH)
        session.move_entry(3, 0)
        for line in session.preview():
            print(line.short_id, line.status, line.note)
        executor = session.execute(runner)
    """

    def __init__(
        self,
        plan: RebasePlan,
        *,
        config: PlanConfig | None = None,
        runner: StepRunner | None = None,
        listener: StatusListener | None = None,
    ) -> None:
        self._config = config or DEFAULT_CONFIG
        self._plan = plan
        self._original = plan
        self._undo: list[RebasePlan] = []
        self._messages: dict[str, str] = {}
        self._message_runs: dict[str, tuple[str, ...]] = {}  # Run each message was written for
        self._runner = runner
        self._listener = listener
        self._executor: RebaseExecutor | None = None

    @classmethod
    def start(
        cls,
        commits: Iterable[CommitRef],
        *,
        onto: str = "",
        branch: str = "",
        config: PlanConfig | None = None,
        runner: StepRunner | None = None,
        listener: StatusListener | None = None,
    ) -> RebaseSession:
        """Open a session with every commit picked, oldest first."""
        plan = RebasePlan.from_commits(commits, onto=onto, branch=branch, config=config)
        logger.debug("Rebase session started with %d commit(s)", len(plan))
        return cls(plan, config=config, runner=runner, listener=listener)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def plan(self) -> RebasePlan:
        return self._plan

    @property
    def original_plan(self) -> RebasePlan:
        return self._original

    @property
    def config(self) -> PlanConfig:
        return self._config

    @property
    def messages(self) -> dict[str, str]:
        """Saved meld messages keyed by fold-target commit id (a copy)."""
        return dict(self._messages)

    @property
    def executor(self) -> RebaseExecutor | None:
        return self._executor

    @property
    def is_executing(self) -> bool:
        return self._executor is not None and not self._executor.status.is_terminal

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    def _require_idle(self, event: str) -> None:
        if self.is_executing:
            raise ExecutionStateError(event, self._executor.status.value)  # type: ignore[union-attr]

    def _replace_plan(self, plan: RebasePlan) -> RebasePlan:
        self._require_idle("edit the plan")
        if plan is not self._plan and plan != self._plan:
            self._undo.append(self._plan)
            self._set_plan(plan)
        return self._plan

    def _set_plan(self, plan: RebasePlan) -> None:
        self._plan = plan
        for commit_id in list(self._messages):
            if plan.fold_run(commit_id) != self._message_runs.get(commit_id, ()):
                logger.info(
                    "Discarding saved squash message for %s: the commits folded into it changed",
                    commit_id[:8],
                )
                del self._messages[commit_id]
                self._message_runs.pop(commit_id, None)

    # ------------------------------------------------------------------
    # Plan editing
    # ------------------------------------------------------------------

    def set_action(self, index: int, action: RebaseAction) -> RebasePlan:
        return self._replace_plan(self._plan.set_action(index, action))

    def apply_shortcut(self, index: int, key: str) -> RebasePlan:
        """Set an action from its single-key shortcut; unknown keys do nothing."""
        action = RebaseAction.from_shortcut(key)
        if action is None:
            return self._plan
        return self.set_action(index, action)

    def reword(self, index: int, message: str) -> RebasePlan:
        return self._replace_plan(self._plan.reword(index, message))

    def set_all_actions(self, action: RebaseAction) -> RebasePlan:
        return self._replace_plan(self._plan.set_all_actions(action))

    def move_entry(self, from_index: int, to_index: int) -> RebasePlan:
        return self._replace_plan(self._plan.move_entry(from_index, to_index))

    def move_up(self, index: int) -> RebasePlan:
        return self._replace_plan(self._plan.move_up(index))

    def move_down(self, index: int) -> RebasePlan:
        return self._replace_plan(self._plan.move_down(index))

    def undo(self) -> RebasePlan:
        """Return to the previous plan value; no-op when nothing to undo.

        Raises:
            ExecutionStateError: While a run is in progress.
        """
        self._require_idle("undo")
        if self._undo:
            self._set_plan(self._undo.pop())
        return self._plan

    def reset(self) -> RebasePlan:
        """Discard every edit and go back to the plan the session started with."""
        plan = self._replace_plan(self._original)
        self._messages.clear()
        self._message_runs.clear()
        return plan

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def fold_groups(self) -> list[FoldGroup]:
        return self._plan.fold_groups()

    def preview(self) -> list[PreviewEntry]:
        return project_preview(self._plan)

    def final_count(self) -> int:
        return final_commit_count(self._plan)

    def validate(self) -> list[str]:
        return self._plan.validate()

    def can_start(self) -> bool:
        return not self.is_executing and not self._plan.validate()

    def todo(self) -> str:
        return render_todo(self._plan, comment_char=self._config.comment_char)

    # ------------------------------------------------------------------
    # Squash messages
    # ------------------------------------------------------------------

    def _group_for(self, commit_id: str) -> Optional[FoldGroup]:
        ids = self._plan.commit_ids
        for group in self._plan.fold_groups():
            if ids[group.target_index] == commit_id:
                return group
        return None

    def squash_message(self, commit_id: str) -> str:
        """Editable combined message for the run that folds into ``commit_id``.

        Raises:
            ValueError: If no squash/fixup run folds into that commit.
        """
        group = self._group_for(commit_id)
        if group is None:
            raise ValueError(f"No squash or fixup run folds into {commit_id!r}")
        entries = [self._plan.entries[i] for i in group.indices]
        return compose_squash_message(entries, comment_char=self._config.comment_char)

    def save_squash_message(self, commit_id: str, raw_text: str) -> str:
        """Store the edited message for a run.

        The message is tied to the commits currently folded into
        ``commit_id`` and is discarded when a later edit changes them.

        Returns:
            The final message. An empty string means the save was
            rejected and the previously saved message (if any) is kept.

        Raises:
            ExecutionStateError: While a run is in progress.
        """
        self._require_idle("save a squash message")
        message = extract_final_message(raw_text, comment_char=self._config.comment_char)
        if not message:
            logger.info("Rejected empty squash message for %s", commit_id[:8])
            return ""
        self._store_message(commit_id, message)
        return message

    def _store_message(self, commit_id: str, message: str) -> None:
        self._messages[commit_id] = message
        self._message_runs[commit_id] = self._plan.fold_run(commit_id)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def review(self) -> PendingRebase:
        """Return a PendingRebase the user approves to start execution."""
        pending = PendingRebase(
            operation="rebase",
            plan=self._plan,
            messages=dict(self._messages),
            comment_char=self._config.comment_char,
        )

        def _execute(p: PendingRebase) -> RebaseExecutor:
            assert p.plan is not None
            self._replace_plan(p.plan)
            for commit_id, message in p.messages.items():
                self._store_message(commit_id, message)
            return self.execute()

        pending._execute_fn = _execute
        return pending

    def execute(self, runner: StepRunner | None = None) -> RebaseExecutor:
        """Start executing the current plan.

        Args:
            runner: Step runner; defaults to the one given to the session.
                Without a runner the returned executor is driven through
                ``current_step`` and ``report()``.

        Raises:
            InvalidPlanError: If the plan fails validation.
            ExecutionStateError: If a run is already in progress.
        """
        self._require_idle("start")
        problems = self._plan.validate()
        if problems:
            raise InvalidPlanError(problems)
        executor = RebaseExecutor(
            runner or self._runner, config=self._config, listener=self._listener
        )
        self._executor = executor
        executor.start(self._plan, self._messages)
        if executor.status == ExecutionStatus.COMPLETED:
            logger.info("Rebase finished without pausing")
        return executor

    def __repr__(self) -> str:
        state = self._executor.status.value if self._executor else "planning"
        return f"<RebaseSession: {len(self._plan)} commits, {state}>"
