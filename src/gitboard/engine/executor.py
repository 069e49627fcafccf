"""Resumable rebase execution.

RebaseExecutor walks the apply steps of a RebasePlan one at a time. It is
an explicit state machine:

    idle -> running -> paused | completed | aborted
    paused -> running (continue_ / skip) | aborted (abort)

Two driving modes are supported. With a StepRunner, the executor calls
``runner.apply()`` itself and keeps going until the run pauses on a
conflict, completes or aborts. Without one, each public call returns the
step that must be applied next and the caller feeds the result back via
``report()``. Either way exactly one step is in flight at a time and no
step is ever retried. An exception from a runner hook aborts the run.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Mapping, Optional

from gitboard.exceptions import (
    ExecutionStateError,
    InvalidPlanError,
    UnknownConflictFileError,
    UnresolvedConflictsError,
)
from gitboard.models.config import DEFAULT_CONFIG
from gitboard.models.execution import (
    ApplyStep,
    ConflictFile,
    ConflictState,
    ExecutionProgress,
    ExecutionStatus,
    StepOutcome,
)
from gitboard.operations.steps import build_steps

if TYPE_CHECKING:
    from gitboard.models.config import PlanConfig
    from gitboard.models.plan import RebasePlan
    from gitboard.protocols import StatusListener, StepRunner

logger = logging.getLogger(__name__)


class RebaseExecutor:
    """Drives a rebase plan through the external step runner.

    Usage::

        executor = RebaseExecutor(runner=my_git_runner)
        executor.start(plan)
        if executor.status == ExecutionStatus.PAUSED:
            for path in executor.conflict.unresolved_paths:
                ...  # user resolves the file
                executor.resolve_file(path)
            executor.continue_()
    """

    def __init__(
        self,
        runner: StepRunner | None = None,
        *,
        config: PlanConfig | None = None,
        listener: StatusListener | None = None,
    ) -> None:
        self._runner = runner
        self._config = config or DEFAULT_CONFIG
        self._listener = listener
        self._status = ExecutionStatus.IDLE
        self._progress = ExecutionProgress()
        self._plan: RebasePlan | None = None
        self._steps: tuple[ApplyStep, ...] = ()
        self._in_flight: ApplyStep | None = None
        self._paused_step: ApplyStep | None = None
        self._conflict: ConflictState | None = None
        self._abort_reason: str | None = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def status(self) -> ExecutionStatus:
        return self._status

    @property
    def progress(self) -> ExecutionProgress:
        return self._progress

    @property
    def conflict(self) -> ConflictState | None:
        return self._conflict

    @property
    def plan(self) -> RebasePlan | None:
        return self._plan

    @property
    def steps(self) -> tuple[ApplyStep, ...]:
        return self._steps

    @property
    def current_step(self) -> ApplyStep | None:
        """Step awaiting a result, or the step the run is paused on."""
        return self._in_flight or self._paused_step

    @property
    def abort_reason(self) -> str | None:
        """Runner error that forced an abort, if any."""
        return self._abort_reason

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def start(
        self,
        plan: RebasePlan,
        messages: Mapping[str, str] | None = None,
    ) -> Optional[ApplyStep]:
        """Begin executing ``plan``.

        Args:
            plan: The plan to apply.
            messages: Final meld messages keyed by fold-target commit id,
                as saved from the squash message editor.

        Returns:
            The step to apply next when driving without a runner, else None.

        Raises:
            ExecutionStateError: If the executor is not idle.
            InvalidPlanError: If ``plan.validate()`` reports problems.
        """
        self._require("start", ExecutionStatus.IDLE)
        problems = plan.validate()
        if problems:
            raise InvalidPlanError(problems)

        self._plan = plan
        self._steps = tuple(
            build_steps(plan, messages, comment_char=self._config.comment_char)
        )
        self._progress = ExecutionProgress(total=len(self._steps))
        logger.info(
            "Starting rebase of %d commit(s) in %d step(s)", len(plan), len(self._steps)
        )
        self._set_status(ExecutionStatus.RUNNING)
        return self._drive()

    def report(self, outcome: StepOutcome) -> Optional[ApplyStep]:
        """Feed back the result of the step in flight.

        Returns:
            The next step to apply, or None if the run paused or ended.

        Raises:
            ExecutionStateError: If no step is awaiting a result.
        """
        self._require("report a step result", ExecutionStatus.RUNNING)
        if self._in_flight is None:
            raise ExecutionStateError("report a step result", "not waiting on a step")
        step = self._in_flight
        self._consume(step, outcome)
        return self._drive()

    def resolve_file(self, path: str) -> None:
        """Mark one conflicted file resolved. Does not change the status."""
        self._require("resolve a file", ExecutionStatus.PAUSED)
        assert self._conflict is not None
        if not self._conflict.has_file(path):
            if self._config.strict:
                raise UnknownConflictFileError(path)
            logger.warning("Ignoring resolve_file(%r): not in the current conflict", path)
            return
        self._conflict = self._conflict.with_resolved(path)

    def resolve_all(self) -> None:
        self._require("resolve files", ExecutionStatus.PAUSED)
        assert self._conflict is not None
        for path in self._conflict.unresolved_paths:
            self._conflict = self._conflict.with_resolved(path)

    def continue_(self) -> Optional[ApplyStep]:
        """Resume after every conflicted file has been resolved.

        The conflicted step counts as applied.

        Raises:
            UnresolvedConflictsError: If any file is unresolved. The
                executor stays paused.
        """
        self._require("continue", ExecutionStatus.PAUSED)
        assert self._conflict is not None and self._paused_step is not None
        unresolved = self._conflict.unresolved_paths
        if unresolved:
            raise UnresolvedConflictsError(unresolved)

        step = self._paused_step
        if self._runner is not None and not self._call_runner("commit_resolution", step):
            return None
        self._progress = replace(
            self._progress,
            current_index=self._progress.current_index + 1,
            completed_ids=self._progress.completed_ids | set(step.commit_ids),
        )
        self._clear_pause()
        logger.info("Continuing rebase after resolving %s", step.target_commit_id[:8])
        self._set_status(ExecutionStatus.RUNNING)
        return self._drive()

    def skip(self) -> Optional[ApplyStep]:
        """Discard the conflicting step and move past it.

        The skipped commits are left out of this run only; the plan
        itself is not modified.
        """
        self._require("skip", ExecutionStatus.PAUSED)
        assert self._paused_step is not None
        step = self._paused_step
        if self._runner is not None and not self._call_runner("discard", step):
            return None
        self._progress = replace(
            self._progress,
            current_index=self._progress.current_index + 1,
            skipped_ids=self._progress.skipped_ids | set(step.commit_ids),
        )
        self._clear_pause()
        logger.info("Skipped %s", step.target_commit_id[:8])
        self._set_status(ExecutionStatus.RUNNING)
        return self._drive()

    def abort(self) -> None:
        """Abandon the run and have the runner restore the pre-rebase state."""
        self._require("abort", ExecutionStatus.RUNNING, ExecutionStatus.PAUSED)
        self._abort()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require(self, event: str, *allowed: ExecutionStatus) -> None:
        if self._status not in allowed:
            raise ExecutionStateError(event, self._status.value)

    def _set_status(self, status: ExecutionStatus) -> None:
        old = self._status
        self._status = status
        self._progress = replace(self._progress, status=status)
        logger.debug("Rebase status %s -> %s", old.value, status.value)
        if self._listener is not None and old != status:
            self._listener(old, status)

    def _drive(self) -> Optional[ApplyStep]:
        """Issue steps until one is awaiting an external result or the run stops."""
        while self._status == ExecutionStatus.RUNNING:
            index = self._progress.current_index
            if index >= len(self._steps):
                self._complete()
                return None
            step = self._steps[index]
            self._in_flight = step
            logger.debug(
                "Issuing step %d/%d: %s %s",
                index + 1, len(self._steps), step.kind.value, step.target_commit_id[:8],
            )
            if self._runner is None:
                return step
            try:
                outcome = self._runner.apply(step)
            except Exception as exc:
                logger.debug("Runner apply() raised: %s", exc, exc_info=True)
                outcome = StepOutcome.failure(f"Runner error: {exc}")
            self._consume(step, outcome)
        return None

    def _call_runner(self, name: str, step: ApplyStep) -> bool:
        """Call a runner hook; on error abort the run and return False."""
        assert self._runner is not None
        try:
            getattr(self._runner, name)(step)
        except Exception as exc:
            logger.error(
                "Runner %s() failed for %s: %s; aborting rebase",
                name, step.target_commit_id[:8], exc,
            )
            self._abort(reason=f"Runner error: {exc}")
            return False
        return True

    def _consume(self, step: ApplyStep, outcome: StepOutcome) -> None:
        self._in_flight = None
        if outcome.success:
            self._progress = replace(
                self._progress,
                current_index=self._progress.current_index + 1,
                completed_ids=self._progress.completed_ids | set(step.commit_ids),
            )
            return
        if outcome.is_conflict:
            self._paused_step = step
            self._conflict = ConflictState(
                commit_id=step.target_commit_id,
                conflicted_files=tuple(ConflictFile(path=p) for p in outcome.conflict_files),
                message=step.new_message or "",
            )
            logger.info(
                "Rebase paused: %d conflicted file(s) applying %s",
                len(outcome.conflict_files), step.target_commit_id[:8],
            )
            self._set_status(ExecutionStatus.PAUSED)
            return
        logger.error(
            "Step %s %s failed: %s; aborting rebase",
            step.kind.value, step.target_commit_id[:8], outcome.error,
        )
        self._abort(reason=outcome.error or "step failed")

    def _clear_pause(self) -> None:
        self._paused_step = None
        self._conflict = None

    def _complete(self) -> None:
        logger.info(
            "Rebase completed: %d applied, %d skipped",
            len(self._progress.completed_ids), len(self._progress.skipped_ids),
        )
        self._plan = None
        self._set_status(ExecutionStatus.COMPLETED)

    def _abort(self, reason: str | None = None) -> None:
        # The run ends aborted even when restore() raises
        try:
            if self._runner is not None:
                self._runner.restore()
        finally:
            self._abort_reason = reason
            self._plan = None
            self._steps = ()
            self._in_flight = None
            self._clear_pause()
            logger.info("Rebase aborted%s", f": {reason}" if reason else "")
            self._set_status(ExecutionStatus.ABORTED)

    def __repr__(self) -> str:
        return f"<RebaseExecutor: {self._progress}>"

    def pprint(self, *, file: object = None) -> None:
        """Print progress and, while paused, the conflicted files."""
        from gitboard.formatting import pprint_progress

        pprint_progress(self._progress, self._conflict, file=file)
