"""Tests for RebaseSession: editing, undo, squash messages and execution."""

from __future__ import annotations

import pytest

from gitboard import (
    ExecutionStateError,
    ExecutionStatus,
    InvalidPlanError,
    PendingRebase,
    PlanConfig,
    RebaseAction,
    RebaseSession,
    StepOutcome,
)
from tests.conftest import FakeRunner, make_commits


@pytest.fixture
def session(commits, runner) -> RebaseSession:
    return RebaseSession.start(commits, onto="main", branch="feature", runner=runner)


class TestEditing:
    def test_starts_all_pick(self, session):
        assert session.plan.actions == [RebaseAction.PICK] * 4
        assert session.plan is session.original_plan
        assert not session.can_undo

    def test_set_action_and_undo(self, session):
        before = session.plan
        session.set_action(1, RebaseAction.SQUASH)
        assert session.plan[1].action == RebaseAction.SQUASH
        assert session.can_undo
        assert session.undo() is before
        assert not session.can_undo

    def test_undo_with_empty_stack(self, session):
        assert session.undo() is session.plan

    def test_noop_edit_not_recorded(self, session):
        session.move_up(0)
        session.move_entry(2, 2)
        assert not session.can_undo

    def test_shortcuts(self, session):
        session.apply_shortcut(2, "f")
        session.apply_shortcut(3, "d")
        assert session.plan.actions[2:] == [RebaseAction.FIXUP, RebaseAction.DROP]

    def test_unknown_shortcut_ignored(self, session):
        session.apply_shortcut(1, "z")
        assert not session.can_undo

    def test_reword_and_moves(self, session):
        session.reword(0, "Better")
        session.move_down(0)
        assert session.plan[1].message == "Better"
        session.move_up(1)
        assert session.plan[0].message == "Better"

    def test_set_all_actions(self, session):
        session.set_all_actions(RebaseAction.FIXUP)
        assert session.plan.actions == [RebaseAction.PICK] + [RebaseAction.FIXUP] * 3
        assert session.plan[0].coerced

    def test_reset(self, session):
        session.set_action(1, RebaseAction.SQUASH)
        session.save_squash_message(session.plan[0].commit_id, "Combined")
        session.move_entry(3, 0)
        session.reset()
        assert session.plan == session.original_plan
        assert session.messages == {}
        # Reset itself can be undone
        assert session.can_undo

    def test_lenient_config(self, commits):
        session = RebaseSession.start(commits, config=PlanConfig(strict=False))
        session.set_action(10, RebaseAction.DROP)
        assert not session.can_undo


class TestDerivedViews:
    def test_preview_and_count(self, session):
        session.set_action(1, RebaseAction.SQUASH)
        session.set_action(2, RebaseAction.FIXUP)
        assert session.final_count() == 2
        assert len(session.preview()) == 4
        assert [g.indices for g in session.fold_groups()] == [(0, 1, 2)]

    def test_validate_and_can_start(self, session):
        assert session.can_start()
        session.set_all_actions(RebaseAction.DROP)
        assert session.validate() == ["Cannot drop all commits"]
        assert not session.can_start()

    def test_todo(self, session):
        assert session.todo().endswith("# Rebase 4 commit(s) onto main\n")


class TestSquashMessages:
    def test_squash_message_for_target(self, session):
        session.set_action(1, RebaseAction.SQUASH)
        text = session.squash_message(session.plan[0].commit_id)
        assert "# This is the combination of 2 commits." in text

    def test_squash_message_without_group(self, session):
        with pytest.raises(ValueError):
            session.squash_message(session.plan[0].commit_id)

    def test_save_strips_comments(self, session):
        target = session.plan[0].commit_id
        assert session.save_squash_message(target, "# hi\nCombined\n") == "Combined"
        assert session.messages == {target: "Combined"}

    def test_empty_save_rejected(self, session):
        target = session.plan[0].commit_id
        session.save_squash_message(target, "Kept")
        assert session.save_squash_message(target, "# nothing\n") == ""
        assert session.messages[target] == "Kept"

    def test_messages_is_a_copy(self, session):
        session.messages["x"] = "y"
        assert session.messages == {}

    def test_message_discarded_when_run_changes(self, session, runner):
        target = session.plan[0].commit_id
        session.set_action(1, RebaseAction.SQUASH)
        session.save_squash_message(target, "A plus B")
        session.set_action(2, RebaseAction.SQUASH)
        assert session.messages == {}
        session.execute()
        meld = runner.applied[0]
        assert meld.folded_ids == tuple(session.plan.commit_ids[1:3])
        assert meld.new_message != "A plus B"
        assert "Commit C" in meld.new_message

    def test_message_discarded_when_reorder_changes_run(self, session):
        target = session.plan[0].commit_id
        session.set_action(1, RebaseAction.SQUASH)
        session.save_squash_message(target, "A plus B")
        # C moves between A and B, so B now folds into C
        session.move_entry(2, 1)
        assert target not in session.messages

    def test_message_kept_when_run_unchanged(self, session):
        target = session.plan[0].commit_id
        session.set_action(1, RebaseAction.SQUASH)
        session.save_squash_message(target, "A plus B")
        session.set_action(3, RebaseAction.DROP)
        session.move_entry(3, 2)
        assert session.messages == {target: "A plus B"}

    def test_undo_discards_message_for_changed_run(self, session):
        target = session.plan[0].commit_id
        session.set_action(1, RebaseAction.SQUASH)
        session.save_squash_message(target, "A plus B")
        session.undo()
        assert session.messages == {}


class TestExecution:
    def test_execute_completes(self, session, runner):
        session.set_action(1, RebaseAction.SQUASH)
        executor = session.execute()
        assert executor.status == ExecutionStatus.COMPLETED
        assert session.executor is executor
        assert not session.is_executing
        assert len(runner.applied) == 3

    def test_saved_message_used(self, session, runner):
        session.set_action(1, RebaseAction.SQUASH)
        session.save_squash_message(session.plan[0].commit_id, "One commit")
        session.execute()
        assert runner.applied[0].new_message == "One commit"

    def test_editing_blocked_while_paused(self, commits):
        runner = FakeRunner({commits[1].commit_id: StepOutcome.conflict(["x"])})
        session = RebaseSession.start(commits, runner=runner)
        executor = session.execute()
        assert session.is_executing
        with pytest.raises(ExecutionStateError):
            session.set_action(0, RebaseAction.DROP)
        with pytest.raises(ExecutionStateError):
            session.execute()
        assert not session.can_start()
        executor.abort()
        session.set_action(0, RebaseAction.DROP)
        assert session.plan[0].action == RebaseAction.DROP

    def test_undo_and_save_blocked_while_running(self):
        session = RebaseSession.start(make_commits(3))
        session.set_action(1, RebaseAction.DROP)
        session.set_action(2, RebaseAction.SQUASH)
        executor = session.execute()
        assert executor.status == ExecutionStatus.RUNNING
        with pytest.raises(ExecutionStateError):
            session.undo()
        with pytest.raises(ExecutionStateError):
            session.save_squash_message(session.plan[0].commit_id, "Too late")
        assert session.plan[1].action == RebaseAction.DROP
        assert session.can_undo
        assert session.messages == {}

    def test_invalid_plan(self, session):
        session.set_all_actions(RebaseAction.DROP)
        with pytest.raises(InvalidPlanError):
            session.execute()
        assert session.executor is None

    def test_manual_runner(self):
        session = RebaseSession.start(make_commits(2))
        executor = session.execute()
        assert executor.current_step.target_commit_id == session.plan[0].commit_id
        assert session.is_executing

    def test_repr(self, session):
        assert repr(session) == "<RebaseSession: 4 commits, planning>"
        session.execute()
        assert repr(session) == "<RebaseSession: 4 commits, completed>"


class TestReview:
    def test_review_then_approve(self, session, runner):
        session.set_action(1, RebaseAction.SQUASH)
        pending = session.review()
        assert isinstance(pending, PendingRebase)
        assert pending.final_count == 3
        executor = pending.approve()
        assert executor.status == ExecutionStatus.COMPLETED
        assert pending.result is executor

    def test_exclude_in_review_updates_session(self, session, runner):
        pending = session.review()
        dropped = session.plan[3].commit_id
        pending.exclude(dropped)
        pending.approve()
        assert session.plan[3].action == RebaseAction.DROP
        assert dropped not in [s.target_commit_id for s in runner.applied]

    def test_message_from_review(self, session, runner):
        session.set_action(1, RebaseAction.SQUASH)
        pending = session.review()
        pending.set_message(session.plan[0].commit_id, "# c\nReviewed")
        pending.approve()
        assert runner.applied[0].new_message == "Reviewed"
        assert session.messages[session.plan[0].commit_id] == "Reviewed"

    def test_rejected_review_changes_nothing(self, session, runner):
        pending = session.review()
        pending.reject("not yet")
        assert session.executor is None
        assert runner.calls == []
