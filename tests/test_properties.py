"""Property-based tests for plans, previews, steps and classification."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from gitboard import (
    GitOperation,
    RebaseAction,
    build_steps,
    classify,
    compose_squash_message,
    extract_final_message,
    final_commit_count,
    project_preview,
)
from tests.strategies import (
    actions,
    current_branches,
    drag_sources,
    drop_targets,
    plans,
    plans_with_index,
    plans_with_move,
)


class TestPlanInvariants:
    @given(plan=plans())
    def test_first_entry_never_folds(self, plan):
        assert not plan[0].action.is_fold

    @given(data=plans_with_index(), action=actions)
    def test_set_action_keeps_first_entry_rule(self, data, action):
        plan, index = data
        edited = plan.set_action(index, action)
        assert not edited[0].action.is_fold
        assert len(edited) == len(plan)

    @given(data=plans_with_index(), action=actions)
    def test_set_action_touches_one_entry(self, data, action):
        plan, index = data
        edited = plan.set_action(index, action)
        for i, (before, after) in enumerate(zip(plan, edited)):
            if i != index and i != 0:
                assert before.action == after.action

    @given(data=plans_with_move())
    def test_move_is_a_permutation(self, data):
        plan, src, dst = data
        moved = plan.move_entry(src, dst)
        assert sorted(moved.commit_ids) == sorted(plan.commit_ids)
        assert moved[dst].commit_id == plan[src].commit_id
        assert not moved[0].action.is_fold

    @given(data=plans_with_move())
    def test_move_round_trip_restores_order(self, data):
        plan, src, dst = data
        assert plan.move_entry(src, dst).move_entry(dst, src).commit_ids == plan.commit_ids

    @given(plan=plans())
    def test_fold_groups_partition_fold_entries(self, plan):
        members = [i for g in plan.fold_groups() for i in g.member_indices]
        leaders = [i for i, e in enumerate(plan) if e.action.is_fold and plan.fold_target_of(i) is None]
        assert sorted(members + leaders) == [i for i, e in enumerate(plan) if e.action.is_fold]
        for group in plan.fold_groups():
            target = plan[group.target_index]
            assert target.action.survives or group.target_index in leaders
            assert all(i > group.target_index for i in group.member_indices)
            assert all(plan.fold_target_of(i) == group.target_index for i in group.member_indices)

    @given(plan=plans())
    def test_no_fold_into_dropped_entry(self, plan):
        for i, e in enumerate(plan):
            if e.action.is_fold and plan.fold_target_of(i) is not None:
                assert plan[plan.fold_target_of(i)].action != RebaseAction.DROP


class TestCountLaws:
    @given(plan=plans())
    def test_count_bounds(self, plan):
        count = final_commit_count(plan)
        survivors = sum(1 for e in plan if e.action.survives)
        assert survivors <= count <= len(plan)

    @given(plan=plans())
    def test_preview_has_one_line_per_entry(self, plan):
        assert len(project_preview(plan)) == len(plan)

    @given(plan=plans())
    @settings(max_examples=200)
    def test_steps_match_count(self, plan):
        assert len(build_steps(plan)) == final_commit_count(plan)

    @given(plan=plans())
    def test_dropped_commits_not_in_steps(self, plan):
        applied = {cid for step in build_steps(plan) for cid in step.commit_ids}
        dropped = {e.commit_id for e in plan if e.action == RebaseAction.DROP}
        assert not applied & dropped
        kept = {e.commit_id for e in plan if e.action != RebaseAction.DROP}
        assert applied == kept


class TestSquashLaws:
    @given(plan=plans(min_size=2))
    def test_extract_is_idempotent(self, plan):
        raw = compose_squash_message(list(plan.entries))
        once = extract_final_message(raw)
        assert extract_final_message(once) == once
        assert not any(line.lstrip().startswith("#") for line in once.split("\n"))

    @given(text=st.text(max_size=300))
    def test_extract_never_leaves_comments(self, text):
        final = extract_final_message(text)
        assert final == final.strip()
        assert not any(line.lstrip().startswith("#") for line in final.split("\n") if line)


class TestClassifierLaws:
    @given(source=drag_sources, target=drop_targets, current=current_branches)
    def test_total_and_deterministic(self, source, target, current):
        first = classify(source, target, current)
        assert first == classify(source, target, current)
        assert first.is_valid == (first.operation != GitOperation.INVALID)
        if first.is_valid:
            assert first.command
            assert first.dangerous == first.operation.dangerous
        else:
            assert not first.dangerous
            assert first.command == ""
