"""Shared test helpers for gitboard."""

from __future__ import annotations

import pytest

from gitboard import (
    ApplyStep,
    BranchRef,
    CommitRef,
    PlanConfig,
    RebaseAction,
    RebasePlan,
    StepOutcome,
)


def make_commit(n: int, message: str | None = None, *, branch: str | None = None) -> CommitRef:
    """Commit with a deterministic 40-char id derived from ``n``."""
    commit_id = f"{n:02d}" + "ab" * 19
    return CommitRef(
        commit_id=commit_id,
        message=message if message is not None else f"Commit {n}",
        author_name="Test Author",
        author_email="test@example.com",
        branch_name=branch,
    )


def make_commits(n: int = 4, messages: list[str] | None = None) -> list[CommitRef]:
    """Create n commits, oldest first."""
    messages = messages or [f"Commit {chr(ord('A') + i)}" for i in range(n)]
    return [make_commit(i + 1, m) for i, m in enumerate(messages)]


def make_plan(actions: str | list[RebaseAction], *, strict: bool = True) -> RebasePlan:
    """Build a plan from a shortcut string such as ``"psfp"``.

    Commit messages are "Commit A", "Commit B", ... in order.
    """
    if isinstance(actions, str):
        actions = [RebaseAction.from_shortcut(k) for k in actions]
    plan = RebasePlan.from_commits(
        make_commits(len(actions)),
        onto="main",
        branch="feature",
        config=PlanConfig(strict=strict),
    )
    for i, action in enumerate(actions):
        if action != RebaseAction.PICK:
            plan = plan.set_action(i, action)
    return plan


def make_branch(name: str, *, current: bool = False, remote: bool = False, tip: str = "") -> BranchRef:
    return BranchRef(name=name, commit_id=tip, is_current=current, is_remote=remote)


class FakeRunner:
    """Scripted StepRunner.

    ``outcomes`` maps a target commit id to the outcome its step reports.
    Steps not listed succeed. ``errors`` maps a hook name to an exception
    that hook raises. Every call is recorded in ``calls``.
    """

    def __init__(
        self,
        outcomes: dict[str, StepOutcome] | None = None,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self.outcomes = dict(outcomes or {})
        self.errors = dict(errors or {})
        self.calls: list[tuple[str, str | None]] = []
        self.applied: list[ApplyStep] = []

    def apply(self, step: ApplyStep) -> StepOutcome:
        self.calls.append(("apply", step.target_commit_id))
        self._raise_if_scripted("apply")
        self.applied.append(step)
        return self.outcomes.get(step.target_commit_id, StepOutcome.ok())

    def commit_resolution(self, step: ApplyStep) -> None:
        self.calls.append(("commit_resolution", step.target_commit_id))
        self._raise_if_scripted("commit_resolution")

    def discard(self, step: ApplyStep) -> None:
        self.calls.append(("discard", step.target_commit_id))
        self._raise_if_scripted("discard")

    def restore(self) -> None:
        self.calls.append(("restore", None))
        self._raise_if_scripted("restore")

    def _raise_if_scripted(self, name: str) -> None:
        if name in self.errors:
            raise self.errors[name]

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def commits() -> list[CommitRef]:
    """Four commits A..D, oldest first."""
    return make_commits(4)


@pytest.fixture
def plan(commits) -> RebasePlan:
    return RebasePlan.from_commits(commits, onto="main", branch="feature")


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()
