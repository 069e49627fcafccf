"""Turn a rebase plan into apply steps for the runner.

Dropped entries produce no step. Each fold group (a fold target plus the
squash/fixup entries melded into it) becomes a single ``meld`` step.
Every other kept entry becomes one pick, reword or edit step, in plan
order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping, Optional, Sequence

from gitboard.models.action import RebaseAction
from gitboard.models.execution import ApplyStep, StepKind
from gitboard.operations.squash import (
    DEFAULT_COMMENT_CHAR,
    compose_squash_message,
    extract_final_message,
)

if TYPE_CHECKING:
    from gitboard.models.plan import PlanEntry, RebasePlan

logger = logging.getLogger(__name__)


def default_meld_message(
    base: PlanEntry,
    folded: Sequence[PlanEntry],
    *,
    comment_char: str = DEFAULT_COMMENT_CHAR,
) -> str:
    """Message for a meld step when the user did not edit one.

    Fixup messages are discarded. With no squash member the base keeps
    its own message; otherwise the composed squash text is used with its
    comment lines removed.
    """
    squashed = [e for e in folded if e.action == RebaseAction.SQUASH]
    if not squashed:
        return base.message
    raw = compose_squash_message([base, *squashed], comment_char=comment_char)
    return extract_final_message(raw, comment_char=comment_char)


def _single_step(entry: PlanEntry) -> Optional[ApplyStep]:
    action = entry.action
    if action == RebaseAction.DROP:
        return None
    if action == RebaseAction.PICK:
        return ApplyStep(StepKind.PICK, entry.commit_id)
    if action == RebaseAction.REWORD:
        return ApplyStep(StepKind.REWORD, entry.commit_id, new_message=entry.new_message)
    if action == RebaseAction.EDIT:
        return ApplyStep(StepKind.EDIT, entry.commit_id)
    if action.is_fold:
        # Fold entries are consumed by their group
        raise ValueError(f"{action.value} entry {entry.short_id} has no fold group")
    raise TypeError(f"Unhandled rebase action: {action!r}")


def build_steps(
    plan: RebasePlan,
    messages: Mapping[str, str] | None = None,
    *,
    comment_char: str = DEFAULT_COMMENT_CHAR,
) -> list[ApplyStep]:
    """Build the ordered apply steps for a plan.

    Args:
        plan: The plan to execute.
        messages: Optional final messages for meld steps, keyed by the
            fold target commit id.
        comment_char: Comment marker for composed squash messages.

    Returns:
        One ApplyStep per commit that survives the rebase.
    """
    messages = messages or {}
    groups = {g.target_index: g for g in plan.fold_groups()}

    steps: list[ApplyStep] = []
    for i in plan.base_indices():
        entry = plan.entries[i]
        group = groups.get(i)
        if group is None:
            if entry.action.is_fold:
                # Nothing kept above it: replayed as a plain pick
                logger.debug(
                    "%s %s has no commit to fold into; picking it",
                    entry.action.value, entry.short_id,
                )
                steps.append(ApplyStep(StepKind.PICK, entry.commit_id))
                continue
            step = _single_step(entry)
            if step is not None:
                steps.append(step)
            continue

        folded = [plan.entries[j] for j in group.member_indices]
        message = messages.get(entry.commit_id)
        if message is None:
            message = default_meld_message(entry, folded, comment_char=comment_char)
        steps.append(
            ApplyStep(
                StepKind.MELD,
                entry.commit_id,
                new_message=message,
                folded_ids=tuple(e.commit_id for e in folded),
            )
        )
    return steps


def render_todo(plan: RebasePlan, *, comment_char: str = DEFAULT_COMMENT_CHAR) -> str:
    """Render the plan as a ``git rebase -i`` todo list.

    One ``<action> <short id> <subject>`` line per entry, followed by a
    commented summary line.
    """
    lines = [f"{e.action.value} {e.short_id} {e.commit.subject}".rstrip() for e in plan.entries]
    lines.append("")
    onto = f" onto {plan.onto}" if plan.onto else ""
    lines.append(f"{comment_char} Rebase {len(plan.entries)} commit(s){onto}")
    return "\n".join(lines) + "\n"
