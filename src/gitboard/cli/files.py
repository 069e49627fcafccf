"""JSON input files read by the CLI.

A plan file describes the rebase dialog's state::

    {
      "onto": "main",
      "branch": "feature",
      "entries": [
        {"commit": {"commit_id": "a1b2c3d4", "message": "Add parser"}, "action": "pick"},
        {"commit": {"commit_id": "e5f6a7b8", "message": "Fix typo"}, "action": "fixup"}
      ]
    }

A gesture file describes one drag-and-drop::

    {
      "source": {"kind": "commit", "commit": {"commit_id": "c1"}},
      "target": {"kind": "branch", "branch": {"name": "feature"}},
      "current_branch": "main"
    }
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from gitboard.models.action import RebaseAction
from gitboard.models.commit import CommitRef
from gitboard.models.config import PlanConfig
from gitboard.models.drag import DragSource, DropTarget
from gitboard.models.plan import PlanEntry, RebasePlan


class PlanFileEntry(BaseModel):
    commit: CommitRef
    action: RebaseAction = RebaseAction.PICK
    new_message: Optional[str] = None


class PlanFile(BaseModel):
    onto: str = ""
    branch: str = ""
    entries: list[PlanFileEntry]

    def to_plan(self, config: PlanConfig) -> RebasePlan:
        entries = tuple(
            PlanEntry(
                commit=e.commit,
                action=e.action,
                original_index=i,
                new_message=e.new_message,
            )
            for i, e in enumerate(self.entries)
        )
        return RebasePlan(entries=entries, onto=self.onto, branch=self.branch, strict=config.strict)


class GestureFile(BaseModel):
    source: DragSource
    target: DropTarget
    current_branch: Optional[str] = None


def load_plan(path: str, config: PlanConfig) -> RebasePlan:
    return PlanFile.model_validate_json(Path(path).read_text(encoding="utf-8")).to_plan(config)


def load_gesture(path: str) -> GestureFile:
    return GestureFile.model_validate_json(Path(path).read_text(encoding="utf-8"))
