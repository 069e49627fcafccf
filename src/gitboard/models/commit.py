"""Repository snapshot models for gitboard.

CommitRef and BranchRef are read-only views of the repository supplied
by the board before a rebase session starts and before every drag
classification. The core never mutates them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, model_validator

SHORT_ID_LENGTH = 7


class CommitRef(BaseModel):
    """Immutable snapshot of one repository commit."""

    commit_id: str
    short_id: str = ""
    message: str = ""
    author_name: str = ""
    author_email: str = ""
    timestamp: Optional[datetime] = None
    parent_ids: tuple[str, ...] = ()
    refs: tuple[str, ...] = ()
    branch_name: Optional[str] = None  # Branch lane the commit is drawn on

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _default_short_id(cls, data: object) -> object:
        if isinstance(data, dict) and not data.get("short_id") and data.get("commit_id"):
            data = {**data, "short_id": str(data["commit_id"])[:SHORT_ID_LENGTH]}
        return data

    @property
    def subject(self) -> str:
        """First line of the commit message."""
        return self.message.split("\n", 1)[0]

    @property
    def body(self) -> str:
        """Everything after the subject line, stripped."""
        parts = self.message.split("\n", 1)
        return parts[1].strip() if len(parts) > 1 else ""

    @property
    def is_merge(self) -> bool:
        return len(self.parent_ids) > 1

    def __str__(self) -> str:
        subject = self.subject
        if len(subject) > 60:
            subject = subject[:57] + "..."
        return f"{self.short_id} {subject}"

    def __repr__(self) -> str:
        return f"CommitRef({self.short_id} {self.subject!r})"


class BranchRef(BaseModel):
    """A branch as shown in the board's branch list."""

    name: str
    commit_id: str = ""  # Tip commit
    is_remote: bool = False
    is_current: bool = False

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        flags = []
        if self.is_current:
            flags.append("current")
        if self.is_remote:
            flags.append("remote")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        return f"BranchRef({self.name}{suffix})"


class RepositorySnapshot(BaseModel):
    """Commits and branches the board currently displays."""

    commits: tuple[CommitRef, ...] = ()
    branches: tuple[BranchRef, ...] = ()
    current_branch: Optional[str] = None

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _infer_current_branch(cls, data: object) -> object:
        if isinstance(data, dict) and data.get("current_branch") is None:
            for branch in data.get("branches") or ():
                is_current = (
                    branch.is_current if isinstance(branch, BranchRef)
                    else bool(branch.get("is_current"))
                )
                if is_current:
                    name = branch.name if isinstance(branch, BranchRef) else branch["name"]
                    data = {**data, "current_branch": name}
                    break
        return data

    def commit(self, commit_id: str) -> Optional[CommitRef]:
        """Look up a commit by full id or short id prefix."""
        if not commit_id:
            return None
        for c in self.commits:
            if c.commit_id == commit_id or c.commit_id.startswith(commit_id):
                return c
        return None

    def branch(self, name: str) -> Optional[BranchRef]:
        for b in self.branches:
            if b.name == name:
                return b
        return None
