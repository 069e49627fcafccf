"""Configuration models for gitboard.

PlanConfig holds the settings shared by the plan, the squash composer
and the executor.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class PlanConfig(BaseModel):
    """Per-session configuration."""

    # Out-of-range indices raise PlanIndexError when True; when False they
    # are logged and the plan is returned unchanged.
    strict: bool = True
    comment_char: str = "#"
    simplified_labels: bool = False

    model_config = {"frozen": True}

    @field_validator("comment_char")
    @classmethod
    def _single_char(cls, v: str) -> str:
        if len(v) != 1 or v.isspace():
            raise ValueError("comment_char must be a single non-whitespace character")
        return v


DEFAULT_CONFIG = PlanConfig()
