"""Stateful execution engine."""

from gitboard.engine.executor import RebaseExecutor

__all__ = ["RebaseExecutor"]
