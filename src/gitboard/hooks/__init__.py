"""Confirmation hooks for gitboard.

Operations that rewrite history are gated: they produce a Pending object
the board approves or rejects before anything reaches the runner.

Public API:
    Pending            -- base class for confirmable operations
    PendingOperation   -- drag-and-drop operation awaiting dispatch
    PendingRebase      -- rebase plan awaiting execution
    request_operation  -- route a classifier decision through the gate
"""

from gitboard.hooks.operation import PendingOperation, request_operation
from gitboard.hooks.pending import Pending, PendingStatus
from gitboard.hooks.rebase import PendingRebase

__all__ = [
    "Pending",
    "PendingStatus",
    "PendingOperation",
    "PendingRebase",
    "request_operation",
]
