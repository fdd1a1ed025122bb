"""Move bookkeeping models.

A ``PendingMove`` is created the instant a move key is applied to the board
and lives in the orchestrator's queue (or in-flight slot) until the worker
reports a ``MoveOutcome`` for it.

Outcomes form a small tagged union:

- ``Confirmed``: the store accepted the move, nothing to reconcile
- ``RejectedWithResync``: the move failed, but a fresh board was loaded
- ``RejectedOpaque``: the move failed and no fresh board could be loaded
- ``WorkerFailure``: the worker itself died or disconnected
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .board import Board


class MoveState(str, Enum):
    """States of the move orchestrator."""

    IDLE = "idle"  # Nothing in flight, queue empty
    BUSY = "busy"  # One move in flight, queue may hold more
    DRAINING = "draining"  # Quit requested, finishing pending moves


@dataclass(frozen=True)
class PendingMove:
    """A move applied optimistically and awaiting confirmation."""

    card_id: str
    column_id: str


@dataclass(frozen=True)
class Confirmed:
    """The store confirmed the move."""

    move: PendingMove


@dataclass(frozen=True)
class RejectedWithResync:
    """The move failed; ``board`` is a fresh snapshot from the store."""

    move: PendingMove
    board: Board
    error: str


@dataclass(frozen=True)
class RejectedOpaque:
    """The move failed and the store could not be reloaded."""

    move: PendingMove
    error: str


@dataclass(frozen=True)
class WorkerFailure:
    """The worker died without a usable result."""

    move: PendingMove
    error: str


MoveOutcome = Confirmed | RejectedWithResync | RejectedOpaque | WorkerFailure
