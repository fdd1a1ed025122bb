"""Data models."""

from .actions import Action
from .board import Board, Card, Column
from .config import FlowConfig, JiraConfig
from .moves import (
    Confirmed,
    MoveOutcome,
    MoveState,
    PendingMove,
    RejectedOpaque,
    RejectedWithResync,
    WorkerFailure,
)

__all__ = [
    "Action",
    "Board",
    "Card",
    "Column",
    "Confirmed",
    "FlowConfig",
    "JiraConfig",
    "MoveOutcome",
    "MoveState",
    "PendingMove",
    "RejectedOpaque",
    "RejectedWithResync",
    "WorkerFailure",
]
