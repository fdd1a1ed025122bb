"""Service layer for board state and move orchestration."""

from .config_service import ConfigService
from .cursor import BoardCursor
from .orchestrator import MoveOrchestrator
from .worker import MoveWorker

__all__ = [
    "BoardCursor",
    "ConfigService",
    "MoveOrchestrator",
    "MoveWorker",
]
