"""Store layer for board data access."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from ..models import FlowConfig
from .errors import NotFoundError, ParseError, StoreError, StoreIOError
from .jira import JiraStore
from .local import LocalStore
from .protocol import StoreCapabilities, StoreProtocol

StoreFactory = Callable[[], StoreProtocol]


def create_store_factory(config: FlowConfig, board_path: Path) -> StoreFactory:
    """Resolve the configured provider once into a store factory.

    The foreground and every move worker each call the factory, so no two
    threads share a store instance.
    """
    if config.provider == "jira":
        jira_config = config.jira
        return lambda: JiraStore(jira_config)
    return lambda: LocalStore(board_path)


__all__ = [
    "JiraStore",
    "LocalStore",
    "NotFoundError",
    "ParseError",
    "StoreCapabilities",
    "StoreError",
    "StoreFactory",
    "StoreIOError",
    "StoreProtocol",
    "create_store_factory",
]
