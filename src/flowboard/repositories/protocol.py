"""Store protocol for board storage backends."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from ..models import Board


@dataclass(frozen=True)
class StoreCapabilities:
    """Optional operations a store supports beyond load and move."""

    can_create: bool = False
    can_edit: bool = False


class StoreProtocol(Protocol):
    """Interface for board storage backends.

    This protocol defines the contract that all store implementations
    must follow. It supports:
    - Local directories (board.txt plus one markdown file per card)
    - Jira agile boards

    All methods block and raise ``StoreError`` subclasses on failure.
    Stores are not shared between threads: the move worker builds its
    own instance through the store factory.
    """

    @property
    def capabilities(self) -> StoreCapabilities:
        """Optional operations supported by this store."""
        ...

    def load(self) -> Board:
        """Read a full board snapshot.

        Raises:
            NotFoundError: The board does not exist.
            ParseError: The board data is malformed.
            StoreIOError: The underlying read failed.
        """
        ...

    def move(self, card_id: str, column_id: str) -> None:
        """Move a card to the end of another column.

        Args:
            card_id: The card identifier (e.g., "CARD-1", "PROJ-123")
            column_id: The destination column identifier
        """
        ...

    def close(self) -> None:
        """Release connections held by the store."""
        ...

    def create(self, column_id: str) -> str:
        """Create an empty card in a column and return its ID."""
        ...

    def locate(self, card_id: str) -> Path:
        """Return the file backing a card, for editing."""
        ...
