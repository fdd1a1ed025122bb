"""Board domain models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Card(BaseModel):
    """A single card on the board."""

    id: str  # e.g., "CARD-1718000000000" (local), "PROJ-123" (Jira)
    title: str = ""
    description: str = ""


class Column(BaseModel):
    """A board column holding an ordered list of cards."""

    id: str
    title: str = ""
    cards: list[Card] = Field(default_factory=list)

    @property
    def display_title(self) -> str:
        return self.title or self.id


class Board(BaseModel):
    """Full board state: columns in display order."""

    columns: list[Column] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @property
    def is_empty(self) -> bool:
        """True when the board has no columns."""
        return not self.columns
