"""Card widget."""

from __future__ import annotations

from rich.markup import escape
from textual.widgets import Static

from ...models import Card


class CardItem(Static):
    """A single card line in a column: bold ID, then the title."""

    def __init__(self, card: Card, selected: bool = False, *args, **kwargs) -> None:
        super().__init__(self._format(card), *args, **kwargs)
        self.card = card
        self.set_class(selected, "-selected")

    @staticmethod
    def _format(card: Card) -> str:
        title = card.title if len(card.title) <= 60 else card.title[:59] + "…"
        return f"[b]{escape(card.id)}[/b] {escape(title)}"
