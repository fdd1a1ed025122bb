"""Board column widget."""

from __future__ import annotations

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.css.query import NoMatches
from textual.widget import Widget
from textual.widgets import Static

from ...models import Column
from .card import CardItem


class CardListScroll(VerticalScroll, can_focus=False):
    """Scroll container for a column's cards.

    Not focusable, so arrow keys reach the App bindings instead of scrolling.
    """

    pass


class EmptyColumnMessage(Static):
    """Displayed when a column has no cards."""

    pass


class BoardColumn(Widget):
    """A single column of the board.

    The column is redrawn from a ``Column`` model each time the board
    changes; it keeps no state of its own beyond what it displays.
    """

    def __init__(self, column: Column, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._column = column
        self._focused = False
        self._selected_row: int | None = None

    def compose(self) -> ComposeResult:
        yield Static(self._header_text, classes="column-header")
        yield CardListScroll(classes="column-content")

    def on_mount(self) -> None:
        self.call_after_refresh(self._refresh_cards)

    @property
    def _header_text(self) -> str:
        return f"{escape(self._column.display_title)} [dim]({len(self._column.cards)})[/]"

    def show(self, column: Column, focused: bool, selected_row: int | None) -> None:
        """Display a column, highlighting ``selected_row`` when focused."""
        self._column = column
        self._focused = focused
        self._selected_row = selected_row if focused else None
        self.set_class(focused, "-focused")
        self.call_after_refresh(self._refresh_cards)

    async def _refresh_cards(self) -> None:
        """Rebuild the card list."""
        try:
            content = self.query_one(".column-content", CardListScroll)
            header = self.query_one(".column-header", Static)
        except NoMatches as e:
            self.log.error(f"Column {self._column.id} not ready: {e}")
            return

        header.update(self._header_text)
        await content.remove_children()

        if not self._column.cards:
            await content.mount(EmptyColumnMessage("No cards"))
            return

        items = [
            CardItem(card, selected=(i == self._selected_row))
            for i, card in enumerate(self._column.cards)
        ]
        await content.mount_all(items)
        if self._selected_row is not None and self._selected_row < len(items):
            items[self._selected_row].scroll_visible(animate=False)
