"""Card detail modal."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

from ...models import Card


class CardDetailModal(ModalScreen):
    """Shows the focused card's ID, title and description.

    The modal has no bindings of its own: the app closes it when the
    cursor's detail view is turned off (Enter or Escape).
    """

    DEFAULT_CSS = """
    CardDetailModal {
        align: center middle;
    }

    CardDetailModal > VerticalScroll {
        width: 70%;
        height: 45%;
        border: solid $primary-darken-2;
        background: $surface;
        padding: 0 1;
    }

    CardDetailModal #detail-id {
        text-style: bold;
        padding-bottom: 1;
    }

    CardDetailModal #detail-title {
        padding-bottom: 1;
    }

    CardDetailModal .-empty {
        color: $text-muted;
    }
    """

    def __init__(self, card: Card | None) -> None:
        super().__init__()
        self._card = card

    def compose(self) -> ComposeResult:
        with VerticalScroll() as scroll:
            scroll.border_title = "Detail"
            yield Static(id="detail-id", markup=False)
            yield Static(id="detail-title", markup=False)
            yield Static(id="detail-description", markup=False)

    def on_mount(self) -> None:
        self.show_card(self._card)

    def show_card(self, card: Card | None) -> None:
        """Display a card (or nothing when the focused column is empty)."""
        self._card = card
        description = self.query_one("#detail-description", Static)
        if card is None:
            self.query_one("#detail-id", Static).update("")
            self.query_one("#detail-title", Static).update("")
            description.update("No card selected")
            description.add_class("-empty")
            return

        self.query_one("#detail-id", Static).update(card.id)
        self.query_one("#detail-title", Static).update(card.title)
        has_description = bool(card.description.strip())
        description.update(card.description if has_description else "No description")
        description.set_class(not has_description, "-empty")
