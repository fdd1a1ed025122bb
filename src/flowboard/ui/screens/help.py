"""Help screen showing keyboard shortcuts."""

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Static


class HelpScreen(ModalScreen):
    """Modal help screen showing keyboard shortcuts."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    HelpScreen > Vertical {
        width: 60;
        height: auto;
        max-height: 90%;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    HelpScreen .help-title {
        text-align: center;
        text-style: bold;
        padding-bottom: 1;
        border-bottom: solid $primary-darken-2;
    }

    HelpScreen .help-section {
        height: auto;
        padding: 1 0 0 0;
    }

    HelpScreen .section-title {
        text-style: bold;
        color: $primary;
    }

    HelpScreen .help-row {
        height: 1;
    }

    HelpScreen .help-key {
        width: 18;
        text-style: bold;
    }

    HelpScreen .help-desc {
        width: 1fr;
        color: $text-muted;
    }

    HelpScreen .help-footer {
        text-align: center;
        color: $text-muted;
        padding-top: 1;
        border-top: solid $primary-darken-2;
    }
    """

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Keyboard Shortcuts", classes="help-title")

            with Vertical(classes="help-section"):
                yield Static("Navigation", classes="section-title")
                yield self._help_row("h / Left", "Previous column")
                yield self._help_row("l / Right", "Next column")
                yield self._help_row("k / Up", "Previous card")
                yield self._help_row("j / Down", "Next card")

            with Vertical(classes="help-section"):
                yield Static("Cards", classes="section-title")
                yield self._help_row("H / Shift+Left", "Move card left")
                yield self._help_row("L / Shift+Right", "Move card right")
                yield self._help_row("Enter", "Toggle card detail")
                yield self._help_row("n", "New card in column")
                yield self._help_row("e", "Edit card in $EDITOR")

            with Vertical(classes="help-section"):
                yield Static("General", classes="section-title")
                yield self._help_row("r", "Refresh board")
                yield self._help_row("?", "Show this help")
                yield self._help_row("Escape", "Close detail / Quit")
                yield self._help_row("q", "Quit (waits for pending moves)")

            yield Static("Press any key to close", classes="help-footer")

    def _help_row(self, key: str, description: str) -> Horizontal:
        """Create a help row with key and description."""
        row = Horizontal(classes="help-row")
        row.compose_add_child(Static(key, classes="help-key"))
        row.compose_add_child(Static(description, classes="help-desc"))
        return row

    def on_key(self, event) -> None:
        """Dismiss on any key press and prevent propagation."""
        event.stop()
        self.dismiss()
