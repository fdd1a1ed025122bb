"""flowboard TUI Application."""

from __future__ import annotations

import logging
import shlex
import subprocess

from textual.app import App
from textual.binding import Binding

from .config import Settings
from .models import Action, Board, MoveState
from .repositories import StoreError, StoreProtocol
from .services import BoardCursor, ConfigService, MoveOrchestrator
from .ui.screens import BoardScreen, HelpScreen
from .ui.widgets import CardDetailModal

logger = logging.getLogger(__name__)


class FlowboardApp(App):
    """flowboard - Terminal Kanban board with instant card moves."""

    TITLE = "flowboard"

    CSS_PATH = "ui/styles.tcss"

    BINDINGS = [
        # Core bindings
        Binding("q", "board('quit')", "Quit", show=True),
        Binding("?", "help", "Help", show=True),
        Binding("r", "board('refresh')", "Refresh", show=True),
        Binding("escape", "board('close_or_quit')", "Back", show=False),
        # Navigation - vim style
        Binding("h", "board('focus_left')", "← Column", show=False),
        Binding("j", "board('select_down')", "↓ Card", show=False),
        Binding("k", "board('select_up')", "↑ Card", show=False),
        Binding("l", "board('focus_right')", "→ Column", show=False),
        # Navigation - arrow keys
        Binding("left", "board('focus_left')", "← Column", show=False),
        Binding("down", "board('select_down')", "↓ Card", show=False),
        Binding("up", "board('select_up')", "↑ Card", show=False),
        Binding("right", "board('focus_right')", "→ Column", show=False),
        # Card actions
        Binding("enter", "board('toggle_detail')", "Detail", show=True),
        Binding("H", "board('move_left')", "Move ←", show=True),
        Binding("L", "board('move_right')", "Move →", show=True),
        Binding("shift+left", "board('move_left')", "Move ←", show=False),
        Binding("shift+right", "board('move_right')", "Move →", show=False),
        Binding("n", "new_card", "New", show=True),
        Binding("e", "edit_card", "Edit", show=True),
    ]

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self._board_screen = BoardScreen()
        self._detail: CardDetailModal | None = None
        self._view_key: tuple | None = None
        self._init_services()

    def _init_services(self) -> None:
        """Build the store, load the board and set up move orchestration."""
        self.config_service = ConfigService(self.settings.board_path, self.settings)
        self.store_factory = self.config_service.store_factory()
        self.store: StoreProtocol = self.store_factory()

        notice = self.config_service.config_error
        try:
            board = self.store.load()
        except StoreError as e:
            logger.error("Initial load failed: %s", e)
            board = Board.empty()
            notice = f"Load failed: {e}"

        self.cursor = BoardCursor(board)
        self.cursor.focus_first_non_empty()
        self.orchestrator = MoveOrchestrator(
            self.cursor,
            self.store_factory,
            store=self.store,
            capacity=self.settings.queue_capacity,
        )
        self.orchestrator.notice = notice

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.push_screen(self._board_screen)
        self.call_after_refresh(self._render)
        self.set_interval(self.settings.poll_interval, self._poll_moves)

    def on_unmount(self) -> None:
        self.store.close()

    # --- Actions ---

    def action_board(self, name: str) -> None:
        """Run a board action: collect finished moves first, then apply it."""
        self._dispatch(Action(name))

    def action_help(self) -> None:
        """Show help screen."""
        self.push_screen(HelpScreen())

    def action_new_card(self) -> None:
        """Create a card at the end of the focused column and edit it."""
        if not self.store.capabilities.can_create:
            self.notify("Creation not supported by this provider", severity="warning")
            return

        column = self.cursor.current_column
        if column is None:
            return

        try:
            card_id = self.store.create(column.id)
            path = self.store.locate(card_id)
        except StoreError as e:
            self.notify(f"Create failed: {e}", severity="error")
            return

        self._open_in_editor(path)
        self._dispatch(Action.REFRESH)

    def action_edit_card(self) -> None:
        """Edit the focused card in the external editor."""
        if not self.store.capabilities.can_edit:
            self.notify("Editing not supported by this provider", severity="warning")
            return

        card = self.cursor.current_card
        if card is None:
            return

        try:
            path = self.store.locate(card.id)
        except StoreError as e:
            self.notify(f"Edit failed: {e}", severity="error")
            return

        self._open_in_editor(path)
        self._dispatch(Action.REFRESH)

    # --- Private Methods ---

    def _dispatch(self, action: Action) -> None:
        if self.orchestrator.poll():
            self._exit()
            return
        if self.orchestrator.handle(action):
            self._exit()
            return
        self._render()

    def _poll_moves(self) -> None:
        """Timer callback: pick up worker outcomes while no key is pressed."""
        if self.orchestrator.poll():
            self._exit()
            return
        if self._current_view_key() != self._view_key:
            self._render()

    def _exit(self) -> None:
        # A finished drain reports its last outcome notice on exit
        draining = self.orchestrator.state is MoveState.DRAINING
        logger.info("Exiting")
        self.exit(message=self.orchestrator.notice if draining else None)

    def _current_view_key(self) -> tuple:
        cursor = self.cursor
        return (
            id(cursor.board),
            cursor.position,
            cursor.detail_open,
            self.orchestrator.notice,
            self.orchestrator.pending,
            self.orchestrator.in_flight,
        )

    def _render(self) -> None:
        """Push the cursor's state to the board screen and detail modal."""
        self._view_key = self._current_view_key()
        self.call_later(self._board_screen.show, self.cursor, self.orchestrator.notice)
        self._sync_detail()

    def _sync_detail(self) -> None:
        if self.cursor.detail_open:
            if self._detail is None:
                self._detail = CardDetailModal(self.cursor.current_card)
                self.push_screen(self._detail)
            elif self._detail.is_mounted:
                self._detail.show_card(self.cursor.current_card)
        elif self._detail is not None:
            detail, self._detail = self._detail, None
            if detail in self.screen_stack:
                # Screens pushed over the detail view (help) close with it
                while self.screen is not detail:
                    self.pop_screen()
                self.pop_screen()

    def _open_in_editor(self, path) -> None:
        """Suspend the TUI and run the editor on a card file."""
        cmd = shlex.split(self.settings.editor) + [str(path)]
        with self.suspend():
            try:
                subprocess.run(cmd, check=False)
            except FileNotFoundError:
                logger.warning("Editor not found: %s", self.settings.editor)
                self.notify(f"Editor not found: {self.settings.editor}", severity="error")


def run(settings: Settings | None = None) -> None:
    """Run the flowboard application."""
    app = FlowboardApp(settings)
    app.run()
