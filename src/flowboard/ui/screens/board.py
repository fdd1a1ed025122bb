"""Main board screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from ...services import BoardCursor
from ..widgets.column import BoardColumn
from ..widgets.notice_bar import NoticeBar


class EmptyBoardMessage(Static):
    """Displayed when the board has no columns."""

    pass


class BoardScreen(Screen):
    """Columns side by side, a notice bar and the key footer.

    The screen only reads state: the app hands it the cursor and the
    current notice after every change.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._column_ids: list[str] = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield NoticeBar(id="notice")
        yield Horizontal(id="columns")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(NoticeBar).show_notice(None)

    async def show(self, cursor: BoardCursor, notice: str | None) -> None:
        """Redraw the board from the cursor's state."""
        self.query_one(NoticeBar).show_notice(notice)

        columns = cursor.board.columns
        column_ids = [col.id for col in columns]
        container = self.query_one("#columns", Horizontal)

        if column_ids != self._column_ids or not container.children:
            self._column_ids = column_ids
            await container.remove_children()
            if not columns:
                await container.mount(EmptyBoardMessage("No columns found. Check board.txt."))
                return
            await container.mount_all(BoardColumn(col) for col in columns)

        for idx, widget in enumerate(container.query(BoardColumn)):
            focused = idx == cursor.column
            widget.show(columns[idx], focused, cursor.row if focused else None)
