"""Cursor and focus state over an in-memory board."""

from __future__ import annotations

import logging

from ..models import Action, Board, Card, Column, PendingMove

logger = logging.getLogger(__name__)


class BoardCursor:
    """
    The foreground's view of the board: the board itself, the focused
    (column, row) pair and whether the detail view is open.

    Every method keeps the cursor inside the board:

    - an empty board forces (0, 0)
    - column is a valid index whenever the board has columns
    - row is a valid index into a non-empty focused column, else 0
    """

    def __init__(self, board: Board | None = None) -> None:
        self.board = board if board is not None else Board.empty()
        self.column = 0
        self.row = 0
        self.detail_open = False

    @property
    def position(self) -> tuple[int, int]:
        return (self.column, self.row)

    @property
    def current_column(self) -> Column | None:
        """Get the focused column."""
        if 0 <= self.column < len(self.board.columns):
            return self.board.columns[self.column]
        return None

    @property
    def current_card(self) -> Card | None:
        """Get the focused card."""
        column = self.current_column
        if column and 0 <= self.row < len(column.cards):
            return column.cards[self.row]
        return None

    def replace_board(self, board: Board) -> None:
        """Swap in a new board snapshot and re-clamp against it."""
        self.board = board
        self.clamp()

    def clamp(self) -> None:
        """Pull the cursor back inside the board."""
        if self.board.is_empty:
            self._reset()
            return

        self.column = max(0, min(self.column, len(self.board.columns) - 1))
        self._clamp_row()

    def focus(self, delta: int) -> None:
        """Move focus between columns, saturating at both ends."""
        if self.board.is_empty:
            self._reset()
            return

        self.column = _step(self.column, delta, len(self.board.columns) - 1)
        self._clamp_row()

    def select(self, delta: int) -> None:
        """Move selection within the focused column, saturating at both ends."""
        count = self._column_len()
        if count == 0:
            self.row = 0
            return

        self.row = _step(self.row, delta, count - 1)

    def focus_first_non_empty(self) -> None:
        """Focus the top card of the first column that has cards."""
        self.row = 0
        self.column = next(
            (i for i, col in enumerate(self.board.columns) if col.cards),
            0,
        )

    def apply(self, action: Action) -> bool:
        """
        Apply a navigation action.

        Returns:
            True if the action asks to quit.
        """
        if action is Action.QUIT:
            return True
        if action is Action.CLOSE_OR_QUIT:
            if not self.detail_open:
                return True
            self.detail_open = False
        elif action is Action.FOCUS_LEFT:
            self.focus(-1)
        elif action is Action.FOCUS_RIGHT:
            self.focus(1)
        elif action is Action.SELECT_UP:
            self.select(-1)
        elif action is Action.SELECT_DOWN:
            self.select(1)
        elif action is Action.TOGGLE_DETAIL:
            self.detail_open = not self.detail_open
        return False

    def optimistic_move(self, direction: int) -> PendingMove | None:
        """
        Move the focused card to the end of the neighbouring column.

        The board changes immediately, before any store confirms the move.

        Args:
            direction: -1 for the previous column, 1 for the next one

        Returns:
            The move to confirm, or None when nothing moved (empty board,
            empty focused column, or no column in that direction).
        """
        if self.board.is_empty:
            return None

        self.clamp()

        dst = self.column + direction
        if dst < 0 or dst >= len(self.board.columns):
            return None

        source = self.board.columns[self.column]
        if not source.cards:
            return None

        card = source.cards.pop(self.row)
        target = self.board.columns[dst]
        target.cards.append(card)

        self.column = dst
        self.row = len(target.cards) - 1

        logger.debug("Optimistic move: %s (%s -> %s)", card.id, source.id, target.id)
        return PendingMove(card_id=card.id, column_id=target.id)

    def _reset(self) -> None:
        self.column = 0
        self.row = 0

    def _column_len(self) -> int:
        column = self.current_column
        return len(column.cards) if column else 0

    def _clamp_row(self) -> None:
        count = self._column_len()
        self.row = 0 if count == 0 else max(0, min(self.row, count - 1))


def _step(index: int, delta: int, last: int) -> int:
    """Add delta to index, saturating to [0, last]."""
    return max(0, min(index + delta, last))
