"""Optimistic move orchestration.

Moves are applied to the in-memory board the moment the key is pressed. The
store confirms them one at a time on a background worker; further moves wait
in a bounded FIFO queue. When a confirmation fails the board is reloaded from
the store (or the error is shown) and everything still queued is dropped,
since those moves were computed against a board that turned out to be wrong.

Quitting while moves are pending switches to draining: no new moves are
accepted and the app exits once the last pending move has an outcome.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable

from ..models import (
    Action,
    Confirmed,
    MoveOutcome,
    MoveState,
    PendingMove,
    RejectedWithResync,
)
from ..repositories import StoreError, StoreFactory, StoreProtocol
from .cursor import BoardCursor
from .worker import MoveWorker

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_CAPACITY = 64

NOTICE_MOVING = "Moving..."
NOTICE_QUEUE_FULL = "Move queue full: too many pending moves"
NOTICE_RESYNCED = "Move failed: reloaded board (optimistic state corrected)"


class MoveOrchestrator:
    """
    Owns the pending-move queue and the single in-flight worker.

    All methods run on the foreground; nothing here is shared with the
    worker thread except the worker's own one-shot channel.
    """

    def __init__(
        self,
        cursor: BoardCursor,
        store_factory: StoreFactory,
        store: StoreProtocol | None = None,
        capacity: int = DEFAULT_QUEUE_CAPACITY,
        spawn: Callable[[PendingMove, StoreFactory], MoveWorker] = MoveWorker.start,
    ) -> None:
        """
        Args:
            cursor: Foreground board and cursor state
            store_factory: Builds a store; each worker gets its own
            store: Foreground store used for refresh (built lazily if omitted)
            capacity: Maximum number of moves waiting behind the in-flight one
            spawn: Starts a worker for a move (tests pass a fake)
        """
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.cursor = cursor
        self.capacity = capacity
        self.notice: str | None = None
        self._store_factory = store_factory
        self._store = store
        self._spawn = spawn
        self._queue: deque[PendingMove] = deque()
        self._in_flight: MoveWorker | None = None
        self._quitting = False

    # --- Read-only views ---

    @property
    def state(self) -> MoveState:
        if self._quitting:
            return MoveState.DRAINING
        if self._in_flight is not None:
            return MoveState.BUSY
        return MoveState.IDLE

    @property
    def pending(self) -> int:
        """Number of moves queued behind the in-flight one."""
        return len(self._queue)

    @property
    def queued_moves(self) -> list[PendingMove]:
        return list(self._queue)

    @property
    def in_flight(self) -> PendingMove | None:
        return self._in_flight.move if self._in_flight is not None else None

    @property
    def should_exit(self) -> bool:
        """True once a requested quit has nothing left to wait for."""
        return self._quitting and self._in_flight is None and not self._queue

    # --- Commands ---

    def handle(self, action: Action) -> bool:
        """
        Route an action from the input layer.

        Returns:
            True if the app should exit now.
        """
        if action is Action.MOVE_LEFT:
            self.move(-1)
            return False
        if action is Action.MOVE_RIGHT:
            self.move(1)
            return False
        if action is Action.REFRESH:
            self.refresh()
            return False
        if self.cursor.apply(action):
            return self.request_quit()
        return False

    def move(self, direction: int) -> bool:
        """
        Move the focused card one column left (-1) or right (1).

        Returns:
            True if the board changed.
        """
        if self._quitting:
            logger.debug("Ignoring move while draining")
            return False

        move = self.cursor.optimistic_move(direction)
        if move is None:
            return False

        if self._in_flight is None:
            self._dispatch(move)
            self.notice = NOTICE_MOVING
        elif len(self._queue) >= self.capacity:
            # The board already shows the move; only its confirmation is lost
            logger.warning(
                "Move queue full (%d), not confirming %s -> %s",
                self.capacity,
                move.card_id,
                move.column_id,
            )
            self.notice = NOTICE_QUEUE_FULL
        else:
            self._queue.append(move)
            self.notice = f"{NOTICE_MOVING} ({len(self._queue)} queued)"
            logger.debug("Move queued: %s -> %s", move.card_id, move.column_id)
        return True

    def request_quit(self) -> bool:
        """
        Ask to quit.

        Returns:
            True if the app can exit right away; False while moves drain.
        """
        if self._in_flight is None and not self._queue:
            return True
        if not self._quitting:
            self._quitting = True
            logger.info("Quit requested, draining %d pending moves", self._pending_total())
            self._update_quit_notice()
        return False

    def refresh(self) -> None:
        """Reload the board from the store on the foreground."""
        if self._quitting:
            return

        try:
            board = self._foreground_store().load()
        except StoreError as e:
            logger.warning("Refresh failed: %s", e)
            self.notice = f"Refresh failed: {e}"
            return

        self.cursor.board = board
        self.cursor.focus_first_non_empty()
        self.notice = None
        logger.info("Board refreshed (%d columns)", len(board.columns))

    def poll(self) -> bool:
        """
        Collect the in-flight worker's outcome, if it is ready.

        Returns:
            True if the app should exit now.
        """
        if self._in_flight is not None:
            outcome = self._in_flight.poll()
            if outcome is not None:
                self._in_flight = None
                self._reconcile(outcome)
                self._update_quit_notice()
        return self.should_exit

    # --- Private Methods ---

    def _reconcile(self, outcome: MoveOutcome) -> None:
        if isinstance(outcome, Confirmed):
            if self._queue:
                self._dispatch(self._queue.popleft())
                self.notice = f"{NOTICE_MOVING} ({len(self._queue)} queued)"
            else:
                self.notice = None
            return

        dropped = len(self._queue)
        self._queue.clear()
        if isinstance(outcome, RejectedWithResync):
            self.cursor.replace_board(outcome.board)
            self.notice = NOTICE_RESYNCED
        else:
            self.notice = f"Move failed: {outcome.error}"
        logger.warning(
            "Move %s -> %s failed (%s), dropped %d queued moves",
            outcome.move.card_id,
            outcome.move.column_id,
            type(outcome).__name__,
            dropped,
        )

    def _dispatch(self, move: PendingMove) -> None:
        self._in_flight = self._spawn(move, self._store_factory)

    def _foreground_store(self) -> StoreProtocol:
        if self._store is None:
            self._store = self._store_factory()
        return self._store

    def _pending_total(self) -> int:
        return len(self._queue) + (1 if self._in_flight is not None else 0)

    def _update_quit_notice(self) -> None:
        if not self._quitting:
            return
        pending = self._pending_total()
        if pending:
            self.notice = f"Finishing {pending} pending moves before quit..."
        # Nothing pending: keep the last outcome notice for the exit message
