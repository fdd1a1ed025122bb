"""Background worker that confirms one move against the store."""

from __future__ import annotations

import logging
import queue
import threading

from ..models import (
    Confirmed,
    MoveOutcome,
    PendingMove,
    RejectedOpaque,
    RejectedWithResync,
    WorkerFailure,
)
from ..repositories import StoreError, StoreFactory

logger = logging.getLogger(__name__)


class MoveWorker:
    """
    Confirms a single move on its own thread.

    The thread builds a fresh store, calls ``move`` and, if that fails,
    ``load`` to fetch ground truth. It reports exactly one outcome through a
    one-shot channel and exits. The foreground collects it with ``poll()``.

    A thread that dies without reporting is seen by ``poll()`` as a
    disconnect and turned into a ``WorkerFailure``.
    """

    def __init__(self, move: PendingMove, store_factory: StoreFactory) -> None:
        self.move = move
        self._store_factory = store_factory
        self._channel: queue.Queue[MoveOutcome] = queue.Queue(maxsize=1)
        self._thread = threading.Thread(
            target=self._run,
            name=f"move-{move.card_id}",
            daemon=True,
        )

    @classmethod
    def start(cls, move: PendingMove, store_factory: StoreFactory) -> MoveWorker:
        """Create a worker and start its thread."""
        worker = cls(move, store_factory)
        worker._thread.start()
        logger.debug("Worker started: %s -> %s", move.card_id, move.column_id)
        return worker

    @property
    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def join(self, timeout: float | None = None) -> None:
        """Wait for the thread to finish (tests and shutdown only)."""
        self._thread.join(timeout)

    def poll(self) -> MoveOutcome | None:
        """
        Collect the outcome without blocking.

        Returns:
            The outcome once available, None while the move is still running.
        """
        try:
            return self._channel.get_nowait()
        except queue.Empty:
            pass

        if self._thread.is_alive() or self._thread.ident is None:
            return None

        # The thread may have reported between the first check and is_alive()
        try:
            return self._channel.get_nowait()
        except queue.Empty:
            logger.error("Worker for %s exited without an outcome", self.move.card_id)
            return WorkerFailure(move=self.move, error="worker disconnected")

    def _run(self) -> None:
        self._channel.put_nowait(self._confirm())

    def _confirm(self) -> MoveOutcome:
        """Run the move against the store; never raises."""
        move = self.move
        try:
            store = self._store_factory()
            try:
                return self._move_or_resync(store)
            finally:
                store.close()
        except Exception as e:
            logger.exception("Worker for %s crashed", move.card_id)
            return WorkerFailure(move=move, error=f"worker crashed: {e}")

    def _move_or_resync(self, store) -> MoveOutcome:
        move = self.move
        try:
            store.move(move.card_id, move.column_id)
        except StoreError as move_error:
            logger.warning("Move failed: %s -> %s: %s", move.card_id, move.column_id, move_error)
            try:
                board = store.load()
            except StoreError as load_error:
                logger.warning("Resync after failed move also failed: %s", load_error)
                return RejectedOpaque(move=move, error=str(move_error))
            return RejectedWithResync(move=move, board=board, error=str(move_error))

        logger.info("Move confirmed: %s -> %s", move.card_id, move.column_id)
        return Confirmed(move=move)
