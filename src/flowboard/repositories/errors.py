"""Store error hierarchy.

Every failure a store can report is a ``StoreError``. The message is meant to
be shown to the user as-is, so each subclass carries enough context (the
operation, the target, the underlying cause) to stand on its own.
"""

from __future__ import annotations

from pathlib import Path


class StoreError(Exception):
    """Base exception for store errors."""

    pass


class NotFoundError(StoreError):
    """A referenced card or column does not exist in the store."""

    def __init__(self, id: str) -> None:  # noqa: A002
        self.id = id
        super().__init__(f"not found: {id}")


class ParseError(StoreError):
    """Persisted or remote data is malformed (or the store is misconfigured)."""

    def __init__(self, msg: str) -> None:
        self.msg = msg
        super().__init__(f"parse error: {msg}")


class StoreIOError(StoreError):
    """A read, write or network call failed."""

    def __init__(self, op: str, target: str | Path, cause: BaseException | str) -> None:
        self.op = op
        self.target = str(target)
        self.cause = cause
        super().__init__(f"{op} failed for {self.target}: {cause}")
