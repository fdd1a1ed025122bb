"""Local directory store for boards."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from pathlib import Path

import frontmatter
import yaml

from ..models import Board, Card, Column
from .errors import NotFoundError, ParseError, StoreError, StoreIOError
from .protocol import StoreCapabilities

logger = logging.getLogger(__name__)


class LocalStore:
    """
    Store for boards kept in a local directory.

    Layout::

        board.txt               # one "col <id> [\"Title\"]" line per column
        cols/<id>/order.txt     # card IDs in display order
        cols/<id>/<card>.md     # card title and description

    Card files may carry YAML front matter with a ``title`` key; otherwise
    the first line (without a leading "# ") is the title.
    """

    BOARD_FILE = "board.txt"
    ORDER_FILE = "order.txt"
    COLS_DIR = "cols"

    def __init__(self, root: Path) -> None:
        """
        Initialize store.

        Args:
            root: Path to the board directory (e.g., ~/.config/flow/boards/default)
        """
        self.root = root

    @property
    def capabilities(self) -> StoreCapabilities:
        return StoreCapabilities(can_create=True, can_edit=True)

    def close(self) -> None:
        """Nothing to release for local files."""
        pass

    # --- Board Operations ---

    def load(self) -> Board:
        """Load the whole board from disk."""
        try:
            columns = [
                Column(id=col_id, title=title, cards=self._load_cards(col_id))
                for col_id, title in self._read_columns()
            ]
        except StoreError:
            raise
        except OSError as e:
            raise StoreIOError("load_board", self.root, e) from e

        logger.debug("Loaded %d columns from %s", len(columns), self.root)
        return Board(columns=columns)

    def move(self, card_id: str, column_id: str) -> None:
        """
        Move a card file into another column directory.

        The card is appended to the destination's order. Moving a card into
        the column it already lives in is a no-op.
        """
        try:
            src = self._find_card_column(card_id)
            if src is None:
                raise NotFoundError(card_id)
            if src == column_id:
                return

            src_dir = self._column_dir(src)
            dst_dir = self._column_dir(column_id)
            dst_dir.mkdir(parents=True, exist_ok=True)

            (src_dir / f"{card_id}.md").rename(dst_dir / f"{card_id}.md")
            self._order_remove(src_dir / self.ORDER_FILE, card_id)
            self._order_append(dst_dir / self.ORDER_FILE, card_id)
        except StoreError:
            raise
        except OSError as e:
            raise StoreIOError("move_card", self.root, e) from e

        logger.info("Card moved: %s (%s -> %s)", card_id, src, column_id)

    def create(self, column_id: str) -> str:
        """Create a placeholder card at the end of a column."""
        try:
            if column_id not in self._column_ids():
                raise NotFoundError(column_id)

            card_id = f"CARD-{time.time_ns() // 1_000_000}"
            col_dir = self._column_dir(column_id)
            col_dir.mkdir(parents=True, exist_ok=True)
            (col_dir / f"{card_id}.md").write_text("# New card\n\n")
            self._order_append(col_dir / self.ORDER_FILE, card_id)
        except StoreError:
            raise
        except OSError as e:
            raise StoreIOError("create_card", self.root, e) from e

        logger.info("Card created: %s in %s", card_id, column_id)
        return card_id

    def locate(self, card_id: str) -> Path:
        """Get the markdown file for a card."""
        try:
            col_id = self._find_card_column(card_id)
        except StoreError:
            raise
        except OSError as e:
            raise StoreIOError("card_path", self.root, e) from e

        if col_id is None:
            raise NotFoundError(card_id)
        return self._column_dir(col_id) / f"{card_id}.md"

    # --- Private Methods ---

    def _column_dir(self, column_id: str) -> Path:
        return self.root / self.COLS_DIR / column_id

    def _read_columns(self) -> Iterator[tuple[str, str]]:
        """Yield (id, title) for each column line in board.txt."""
        board_file = self.root / self.BOARD_FILE
        if not board_file.exists():
            raise NotFoundError(str(board_file))

        for line in _read_text(board_file).splitlines():
            line = line.strip()
            if line != "col" and not line.startswith("col "):
                continue
            yield _parse_column_line(line[3:])

    def _column_ids(self) -> list[str]:
        return [col_id for col_id, _title in self._read_columns()]

    def _load_cards(self, column_id: str) -> list[Card]:
        """Load cards for a column in order.txt order."""
        col_dir = self._column_dir(column_id)
        order_path = col_dir / self.ORDER_FILE
        if not order_path.exists():
            return []

        cards = []
        for card_id in _read_order(order_path):
            raw = _read_text(col_dir / f"{card_id}.md")
            title, description = _parse_card(raw, card_id)
            cards.append(Card(id=card_id, title=title, description=description))
        return cards

    def _find_card_column(self, card_id: str) -> str | None:
        """Find which column directory holds a card file."""
        for col_id in self._column_ids():
            if (self._column_dir(col_id) / f"{card_id}.md").exists():
                return col_id
        return None

    def _order_remove(self, path: Path, card_id: str) -> None:
        if not path.exists():
            return
        ids = [i for i in _read_order(path) if i != card_id]
        _write_order(path, ids)

    def _order_append(self, path: Path, card_id: str) -> None:
        ids = _read_order(path) if path.exists() else []
        if card_id not in ids:
            ids.append(card_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        _write_order(path, ids)


def _parse_column_line(rest: str) -> tuple[str, str]:
    """Parse the part of a column line after "col"."""
    parts = rest.strip().split(" ", 1)
    col_id = parts[0]
    if not col_id:
        raise ParseError("missing column id")
    title = parts[1].strip().strip('"') if len(parts) > 1 else ""
    return col_id, title or col_id


def _parse_card(raw: str, fallback: str) -> tuple[str, str]:
    """Split a card file into (title, description)."""
    try:
        post = frontmatter.loads(raw)
    except yaml.YAMLError as e:
        raise ParseError(f"invalid front matter in {fallback}.md: {e}") from e

    title = post.metadata.get("title")
    if title:
        return str(title), post.content.strip()

    first, _, rest = post.content.partition("\n")
    title = first.removeprefix("# ").strip()
    return title or fallback, rest.strip()


def _read_order(path: Path) -> list[str]:
    return [line.strip() for line in _read_text(path).splitlines() if line.strip()]


def _write_order(path: Path, ids: list[str]) -> None:
    path.write_text("\n".join(ids) + "\n")


def _read_text(path: Path) -> str:
    """Read a UTF-8 file; undecodable bytes are a parse error."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(f"invalid UTF-8 in {path}: {e}") from e
