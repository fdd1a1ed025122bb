"""Shared board builders for tests."""

from flowboard.models import Board, Card, Column


def make_board(**columns: list[str]) -> Board:
    """Build a board from column id -> card ids, in keyword order."""
    return Board(
        columns=[
            Column(id=col_id, title=col_id.title(), cards=[Card(id=c, title=f"Card {c}") for c in cards])
            for col_id, cards in columns.items()
        ]
    )


def card_ids(board: Board) -> dict[str, list[str]]:
    """Flatten a board to column id -> card ids."""
    return {col.id: [card.id for card in col.cards] for col in board.columns}
