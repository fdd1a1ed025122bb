"""UI components."""

from .screens.board import BoardScreen
from .widgets.column import BoardColumn
from .widgets.card import CardItem

__all__ = [
    "BoardColumn",
    "BoardScreen",
    "CardItem",
]
