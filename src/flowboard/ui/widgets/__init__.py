"""Widget components."""

from .card import CardItem
from .card_detail_modal import CardDetailModal
from .column import BoardColumn, EmptyColumnMessage
from .notice_bar import NoticeBar

__all__ = [
    "BoardColumn",
    "CardDetailModal",
    "CardItem",
    "EmptyColumnMessage",
    "NoticeBar",
]
