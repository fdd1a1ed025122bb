"""User actions delivered by the input layer."""

from enum import Enum


class Action(str, Enum):
    """Discrete actions the board reacts to."""

    QUIT = "quit"
    CLOSE_OR_QUIT = "close_or_quit"
    FOCUS_LEFT = "focus_left"
    FOCUS_RIGHT = "focus_right"
    SELECT_UP = "select_up"
    SELECT_DOWN = "select_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    TOGGLE_DETAIL = "toggle_detail"
    REFRESH = "refresh"
