"""
utils.py - Shared constants, enumerations and helpers

Cell values, game status and outcome enums, the four line directions used by
the win detector and the ASCII board renderer.
"""

from enum import Enum, auto
from typing import Dict, Optional

import numpy as np

# Cell values stored in the board grid
EMPTY = 0
PLAYER_ONE = 1
PLAYER_TWO = 2
PLAYER_IDS = (PLAYER_ONE, PLAYER_TWO)

PLAYER_SYMBOLS = {EMPTY: " ", PLAYER_ONE: "X", PLAYER_TWO: "O"}


def other_player(player_id: int) -> int:
    """Get the id of the opponent."""
    if player_id == PLAYER_ONE:
        return PLAYER_TWO
    if player_id == PLAYER_TWO:
        return PLAYER_ONE
    raise ValueError(f"Unknown player id: {player_id!r}")


class GameStatus(Enum):
    """Lifecycle of a game held by the engine."""
    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    FINISHED = auto()


class Outcome(Enum):
    """Result of the game after a move."""
    CONTINUE = "continue"
    WIN = "win"
    TIE = "tie"

    def is_game_over(self) -> bool:
        return self != Outcome.CONTINUE


class RejectReason(Enum):
    """Why a drop was not applied."""
    COLUMN_FULL = "column_full"
    GAME_NOT_IN_PROGRESS = "game_not_in_progress"


class Direction(Enum):
    """Directions a four-in-a-row can run in, starting from its first cell."""
    HORIZONTAL = auto()           # left to right
    VERTICAL = auto()             # top to bottom
    DIAGONAL_DOWN_RIGHT = auto()
    DIAGONAL_DOWN_LEFT = auto()


# (row, col) step for each direction; row 0 is the top of the board
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1),
}


def render_board_ascii(grid: np.ndarray, symbols: Optional[Dict[int, str]] = None) -> str:
    """
    Render a grid as ASCII art with column numbers underneath.

    Args:
        grid: 2D array of cell values
        symbols: Optional mapping from cell value to the string drawn for it

    Returns:
        Multi-line string representation of the board
    """
    symbols = symbols or PLAYER_SYMBOLS
    rows, cols = grid.shape
    border = "|" + "-" * (cols * 2 - 1) + "|"

    lines = [border]
    for row in range(rows):
        cells = [symbols.get(int(grid[row, col]), "?") for col in range(cols)]
        lines.append("|" + " ".join(cells) + "|")
    lines.append(border)

    # Column labels wrap after 9 so wide boards stay aligned
    lines.append("|" + " ".join(str(col % 10) for col in range(cols)) + "|")

    return "\n".join(lines)
