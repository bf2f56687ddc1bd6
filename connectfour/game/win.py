"""
win.py - Four-in-a-row detection

Two strategies with identical answers for boards reached through legal play:
a full-board scan that treats every cell as the possible start of a line, and
a local check that only looks at lines passing through the last move. The
engine uses the local check after each drop; the full scan serves analysis of
arbitrary positions.
"""

from typing import Iterator, List, Optional, Tuple

from connectfour.config import CONNECT_N
from connectfour.debug import debug
from connectfour.game.board import Board
from connectfour.utils import DIRECTION_VECTORS, PLAYER_IDS, Direction

Coord = Tuple[int, int]  # (row, col)


def line_from(start: Coord, direction: Direction, length: int = CONNECT_N) -> List[Coord]:
    """The ``length`` consecutive coordinates starting at ``start``."""
    dr, dc = DIRECTION_VECTORS[direction]
    row, col = start
    return [(row + i * dr, col + i * dc) for i in range(length)]


def _is_line_owned(board: Board, cells: List[Coord], player_id: int) -> bool:
    return all(board.in_bounds(r, c) and board.grid[r, c] == player_id for r, c in cells)


def _lines_through(cell: Coord) -> Iterator[List[Coord]]:
    """Every line of CONNECT_N cells that contains ``cell``, bounds unchecked."""
    row, col = cell
    for direction, (dr, dc) in DIRECTION_VECTORS.items():
        for offset in range(CONNECT_N):
            start = (row - offset * dr, col - offset * dc)
            yield line_from(start, direction)


def _scan_board(board: Board) -> Iterator[List[Coord]]:
    for row in range(board.height):
        for col in range(board.width):
            for direction in DIRECTION_VECTORS:
                yield line_from((row, col), direction)


def find_winning_line(board: Board, player_id: int,
                      last_move: Optional[Coord] = None) -> Optional[List[Coord]]:
    """
    Find a four-in-a-row owned by a player.

    Args:
        board: Board to inspect (not modified)
        player_id: Player whose lines are checked
        last_move: If given, only lines through this cell are examined

    Returns:
        The coordinates of the first matching line, or None
    """
    if last_move is None:
        candidates = _scan_board(board)
    else:
        candidates = _lines_through(last_move)

    for cells in candidates:
        if _is_line_owned(board, cells, player_id):
            debug.trace(f"Player {player_id} owns line {cells}", "win")
            return cells
    return None


def check_win(board: Board, player_id: int, last_move: Optional[Coord] = None) -> bool:
    """True if the player has four in a row (through ``last_move`` when given)."""
    return find_winning_line(board, player_id, last_move) is not None


def winners(board: Board) -> List[int]:
    """Every player holding a four-in-a-row anywhere on the board."""
    return [player_id for player_id in PLAYER_IDS if check_win(board, player_id)]
