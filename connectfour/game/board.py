"""
board.py - Board representation for Connect Four

The Board owns the grid of cells and nothing else: it answers where a piece
dropped into a column would land, records placements and reports occupancy.
Turn order and win detection live in the engine and the win detector.
"""

from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from connectfour.debug import debug
from connectfour.errors import (CellOccupiedError, InvalidColumnError,
                                InvalidDimensionsError, InvalidPositionError)
from connectfour.utils import EMPTY, PLAYER_IDS, render_board_ascii


def _is_index(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


class Board:
    """
    A fixed-size Connect Four grid.

    Row 0 is the top of the board and row ``height - 1`` the bottom, so
    pieces in a column fill from the highest row index downward. Cells hold
    0 when empty, otherwise the id of the player occupying them.
    """

    def __init__(self, height: int, width: int):
        """
        Create an empty board.

        Args:
            height: Number of rows
            width: Number of columns

        Raises:
            InvalidDimensionsError: If either dimension is not a positive integer
        """
        if not (_is_index(height) and _is_index(width)) or height <= 0 or width <= 0:
            debug.warning(f"Rejected board dimensions {height!r}x{width!r}", "board")
            raise InvalidDimensionsError(height, width)

        self.height = int(height)
        self.width = int(width)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)
        debug.trace(f"Created {self.height}x{self.width} board", "board")

    @classmethod
    def create(cls, height: int, width: int) -> 'Board':
        """Create an all-empty board of the given dimensions."""
        return cls(height, width)

    @classmethod
    def from_grid(cls, grid: Union[np.ndarray, Sequence[Sequence[int]]]) -> 'Board':
        """
        Build a board from an existing grid of 0/1/2 values.

        The grid is taken as-is; gravity is not checked, which lets analysis
        tools load arbitrary positions.

        Raises:
            InvalidDimensionsError: If the grid is not a non-empty 2D array
            ValueError: If a cell holds anything other than 0, 1 or 2
        """
        array = np.asarray(grid)
        if array.ndim != 2:
            raise InvalidDimensionsError(*(array.shape + (0, 0))[:2])

        board = cls(*array.shape)
        if not np.isin(array, (EMPTY,) + PLAYER_IDS).all():
            raise ValueError("Grid values must be 0 (empty), 1 or 2")
        board.grid[:, :] = array
        return board

    def copy(self) -> 'Board':
        """Create an independent copy of this board."""
        new_board = Board(self.height, self.width)
        new_board.grid = self.grid.copy()
        return new_board

    def in_bounds(self, row: int, column: int) -> bool:
        """Check if a position lies on the board."""
        return 0 <= row < self.height and 0 <= column < self.width

    def _check_column(self, column: int) -> None:
        if not _is_index(column) or not 0 <= column < self.width:
            debug.warning(f"Column {column!r} outside [0, {self.width})", "board")
            raise InvalidColumnError(column, self.width)

    def landing_row(self, column: int) -> Optional[int]:
        """
        Find the row a piece dropped into a column would land in.

        Args:
            column: Column index in [0, width)

        Returns:
            The lowest empty row index, or None if the column is full

        Raises:
            InvalidColumnError: If the column is out of range
        """
        self._check_column(column)

        for row in range(self.height - 1, -1, -1):
            if self.grid[row, column] == EMPTY:
                return row
        return None

    def place(self, row: int, column: int, player_id: int) -> None:
        """
        Mark a cell as occupied by a player.

        Callers are expected to have picked the row with landing_row(); placing
        onto an occupied cell is a programming error.

        Raises:
            InvalidPositionError: If the cell is off the board
            CellOccupiedError: If the cell already holds a piece
            ValueError: If player_id is not 1 or 2
        """
        if player_id not in PLAYER_IDS:
            raise ValueError(f"Unknown player id: {player_id!r}")
        occupant = self.cell_at(row, column)
        if occupant is not None:
            debug.warning(f"Cell ({row}, {column}) already holds player {occupant}", "board")
            raise CellOccupiedError(row, column, occupant)

        self.grid[row, column] = player_id
        debug.trace(f"Player {player_id} placed at ({row}, {column})", "board")

    def cell_at(self, row: int, column: int) -> Optional[int]:
        """
        Get the occupant of a cell.

        Returns:
            The player id, or None if the cell is empty

        Raises:
            InvalidPositionError: If the position is off the board
        """
        if not (_is_index(row) and _is_index(column)) or not self.in_bounds(row, column):
            raise InvalidPositionError(row, column, self.height, self.width)

        value = int(self.grid[row, column])
        return None if value == EMPTY else value

    def is_full(self) -> bool:
        """True iff every cell holds a piece."""
        return bool(np.all(self.grid != EMPTY))

    def is_column_full(self, column: int) -> bool:
        self._check_column(column)
        return self.grid[0, column] != EMPTY

    def valid_columns(self) -> List[int]:
        """Columns that still have room for a piece."""
        return [int(col) for col in np.flatnonzero(self.grid[0] == EMPTY)]

    def occupied_cells(self, player_id: int) -> List[Tuple[int, int]]:
        """All (row, col) positions held by a player, top to bottom."""
        return [(int(r), int(c)) for r, c in zip(*np.nonzero(self.grid == player_id))]

    def get_state(self) -> np.ndarray:
        """Get a copy of the grid."""
        return self.grid.copy()

    def render(self, symbols=None) -> str:
        return render_board_ascii(self.grid, symbols)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid.shape == other.grid.shape and bool(np.array_equal(self.grid, other.grid))

    __hash__ = None

    def __repr__(self) -> str:
        return f"Board(height={self.height}, width={self.width})"

    def __str__(self) -> str:
        return self.render()
