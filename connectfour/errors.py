"""
errors.py - Exceptions raised by the Connect Four engine

Only precondition violations are raised. Moves that are merely not allowed
right now (full column, game not running) come back as rejected MoveResults.
"""


class ConnectFourError(Exception):
    """Base class for all engine errors."""


class InvalidDimensionsError(ConnectFourError, ValueError):
    """Board height or width is not a positive integer."""

    def __init__(self, height, width):
        super().__init__(f"Board dimensions must be positive integers, got {height}x{width}")
        self.height = height
        self.width = width


class InvalidColumnError(ConnectFourError, ValueError):
    """Column index is not an integer in [0, width)."""

    def __init__(self, column, width: int):
        super().__init__(f"Column {column!r} out of range (expected 0-{width - 1})")
        self.column = column
        self.width = width


class InvalidPositionError(ConnectFourError, ValueError):
    """A (row, column) coordinate lies outside the board."""

    def __init__(self, row, column, height: int, width: int):
        super().__init__(f"Position ({row!r}, {column!r}) is outside a {height}x{width} board")
        self.row = row
        self.column = column


class CellOccupiedError(ConnectFourError, ValueError):
    """A piece was placed on a cell that already holds one."""

    def __init__(self, row: int, column: int, occupant: int):
        super().__init__(f"Cell ({row}, {column}) is already occupied by player {occupant}")
        self.row = row
        self.column = column
        self.occupant = occupant
