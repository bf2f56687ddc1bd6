"""
rules.py - Game state management for Connect Four

GameEngine runs one game at a time: it owns the board and both players,
validates drops, asks the win detector about each placement and moves the
game through NOT_STARTED -> IN_PROGRESS -> FINISHED. A presentation layer
drives it through start_game() and drop_piece() and can subscribe to events
to know when to redraw.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from connectfour.config import GameConfig
from connectfour.debug import debug
from connectfour.game.board import Board
from connectfour.game.player import Player, PlayerAttrs, make_players
from connectfour.game.win import Coord, find_winning_line
from connectfour.utils import GameStatus, Outcome, PLAYER_SYMBOLS, RejectReason, other_player


@dataclass(frozen=True)
class MoveResult:
    """What happened to a drop_piece() request."""
    accepted: bool
    outcome: Outcome
    row: Optional[int] = None
    column: Optional[int] = None
    player_id: Optional[int] = None
    reason: Optional[RejectReason] = None
    winning_line: Optional[Tuple[Coord, ...]] = None

    @property
    def is_game_over(self) -> bool:
        return self.outcome.is_game_over()

    def to_dict(self) -> Dict[str, Any]:
        """
        Plain mapping for a renderer, e.g.
        ``{"accepted": True, "row": 5, "column": 0, "playerId": 1, "outcome": "continue"}``.
        Rejected moves carry no position.
        """
        data: Dict[str, Any] = {"accepted": self.accepted}
        if self.accepted:
            data.update(row=self.row, column=self.column, playerId=self.player_id)
        else:
            data["reason"] = self.reason.value if self.reason else None
        data["outcome"] = self.outcome.value
        return data


class EventKind(Enum):
    GAME_STARTED = "game_started"  # full redraw
    PIECE_PLACED = "piece_placed"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameEvent:
    kind: EventKind
    payload: Dict[str, Any] = field(default_factory=dict)


Listener = Callable[[GameEvent], None]


class GameEngine:
    """
    Turn order, move validation and end-of-game detection for one game.

    Every public call runs to completion before returning and leaves the
    engine consistent; listeners are only notified once a move has been fully
    applied. Exceptions raised by listeners propagate to the caller.
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 rows: Optional[int] = None, cols: Optional[int] = None):
        """
        Create an engine with no game running yet.

        Args:
            config: Board size and default colours (defaults to GameConfig())
            rows: Overrides config.rows
            cols: Overrides config.cols

        Raises:
            InvalidDimensionsError: If the board size is not positive
        """
        self.config = (config or GameConfig()).with_overrides(rows=rows, cols=cols).validate()
        self._listeners: List[Listener] = []
        self._reset_state()
        debug.debug(f"Initialized engine with {self.config.rows}x{self.config.cols} board", "engine")

    def _reset_state(self, players: Optional[Tuple[Player, Player]] = None) -> None:
        self._board = Board(self.config.rows, self.config.cols)
        self._players = players
        self._current: Optional[Player] = players[0] if players else None
        self._status = GameStatus.IN_PROGRESS if players else GameStatus.NOT_STARTED
        self._outcome = Outcome.CONTINUE
        self._winner: Optional[Player] = None
        self._winning_line: Optional[Tuple[Coord, ...]] = None
        self._history: List[Tuple[int, int, int]] = []

    # Events

    def subscribe(self, listener: Listener) -> None:
        """Register a callback for game events; it survives new games."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, kind: EventKind, **payload) -> None:
        event = GameEvent(kind, payload)
        for listener in list(self._listeners):
            listener(event)

    # Commands

    def start_game(self, player1: PlayerAttrs = None, player2: PlayerAttrs = None) -> None:
        """
        Discard any current game and start a fresh one.

        Args:
            player1: Player, colour string or attribute mapping for seat 1
            player2: Same for seat 2

        Raises:
            ValueError: If the players cannot be built (wrong seat, same colour)
        """
        defaults = (self.config.player1_color, self.config.player2_color)
        players = make_players(player1, player2, default_colors=defaults)

        if self._status == GameStatus.IN_PROGRESS:
            debug.info(f"Abandoning game after {len(self._history)} moves", "engine")
        self._reset_state(players)
        debug.info(f"New game: {players[0]} vs {players[1]}", "engine")

        self._emit(EventKind.GAME_STARTED, rows=self._board.height, cols=self._board.width,
                   players=players)

    def drop_piece(self, column: int) -> MoveResult:
        """
        Drop the current player's piece into a column.

        Args:
            column: Column index in [0, width)

        Returns:
            MoveResult; rejected (accepted=False) when the column is full or no
            game is in progress, in which case nothing changes

        Raises:
            InvalidColumnError: If column is not an integer in [0, width)
        """
        if self._status != GameStatus.IN_PROGRESS:
            debug.debug(f"Rejected drop in column {column!r}: game is {self._status.name}", "engine")
            return MoveResult(False, self._outcome, reason=RejectReason.GAME_NOT_IN_PROGRESS)

        row = self._board.landing_row(column)
        if row is None:
            debug.debug(f"Rejected drop in column {column}: column is full", "engine")
            return MoveResult(False, self._outcome, reason=RejectReason.COLUMN_FULL)

        column = int(column)
        player = self._current
        self._board.place(row, column, player.id)
        self._history.append((row, column, player.id))
        debug.debug(f"{player} dropped into column {column}, landed on row {row}", "engine")

        debug.start_timer("win_check")
        line = find_winning_line(self._board, player.id, last_move=(row, column))
        debug.end_timer("win_check", "engine")

        if line is not None:
            self._status = GameStatus.FINISHED
            self._outcome = Outcome.WIN
            self._winner = player
            self._winning_line = tuple(line)
            debug.info(f"{player} wins after {len(self._history)} moves", "engine")
        elif self._board.is_full():
            self._status = GameStatus.FINISHED
            self._outcome = Outcome.TIE
            debug.info("Board is full: tie", "engine")
        else:
            self._current = self._players[other_player(player.id) - 1]

        result = MoveResult(True, self._outcome, row=row, column=column, player_id=player.id,
                            winning_line=self._winning_line)

        self._emit(EventKind.PIECE_PLACED, row=row, column=column, player=player,
                   outcome=self._outcome)
        if self._status == GameStatus.FINISHED:
            self._emit(EventKind.GAME_OVER, outcome=self._outcome, winner=self._winner,
                       winning_line=self._winning_line)
        return result

    # Queries

    def current_player(self) -> Optional[Player]:
        """Player to move; once finished, the player who made the last move."""
        return self._current

    def cell_at(self, row: int, column: int) -> Optional[int]:
        return self._board.cell_at(row, column)

    def is_finished(self) -> bool:
        return self._status == GameStatus.FINISHED

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def winning_line(self) -> Optional[Tuple[Coord, ...]]:
        return self._winning_line

    @property
    def players(self) -> Optional[Tuple[Player, Player]]:
        return self._players

    @property
    def board(self) -> Board:
        """A copy of the board; changing it does not affect the game."""
        return self._board.copy()

    @property
    def history(self) -> Tuple[Tuple[int, int, int], ...]:
        """Accepted moves as (row, column, player_id), oldest first."""
        return tuple(self._history)

    def get_state(self) -> np.ndarray:
        return self._board.get_state()

    def valid_columns(self) -> List[int]:
        if self._status != GameStatus.IN_PROGRESS:
            return []
        return self._board.valid_columns()

    def render(self, symbols: Optional[Dict[int, str]] = None) -> str:
        return self._board.render(symbols or PLAYER_SYMBOLS)
