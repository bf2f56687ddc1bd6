"""
connectfour.game - Core game mechanics for Connect Four

Board representation, win detection, player identity and the game engine
that ties them together.
"""

from connectfour.game.board import Board
from connectfour.game.player import Player
from connectfour.game.rules import EventKind, GameEngine, GameEvent, MoveResult
from connectfour.game.win import check_win, find_winning_line

__all__ = ['Board', 'Player', 'GameEngine', 'GameEvent', 'EventKind', 'MoveResult',
           'check_win', 'find_winning_line']
