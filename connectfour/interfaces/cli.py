"""
cli.py - Command-line front end for the Connect Four engine

A hot-seat two-player game in the terminal, plus tools for analysing a
position and benchmarking the two win-detection strategies. The game loop
only feeds columns into the engine; all drawing happens in the event handler,
the same way a browser front end would react to engine events.
"""

import argparse
import sys
import time
from typing import Callable, Dict, List, Optional, Union

import numpy as np

from connectfour.config import GameConfig
from connectfour.debug import debug, parse_level
from connectfour.errors import ConnectFourError
from connectfour.game.board import Board
from connectfour.game.rules import EventKind, GameEngine, GameEvent
from connectfour.game.win import check_win, find_winning_line, winners
from connectfour.utils import EMPTY, Outcome, PLAYER_SYMBOLS

QUIT = "quit"
RESTART = "restart"

ANSI_COLORS = {
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "purple": "\033[35m",
    "cyan": "\033[36m",
    "white": "\033[37m",
}
ANSI_RESET = "\033[0m"


def parse_position(position: str, rows: Optional[int] = None,
                   cols: Optional[int] = None) -> Board:
    """
    Load a board from a comma-separated list of 0/1/2 values.

    Values are read row by row starting with the top row. Without explicit
    dimensions the standard 6x7 board is assumed.

    Raises:
        ValueError: If the values do not fill the board or are not 0/1/2
    """
    config = GameConfig().with_overrides(rows=rows, cols=cols).validate()
    fields = position.replace(" ", "").split(",")
    for index, value in enumerate(fields):
        if value == "":
            raise ValueError(f"Position has an empty value at field {index + 1}: {position!r}")
    try:
        values = [int(v) for v in fields]
    except ValueError:
        raise ValueError(f"Position must be comma-separated integers, got {position!r}")

    expected = config.rows * config.cols
    if len(values) != expected:
        raise ValueError(f"Position must have {expected} values for a "
                         f"{config.rows}x{config.cols} board, got {len(values)}")
    return Board.from_grid(np.array(values).reshape(config.rows, config.cols))


class SimpleCLI:
    """Terminal interface for playing and inspecting Connect Four games."""

    def __init__(self, config: Optional[GameConfig] = None,
                 input_fn: Callable[[str], str] = input,
                 output: Callable[[str], None] = print,
                 use_color: bool = True):
        self.config = config or GameConfig()
        self.engine = GameEngine(self.config)
        self.engine.subscribe(self.on_event)
        self._input = input_fn
        self._print = output
        self.use_color = use_color

    def symbols(self) -> Dict[int, str]:
        """Cell symbols, coloured with each player's colour when possible."""
        symbols = dict(PLAYER_SYMBOLS)
        if not self.use_color or not self.engine.players:
            return symbols
        for player in self.engine.players:
            code = ANSI_COLORS.get((player.color or "").lower())
            if code:
                symbols[player.id] = f"{code}{symbols[player.id]}{ANSI_RESET}"
        return symbols

    def on_event(self, event: GameEvent) -> None:
        """Redraw in response to engine events."""
        if event.kind == EventKind.GAME_STARTED:
            first, second = event.payload["players"]
            self._print(f"New game: {first} plays X, {second} plays O")
            self._print(self.engine.render(self.symbols()))
        elif event.kind == EventKind.PIECE_PLACED:
            self._print(self.engine.render(self.symbols()))
        elif event.kind == EventKind.GAME_OVER:
            if event.payload["outcome"] == Outcome.WIN:
                line = ", ".join(f"({r}, {c})" for r, c in event.payload["winning_line"])
                self._print(f"{event.payload['winner']} won! Winning line: {line}")
            else:
                self._print("Tie!")

    def get_human_move(self) -> Optional[Union[int, str]]:
        """
        Read one command from the current player.

        Returns:
            A column number, QUIT, RESTART, or None for unreadable input
        """
        player = self.engine.current_player()
        last_col = self.engine.config.cols - 1
        try:
            user_input = self._input(f"{player} move (0-{last_col}, r=restart, q=quit): ")
        except EOFError:
            return QUIT

        user_input = user_input.strip().lower()
        if user_input == 'q':
            return QUIT
        if user_input == 'r':
            return RESTART
        try:
            return int(user_input)
        except ValueError:
            self._print("Invalid input. Please enter a column number, 'r' or 'q'.")
            return None

    def play_game(self, player1=None, player2=None) -> Optional[Outcome]:
        """
        Play a hot-seat game until it ends or a player quits.

        Returns:
            The final outcome, or None if the game was abandoned
        """
        self.engine.start_game(player1, player2)

        while not self.engine.is_finished():
            move = self.get_human_move()
            if move is None:
                continue
            if move == QUIT:
                self._print("Quitting game.")
                return None
            if move == RESTART:
                self.engine.start_game(*self.engine.players)
                continue

            try:
                result = self.engine.drop_piece(move)
            except ConnectFourError as e:
                self._print(str(e))
                continue

            if not result.accepted:
                self._print(f"Column {move} is full, pick another one.")

        return self.engine.outcome

    def check_position(self, board: Board) -> Dict:
        """Print and return an analysis of a loaded position."""
        self._print("Loaded position:")
        self._print(board.render())

        report = {
            'winners': winners(board),
            'lines': {},
            'full': board.is_full(),
            'empty_cells': int(np.sum(board.grid == EMPTY)),
            'valid_moves': board.valid_columns(),
        }
        for player_id in report['winners']:
            line = find_winning_line(board, player_id)
            report['lines'][player_id] = line
            self._print(f"Win for player {player_id}: {line}")
        if not report['winners']:
            self._print("No win detected for any player")

        if report['full']:
            self._print("Board is full")
        else:
            self._print(f"Empty spaces: {report['empty_cells']}")
        self._print(f"Valid moves: {report['valid_moves']}")
        return report

    def benchmark(self, iterations: int = 1000, seed: Optional[int] = None) -> Dict:
        """
        Play random games and time both win-detection strategies.

        After every move the full-board scan and the check through the last
        move must agree; any disagreement is counted as a mismatch.
        """
        rng = np.random.default_rng(seed)
        rows, cols = self.config.rows, self.config.cols
        full_time = local_time = 0.0
        checks = mismatches = 0
        outcomes: Dict[str, int] = {'win': 0, 'tie': 0}

        for _ in range(iterations):
            engine = GameEngine(self.config)
            engine.start_game()
            while not engine.is_finished():
                column = int(rng.choice(engine.valid_columns()))
                player_id = engine.current_player().id
                result = engine.drop_piece(column)
                board = engine.board

                started = time.perf_counter()
                full = check_win(board, player_id)
                full_time += time.perf_counter() - started

                started = time.perf_counter()
                local = check_win(board, player_id, last_move=(result.row, result.column))
                local_time += time.perf_counter() - started

                checks += 1
                if full != local:
                    mismatches += 1
                    debug.error(f"Win detectors disagree at {result.row},{result.column}", "cli")
            outcomes[engine.outcome.value] += 1

        self._print(f"Benchmark: {iterations} random games on a {rows}x{cols} board, "
                    f"{checks} win checks")
        self._print(f"  full-board scan: {full_time * 1000:.2f} ms")
        self._print(f"  last-move scan:  {local_time * 1000:.2f} ms")
        self._print(f"  wins: {outcomes['win']}, ties: {outcomes['tie']}, mismatches: {mismatches}")
        return {'games': iterations, 'checks': checks, 'mismatches': mismatches,
                'full_time': full_time, 'local_time': local_time, 'outcomes': outcomes}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Connect Four')
    subparsers = parser.add_subparsers(dest='component', help='Component to run')

    game_parser = subparsers.add_parser('game', help='Play or analyse Connect Four games')
    game_parser.add_argument('command', choices=['play', 'check', 'benchmark'],
        help='play: hot-seat game, check: analyse a position, benchmark: time win detection')
    game_parser.add_argument('--rows', type=int, help='Board height (default: 6)')
    game_parser.add_argument('--cols', type=int, help='Board width (default: 7)')
    game_parser.add_argument('--color1', type=str, help='Colour of player 1 (default: red)')
    game_parser.add_argument('--color2', type=str, help='Colour of player 2 (default: yellow)')
    game_parser.add_argument('--no-color', action='store_true',
        help='Draw pieces without terminal colours')
    game_parser.add_argument('--position', type=str,
        help='Comma-separated 0/1/2 cell values, top row first (used with check)')
    game_parser.add_argument('--iterations', type=int, default=200,
        help='Number of random games (used with benchmark)')
    game_parser.add_argument('--seed', type=int, help='Random seed (used with benchmark)')
    game_parser.add_argument('--debug', action='store_true',
        help='Enable debug mode (equivalent to --debug_level debug)')
    game_parser.add_argument('--debug_level',
        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
        help='Logging level (default: CONNECTFOUR_DEBUG_LEVEL or warning)')
    game_parser.add_argument('--log_file', type=str, help='Also write logs to this file')
    return parser


def configure_debug(args: argparse.Namespace, config: GameConfig) -> None:
    """Set logging from the config, letting command line flags win."""
    if args.debug:
        level = parse_level('debug')
    elif args.debug_level:
        level = parse_level(args.debug_level)
    else:
        level = config.debug_level
    debug.configure(level=level, log_file=args.log_file or config.log_file or "")


def handle_game_command(args: argparse.Namespace) -> int:
    try:
        config = GameConfig.from_env().with_overrides(
            rows=args.rows, cols=args.cols,
            player1_color=args.color1, player2_color=args.color2).validate()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    configure_debug(args, config)
    cli = SimpleCLI(config, use_color=not args.no_color)

    if args.command == 'play':
        try:
            cli.play_game(config.player1_color, config.player2_color)
        except ValueError as e:
            print(f"Cannot start game: {e}", file=sys.stderr)
            return 2
    elif args.command == 'check':
        if not args.position:
            print("Please provide a position string with --position", file=sys.stderr)
            return 2
        try:
            board = parse_position(args.position, config.rows, config.cols)
        except ValueError as e:
            print(f"Error parsing position: {e}", file=sys.stderr)
            return 2
        cli.check_position(board)
    elif args.command == 'benchmark':
        report = cli.benchmark(args.iterations, args.seed)
        return 1 if report['mismatches'] else 0
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.component == 'game':
        return handle_game_command(args)
    parser.print_help()
    return 1
