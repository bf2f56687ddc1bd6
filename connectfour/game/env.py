"""
env.py - Gymnasium environment around the game engine

Lets scripted callers play through the standard reset()/step() protocol. Both
seats are driven by whoever calls step(); the environment itself never picks
a move.
"""

from typing import Any, Dict, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connectfour.config import GameConfig
from connectfour.debug import debug
from connectfour.game.rules import GameEngine
from connectfour.utils import GameStatus, Outcome, PLAYER_ONE

CELL_PIXELS = 50

# RGB values for colour names the renderer knows; anything else falls back
# to the seat default
NAMED_COLORS = {
    "red": (220, 30, 30),
    "yellow": (240, 220, 0),
    "blue": (30, 80, 220),
    "green": (30, 160, 60),
    "orange": (240, 140, 0),
    "purple": (140, 40, 160),
    "pink": (240, 120, 180),
    "black": (20, 20, 20),
    "white": (245, 245, 245),
}
BOARD_RGB = (0, 0, 128)
EMPTY_RGB = (0, 0, 0)


def color_to_rgb(color: Optional[str], fallback: Tuple[int, int, int]) -> Tuple[int, int, int]:
    """Convert a colour name or ``#rrggbb`` string to an RGB tuple."""
    if not color:
        return fallback
    color = color.strip().lower()
    if color in NAMED_COLORS:
        return NAMED_COLORS[color]
    if color.startswith("#") and len(color) == 7:
        try:
            return tuple(int(color[i:i + 2], 16) for i in (1, 3, 5))
        except ValueError:
            return fallback
    return fallback


class ConnectFourEnv(gym.Env):
    """
    Connect Four following the Gymnasium interface.

    Rewards are from player 1's point of view: ``reward_win`` when player 1
    wins, ``reward_lose`` when player 2 wins. They are only the scoring
    convention of the step() interface; no agent, opponent or training code
    lives in this package.
    """

    metadata = {'render_modes': ['ascii', 'human', 'rgb_array'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, config: Optional[GameConfig] = None):
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode!r}")

        self.engine = GameEngine(config)
        rows, cols = self.engine.config.rows, self.engine.config.cols

        self.action_space = spaces.Discrete(cols)
        self.observation_space = spaces.Box(low=0, high=2, shape=(rows, cols), dtype=np.int8)
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = 0.0
        debug.debug(f"Initialized ConnectFourEnv ({rows}x{cols})", "env")

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict[str, Any]] = None) -> Tuple[np.ndarray, Dict]:
        """
        Start a new game.

        Args:
            seed: Seed for the environment's RNG (the game itself is deterministic)
            options: May carry ``player1`` / ``player2`` attributes for start_game

        Returns:
            Initial observation and info dictionary
        """
        super().reset(seed=seed)
        options = options or {}
        self.engine.start_game(options.get("player1"), options.get("player2"))

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop a piece for the player whose turn it is.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)

        Raises:
            InvalidColumnError: If the action is not a column of the board
        """
        if self.engine.status == GameStatus.NOT_STARTED:
            raise RuntimeError("Call reset() before step()")

        result = self.engine.drop_piece(int(action))

        if not result.accepted:
            debug.debug(f"Invalid action {action}: {result.reason.value}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return (self._get_observation(), self.reward_invalid_move,
                    self.engine.is_finished(), True, info)

        reward = self.reward_step
        terminated = False
        if result.outcome == Outcome.WIN:
            reward = self.reward_win if result.player_id == PLAYER_ONE else self.reward_lose
            terminated = True
        elif result.outcome == Outcome.TIE:
            reward = self.reward_draw
            terminated = True

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode is None:
            return None
        if self.render_mode == "ascii":
            return self.engine.render()
        if self.render_mode == "human":
            print(self.engine.render())
            return None
        return self._render_rgb()

    def _render_rgb(self) -> np.ndarray:
        """Paint each cell as a disc in its owner's colour on a blue board."""
        grid = self.engine.get_state()
        rows, cols = grid.shape
        players = self.engine.players or ()
        defaults = {1: NAMED_COLORS["red"], 2: NAMED_COLORS["yellow"]}
        palette = {0: EMPTY_RGB}
        for player_id in (1, 2):
            color = players[player_id - 1].color if players else None
            palette[player_id] = color_to_rgb(color, defaults[player_id])

        frame = np.empty((rows * CELL_PIXELS, cols * CELL_PIXELS, 3), dtype=np.uint8)
        frame[:, :] = BOARD_RGB

        radius = CELL_PIXELS * 2 // 5
        yy, xx = np.mgrid[0:CELL_PIXELS, 0:CELL_PIXELS]
        centre = CELL_PIXELS // 2
        disc = (yy - centre) ** 2 + (xx - centre) ** 2 <= radius ** 2

        for row in range(rows):
            for col in range(cols):
                cell = frame[row * CELL_PIXELS:(row + 1) * CELL_PIXELS,
                             col * CELL_PIXELS:(col + 1) * CELL_PIXELS]
                cell[disc] = palette[int(grid[row, col])]
        return frame

    def _get_observation(self) -> np.ndarray:
        return self.engine.get_state()

    def _get_info(self) -> Dict[str, Any]:
        current = self.engine.current_player()
        winner = self.engine.winner
        return {
            'valid_moves': self.engine.valid_columns(),
            'current_player': current.id if current else None,
            'status': self.engine.status.name,
            'outcome': self.engine.outcome.value,
            'winner': winner.id if winner else None,
            'winning_line': self.engine.winning_line,
            'moves_made': len(self.engine.history),
        }

    def close(self):
        pass
