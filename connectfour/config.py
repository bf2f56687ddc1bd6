"""
config.py - Game configuration

Defaults for the board size and player colours, plus a GameConfig that can be
filled from CONNECTFOUR_* environment variables and overridden from the
command line.
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from connectfour.debug import DebugLevel, parse_level
from connectfour.errors import InvalidDimensionsError

DEFAULT_ROWS = 6
DEFAULT_COLS = 7
CONNECT_N = 4  # pieces in a row needed to win

DEFAULT_COLORS = ("red", "yellow")

ENV_PREFIX = "CONNECTFOUR_"


def _env_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(ENV_PREFIX + key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{key} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class GameConfig:
    """Settings for one engine instance."""
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    player1_color: Optional[str] = DEFAULT_COLORS[0]
    player2_color: Optional[str] = DEFAULT_COLORS[1]
    debug_level: DebugLevel = DebugLevel.WARNING
    log_file: Optional[str] = None

    def validate(self) -> "GameConfig":
        """
        Check the board dimensions.

        Returns:
            The config itself, so calls can be chained

        Raises:
            InvalidDimensionsError: If rows or cols is not a positive integer
        """
        for value in (self.rows, self.cols):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidDimensionsError(self.rows, self.cols)
        return self

    def with_overrides(self, **overrides) -> "GameConfig":
        """Return a copy with every override that is not None applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GameConfig":
        """Build a config from CONNECTFOUR_* environment variables."""
        environ = os.environ if environ is None else environ

        level_str = environ.get(ENV_PREFIX + "DEBUG_LEVEL")
        return cls(
            rows=_env_int(environ, "ROWS", DEFAULT_ROWS),
            cols=_env_int(environ, "COLS", DEFAULT_COLS),
            player1_color=environ.get(ENV_PREFIX + "COLOR1") or DEFAULT_COLORS[0],
            player2_color=environ.get(ENV_PREFIX + "COLOR2") or DEFAULT_COLORS[1],
            debug_level=parse_level(level_str) if level_str else DebugLevel.WARNING,
            log_file=environ.get(ENV_PREFIX + "LOG_FILE") or None,
        )
