"""
player.py - Player identity

A player is an ordinal id (1 or 2) plus an optional colour that only the
presentation layer cares about.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union

from connectfour.utils import PLAYER_IDS

PlayerAttrs = Union['Player', str, Mapping[str, Any], None]


@dataclass(frozen=True)
class Player:
    id: int
    color: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.id, bool) or self.id not in PLAYER_IDS:
            raise ValueError(f"Player id must be 1 or 2, got {self.id!r}")
        if self.color is not None and not isinstance(self.color, str):
            raise ValueError(f"Player color must be a string, got {self.color!r}")

    @property
    def name(self) -> str:
        return f"Player {self.id}"

    def __str__(self) -> str:
        if self.color:
            return f"{self.name} ({self.color})"
        return self.name


def make_player(player_id: int, attrs: PlayerAttrs = None,
                default_color: Optional[str] = None) -> Player:
    """
    Build a Player from whatever the caller collected for that seat.

    Args:
        player_id: Seat being filled (1 or 2)
        attrs: A Player, a colour string, a mapping with a ``color`` key, or None
        default_color: Colour used when the attributes do not name one

    Raises:
        ValueError: If a Player is passed for the wrong seat, or the attributes are
            of an unsupported type
    """
    if isinstance(attrs, Player):
        if attrs.id != player_id:
            raise ValueError(f"{attrs.name} cannot take seat {player_id}")
        return attrs
    if attrs is None:
        return Player(player_id, default_color)
    if isinstance(attrs, str):
        return Player(player_id, attrs.strip() or default_color)
    if isinstance(attrs, Mapping):
        return Player(player_id, attrs.get("color", default_color))
    raise ValueError(f"Unsupported player attributes: {attrs!r}")


def make_players(player1: PlayerAttrs = None, player2: PlayerAttrs = None,
                 default_colors: Tuple[Optional[str], Optional[str]] = (None, None)
                 ) -> Tuple[Player, Player]:
    """
    Build both players for a new game.

    Raises:
        ValueError: If both players end up with the same colour
    """
    first = make_player(1, player1, default_colors[0])
    second = make_player(2, player2, default_colors[1])

    if first.color and second.color and first.color.lower() == second.color.lower():
        raise ValueError(f"Players must have different colors, both chose {first.color!r}")
    return first, second
