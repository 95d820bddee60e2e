"""
Fantasy Roster Positions

Position enum shared by the cap, free agency and negotiation packages, plus
normalization of the raw position strings found in player documents.

Usage:
    from constants.positions import Position, position_key

    position_key("wide_receiver")   # "WR"
    position_key(Position.QB)       # "QB"
    position_key("D/ST")            # "DEF"
"""

from enum import Enum
from typing import Optional, Union


class Position(Enum):
    """Fantasy roster positions (offense, kicker, team defense and IDP)."""
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    K = "K"
    DEF = "DEF"
    DL = "DL"
    LB = "LB"
    DB = "DB"


# Long-form and feed-specific names -> position code
POSITION_ALIASES = {
    "quarterback": "QB",
    "running_back": "RB",
    "halfback": "RB",
    "wide_receiver": "WR",
    "tight_end": "TE",
    "kicker": "K",
    "pk": "K",
    "defense": "DEF",
    "d/st": "DEF",
    "dst": "DEF",
    "team_defense": "DEF",
    "defensive_line": "DL",
    "defensive_end": "DL",
    "defensive_tackle": "DL",
    "de": "DL",
    "dt": "DL",
    "linebacker": "LB",
    "defensive_back": "DB",
    "cornerback": "DB",
    "safety": "DB",
    "cb": "DB",
    "s": "DB",
}


def normalize_position(position: str) -> str:
    """
    Lowercase underscore form of a raw position string.

    Converts: "Wide Receiver", "wide-receiver", " WIDE_RECEIVER " -> "wide_receiver"
    """
    if not position:
        return ""
    return position.strip().lower().replace(" ", "_").replace("-", "_")


def position_key(position: Union[Position, str, None]) -> str:
    """
    Normalize a position to its code string.

    Unknown positions come back upper-cased so lookups fall through to
    their defaults instead of raising.
    """
    if isinstance(position, Position):
        return position.value
    if not position:
        return ""
    normalized = normalize_position(str(position))
    return POSITION_ALIASES.get(normalized, normalized.upper())


def parse_position(position: Union[Position, str, None]) -> Optional[Position]:
    """Position enum for a raw value, or None when it is not a roster position."""
    try:
        return Position(position_key(position))
    except ValueError:
        return None
