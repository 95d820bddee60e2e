"""
Constants package for the dynasty free agency engine

Contains the position and tier enums shared across packages.
"""

from .positions import Position, POSITION_ALIASES, normalize_position, position_key, parse_position
from .player_tiers import PlayerTier

__all__ = [
    'Position',
    'POSITION_ALIASES',
    'normalize_position',
    'position_key',
    'parse_position',
    'PlayerTier',
]
