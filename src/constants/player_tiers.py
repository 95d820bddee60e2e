"""Player value tiers used by minimum-contract and market-ripple math."""

from enum import Enum


class PlayerTier(Enum):
    """Coarse value classification."""
    ELITE = "elite"
    STARTER = "starter"
    DEPTH = "depth"
