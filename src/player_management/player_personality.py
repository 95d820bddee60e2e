"""Player personality traits driving contract negotiation behaviour.

Personalities are derived, never stored: every trait is a deterministic
function of the player's id, so the same player always negotiates the same
way no matter which process or platform computes it.
"""

import hashlib
import random
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Tuple


@dataclass(frozen=True)
class TeamPriority:
    """Something the player looks for in a team beyond money."""

    category: str  # 'role', 'contender', 'location'
    preference: str  # e.g. 'starter', 'playoff_team', 'hometown'
    weight: float

    def to_dict(self) -> Dict[str, Any]:
        return {"category": self.category, "preference": self.preference, "weight": self.weight}


@dataclass(frozen=True)
class PlayerPersonality:
    """Negotiation personality for one player.

    All traits are on a 0.0-1.0 scale.

    Attributes:
        risk_tolerance: Willingness to trade guarantees for upside
        security_preference: Desire for long, stable contracts
        agent_quality: Agent toughness; raises asks and patience
        loyalty: Attachment to current team
        money_vs_role: Weight of money relative to role
        market_savvy: Awareness of what comparable players earn
        priorities: Named team priorities
    """

    player_id: str
    risk_tolerance: float
    security_preference: float
    agent_quality: float
    loyalty: float
    money_vs_role: float
    market_savvy: float
    priorities: Tuple[TeamPriority, ...] = field(default_factory=tuple)

    TRAIT_NAMES = (
        "risk_tolerance",
        "security_preference",
        "agent_quality",
        "loyalty",
        "money_vs_role",
        "market_savvy",
    )

    def __post_init__(self):
        """Validate trait ranges."""
        for trait in self.TRAIT_NAMES:
            value = getattr(self, trait)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{trait} must be between 0.0 and 1.0, got {value}")
        if not isinstance(self.priorities, tuple):
            object.__setattr__(self, "priorities", tuple(self.priorities))

    def priority_for(self, category: str) -> Optional[TeamPriority]:
        for priority in self.priorities:
            if priority.category == category:
                return priority
        return None

    @property
    def primary_trait(self) -> str:
        """Return the player's strongest trait."""
        return max(self.TRAIT_NAMES, key=lambda trait: getattr(self, trait))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {"player_id": self.player_id}
        data.update({trait: getattr(self, trait) for trait in self.TRAIT_NAMES})
        data["priorities"] = [priority.to_dict() for priority in self.priorities]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerPersonality":
        """Create PlayerPersonality from dictionary."""
        priorities = tuple(
            TeamPriority(p["category"], p["preference"], p["weight"])
            for p in data.get("priorities", [])
        )
        return cls(
            player_id=data["player_id"],
            priorities=priorities,
            **{trait: data[trait] for trait in cls.TRAIT_NAMES},
        )


class PlayerPersonalityGenerator:
    """Generates deterministic personalities from player ids.

    Each trait draws from its own random.Random seeded with a SHA-256 digest
    of "<player_id>:<trait>", so traits do not depend on generation order.
    """

    TRAIT_RANGES: Dict[str, Tuple[float, float]] = {
        "risk_tolerance": (0.2, 0.8),
        "security_preference": (0.3, 0.9),
        "agent_quality": (0.4, 0.9),
        "loyalty": (0.1, 0.8),
        "money_vs_role": (0.3, 0.9),
        "market_savvy": (0.3, 0.8),
    }

    # (category, preference, weight, draw needed to hold the priority)
    PRIORITY_RULES = (
        ("role", "starter", 0.8, 0.5),
        ("contender", "playoff_team", 0.7, 0.6),
        ("location", "hometown", 0.6, 0.7),
    )

    def generate_personality(self, player_id: str) -> PlayerPersonality:
        """Personality for a player; identical ids give identical results."""
        traits = {
            trait: low + self._draw(player_id, trait) * (high - low)
            for trait, (low, high) in self.TRAIT_RANGES.items()
        }

        priorities = tuple(
            TeamPriority(category, preference, weight)
            for category, preference, weight, cutoff in self.PRIORITY_RULES
            if self._draw(player_id, f"priority:{category}") > cutoff
        )

        return PlayerPersonality(player_id=str(player_id), priorities=priorities, **traits)

    def _draw(self, player_id: str, key: str) -> float:
        """Uniform draw in [0, 1) for one (player, key) pair."""
        digest = hashlib.sha256(f"{player_id}:{key}".encode("utf-8")).digest()
        seed = int.from_bytes(digest[:8], "big")
        return random.Random(seed).random()


_default_generator = PlayerPersonalityGenerator()


def generate_personality(player_id: str) -> PlayerPersonality:
    """Personality for a player with the default generator."""
    return _default_generator.generate_personality(player_id)
