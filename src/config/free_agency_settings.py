"""
Free Agency Week Settings

League-level knobs for the weekly bid cycle. The bid engine reads
shortlist_size; the bid window reads max_concurrent_offers; open FA reads
open_fa_discount. trust_penalty and market_ripple_enabled are toggles the
calling system consumes around the engine.
"""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass
class FreeAgencySettings:
    """
    Settings for one league's free agency period.

    Attributes:
        shortlist_size: Max bids a player keeps under consideration per pass
        max_concurrent_offers: Max pending bids a single team may hold
        evaluation_frequency: How often bids are evaluated ("weekly" or "daily")
        open_fa_discount: Percent discount for instant open-FA signings (0-100)
        trust_penalty: Trust lost by a team whose bid is rejected (0.0-1.0)
        market_ripple_enabled: Whether signings feed back into the market
    """

    shortlist_size: int = 3
    max_concurrent_offers: int = 6
    evaluation_frequency: str = "weekly"
    open_fa_discount: float = 20.0
    trust_penalty: float = 0.2
    market_ripple_enabled: bool = True

    VALID_FREQUENCIES = ("weekly", "daily")

    def __post_init__(self):
        """Validate all fields."""
        if not isinstance(self.shortlist_size, int) or self.shortlist_size < 0:
            raise ValueError(
                f"shortlist_size must be a non-negative integer, got {self.shortlist_size}"
            )
        if not isinstance(self.max_concurrent_offers, int) or self.max_concurrent_offers < 1:
            raise ValueError(
                f"max_concurrent_offers must be a positive integer, got {self.max_concurrent_offers}"
            )
        if self.evaluation_frequency not in self.VALID_FREQUENCIES:
            raise ValueError(
                f"evaluation_frequency must be one of {self.VALID_FREQUENCIES}, "
                f"got {self.evaluation_frequency!r}"
            )
        if not 0 <= self.open_fa_discount <= 100:
            raise ValueError(f"open_fa_discount must be 0-100, got {self.open_fa_discount}")
        if not 0.0 <= self.trust_penalty <= 1.0:
            raise ValueError(f"trust_penalty must be 0.0-1.0, got {self.trust_penalty}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "shortlist_size": self.shortlist_size,
            "max_concurrent_offers": self.max_concurrent_offers,
            "evaluation_frequency": self.evaluation_frequency,
            "open_fa_discount": self.open_fa_discount,
            "trust_penalty": self.trust_penalty,
            "market_ripple_enabled": self.market_ripple_enabled,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FreeAgencySettings":
        """
        Create from dictionary.

        Accepts both snake_case keys and the camelCase keys stored by the
        league documents (shortlistSize, maxConcurrentOffers, ...).
        """
        def pick(snake: str, camel: str, default):
            if snake in data:
                return data[snake]
            return data.get(camel, default)

        return cls(
            shortlist_size=pick("shortlist_size", "shortlistSize", 3),
            max_concurrent_offers=pick("max_concurrent_offers", "maxConcurrentOffers", 6),
            evaluation_frequency=pick("evaluation_frequency", "evaluationFrequency", "weekly"),
            open_fa_discount=pick("open_fa_discount", "openFADiscount", 20.0),
            trust_penalty=pick("trust_penalty", "trustPenalty", 0.2),
            market_ripple_enabled=pick("market_ripple_enabled", "marketRippleEnabled", True),
        )
