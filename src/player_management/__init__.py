"""Player management module for personalities and contract negotiation."""

from .player_personality import (
    PlayerPersonality,
    PlayerPersonalityGenerator,
    TeamPriority,
    generate_personality,
)
from .negotiation_models import (
    CounterOffer,
    NegotiationClosedError,
    NegotiationEvent,
    NegotiationMarket,
    NegotiationResult,
    NegotiationSession,
    NegotiationStatus,
    NegotiationTerms,
)
from .negotiation_engine import NegotiationEngine

__all__ = [
    "PlayerPersonality",
    "PlayerPersonalityGenerator",
    "TeamPriority",
    "generate_personality",
    "CounterOffer",
    "NegotiationClosedError",
    "NegotiationEvent",
    "NegotiationMarket",
    "NegotiationResult",
    "NegotiationSession",
    "NegotiationStatus",
    "NegotiationTerms",
    "NegotiationEngine",
]
