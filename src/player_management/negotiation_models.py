"""
Negotiation Data Models

Value types for one-on-one contract negotiations between a team and a
player's agent. Sessions are immutable; each evaluated offer produces the
next session state.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Any, Optional, Tuple

from free_agency.models import SeasonStage


class NegotiationStatus(Enum):
    """Session lifecycle. Only ACTIVE sessions accept offers."""
    ACTIVE = "active"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"


class NegotiationClosedError(Exception):
    """
    Raised when an offer is made on a session that is no longer active.

    Sessions close when the player accepts, the team declines, or the
    agent's patience runs out.
    """
    pass


@dataclass(frozen=True)
class NegotiationTerms:
    """
    Headline contract terms being negotiated.

    Attributes:
        aav: Average annual value in dollars
        gtd_pct: Guaranteed share of the contract (0.0-1.0)
        years: Contract length
    """

    aav: int
    gtd_pct: float
    years: int

    def __post_init__(self):
        if self.aav < 0:
            raise ValueError(f"aav cannot be negative, got {self.aav}")
        if not 0.0 <= self.gtd_pct <= 1.0:
            raise ValueError(f"gtd_pct must be 0.0-1.0, got {self.gtd_pct}")
        if self.years < 1:
            raise ValueError(f"years must be >= 1, got {self.years}")

    def to_dict(self) -> Dict[str, Any]:
        return {"aav": self.aav, "gtd_pct": self.gtd_pct, "years": self.years}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NegotiationTerms":
        return cls(
            aav=data["aav"],
            gtd_pct=data.get("gtd_pct", data.get("gtdPct", 0.0)),
            years=data["years"],
        )


@dataclass(frozen=True)
class NegotiationMarket:
    """Market conditions around one negotiation."""

    competing_offers: int = 0
    positional_demand: float = 0.5
    cap_space_available: int = 0
    season_stage: SeasonStage = SeasonStage.EARLY_FA

    def __post_init__(self):
        if self.competing_offers < 0:
            raise ValueError(f"competing_offers cannot be negative, got {self.competing_offers}")
        if not 0.0 <= self.positional_demand <= 1.0:
            raise ValueError(f"positional_demand must be 0.0-1.0, got {self.positional_demand}")


@dataclass(frozen=True)
class CounterOffer:
    """Agent counter-proposal with the message that accompanies it."""

    terms: NegotiationTerms
    message: str
    focus: str  # 'aav', 'gtd' or 'years'


@dataclass(frozen=True)
class NegotiationEvent:
    """One entry in a session's history."""

    event_type: str  # 'offer' or 'counter'
    round_number: int
    terms: NegotiationTerms
    message: str = ""


@dataclass(frozen=True)
class NegotiationSession:
    """
    State of a negotiation after the latest round.

    Attributes:
        reservation: Lowest terms the player will take
        ask_anchor: Opening ask, above the reservation
        patience: Rounds left before the agent walks away
    """

    session_id: str
    player_id: str
    team_id: str
    reservation: NegotiationTerms
    ask_anchor: NegotiationTerms
    patience: int
    market: NegotiationMarket
    max_years: int = 5
    round_number: int = 1
    status: NegotiationStatus = NegotiationStatus.ACTIVE
    history: Tuple[NegotiationEvent, ...] = ()
    created_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status is NegotiationStatus.ACTIVE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.session_id,
            "player_id": self.player_id,
            "team_id": self.team_id,
            "round": self.round_number,
            "reservation": self.reservation.to_dict(),
            "ask_anchor": self.ask_anchor.to_dict(),
            "patience": self.patience,
            "status": self.status.value,
            "max_years": self.max_years,
            "history": [
                {
                    "type": event.event_type,
                    "round": event.round_number,
                    "terms": event.terms.to_dict(),
                    "message": event.message,
                }
                for event in self.history
            ],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class NegotiationResult:
    """Outcome of evaluating one offer."""

    accepted: bool
    message: str
    session: NegotiationSession
    utility: float
    market_pressure: float
    threshold: float
    counter: Optional[CounterOffer] = None
    lowball: bool = False
