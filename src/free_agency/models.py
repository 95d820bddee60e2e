"""
Free Agency Data Models

Value types for the weekly free agency cycle:
- Enums: BidStatus, SeasonStage, MarketTrend, MarketImpact, LeagueHealth
  (Position and PlayerTier live in constants and are re-exported here)
- Player, Guarantee, ContractOffer, Contract, Bid
- LeagueRosterInfo, MarketContext (read-only snapshot per evaluation pass)
- ContractAnalysis, MarketFactors, PlayerDecision (evaluation output)
- SigningRecord, MarketShift, LeagueCapContext, MarketRippleContext
  (cross-cycle market state)

All money values are whole dollars.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Any, List, Optional, Tuple, Union

from constants.positions import Position, position_key
from constants.player_tiers import PlayerTier


# ============================================================================
# ENUMS
# ============================================================================

class BidStatus(Enum):
    """Bid lifecycle. PENDING is the only non-terminal state."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    SHORTLISTED = "shortlisted"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not BidStatus.PENDING


class SeasonStage(Enum):
    """Where the league is in the free agency calendar."""
    EARLY_FA = "EarlyFA"
    MID_FA = "MidFA"
    LATE_FA = "LateFA"
    CAMP = "Camp"
    MID_SEASON = "MidSeason"

    @classmethod
    def from_week(cls, week_number: int) -> "SeasonStage":
        """Stage for an FA week number. Open FA (week 5+) runs into camp."""
        if week_number <= 1:
            return cls.EARLY_FA
        if week_number <= 2:
            return cls.MID_FA
        if week_number <= 4:
            return cls.LATE_FA
        return cls.CAMP


class MarketTrend(Enum):
    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"


class MarketImpact(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class LeagueHealth(Enum):
    PROSPEROUS = "prosperous"
    HEALTHY = "healthy"
    STRUGGLING = "struggling"


# ============================================================================
# PLAYERS AND CONTRACTS
# ============================================================================

@dataclass(frozen=True)
class Player:
    """
    Free agent as seen by the engine.

    Owned by the calling system and immutable for one evaluation pass.
    """

    player_id: str
    position: Position
    age: int
    overall: int
    years_exp: int = 0
    name: str = ""

    def __post_init__(self):
        """Validate all fields."""
        if not self.player_id:
            raise ValueError("player_id must be a non-empty string")
        if not isinstance(self.position, Position):
            raise TypeError(f"position must be Position enum, got {type(self.position)}")
        if not 50 <= self.overall <= 99:
            raise ValueError(f"overall must be 50-99, got {self.overall}")
        if self.age <= 0:
            raise ValueError(f"age must be positive, got {self.age}")
        if self.years_exp < 0:
            raise ValueError(f"years_exp cannot be negative, got {self.years_exp}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "position": self.position.value,
            "age": self.age,
            "overall": self.overall,
            "years_exp": self.years_exp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Create from a player document (accepts id/player_id and yearsExp)."""
        player_id = data.get("player_id", data.get("id"))
        years_exp = data.get("years_exp", data.get("yearsExp", 0))
        return cls(
            player_id=str(player_id) if player_id is not None else "",
            name=data.get("name", ""),
            position=Position(position_key(data["position"])),
            age=data["age"],
            overall=data["overall"],
            years_exp=years_exp or 0,
        )


@dataclass(frozen=True)
class Guarantee:
    """Guaranteed money attached to one contract year."""

    amount: int
    year: int
    guarantee_type: str = "full"  # 'full' or 'injury-only'

    VALID_TYPES = ("full", "injury-only")

    def __post_init__(self):
        if self.guarantee_type not in self.VALID_TYPES:
            raise ValueError(
                f"guarantee_type must be one of {self.VALID_TYPES}, got {self.guarantee_type!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {"amount": self.amount, "year": self.year, "type": self.guarantee_type}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Guarantee":
        return cls(
            amount=data["amount"],
            year=data["year"],
            guarantee_type=data.get("type", data.get("guarantee_type", "full")),
        )


@dataclass(frozen=True)
class ContractOffer:
    """
    Contract terms offered in a bid.

    Attributes:
        years: Contract length (1-7)
        base_salary: Year -> base salary
        signing_bonus: Up-front bonus, prorated over min(years, 5) for cap purposes
        guarantees: Guaranteed amounts by year
        contract_type: 'prove_it', 'bridge' or 'standard'

    Structural consistency (years vs salary map) is reported by
    salary_cap.contract_validator.validate_offer rather than raised here.
    """

    years: int
    base_salary: Dict[int, int]
    signing_bonus: int = 0
    guarantees: Tuple[Guarantee, ...] = ()
    contract_type: str = "standard"

    def __post_init__(self):
        if not 1 <= self.years <= 7:
            raise ValueError(f"years must be 1-7, got {self.years}")
        if self.signing_bonus < 0:
            raise ValueError(f"signing_bonus cannot be negative, got {self.signing_bonus}")
        # Accept lists from callers; store a tuple so the offer stays hashable-ish
        if not isinstance(self.guarantees, tuple):
            object.__setattr__(self, "guarantees", tuple(self.guarantees))

    @property
    def total_value(self) -> int:
        """Sum of base salaries plus signing bonus."""
        return sum(self.base_salary.values()) + self.signing_bonus

    @property
    def apy(self) -> int:
        """Average per-year value."""
        return self.total_value // self.years

    @property
    def start_year(self) -> int:
        return min(self.base_salary) if self.base_salary else 0

    @property
    def end_year(self) -> int:
        if not self.base_salary:
            return self.start_year + self.years - 1
        return max(self.base_salary)

    @property
    def guaranteed_total(self) -> int:
        return sum(g.amount for g in self.guarantees)

    def to_contract(
        self,
        player_id: str,
        team_id: str,
        contract_id: Optional[str] = None,
    ) -> "Contract":
        """Convert accepted terms into a signed Contract."""
        return Contract(
            contract_id=contract_id or f"{team_id}_{player_id}_{self.start_year}",
            player_id=player_id,
            team_id=team_id,
            start_year=self.start_year,
            end_year=self.start_year + self.years - 1,
            base_salary=dict(self.base_salary),
            signing_bonus=self.signing_bonus,
            guarantees=self.guarantees,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "years": self.years,
            "base_salary": {str(year): amount for year, amount in self.base_salary.items()},
            "signing_bonus": self.signing_bonus,
            "guarantees": [g.to_dict() for g in self.guarantees],
            "contract_type": self.contract_type,
            "total_value": self.total_value,
            "apy": self.apy,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContractOffer":
        """Create from dictionary (document stores key years as strings)."""
        salaries = data.get("base_salary", data.get("baseSalary", {}))
        return cls(
            years=data["years"],
            base_salary={int(year): amount for year, amount in salaries.items()},
            signing_bonus=data.get("signing_bonus", data.get("signingBonus", 0)) or 0,
            guarantees=tuple(Guarantee.from_dict(g) for g in data.get("guarantees", [])),
            contract_type=data.get("contract_type", data.get("contractType", "standard")),
        )


@dataclass(frozen=True)
class Contract:
    """A signed contract on a team's books."""

    contract_id: str
    player_id: str
    team_id: str
    start_year: int
    end_year: int
    base_salary: Dict[int, int]
    signing_bonus: int = 0
    guarantees: Tuple[Guarantee, ...] = ()
    no_trade_clause: bool = False

    @property
    def length(self) -> int:
        return self.end_year - self.start_year + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contract_id": self.contract_id,
            "player_id": self.player_id,
            "team_id": self.team_id,
            "start_year": self.start_year,
            "end_year": self.end_year,
            "base_salary": {str(year): amount for year, amount in self.base_salary.items()},
            "signing_bonus": self.signing_bonus,
            "guarantees": [g.to_dict() for g in self.guarantees],
            "no_trade_clause": self.no_trade_clause,
        }


@dataclass(frozen=True)
class Bid:
    """A team's offer for one player in one FA week."""

    bid_id: str
    team_id: str
    player_id: str
    offer: ContractOffer
    week_number: int = 1
    status: BidStatus = BidStatus.PENDING
    league_id: str = ""
    submitted_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.bid_id:
            raise ValueError("bid_id must be a non-empty string")
        if not isinstance(self.status, BidStatus):
            raise TypeError(f"status must be BidStatus enum, got {type(self.status)}")
        if self.week_number < 1:
            raise ValueError(f"week_number must be >= 1, got {self.week_number}")

    @property
    def is_pending(self) -> bool:
        return self.status is BidStatus.PENDING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.bid_id,
            "league_id": self.league_id,
            "team_id": self.team_id,
            "player_id": self.player_id,
            "offer": self.offer.to_dict(),
            "week_number": self.week_number,
            "status": self.status.value,
            "submitted_at": self.submitted_at.isoformat() if self.submitted_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bid":
        submitted = data.get("submitted_at")
        if isinstance(submitted, str):
            submitted = datetime.fromisoformat(submitted)
        return cls(
            bid_id=data.get("bid_id", data.get("id", "")),
            league_id=data.get("league_id", data.get("leagueId", "")),
            team_id=data.get("team_id", data.get("teamId", "")),
            player_id=str(data.get("player_id", data.get("playerId", ""))),
            offer=ContractOffer.from_dict(data["offer"]),
            week_number=data.get("week_number", data.get("weekNumber", 1)),
            status=BidStatus(data.get("status", "pending")),
            submitted_at=submitted,
        )


# ============================================================================
# MARKET SNAPSHOT
# ============================================================================

@dataclass(frozen=True)
class LeagueRosterInfo:
    """League roster composition used for realistic positional demand."""

    team_count: int
    position_requirements: Dict[str, int]
    max_players: int

    def __post_init__(self):
        if self.team_count < 1:
            raise ValueError(f"team_count must be positive, got {self.team_count}")
        if self.max_players < 1:
            raise ValueError(f"max_players must be positive, got {self.max_players}")

    def requirement_for(self, position: Union[Position, str]) -> int:
        key = position_key(position)
        for name, count in self.position_requirements.items():
            if position_key(name) == key:
                return count
        return 0

    @property
    def total_roster_slots(self) -> int:
        return self.max_players * self.team_count


@dataclass(frozen=True)
class SigningRecord:
    """A finalized signing, kept as a market comparable."""

    player_id: str
    position: str
    tier: PlayerTier
    contract_value: int
    overall: int = 0
    market_impact: MarketImpact = MarketImpact.NEUTRAL
    signed_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "position": self.position,
            "tier": self.tier.value,
            "contract_value": self.contract_value,
            "overall": self.overall,
            "market_impact": self.market_impact.value,
            "signed_at": self.signed_at.isoformat() if self.signed_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SigningRecord":
        signed_at = data.get("signed_at")
        if isinstance(signed_at, str):
            signed_at = datetime.fromisoformat(signed_at)
        return cls(
            player_id=str(data["player_id"]),
            position=position_key(data["position"]),
            tier=PlayerTier(data["tier"]),
            contract_value=data["contract_value"],
            overall=data.get("overall", 0),
            market_impact=MarketImpact(data.get("market_impact", "neutral")),
            signed_at=signed_at,
        )


@dataclass(frozen=True)
class MarketContext:
    """
    Read-only market snapshot for one evaluation pass.

    Attributes:
        current_week: FA week being evaluated
        season_stage: Calendar stage (EarlyFA adds a 10% premium to expectations)
        positional_demand: Position -> demand signal (0.0-1.0), default 0.5
        league_roster_info: Roster composition; when present it replaces the
            positional_demand signal with a league-aware figure
        team_reputation: Team id -> reputation (-1.0 to 1.0)
        recent_signings: Comparable deals for the market-factor summary
        cap_space_available: Total cap space across bidding teams
    """

    current_week: int = 1
    season_stage: SeasonStage = SeasonStage.EARLY_FA
    positional_demand: Dict[str, float] = field(default_factory=dict)
    league_roster_info: Optional[LeagueRosterInfo] = None
    team_reputation: Dict[str, float] = field(default_factory=dict)
    recent_signings: Tuple[SigningRecord, ...] = ()
    cap_space_available: int = 0

    DEFAULT_DEMAND = 0.5

    def __post_init__(self):
        if self.current_week < 1:
            raise ValueError(f"current_week must be >= 1, got {self.current_week}")
        if not isinstance(self.season_stage, SeasonStage):
            raise TypeError(f"season_stage must be SeasonStage enum, got {type(self.season_stage)}")
        for position, demand in self.positional_demand.items():
            if not 0.0 <= demand <= 1.0:
                raise ValueError(f"positional_demand[{position}] must be 0.0-1.0, got {demand}")
        if not isinstance(self.recent_signings, tuple):
            object.__setattr__(self, "recent_signings", tuple(self.recent_signings))

    def demand_signal(self, position: Union[Position, str]) -> float:
        """Raw per-position demand signal, neutral when unknown."""
        key = position_key(position)
        for name, demand in self.positional_demand.items():
            if position_key(name) == key:
                return demand
        return self.DEFAULT_DEMAND

    def reputation_for(self, team_id: str) -> Optional[float]:
        return self.team_reputation.get(team_id)

    @classmethod
    def for_week(cls, week_number: int, **kwargs) -> "MarketContext":
        """Snapshot whose season stage follows the week number."""
        return cls(current_week=week_number, season_stage=SeasonStage.from_week(week_number), **kwargs)


# ============================================================================
# EVALUATION OUTPUT
# ============================================================================

@dataclass(frozen=True)
class ContractAnalysis:
    """Component scores for one bid and how they combined."""

    bid_id: str
    expected_aav: int
    aav_score: float
    bonus_score: float
    guarantee_score: float
    length_score: float
    team_score: float
    raw_score: float
    desperation_multiplier: float
    total_score: float
    threshold: float

    @property
    def meets_threshold(self) -> bool:
        return self.total_score >= self.threshold

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bid_id": self.bid_id,
            "expected_aav": self.expected_aav,
            "aav_score": self.aav_score,
            "bonus_score": self.bonus_score,
            "guarantee_score": self.guarantee_score,
            "length_score": self.length_score,
            "team_score": self.team_score,
            "raw_score": self.raw_score,
            "desperation_multiplier": self.desperation_multiplier,
            "total_score": self.total_score,
            "threshold": self.threshold,
        }


@dataclass(frozen=True)
class MarketFactors:
    """Market conditions summarized for one player's decision."""

    positional_demand: float
    market_pressure: float
    competing_bids: int
    comparable_deals: Tuple[SigningRecord, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "positional_demand": self.positional_demand,
            "market_pressure": self.market_pressure,
            "competing_bids": self.competing_bids,
            "comparable_deals": [deal.to_dict() for deal in self.comparable_deals],
        }


@dataclass(frozen=True)
class PlayerDecision:
    """
    One player's response to every bid evaluated for them in a pass.

    accepted_bid_id, shortlisted_bid_ids and rejected_bid_ids partition the
    evaluated bid ids exactly.
    """

    player_id: str
    week_number: int
    accepted_bid_id: Optional[str]
    shortlisted_bid_ids: Tuple[str, ...]
    rejected_bid_ids: Tuple[str, ...]
    analysis: ContractAnalysis
    bid_analyses: Tuple[ContractAnalysis, ...]
    market_factors: MarketFactors
    player_rationale: str
    agent_rationale: str
    trust_impact: Dict[str, float] = field(default_factory=dict)

    @property
    def evaluated_bid_ids(self) -> List[str]:
        ids = [self.accepted_bid_id] if self.accepted_bid_id else []
        return ids + list(self.shortlisted_bid_ids) + list(self.rejected_bid_ids)

    def status_for(self, bid_id: str) -> Optional[BidStatus]:
        """Status this decision assigns to a bid, or None if not evaluated here."""
        if bid_id == self.accepted_bid_id:
            return BidStatus.ACCEPTED
        if bid_id in self.shortlisted_bid_ids:
            return BidStatus.SHORTLISTED
        if bid_id in self.rejected_bid_ids:
            return BidStatus.REJECTED
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "week_number": self.week_number,
            "accepted_bid_id": self.accepted_bid_id,
            "shortlisted_bid_ids": list(self.shortlisted_bid_ids),
            "rejected_bid_ids": list(self.rejected_bid_ids),
            "analysis": self.analysis.to_dict(),
            "bid_analyses": [a.to_dict() for a in self.bid_analyses],
            "market_factors": self.market_factors.to_dict(),
            "player_rationale": self.player_rationale,
            "agent_rationale": self.agent_rationale,
            "trust_impact": dict(self.trust_impact),
        }


# ============================================================================
# CROSS-CYCLE MARKET STATE
# ============================================================================

@dataclass(frozen=True)
class MarketShift:
    """Market movement triggered by one signing."""

    position: str
    tier: PlayerTier
    shift_percentage: float
    trigger: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "tier": self.tier.value,
            "shift_percentage": self.shift_percentage,
            "trigger": self.trigger,
        }


@dataclass(frozen=True)
class LeagueCapContext:
    """League-wide cap health, slowly changing across cycles."""

    current_year_cap: int
    average_team_cap_space: int
    total_team_cap_space: int = 0
    projected_cap_growth: float = 0.06
    league_health: LeagueHealth = LeagueHealth.HEALTHY
    recent_signings: Tuple[SigningRecord, ...] = ()
    market_benchmarks: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        if self.current_year_cap <= 0:
            raise ValueError(f"current_year_cap must be positive, got {self.current_year_cap}")
        if not isinstance(self.league_health, LeagueHealth):
            raise TypeError(f"league_health must be LeagueHealth enum, got {type(self.league_health)}")
        if not isinstance(self.recent_signings, tuple):
            object.__setattr__(self, "recent_signings", tuple(self.recent_signings))

    @property
    def average_cap_space_pct(self) -> float:
        """Average team cap space as a fraction of the cap."""
        return self.average_team_cap_space / self.current_year_cap

    @classmethod
    def create_default(cls, salary_cap: int = 200_000_000) -> "LeagueCapContext":
        """Factory for a league with no history yet."""
        return cls(
            current_year_cap=salary_cap,
            average_team_cap_space=int(salary_cap * 0.01),
            total_team_cap_space=int(salary_cap * 0.1),
            market_benchmarks={
                "QB": 15_000_000,
                "RB": 8_000_000,
                "WR": 10_000_000,
                "TE": 7_000_000,
                "K": 3_000_000,
                "DEF": 5_000_000,
                "DL": 6_000_000,
                "LB": 6_000_000,
                "DB": 5_000_000,
            },
        )


@dataclass(frozen=True)
class MarketRippleContext:
    """
    How recent signings have moved the market.

    segment_trends is keyed "<position>/<tier>" so each position and tier
    keeps its own trend; position_market_trend and tier_market_trend mirror
    the segment touched by the latest signing.
    """

    similar_player_signings: Tuple[SigningRecord, ...] = ()
    position_market_trend: MarketTrend = MarketTrend.STABLE
    tier_market_trend: MarketTrend = MarketTrend.STABLE
    recent_market_shifts: Tuple[MarketShift, ...] = ()
    segment_trends: Dict[str, MarketTrend] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.similar_player_signings, tuple):
            object.__setattr__(self, "similar_player_signings", tuple(self.similar_player_signings))
        if not isinstance(self.recent_market_shifts, tuple):
            object.__setattr__(self, "recent_market_shifts", tuple(self.recent_market_shifts))

    @staticmethod
    def segment_key(position: Union[Position, str], tier: PlayerTier) -> str:
        return f"{position_key(position)}/{tier.value}"

    def trend_for(self, position: Union[Position, str], tier: PlayerTier) -> MarketTrend:
        """Trend for a position/tier segment, falling back to the headline trend."""
        return self.segment_trends.get(self.segment_key(position, tier), self.position_market_trend)

    def comparables_for(self, position: Union[Position, str], tier: PlayerTier) -> List[SigningRecord]:
        key = position_key(position)
        return [s for s in self.similar_player_signings if s.position == key and s.tier == tier]


# ============================================================================
# FA WEEKS AND OPEN FREE AGENCY
# ============================================================================

class FAPhase(Enum):
    """Weeks 1-4 are sealed bid weeks; afterwards players sign instantly."""
    FA_WEEK = "FA_WEEK"
    OPEN_FA = "OPEN_FA"


@dataclass(frozen=True)
class FAWeek:
    """One bidding week of a league's free agency period."""

    week_id: str
    league_id: str
    week_number: int
    phase: FAPhase
    start_date: datetime
    end_date: datetime
    status: str = "active"  # 'active', 'evaluating', 'completed'
    ready_teams: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.week_number < 1:
            raise ValueError(f"week_number must be >= 1, got {self.week_number}")
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        if not isinstance(self.ready_teams, tuple):
            object.__setattr__(self, "ready_teams", tuple(self.ready_teams))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.week_id,
            "league_id": self.league_id,
            "week_number": self.week_number,
            "phase": self.phase.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "status": self.status,
            "ready_teams": list(self.ready_teams),
        }


@dataclass(frozen=True)
class OpenFASigning:
    """Instant signing during open free agency at a discounted price."""

    signing_id: str
    league_id: str
    team_id: str
    player_id: str
    contract: ContractOffer
    market_price: int
    discount_applied: float
    signed_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.signing_id,
            "league_id": self.league_id,
            "team_id": self.team_id,
            "player_id": self.player_id,
            "contract": self.contract.to_dict(),
            "market_price": self.market_price,
            "discount_applied": self.discount_applied,
            "signed_at": self.signed_at.isoformat() if self.signed_at else None,
        }
