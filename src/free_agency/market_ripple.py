"""
Market Ripple & Enhanced Minimum

Feeds finalized signings back into the market. A signing well above or below
a player's naive value moves the trend for its position/tier segment, and the
next player's minimum reflects comparable deals, league cap health and that
trend.

Cross-cycle contexts are immutable: every operation returns a new context
and leaves the input untouched. The calling system persists the result for
the next cycle.
"""

from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional, Tuple
import logging

from constants.player_tiers import PlayerTier
from constants.positions import position_key
from free_agency.models import (
    LeagueCapContext,
    LeagueHealth,
    MarketImpact,
    MarketRippleContext,
    MarketShift,
    MarketTrend,
    Player,
    SigningRecord,
)
from salary_cap.contract_minimum import ContractMinimumCalculator


VALUE_PER_OVERALL = 100_000
MAX_HISTORY = 10


class EnhancedMinimumCalculator:
    """
    Player minimum adjusted for market conditions.

    final = max(base, base * market, base * cap_health, base * trend),
    floored at a tier share of base.
    """

    # Comparable average vs the player's naive value
    UNDERPAID_RATIO = 0.8
    OVERPAID_RATIO = 1.2
    UNDERPAID_ADJUSTMENT = 1.20
    OVERPAID_ADJUSTMENT = 0.95

    # (minimum cap space share, multiplier), checked in order
    CAP_HEALTH_BANDS: Dict[LeagueHealth, Tuple[Tuple[float, float], ...]] = {
        LeagueHealth.PROSPEROUS: ((0.15, 1.15), (0.10, 1.10), (0.0, 1.05)),
        LeagueHealth.HEALTHY: ((0.15, 1.05), (0.10, 1.0), (0.05, 0.97), (0.0, 0.95)),
        LeagueHealth.STRUGGLING: ((0.10, 0.95), (0.05, 0.92), (0.0, 0.90)),
    }

    TREND_ADJUSTMENTS = {
        MarketTrend.RISING: 1.10,
        MarketTrend.FALLING: 0.95,
        MarketTrend.STABLE: 1.0,
    }

    TIER_FLOORS = {
        PlayerTier.ELITE: 0.80,
        PlayerTier.STARTER: 0.70,
        PlayerTier.DEPTH: 0.60,
    }

    def __init__(self, minimum_calculator: Optional[ContractMinimumCalculator] = None):
        self.logger = logging.getLogger(__name__)
        self.minimum_calculator = minimum_calculator or ContractMinimumCalculator()

    def calculate_enhanced_minimum(
        self,
        player: Player,
        league_context: LeagueCapContext,
        market_ripple: MarketRippleContext
    ) -> int:
        """
        Minimum contract value for a player in the current market.

        Args:
            player: Player being priced
            league_context: League cap state (cap ceiling and health)
            market_ripple: Recent signings and segment trends

        Returns:
            Minimum in whole dollars, never below the tier floor of the base
        """
        tier = self.minimum_calculator.determine_tier(player.overall, player.years_exp, player.position)
        base = self.minimum_calculator.calculate_minimum_contract(
            tier, player.age, player.position, league_context.current_year_cap
        )

        market_adjustment = self.calculate_market_adjustment(player, tier, market_ripple)
        cap_adjustment = self.calculate_cap_health_adjustment(league_context)
        trend_adjustment = self.TREND_ADJUSTMENTS[market_ripple.trend_for(player.position, tier)]

        enhanced = max(
            base,
            base * market_adjustment,
            base * cap_adjustment,
            base * trend_adjustment,
        )
        floor = base * self.TIER_FLOORS[tier]
        final = round(max(enhanced, floor))

        self.logger.debug(
            f"Enhanced minimum for {player.player_id} ({tier.value} {position_key(player.position)}): "
            f"base ${base:,} market x{market_adjustment} cap x{cap_adjustment} "
            f"trend x{trend_adjustment} -> ${final:,}"
        )
        return final

    def calculate_market_adjustment(
        self,
        player: Player,
        tier: PlayerTier,
        market_ripple: MarketRippleContext
    ) -> float:
        """Correction against comparable signings; neutral without comparables."""
        comparables = market_ripple.comparables_for(player.position, tier)
        if not comparables:
            return 1.0

        average_value = sum(s.contract_value for s in comparables) / len(comparables)
        naive_value = player.overall * VALUE_PER_OVERALL

        if average_value < naive_value * self.UNDERPAID_RATIO:
            return self.UNDERPAID_ADJUSTMENT
        if average_value > naive_value * self.OVERPAID_RATIO:
            return self.OVERPAID_ADJUSTMENT
        return 1.0

    def calculate_cap_health_adjustment(self, league_context: LeagueCapContext) -> float:
        """League health crossed with average cap space share, 0.90-1.15."""
        space_pct = league_context.average_cap_space_pct
        for minimum_pct, multiplier in self.CAP_HEALTH_BANDS[league_context.league_health]:
            if space_pct >= minimum_pct:
                return multiplier
        # Negative average space lands in the lowest band
        return self.CAP_HEALTH_BANDS[league_context.league_health][-1][1]


class MarketRippleAnalyzer:
    """Turns a finalized signing into the next market ripple context."""

    POSITIVE_IMPACT_RATIO = 1.2
    NEGATIVE_IMPACT_RATIO = 0.8

    POSITIVE_SHIFT = 5.0
    NEGATIVE_SHIFT = -3.0
    NEUTRAL_SHIFT = 0.0

    TREND_WINDOW = 5
    RISING_THRESHOLD = 2.0
    FALLING_THRESHOLD = -2.0

    def __init__(self, minimum_calculator: Optional[ContractMinimumCalculator] = None):
        self.logger = logging.getLogger(__name__)
        self.minimum_calculator = minimum_calculator or ContractMinimumCalculator()

    def classify_impact(self, player: Player, contract_value: int) -> MarketImpact:
        """Positive above 120% of overall * $100K, negative below 80%."""
        naive_value = player.overall * VALUE_PER_OVERALL
        if contract_value > naive_value * self.POSITIVE_IMPACT_RATIO:
            return MarketImpact.POSITIVE
        if contract_value < naive_value * self.NEGATIVE_IMPACT_RATIO:
            return MarketImpact.NEGATIVE
        return MarketImpact.NEUTRAL

    def analyze_market_ripple(
        self,
        player: Player,
        contract_value: int,
        existing_ripple: MarketRippleContext,
        signed_at: Optional[datetime] = None
    ) -> MarketRippleContext:
        """
        Record a signing and recompute its segment's trend.

        Args:
            player: Player who signed
            contract_value: Value of the signed contract
            existing_ripple: Current ripple context (not modified)
            signed_at: Signing time (defaults to now)

        Returns:
            New MarketRippleContext with the signing and shift appended
            (each history bounded to the last 10 entries)
        """
        tier = self.minimum_calculator.determine_tier(player.overall, player.years_exp, player.position)
        position = position_key(player.position)
        impact = self.classify_impact(player, contract_value)

        signing = SigningRecord(
            player_id=player.player_id,
            position=position,
            tier=tier,
            contract_value=contract_value,
            overall=player.overall,
            market_impact=impact,
            signed_at=signed_at or datetime.now(),
        )
        shift = MarketShift(
            position=position,
            tier=tier,
            shift_percentage=self._shift_for(impact),
            trigger=f"Recent {impact.value} signing in {position} {tier.value} tier",
        )

        signings = (existing_ripple.similar_player_signings + (signing,))[-MAX_HISTORY:]
        shifts = (existing_ripple.recent_market_shifts + (shift,))[-MAX_HISTORY:]
        trend = self.calculate_segment_trend(shifts, position, tier)

        segment_trends = dict(existing_ripple.segment_trends)
        segment_trends[MarketRippleContext.segment_key(position, tier)] = trend

        self.logger.info(
            f"Signing {player.player_id} ({position} {tier.value}, ${contract_value:,}) "
            f"impact {impact.value}; segment trend {trend.value}"
        )

        return replace(
            existing_ripple,
            similar_player_signings=signings,
            recent_market_shifts=shifts,
            position_market_trend=trend,
            tier_market_trend=trend,
            segment_trends=segment_trends,
        )

    def calculate_segment_trend(
        self,
        shifts: Tuple[MarketShift, ...],
        position: str,
        tier: PlayerTier
    ) -> MarketTrend:
        """Average of the last five shifts for one position/tier segment."""
        segment: List[MarketShift] = [
            s for s in shifts if s.position == position and s.tier == tier
        ][-self.TREND_WINDOW:]
        if not segment:
            return MarketTrend.STABLE

        average_shift = sum(s.shift_percentage for s in segment) / len(segment)
        if average_shift > self.RISING_THRESHOLD:
            return MarketTrend.RISING
        if average_shift < self.FALLING_THRESHOLD:
            return MarketTrend.FALLING
        return MarketTrend.STABLE

    def record_signing(
        self,
        league_context: LeagueCapContext,
        record: SigningRecord
    ) -> LeagueCapContext:
        """League context with the signing appended to its bounded history."""
        signings = (league_context.recent_signings + (record,))[-MAX_HISTORY:]
        return replace(league_context, recent_signings=signings)

    def _shift_for(self, impact: MarketImpact) -> float:
        if impact is MarketImpact.POSITIVE:
            return self.POSITIVE_SHIFT
        if impact is MarketImpact.NEGATIVE:
            return self.NEGATIVE_SHIFT
        return self.NEUTRAL_SHIFT


_default_minimum_calculator = EnhancedMinimumCalculator()
_default_ripple_analyzer = MarketRippleAnalyzer()


def enhanced_minimum(
    player: Player,
    league_context: LeagueCapContext,
    market_ripple: MarketRippleContext
) -> int:
    """Market-adjusted minimum with the default calculator."""
    return _default_minimum_calculator.calculate_enhanced_minimum(player, league_context, market_ripple)


def analyze_market_ripple(
    player: Player,
    contract_value: int,
    market_ripple: MarketRippleContext,
    signed_at: Optional[datetime] = None
) -> MarketRippleContext:
    """Next ripple context after a signing, with the default analyzer."""
    return _default_ripple_analyzer.analyze_market_ripple(player, contract_value, market_ripple, signed_at)


def record_signing(league_context: LeagueCapContext, record: SigningRecord) -> LeagueCapContext:
    """League context with a signing appended to its history."""
    return _default_ripple_analyzer.record_signing(league_context, record)
