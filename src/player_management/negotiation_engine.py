"""
Negotiation Engine

Stateful bilateral contract negotiation between a team and a player's agent,
separate from the weekly sealed-bid flow. Each round the team makes an offer;
the agent accepts it, answers a lowball by raising the ask, or counters by
closing most of the gap to the player's reservation terms. Patience drops
every round and the session expires when it runs out.

Session lifecycle: active -> accepted | declined | expired
"""

import logging
import math
from dataclasses import replace
from datetime import datetime
from typing import Optional

from free_agency.market_pressure import calculate_market_pressure
from free_agency.models import Player
from player_management.negotiation_models import (
    CounterOffer,
    NegotiationClosedError,
    NegotiationEvent,
    NegotiationMarket,
    NegotiationResult,
    NegotiationSession,
    NegotiationStatus,
    NegotiationTerms,
)
from player_management.player_personality import (
    PlayerPersonality,
    PlayerPersonalityGenerator,
)


class NegotiationEngine:
    """
    Agent-side negotiation logic.

    Usage:
        engine = NegotiationEngine()
        session = engine.create_session(player, "team1", market)
        result = engine.evaluate_offer(NegotiationTerms(9_000_000, 0.6, 3), session, player)
        session = result.session
    """

    VALUE_PER_OVERALL = 100_000
    DEFAULT_MAX_YEARS = 5

    # Acceptance threshold
    BASE_THRESHOLD = 0.95
    PATIENCE_BASELINE = 5
    THRESHOLD_PER_LOST_PATIENCE = 0.05
    AGENT_THRESHOLD_WEIGHT = 0.1
    NO_COMPETITION_DISCOUNT = 0.1
    MIN_THRESHOLD = 0.8
    MAX_THRESHOLD = 1.1

    # Lowball handling
    LOWBALL_AAV_RATIO = 0.85
    LOWBALL_GTD_RATIO = 0.80
    LOWBALL_AAV_RAISE = 1.06
    LOWBALL_GTD_RAISE = 1.05
    MAX_GTD_PCT = 0.95

    # Share of each gap a counter closes
    AAV_GAP_CLOSE = 0.75
    GTD_GAP_CLOSE = 0.85
    YEARS_GAP_CLOSE = 0.5

    COUNTER_MESSAGES = {
        "aav": (
            "We need to see more money on the table. My client deserves market value.",
            "The AAV is below what we're seeing for similar players. Let's bridge this gap.",
            "We're looking for a stronger financial commitment. Can you improve the annual value?",
        ),
        "gtd": (
            "The guarantees aren't strong enough. My client needs security.",
            "We need stronger guarantees to protect against injury and roster changes.",
            "The guaranteed money is too low. Let's make this deal more secure.",
        ),
        "years": (
            "The contract length doesn't provide the stability my client is looking for.",
            "We need a longer commitment to justify the investment.",
            "The years don't match our long-term vision. Can we extend the term?",
        ),
    }

    def __init__(self, personality_generator: Optional[PlayerPersonalityGenerator] = None):
        self.logger = logging.getLogger(__name__)
        self.personalities = personality_generator or PlayerPersonalityGenerator()

    # ========================================================================
    # SESSION LIFECYCLE
    # ========================================================================

    def create_session(
        self,
        player: Player,
        team_id: str,
        market: NegotiationMarket,
        max_years: int = DEFAULT_MAX_YEARS,
        created_at: Optional[datetime] = None
    ) -> NegotiationSession:
        """
        Open a negotiation.

        Reservation terms:
            aav = overall * $100K * (0.9 + risk * 0.1)
            gtd_pct = 0.5 + (1 - risk) * 0.3
            years = clamp(round(2 + security * 3), 1, max_years)

        The ask anchor sits above the reservation by agent quality, and
        patience runs 4-6 rounds.
        """
        personality = self.personalities.generate_personality(player.player_id)
        risk = personality.risk_tolerance
        security = personality.security_preference
        agent = personality.agent_quality

        expected_value = player.overall * self.VALUE_PER_OVERALL
        reservation = NegotiationTerms(
            aav=round(expected_value * (0.9 + risk * 0.1)),
            gtd_pct=0.5 + (1 - risk) * 0.3,
            years=max(1, min(max_years, round(2 + security * 3))),
        )
        ask_anchor = NegotiationTerms(
            aav=round(reservation.aav * (1.1 + agent * 0.1)),
            gtd_pct=min(self.MAX_GTD_PCT, reservation.gtd_pct * (1.05 + agent * 0.1)),
            years=min(max_years, reservation.years + math.ceil(security * 2)),
        )

        created = created_at or datetime.now()
        session = NegotiationSession(
            session_id=f"neg_{player.player_id}_{team_id}_{int(created.timestamp())}",
            player_id=player.player_id,
            team_id=team_id,
            reservation=reservation,
            ask_anchor=ask_anchor,
            patience=4 + math.floor(agent * 2),
            market=market,
            max_years=max_years,
            created_at=created,
        )
        self.logger.info(
            f"Opened negotiation {session.session_id}: reservation ${reservation.aav:,} "
            f"x {reservation.years}y, patience {session.patience}"
        )
        return session

    def decline(self, session: NegotiationSession) -> NegotiationSession:
        """End a session from the team's side."""
        self._require_active(session)
        self.logger.info(f"Negotiation {session.session_id} declined by {session.team_id}")
        return replace(session, status=NegotiationStatus.DECLINED)

    # ========================================================================
    # OFFER EVALUATION
    # ========================================================================

    def evaluate_offer(
        self,
        offer: NegotiationTerms,
        session: NegotiationSession,
        player: Player
    ) -> NegotiationResult:
        """
        Respond to a team's offer.

        Args:
            offer: Terms offered this round
            session: Current session state (not modified)
            player: Player being negotiated for

        Returns:
            NegotiationResult carrying the next session state

        Raises:
            NegotiationClosedError: If the session is no longer active
        """
        self._require_active(session)
        personality = self.personalities.generate_personality(player.player_id)

        utility = self.calculate_utility(offer, session.reservation, personality)
        pressure = calculate_market_pressure(
            competing_offers=session.market.competing_offers,
            positional_demand=session.market.positional_demand,
            cap_space_available=session.market.cap_space_available,
            season_stage=session.market.season_stage,
        )
        threshold = self.get_acceptance_threshold(session, personality)
        accepted = utility + pressure >= threshold

        history = session.history + (
            NegotiationEvent("offer", session.round_number, offer),
        )
        counter = None
        lowball = False

        if accepted:
            message = self._acceptance_message(personality)
            next_session = replace(session, status=NegotiationStatus.ACCEPTED, history=history)
            self.logger.info(
                f"Negotiation {session.session_id} accepted at ${offer.aav:,} "
                f"(utility {utility + pressure:.3f} >= {threshold:.3f})"
            )
        else:
            lowball = self.is_lowball(offer, session.reservation)
            if lowball:
                session = self._raise_reservation(session)
                message = self._lowball_message(personality)
            else:
                counter = self.generate_counter(offer, session.reservation, personality)
                message = counter.message
                history = history + (
                    NegotiationEvent("counter", session.round_number, counter.terms, message),
                )

            patience = max(0, session.patience - 1)
            status = NegotiationStatus.ACTIVE if patience > 0 else NegotiationStatus.EXPIRED
            next_session = replace(
                session,
                round_number=session.round_number + 1,
                patience=patience,
                status=status,
                history=history,
            )
            if status is NegotiationStatus.EXPIRED:
                self.logger.info(f"Negotiation {session.session_id} expired after round {session.round_number}")

        return NegotiationResult(
            accepted=accepted,
            message=message,
            session=next_session,
            utility=utility,
            market_pressure=pressure,
            threshold=threshold,
            counter=counter,
            lowball=lowball,
        )

    def calculate_utility(
        self,
        offer: NegotiationTerms,
        reservation: NegotiationTerms,
        personality: PlayerPersonality
    ) -> float:
        """
        Personality-weighted value of an offer relative to the reservation.

        Each term ratio is capped at 1.0; a tougher agent inflates the
        result by up to 20%.
        """
        aav_ratio = self._ratio(offer.aav, reservation.aav)
        gtd_ratio = self._ratio(offer.gtd_pct, reservation.gtd_pct)
        years_ratio = self._ratio(offer.years, reservation.years)

        utility = (
            personality.money_vs_role * aav_ratio
            + (1 - personality.risk_tolerance) * gtd_ratio
            + personality.security_preference * years_ratio
        )
        return utility * (0.8 + personality.agent_quality * 0.4)

    def get_acceptance_threshold(
        self,
        session: NegotiationSession,
        personality: PlayerPersonality
    ) -> float:
        """Threshold drops as patience runs out, rises with agent quality."""
        threshold = self.BASE_THRESHOLD
        threshold -= (self.PATIENCE_BASELINE - session.patience) * self.THRESHOLD_PER_LOST_PATIENCE
        threshold += personality.agent_quality * self.AGENT_THRESHOLD_WEIGHT
        if session.market.competing_offers == 0:
            threshold -= self.NO_COMPETITION_DISCOUNT
        return max(self.MIN_THRESHOLD, min(self.MAX_THRESHOLD, threshold))

    def is_lowball(self, offer: NegotiationTerms, reservation: NegotiationTerms) -> bool:
        return (
            self._raw_ratio(offer.aav, reservation.aav) < self.LOWBALL_AAV_RATIO
            or self._raw_ratio(offer.gtd_pct, reservation.gtd_pct) < self.LOWBALL_GTD_RATIO
        )

    def generate_counter(
        self,
        offer: NegotiationTerms,
        reservation: NegotiationTerms,
        personality: PlayerPersonality
    ) -> CounterOffer:
        """
        Counter that closes most of each gap to the reservation.

        The message targets the term with the largest gap relative to the
        reservation value.
        """
        aav_gap = max(0, reservation.aav - offer.aav)
        gtd_gap = max(0.0, reservation.gtd_pct - offer.gtd_pct)
        years_gap = max(0, reservation.years - offer.years)

        relative_gaps = {
            "aav": self._raw_ratio(aav_gap, reservation.aav),
            "gtd": self._raw_ratio(gtd_gap, reservation.gtd_pct),
            "years": self._raw_ratio(years_gap, reservation.years),
        }
        focus = max(relative_gaps, key=relative_gaps.get)

        terms = NegotiationTerms(
            aav=offer.aav + round(aav_gap * self.AAV_GAP_CLOSE),
            gtd_pct=min(1.0, offer.gtd_pct + gtd_gap * self.GTD_GAP_CLOSE),
            years=offer.years + math.ceil(years_gap * self.YEARS_GAP_CLOSE),
        )
        return CounterOffer(terms=terms, message=self._counter_message(focus, personality), focus=focus)

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _require_active(self, session: NegotiationSession) -> None:
        if not session.is_active:
            raise NegotiationClosedError(
                f"Negotiation {session.session_id} is {session.status.value}"
            )

    def _raise_reservation(self, session: NegotiationSession) -> NegotiationSession:
        """Lowball response: the ask goes up and patience drops."""
        reservation = NegotiationTerms(
            aav=round(session.reservation.aav * self.LOWBALL_AAV_RAISE),
            gtd_pct=min(self.MAX_GTD_PCT, session.reservation.gtd_pct * self.LOWBALL_GTD_RAISE),
            years=session.reservation.years,
        )
        self.logger.debug(
            f"Lowball on {session.session_id}: reservation raised to ${reservation.aav:,}"
        )
        return replace(session, reservation=reservation, patience=max(1, session.patience - 1))

    def _ratio(self, value: float, target: float) -> float:
        return min(1.0, self._raw_ratio(value, target))

    def _raw_ratio(self, value: float, target: float) -> float:
        if target <= 0:
            return 1.0
        return value / target

    def _counter_message(self, focus: str, personality: PlayerPersonality) -> str:
        pool = self.COUNTER_MESSAGES.get(focus, self.COUNTER_MESSAGES["aav"])
        index = min(math.floor(personality.agent_quality * len(pool)), len(pool) - 1)
        return pool[index]

    def _acceptance_message(self, personality: PlayerPersonality) -> str:
        if personality.loyalty > 0.7:
            return "My client is excited to join your organization. We have a deal!"
        if personality.money_vs_role > 0.6:
            return "The financial terms work for us. We're ready to sign."
        return "This offer meets our requirements. Let's get this done."

    def _lowball_message(self, personality: PlayerPersonality) -> str:
        if personality.agent_quality > 0.7:
            return "That offer is disrespectful. We're raising our ask significantly."
        return "That's too low. We need to see a much better offer to continue talks."
