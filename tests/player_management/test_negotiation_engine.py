"""
Tests for NegotiationEngine

A fixed personality generator pins the agent's traits so the session
numbers can be worked out by hand:

    overall 80 -> expected $8M
    reservation: aav $7.92M, gtd 0.53, 3 years; patience 4
    threshold with no competition: 0.84; market pressure: 0.2
"""

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from player_management.negotiation_engine import NegotiationEngine
from player_management.negotiation_models import (
    NegotiationClosedError,
    NegotiationMarket,
    NegotiationStatus,
    NegotiationTerms,
)
from player_management.player_personality import PlayerPersonality, PlayerPersonalityGenerator


CREATED = datetime(2025, 3, 10, tzinfo=timezone.utc)


class FixedPersonalityGenerator(PlayerPersonalityGenerator):
    """Returns the same personality for every player."""

    def __init__(self, **traits):
        defaults = {
            "risk_tolerance": 0.9,
            "security_preference": 0.3,
            "agent_quality": 0.4,
            "loyalty": 0.2,
            "money_vs_role": 0.3,
            "market_savvy": 0.5,
        }
        defaults.update(traits)
        self.traits = defaults

    def generate_personality(self, player_id):
        return PlayerPersonality(player_id=str(player_id), **self.traits)


@pytest.fixture
def engine():
    return NegotiationEngine(personality_generator=FixedPersonalityGenerator())


@pytest.fixture
def player(make_player):
    return make_player(player_id="p1", overall=80)


@pytest.fixture
def session(engine, player):
    return engine.create_session(player, "team1", NegotiationMarket(), created_at=CREATED)


def _scaled(terms, aav=1.0, gtd=1.0, years=None):
    return NegotiationTerms(
        aav=round(terms.aav * aav),
        gtd_pct=terms.gtd_pct * gtd,
        years=terms.years if years is None else years,
    )


class TestCreateSession:

    def test_reservation_and_anchor(self, session):
        assert session.reservation.aav == 7_920_000
        assert session.reservation.gtd_pct == pytest.approx(0.53)
        assert session.reservation.years == 3
        assert session.ask_anchor.aav > session.reservation.aav
        assert session.ask_anchor.gtd_pct > session.reservation.gtd_pct
        assert session.ask_anchor.years == 4

    def test_session_state(self, session):
        assert session.session_id == f"neg_p1_team1_{int(CREATED.timestamp())}"
        assert session.patience == 4
        assert session.round_number == 1
        assert session.status is NegotiationStatus.ACTIVE
        assert session.history == ()

    def test_years_respect_max(self, player):
        secure = NegotiationEngine(FixedPersonalityGenerator(security_preference=1.0))
        session = secure.create_session(player, "team1", NegotiationMarket(), max_years=2)
        assert session.reservation.years == 2
        assert session.ask_anchor.years == 2


class TestThresholdAndUtility:

    def test_threshold_without_competition(self, engine, session):
        personality = engine.personalities.generate_personality("p1")
        assert engine.get_acceptance_threshold(session, personality) == pytest.approx(0.84)

    def test_competition_removes_discount(self, engine, player):
        session = engine.create_session(player, "team1", NegotiationMarket(competing_offers=2))
        personality = engine.personalities.generate_personality("p1")
        assert engine.get_acceptance_threshold(session, personality) == pytest.approx(0.94)

    def test_threshold_is_clamped(self, engine, session):
        personality = engine.personalities.generate_personality("p1")
        exhausted = replace(session, patience=0)
        assert engine.get_acceptance_threshold(exhausted, personality) == 0.8

    def test_utility_caps_each_ratio(self, engine, session):
        personality = engine.personalities.generate_personality("p1")
        generous = _scaled(session.reservation, aav=2.0, gtd=1.5, years=6)

        at_reservation = engine.calculate_utility(session.reservation, session.reservation, personality)
        above = engine.calculate_utility(generous, session.reservation, personality)

        assert at_reservation == pytest.approx(0.7 * 0.96)
        assert above == pytest.approx(at_reservation)

    def test_lowball_detection(self, engine, session):
        reservation = session.reservation
        assert engine.is_lowball(_scaled(reservation, aav=0.84), reservation)
        assert engine.is_lowball(_scaled(reservation, gtd=0.79), reservation)
        assert not engine.is_lowball(_scaled(reservation, aav=0.86, gtd=0.81), reservation)


class TestEvaluateOffer:

    def test_reservation_offer_is_accepted(self, engine, session, player):
        result = engine.evaluate_offer(session.reservation, session, player)

        assert result.accepted is True
        assert result.session.status is NegotiationStatus.ACCEPTED
        assert result.market_pressure == pytest.approx(0.2)
        assert result.message == "This offer meets our requirements. Let's get this done."
        assert [e.event_type for e in result.session.history] == ["offer"]

    def test_counter_targets_largest_relative_gap(self, engine, session, player):
        offer = _scaled(session.reservation, aav=0.9, gtd=0.85, years=1)
        result = engine.evaluate_offer(offer, session, player)

        assert result.accepted is False
        assert result.lowball is False
        assert result.counter.focus == "years"
        assert result.counter.terms.years == 2
        assert result.counter.terms.aav == offer.aav + round((session.reservation.aav - offer.aav) * 0.75)
        assert result.message == "We need a longer commitment to justify the investment."

        next_session = result.session
        assert next_session.round_number == 2
        assert next_session.patience == 3
        assert [e.event_type for e in next_session.history] == ["offer", "counter"]

    def test_counter_on_money(self, engine, session, player):
        offer = _scaled(session.reservation, aav=0.86)
        result = engine.evaluate_offer(offer, session, player)

        assert result.accepted is False
        assert result.counter.focus == "aav"
        assert result.counter.terms.years == session.reservation.years

    def test_lowball_raises_reservation(self, engine, session, player):
        offer = _scaled(session.reservation, aav=0.5)
        result = engine.evaluate_offer(offer, session, player)

        assert result.lowball is True
        assert result.counter is None
        assert result.message == "That's too low. We need to see a much better offer to continue talks."
        assert result.session.reservation.aav == round(session.reservation.aav * 1.06)
        assert result.session.patience == 2
        assert session.reservation.aav == 7_920_000

    def test_session_expires_when_patience_runs_out(self, engine, session, player):
        offer = _scaled(session.reservation, aav=0.9, gtd=0.85, years=1)
        for _ in range(4):
            result = engine.evaluate_offer(offer, session, player)
            session = result.session

        assert session.status is NegotiationStatus.EXPIRED
        assert session.patience == 0
        with pytest.raises(NegotiationClosedError):
            engine.evaluate_offer(offer, session, player)

    def test_accepted_session_is_closed(self, engine, session, player):
        closed = engine.evaluate_offer(session.reservation, session, player).session
        with pytest.raises(NegotiationClosedError):
            engine.evaluate_offer(session.reservation, closed, player)

    def test_decline(self, engine, session):
        declined = engine.decline(session)
        assert declined.status is NegotiationStatus.DECLINED
        assert session.status is NegotiationStatus.ACTIVE
        with pytest.raises(NegotiationClosedError):
            engine.decline(declined)

    def test_session_to_dict(self, engine, session, player):
        offer = _scaled(session.reservation, aav=0.9, gtd=0.85, years=1)
        data = engine.evaluate_offer(offer, session, player).session.to_dict()

        assert data["round"] == 2
        assert data["status"] == "active"
        assert data["history"][1]["type"] == "counter"


class TestMessages:

    def test_loyal_player_acceptance(self, player):
        engine = NegotiationEngine(FixedPersonalityGenerator(loyalty=0.9))
        session = engine.create_session(player, "team1", NegotiationMarket())
        result = engine.evaluate_offer(session.reservation, session, player)
        assert result.message == "My client is excited to join your organization. We have a deal!"

    def test_tough_agent_lowball(self, player):
        engine = NegotiationEngine(FixedPersonalityGenerator(agent_quality=0.9))
        session = engine.create_session(player, "team1", NegotiationMarket())
        result = engine.evaluate_offer(_scaled(session.reservation, aav=0.5), session, player)
        assert result.message == "That offer is disrespectful. We're raising our ask significantly."
