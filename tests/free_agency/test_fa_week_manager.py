"""
Tests for FAWeekManager
"""

from dataclasses import replace
from datetime import datetime, timedelta

import pytest

from config.free_agency_settings import FreeAgencySettings
from free_agency.fa_week_manager import FAWeekManager
from free_agency.models import BidStatus, FAPhase, FAWeek, MarketContext


START = datetime(2025, 3, 10, 9, 0)


@pytest.fixture
def manager():
    return FAWeekManager()


class TestWeeks:

    @pytest.mark.parametrize("week,phase", [
        (1, FAPhase.FA_WEEK), (4, FAPhase.FA_WEEK), (5, FAPhase.OPEN_FA), (9, FAPhase.OPEN_FA),
    ])
    def test_phase_for_week(self, manager, week, phase):
        assert manager.phase_for_week(week) is phase

    def test_create_fa_week(self, manager):
        week = manager.create_fa_week("league1", 2, start_date=START)

        assert week.week_id == "league1_week_2"
        assert week.phase is FAPhase.FA_WEEK
        assert week.status == "active"
        assert week.end_date - week.start_date == timedelta(days=7)
        assert week.ready_teams == ()

    def test_week_cannot_end_before_it_starts(self):
        with pytest.raises(ValueError):
            FAWeek("w", "league1", 1, FAPhase.FA_WEEK, START, START - timedelta(days=1))

    def test_readiness(self, manager):
        week = manager.create_fa_week("league1", 1, start_date=START)
        week = manager.mark_team_ready(week, "team1")
        again = manager.mark_team_ready(week, "team1")

        assert again is week
        assert manager.is_ready_to_evaluate(week, ["team1", "team2"]) is False

        week = manager.mark_team_ready(week, "team2")
        assert manager.is_ready_to_evaluate(week, ["team1", "team2"]) is True
        assert week.to_dict()["ready_teams"] == ["team1", "team2"]


class TestBidLimits:

    def test_limit_counts_only_pending_bids_for_team(self, manager, make_bid):
        settings = FreeAgencySettings(max_concurrent_offers=2)
        bids = [
            make_bid("b1", team_id="team1"),
            replace(make_bid("b2", team_id="team1"), status=BidStatus.REJECTED),
            make_bid("b3", team_id="team2"),
        ]
        assert manager.can_submit_bid("team1", bids, settings) is True

        bids.append(make_bid("b4", team_id="team1"))
        assert manager.can_submit_bid("team1", bids, settings) is False
        assert manager.can_submit_bid("team2", bids, settings) is True

    def test_cap_hold_is_first_year_hit(self, manager, make_bid):
        bid = make_bid("b1", apy=10_000_000, years=3, signing_bonus=3_000_000)
        assert manager.calculate_cap_hold(bid) == 11_000_000


class TestOpenFreeAgency:

    def test_open_fa_contract(self, manager, make_player, settings):
        player = make_player(overall=80)
        contract = manager.calculate_open_fa_contract(player, MarketContext.for_week(5), settings, year=2025)

        assert contract.years == 1
        assert contract.contract_type == "prove_it"
        assert contract.base_salary == {2025: 6_400_000}
        assert contract.signing_bonus == 0
        assert contract.guarantees == ()

    def test_process_open_fa_signing(self, manager, make_player, settings):
        contract = manager.calculate_open_fa_contract(
            make_player(overall=80), MarketContext.for_week(5), settings, year=2025
        )
        signing = manager.process_open_fa_signing("p1", "team1", "league1", contract, settings, signed_at=START)

        assert signing.signing_id == "league1_openfa_p1_team1"
        assert signing.market_price == 6_400_000
        assert signing.discount_applied == 20.0
        assert signing.to_dict()["signed_at"] == START.isoformat()
