"""
Tests for positional demand and market pressure.
"""

import pytest

from free_agency.market_pressure import calculate_market_pressure
from free_agency.models import LeagueRosterInfo, MarketContext, Position, SeasonStage
from free_agency.positional_demand import calculate_positional_demand, demand_for


@pytest.fixture
def one_qb_league():
    return LeagueRosterInfo(
        team_count=12,
        position_requirements={"QB": 1, "RB": 2, "WR": 3, "TE": 1, "K": 1, "DEF": 1},
        max_players=20,
    )


@pytest.fixture
def superflex_league():
    return LeagueRosterInfo(
        team_count=12,
        position_requirements={"quarterback": 2, "RB": 2, "WR": 2, "TE": 1},
        max_players=25,
    )


class TestPositionalDemand:

    def test_one_qb_league(self, one_qb_league):
        assert calculate_positional_demand(Position.QB, one_qb_league) == 0.3

    def test_superflex(self, superflex_league):
        assert calculate_positional_demand("QB", superflex_league) == 0.9

    def test_kicker_and_defense_are_surplus(self, one_qb_league):
        assert calculate_positional_demand(Position.K, one_qb_league) == 0.2
        assert calculate_positional_demand("D/ST", one_qb_league) == 0.2

    def test_wr_is_capped(self, one_qb_league):
        # 36 / 240 * 4 = 0.6
        assert calculate_positional_demand("WR", one_qb_league) == 0.4

    def test_rb_slot_share(self, one_qb_league):
        # 24 / 240 * 4 = 0.4
        assert calculate_positional_demand(Position.RB, one_qb_league) == pytest.approx(0.4)

    def test_unlisted_position_hits_floor(self, one_qb_league):
        assert calculate_positional_demand(Position.LB, one_qb_league) == 0.2

    def test_demand_for_prefers_roster_info(self, one_qb_league):
        market = MarketContext(positional_demand={"QB": 0.9}, league_roster_info=one_qb_league)
        assert demand_for(Position.QB, market) == 0.3

    def test_demand_for_falls_back_to_signal(self):
        market = MarketContext(positional_demand={"TE": 0.75})
        assert demand_for(Position.TE, market) == 0.75
        assert demand_for(Position.RB, market) == 0.5


class TestMarketPressure:

    def test_components_add_up(self):
        pressure = calculate_market_pressure(
            competing_offers=1,
            positional_demand=0.5,
            cap_space_available=10_000_000,
            season_stage=SeasonStage.EARLY_FA,
        )
        assert pressure == pytest.approx(0.1 + 0.1 + 0.1 + 0.1)

    def test_capped_at_half(self):
        pressure = calculate_market_pressure(5, 1.0, 500_000_000, SeasonStage.MID_SEASON)
        assert pressure == 0.5

    def test_later_stages_push_harder(self):
        stages = [
            SeasonStage.EARLY_FA,
            SeasonStage.MID_FA,
            SeasonStage.LATE_FA,
            SeasonStage.CAMP,
            SeasonStage.MID_SEASON,
        ]
        values = [calculate_market_pressure(0, 0.0, 0, stage) for stage in stages]
        assert values == sorted(values)
        assert values[2] == 0.25

    def test_negative_inputs_do_not_reduce_pressure(self):
        assert calculate_market_pressure(-3, 0.0, -10_000_000, SeasonStage.EARLY_FA) == pytest.approx(0.1)
