"""
Pytest configuration for test discovery and imports.

Provides fixtures for testing including:
- Salary cap and league settings fixtures
- Player, offer and bid factories
- Market snapshots for bid evaluation
"""

import sys
from pathlib import Path
import pytest


# Determine paths
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
tests_path = project_root / "tests"


def pytest_configure(config):
    """Configure pytest - runs very early in startup.

    src must come first so tests/<package> directories never shadow the
    real packages of the same name.
    """
    new_path = [p for p in dict.fromkeys(sys.path) if p not in (str(tests_path), str(src_path))]
    new_path.insert(0, str(src_path))
    sys.path[:] = new_path


from config.free_agency_settings import FreeAgencySettings  # noqa: E402
from constants.positions import Position  # noqa: E402
from free_agency.models import (  # noqa: E402
    Bid,
    ContractOffer,
    Guarantee,
    MarketContext,
    Player,
    SeasonStage,
)


# ============================================================================
# LEAGUE FIXTURES
# ============================================================================

@pytest.fixture
def salary_cap():
    """Default dynasty league salary cap ($200M)."""
    return 200_000_000


@pytest.fixture
def settings():
    """Default free agency settings."""
    return FreeAgencySettings()


@pytest.fixture
def week_one_market():
    """Week 1 market with neutral demand."""
    return MarketContext(current_week=1, season_stage=SeasonStage.EARLY_FA)


# ============================================================================
# FACTORIES
# ============================================================================

@pytest.fixture
def make_player():
    """Factory for Player records."""
    def _make(player_id="p1", position=Position.WR, age=27, overall=80, years_exp=4, name=""):
        return Player(
            player_id=player_id,
            position=position,
            age=age,
            overall=overall,
            years_exp=years_exp,
            name=name,
        )
    return _make


@pytest.fixture
def make_offer():
    """
    Factory for ContractOffer with a flat salary.

    apy is the per-year base salary; the bonus is added on top.
    """
    def _make(apy=10_000_000, years=3, start_year=2025, signing_bonus=0,
              guarantee_count=0, contract_type="standard"):
        base_salary = {start_year + i: apy for i in range(years)}
        guarantees = tuple(
            Guarantee(amount=apy, year=start_year + i)
            for i in range(min(guarantee_count, years))
        )
        return ContractOffer(
            years=years,
            base_salary=base_salary,
            signing_bonus=signing_bonus,
            guarantees=guarantees,
            contract_type=contract_type,
        )
    return _make


@pytest.fixture
def make_bid(make_offer):
    """Factory for pending bids."""
    def _make(bid_id, player_id="p1", team_id="team1", apy=10_000_000, week_number=1, **offer_kwargs):
        return Bid(
            bid_id=bid_id,
            team_id=team_id,
            player_id=player_id,
            offer=make_offer(apy=apy, **offer_kwargs),
            week_number=week_number,
            league_id="league1",
        )
    return _make
