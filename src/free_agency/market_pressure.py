"""
Market Pressure

How hard the market is pushing a player toward signing, on a 0.0-0.5 scale.
Shared by the bid evaluator's market summary and the negotiation engine.
"""

from free_agency.models import SeasonStage


COMPETING_OFFER_WEIGHT = 0.1
DEMAND_WEIGHT = 0.2
CAP_SPACE_SCALE = 100_000_000
MAX_CAP_SPACE_PRESSURE = 0.3
MAX_MARKET_PRESSURE = 0.5

STAGE_PRESSURE = {
    SeasonStage.EARLY_FA: 0.1,
    SeasonStage.MID_FA: 0.2,
    SeasonStage.LATE_FA: 0.25,
    SeasonStage.CAMP: 0.3,
    SeasonStage.MID_SEASON: 0.4,
}


def calculate_market_pressure(
    competing_offers: int,
    positional_demand: float,
    cap_space_available: int,
    season_stage: SeasonStage
) -> float:
    """
    Combine competition, demand, available money and calendar pressure.

    Args:
        competing_offers: Number of live offers for the player
        positional_demand: Demand signal (0.0-1.0)
        cap_space_available: Cap space across interested teams
        season_stage: Calendar stage; later stages push harder

    Returns:
        Pressure capped at 0.5
    """
    pressure = max(0, competing_offers) * COMPETING_OFFER_WEIGHT
    pressure += positional_demand * DEMAND_WEIGHT
    pressure += min(MAX_CAP_SPACE_PRESSURE, max(0, cap_space_available) / CAP_SPACE_SCALE)
    pressure += STAGE_PRESSURE.get(season_stage, 0.0)

    return min(MAX_MARKET_PRESSURE, pressure)
