"""
Positional Demand

Estimates how scarce a position is for the league as a whole, on a 0.0-1.0
scale. With roster composition available the figure is derived from how many
starting slots every team must fill; without it the market's raw
per-position signal is used.

Formula (non-special positions):
    starter_slots = requirement * team_count
    total_roster_slots = max_players * team_count
    demand = starter_slots / total_roster_slots * 4.0
"""

from typing import Optional, Union

from constants.positions import Position, position_key
from free_agency.models import LeagueRosterInfo, MarketContext


# Single-QB leagues rarely compete for a second quarterback
ONE_QB_DEMAND = 0.3
SUPERFLEX_QB_DEMAND = 0.9

# Positions with a league-wide surplus
LOW_DEMAND_POSITIONS = {"K": 0.2, "DEF": 0.2}

DEMAND_MULTIPLIER = 4.0
WR_DEMAND_CAP = 0.4
MIN_DEMAND = 0.2
MAX_DEMAND = 0.8


def calculate_positional_demand(
    position: Union[Position, str],
    roster_info: LeagueRosterInfo
) -> float:
    """
    League-aware demand for a position.

    Args:
        position: Position enum or raw position string
        roster_info: League roster composition

    Returns:
        Demand signal between 0.0 and 1.0

    Examples:
        >>> info = LeagueRosterInfo(12, {"QB": 1, "WR": 3}, 20)
        >>> calculate_positional_demand("QB", info)
        0.3
        >>> calculate_positional_demand("WR", info)   # 36/240*4 = 0.6, capped
        0.4
    """
    key = position_key(position)

    if key == "QB":
        if roster_info.requirement_for("QB") >= 2:
            return SUPERFLEX_QB_DEMAND
        return ONE_QB_DEMAND

    if key in LOW_DEMAND_POSITIONS:
        return LOW_DEMAND_POSITIONS[key]

    starter_slots = roster_info.requirement_for(key) * roster_info.team_count
    demand = starter_slots / roster_info.total_roster_slots * DEMAND_MULTIPLIER

    if key == "WR":
        return min(WR_DEMAND_CAP, demand)
    return max(MIN_DEMAND, min(MAX_DEMAND, demand))


def demand_for(
    position: Union[Position, str],
    market: MarketContext,
    roster_info: Optional[LeagueRosterInfo] = None
) -> float:
    """
    Demand used for scoring: league-aware when roster info is known,
    otherwise the market's per-position signal (0.5 when absent).
    """
    info = roster_info or market.league_roster_info
    if info is not None:
        return calculate_positional_demand(position, info)
    return market.demand_signal(position)
