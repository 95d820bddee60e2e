"""
FA Week Manager

Bid window bookkeeping around the weekly evaluation:
- Week creation and phase (sealed bid weeks 1-4, open FA afterwards)
- Team readiness for advancing a week
- Concurrent bid limits and cap holds for pending bids
- Instant open-FA signings at a discount to expected value
"""

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Iterable, Optional
import logging

from config.free_agency_settings import FreeAgencySettings
from free_agency.bid_evaluator import BidEvaluator
from free_agency.models import (
    Bid,
    ContractOffer,
    FAPhase,
    FAWeek,
    MarketContext,
    OpenFASigning,
    Player,
)
from salary_cap.cap_calculator import CapCalculator


class FAWeekManager:
    """
    Weekly free agency window management.

    Usage:
        manager = FAWeekManager()
        week = manager.create_fa_week("league1", 1)
        if manager.can_submit_bid("team1", bids, settings):
            ...
    """

    SEALED_BID_WEEKS = 4
    WEEK_DURATION = timedelta(days=7)

    def __init__(
        self,
        bid_evaluator: Optional[BidEvaluator] = None,
        cap_calculator: Optional[CapCalculator] = None
    ):
        self.logger = logging.getLogger(__name__)
        self.bid_evaluator = bid_evaluator or BidEvaluator()
        self.cap_calculator = cap_calculator or CapCalculator()

    # ========================================================================
    # WEEKS
    # ========================================================================

    def phase_for_week(self, week_number: int) -> FAPhase:
        if week_number <= self.SEALED_BID_WEEKS:
            return FAPhase.FA_WEEK
        return FAPhase.OPEN_FA

    def create_fa_week(
        self,
        league_id: str,
        week_number: int,
        start_date: Optional[datetime] = None
    ) -> FAWeek:
        """New active week lasting seven days from start_date (default now)."""
        start = start_date or datetime.now()
        fa_week = FAWeek(
            week_id=f"{league_id}_week_{week_number}",
            league_id=league_id,
            week_number=week_number,
            phase=self.phase_for_week(week_number),
            start_date=start,
            end_date=start + self.WEEK_DURATION,
        )
        self.logger.info(f"Created FA week {fa_week.week_id} ({fa_week.phase.value})")
        return fa_week

    def mark_team_ready(self, fa_week: FAWeek, team_id: str) -> FAWeek:
        """Week with team_id added to the ready list (idempotent)."""
        if team_id in fa_week.ready_teams:
            return fa_week
        return replace(fa_week, ready_teams=fa_week.ready_teams + (team_id,))

    def is_ready_to_evaluate(self, fa_week: FAWeek, team_ids: Iterable[str]) -> bool:
        """Every team in the league has marked itself ready."""
        return set(team_ids) <= set(fa_week.ready_teams)

    # ========================================================================
    # BIDS
    # ========================================================================

    def can_submit_bid(
        self,
        team_id: str,
        current_bids: Iterable[Bid],
        settings: FreeAgencySettings
    ) -> bool:
        """A team may hold fewer than max_concurrent_offers pending bids."""
        pending = sum(
            1 for bid in current_bids
            if bid.team_id == team_id and bid.is_pending
        )
        return pending < settings.max_concurrent_offers

    def calculate_cap_hold(self, bid: Bid) -> int:
        """Cap reserved for a pending bid (first-year hit)."""
        return self.cap_calculator.calculate_cap_hold(bid.offer)

    # ========================================================================
    # OPEN FREE AGENCY
    # ========================================================================

    def calculate_open_fa_contract(
        self,
        player: Player,
        market: MarketContext,
        settings: FreeAgencySettings,
        year: Optional[int] = None
    ) -> ContractOffer:
        """
        Auto-priced one-year prove-it deal.

        Example:
            Expected AAV $8M with a 20% discount -> $6.4M for one season,
            no bonus, no guarantees
        """
        expected_aav = self.bid_evaluator.calculate_expected_aav(player, market)
        discounted_aav = round(expected_aav * (1 - settings.open_fa_discount / 100))
        season = year if year is not None else datetime.now().year

        return ContractOffer(
            years=1,
            base_salary={season: discounted_aav},
            signing_bonus=0,
            guarantees=(),
            contract_type="prove_it",
        )

    def process_open_fa_signing(
        self,
        player_id: str,
        team_id: str,
        league_id: str,
        contract: ContractOffer,
        settings: FreeAgencySettings,
        signed_at: Optional[datetime] = None
    ) -> OpenFASigning:
        """Record an instant signing at the open-FA price."""
        signing = OpenFASigning(
            signing_id=f"{league_id}_openfa_{player_id}_{team_id}",
            league_id=league_id,
            team_id=team_id,
            player_id=player_id,
            contract=contract,
            market_price=contract.apy,
            discount_applied=settings.open_fa_discount,
            signed_at=signed_at or datetime.now(),
        )
        self.logger.info(
            f"Open FA signing: {player_id} to {team_id} at ${contract.apy:,} "
            f"({settings.open_fa_discount}% discount)"
        )
        return signing
