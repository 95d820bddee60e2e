"""
Bid Evaluation Engine

Scores every pending bid for each free agent in one pass and partitions the
bids into accepted, shortlisted and rejected.

Scoring (per bid):
    raw = 0.30 * aav + 0.25 * bonus + 0.20 * guarantee + 0.15 * length + 0.10 * team
    total = raw * desperation_multiplier(week)

The top-scoring bid is the candidate. It is accepted when its total reaches
the week's threshold (0.70 scaled down as the weeks pass); otherwise it stays
alive on the shortlist. Players become less selective every week, so an
offer can only look better to them later in free agency.

The engine is pure: inputs are never mutated and results can be discarded
without side effects. Callers commit the whole batch together (see
collect_status_updates).
"""

from dataclasses import replace
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union
import logging

from config.free_agency_settings import FreeAgencySettings
from constants.positions import position_key
from free_agency.decision_rationale import build_rationale
from free_agency.market_pressure import calculate_market_pressure
from free_agency.models import (
    Bid,
    BidStatus,
    ContractAnalysis,
    MarketContext,
    MarketFactors,
    Player,
    PlayerDecision,
    SeasonStage,
)
from free_agency.positional_demand import demand_for


class EvaluationIntegrityError(Exception):
    """Raised when a batch of decisions would assign conflicting bid statuses."""
    pass


class BidEvaluator:
    """
    Weekly bid evaluation.

    Usage:
        evaluator = BidEvaluator()
        decisions = evaluator.evaluate_cycle(bids, players, market, settings)
        updates = collect_status_updates(decisions)
    """

    # Component weights (sum to 1.0)
    AAV_WEIGHT = 0.30
    BONUS_WEIGHT = 0.25
    GUARANTEE_WEIGHT = 0.20
    LENGTH_WEIGHT = 0.15
    TEAM_WEIGHT = 0.10

    VALUE_PER_OVERALL = 100_000
    HIGH_DEMAND = 0.7
    LOW_DEMAND = 0.3
    HIGH_DEMAND_MULTIPLIER = 1.2
    LOW_DEMAND_MULTIPLIER = 0.8
    EARLY_FA_PREMIUM = 1.1

    # Bonus worth 20% of expected AAV earns full marks
    BONUS_TARGET_SHARE = 0.2
    NO_BONUS_SCORE = 0.3
    GUARANTEES_FOR_FULL_SCORE = 2
    NEUTRAL_TEAM_SCORE = 0.5

    BASE_THRESHOLD = 0.70

    # (last week of band, multiplier); weeks past the last band use the final value
    DESPERATION_BANDS = ((2, 1.00), (4, 1.05), (6, 1.15))
    MAX_DESPERATION = 1.25
    THRESHOLD_BANDS = ((2, 1.0), (4, 0.9), (6, 0.7))
    MIN_THRESHOLD_FACTOR = 0.5

    ACCEPTED_TRUST_BONUS = 0.1
    MAX_COMPARABLE_DEALS = 3

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    # ========================================================================
    # PUBLIC API
    # ========================================================================

    def evaluate_cycle(
        self,
        bids: Iterable[Bid],
        players: Union[Mapping[str, Player], Iterable[Player]],
        market: MarketContext,
        settings: Optional[FreeAgencySettings] = None
    ) -> List[PlayerDecision]:
        """
        Evaluate all pending bids, one decision per player with bids.

        Args:
            bids: Bids snapshot (non-pending bids are skipped)
            players: Player records keyed by id, or an iterable of Players
            market: Market snapshot for this pass
            settings: League settings (defaults when omitted)

        Returns:
            PlayerDecisions in the order each player first appears in bids.
            Players without a record are skipped with a warning.
        """
        settings = settings or FreeAgencySettings()
        player_lookup = self._index_players(players)
        grouped = self._group_pending_bids(bids)

        self.logger.info(
            f"Evaluating {sum(len(group) for group in grouped.values())} pending bids "
            f"for {len(grouped)} players (week {market.current_week})"
        )

        decisions = []
        for player_id, player_bids in grouped.items():
            player = player_lookup.get(player_id)
            if player is None:
                self.logger.warning(
                    f"No player record for {player_id}; skipping {len(player_bids)} bid(s)"
                )
                continue

            decisions.append(self.evaluate_player(player, player_bids, market, settings))

        accepted = sum(1 for decision in decisions if decision.accepted_bid_id)
        self.logger.info(f"Week {market.current_week}: {accepted}/{len(decisions)} players accepted a bid")
        return decisions

    def evaluate_player(
        self,
        player: Player,
        bids: List[Bid],
        market: MarketContext,
        settings: FreeAgencySettings
    ) -> PlayerDecision:
        """
        Decide among one player's competing bids.

        Raises:
            ValueError: If bids is empty
            EvaluationIntegrityError: If the partition does not cover the bids
        """
        if not bids:
            raise ValueError(f"No bids to evaluate for player {player.player_id}")

        week = market.current_week
        demand = demand_for(player.position, market)
        expected_aav = self.calculate_expected_aav(player, market, demand)

        scored: List[Tuple[ContractAnalysis, Bid]] = [
            (self.analyze_bid(bid, player, market, expected_aav), bid)
            for bid in bids
        ]
        scored.sort(key=lambda item: (-item[0].total_score, -item[1].offer.apy, item[1].bid_id))

        candidate_analysis, candidate_bid = scored[0]
        remaining = [bid.bid_id for _, bid in scored[1:]]
        shortlist_size = settings.shortlist_size

        if candidate_analysis.meets_threshold:
            accepted_bid_id = candidate_bid.bid_id
            shortlisted = remaining[:shortlist_size]
            rejected = remaining[shortlist_size:]
        else:
            accepted_bid_id = None
            shortlisted = [candidate_bid.bid_id] + remaining[:shortlist_size]
            rejected = remaining[shortlist_size:]

        self._verify_partition(player.player_id, bids, accepted_bid_id, shortlisted, rejected)

        player_text, agent_text = build_rationale(
            accepted=accepted_bid_id is not None,
            offer=candidate_bid.offer,
            analysis=candidate_analysis,
            week_number=week,
            shortlisted_count=len(shortlisted),
        )

        bids_by_id = {bid.bid_id: bid for bid in bids}
        decision = PlayerDecision(
            player_id=player.player_id,
            week_number=week,
            accepted_bid_id=accepted_bid_id,
            shortlisted_bid_ids=tuple(shortlisted),
            rejected_bid_ids=tuple(rejected),
            analysis=candidate_analysis,
            bid_analyses=tuple(analysis for analysis, _ in scored),
            market_factors=self._build_market_factors(player, bids, market, demand),
            player_rationale=player_text,
            agent_rationale=agent_text,
            trust_impact=self._calculate_trust_impact(
                bids_by_id, accepted_bid_id, rejected, settings.trust_penalty
            ),
        )

        if accepted_bid_id:
            self.logger.info(
                f"Player {player.player_id} accepted {accepted_bid_id} from "
                f"{candidate_bid.team_id} (score {candidate_analysis.total_score:.3f} "
                f">= {candidate_analysis.threshold:.3f})"
            )
        else:
            self.logger.debug(
                f"Player {player.player_id} shortlisted {len(shortlisted)} bid(s); best score "
                f"{candidate_analysis.total_score:.3f} < {candidate_analysis.threshold:.3f}"
            )

        return decision

    def calculate_expected_aav(
        self,
        player: Player,
        market: MarketContext,
        demand: Optional[float] = None
    ) -> int:
        """
        What the player believes they are worth per year.

        Base is overall * $100K, scaled up for hot positions (demand > 0.7),
        down for cold ones (demand < 0.3), and by 10% in early free agency.

        Example:
            Overall 80, neutral demand, EarlyFA -> 8.0M * 1.1 = $8.8M
        """
        if demand is None:
            demand = demand_for(player.position, market)

        expected = player.overall * self.VALUE_PER_OVERALL
        if demand > self.HIGH_DEMAND:
            expected *= self.HIGH_DEMAND_MULTIPLIER
        elif demand < self.LOW_DEMAND:
            expected *= self.LOW_DEMAND_MULTIPLIER

        if market.season_stage is SeasonStage.EARLY_FA:
            expected *= self.EARLY_FA_PREMIUM

        return round(expected)

    def analyze_bid(
        self,
        bid: Bid,
        player: Player,
        market: MarketContext,
        expected_aav: int
    ) -> ContractAnalysis:
        """Score one bid's terms for a player."""
        offer = bid.offer

        aav_score = self._ratio(offer.apy, expected_aav)
        if offer.signing_bonus > 0:
            bonus_score = self._ratio(offer.signing_bonus, expected_aav * self.BONUS_TARGET_SHARE)
        else:
            bonus_score = self.NO_BONUS_SCORE
        guarantee_score = min(1.0, len(offer.guarantees) / self.GUARANTEES_FOR_FULL_SCORE)
        length_score = self.score_length(player.age, offer.years)
        team_score = self.score_team(bid.team_id, market)

        raw_score = (
            aav_score * self.AAV_WEIGHT
            + bonus_score * self.BONUS_WEIGHT
            + guarantee_score * self.GUARANTEE_WEIGHT
            + length_score * self.LENGTH_WEIGHT
            + team_score * self.TEAM_WEIGHT
        )
        multiplier = self.get_desperation_multiplier(market.current_week)
        total_score = raw_score * multiplier

        self.logger.debug(
            f"Bid {bid.bid_id} ({bid.team_id} -> {player.player_id}): "
            f"aav={aav_score:.2f} bonus={bonus_score:.2f} gtd={guarantee_score:.2f} "
            f"len={length_score:.2f} team={team_score:.2f} total={total_score:.3f}"
        )

        return ContractAnalysis(
            bid_id=bid.bid_id,
            expected_aav=expected_aav,
            aav_score=aav_score,
            bonus_score=bonus_score,
            guarantee_score=guarantee_score,
            length_score=length_score,
            team_score=team_score,
            raw_score=raw_score,
            desperation_multiplier=multiplier,
            total_score=total_score,
            threshold=self.get_acceptance_threshold(market.current_week),
        )

    # ========================================================================
    # COMPONENT SCORES
    # ========================================================================

    def score_length(self, age: int, years: int) -> float:
        """
        Contract length fit by career stage.

        Young players want long deals, prime players want at least two
        years, veterans prefer one-year deals.
        """
        if age < 26:
            if years >= 3:
                return 1.0
            if years >= 2:
                return 0.7
            return 0.3
        if age < 30:
            if years >= 2:
                return 1.0
            if years >= 1:
                return 0.8
            return 0.4
        if years == 1:
            return 1.0
        if years == 2:
            return 0.6
        return 0.2

    def score_team(self, team_id: str, market: MarketContext) -> float:
        """Team reputation mapped from -1..1 onto 0..1, neutral when unknown."""
        reputation = market.reputation_for(team_id)
        if reputation is None:
            return self.NEUTRAL_TEAM_SCORE
        reputation = max(-1.0, min(1.0, reputation))
        return (reputation + 1.0) / 2.0

    # ========================================================================
    # TIME PRESSURE
    # ========================================================================

    def get_desperation_multiplier(self, week_number: int) -> float:
        for last_week, multiplier in self.DESPERATION_BANDS:
            if week_number <= last_week:
                return multiplier
        return self.MAX_DESPERATION

    def get_acceptance_threshold(self, week_number: int) -> float:
        """Base threshold 0.70 relaxed to 90%, 70%, then 50% as weeks pass."""
        for last_week, factor in self.THRESHOLD_BANDS:
            if week_number <= last_week:
                return self.BASE_THRESHOLD * factor
        return self.BASE_THRESHOLD * self.MIN_THRESHOLD_FACTOR

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _ratio(self, value: float, expected: float) -> float:
        """min(1, value / expected); a non-positive expectation counts as met."""
        if expected <= 0:
            return 1.0
        return min(1.0, value / expected)

    def _index_players(self, players) -> Dict[str, Player]:
        if isinstance(players, Mapping):
            return dict(players)
        return {player.player_id: player for player in players}

    def _group_pending_bids(self, bids: Iterable[Bid]) -> Dict[str, List[Bid]]:
        """Group pending bids by player id in first-seen order."""
        grouped: Dict[str, List[Bid]] = {}
        for bid in bids:
            if not bid.is_pending:
                self.logger.debug(f"Skipping bid {bid.bid_id} with status {bid.status.value}")
                continue
            grouped.setdefault(bid.player_id, []).append(bid)
        return grouped

    def _build_market_factors(
        self,
        player: Player,
        bids: List[Bid],
        market: MarketContext,
        demand: float
    ) -> MarketFactors:
        key = position_key(player.position)
        comparables = [signing for signing in market.recent_signings if signing.position == key]
        pressure = calculate_market_pressure(
            competing_offers=len(bids),
            positional_demand=demand,
            cap_space_available=market.cap_space_available,
            season_stage=market.season_stage,
        )
        return MarketFactors(
            positional_demand=demand,
            market_pressure=pressure,
            competing_bids=len(bids),
            comparable_deals=tuple(comparables[-self.MAX_COMPARABLE_DEALS:]),
        )

    def _calculate_trust_impact(
        self,
        bids_by_id: Dict[str, Bid],
        accepted_bid_id: Optional[str],
        rejected: List[str],
        trust_penalty: float
    ) -> Dict[str, float]:
        """Trust change per team: bonus for the winner, penalty per rejected bid."""
        impact: Dict[str, float] = {}
        if accepted_bid_id:
            team_id = bids_by_id[accepted_bid_id].team_id
            impact[team_id] = impact.get(team_id, 0.0) + self.ACCEPTED_TRUST_BONUS
        for bid_id in rejected:
            team_id = bids_by_id[bid_id].team_id
            impact[team_id] = impact.get(team_id, 0.0) - trust_penalty
        return impact

    def _verify_partition(
        self,
        player_id: str,
        bids: List[Bid],
        accepted_bid_id: Optional[str],
        shortlisted: List[str],
        rejected: List[str]
    ) -> None:
        assigned = ([accepted_bid_id] if accepted_bid_id else []) + shortlisted + rejected
        expected = sorted(bid.bid_id for bid in bids)
        if sorted(assigned) != expected:
            raise EvaluationIntegrityError(
                f"Decision for player {player_id} does not partition its bids: "
                f"assigned {sorted(assigned)}, evaluated {expected}"
            )


# ============================================================================
# BATCH COMMIT HELPERS
# ============================================================================

def collect_status_updates(decisions: Iterable[PlayerDecision]) -> Dict[str, BidStatus]:
    """
    Flatten a batch of decisions into one bid-id -> status map.

    The map is what a host commits in a single transaction.

    Raises:
        EvaluationIntegrityError: If any bid id appears in more than one slot
    """
    updates: Dict[str, BidStatus] = {}
    for decision in decisions:
        for bid_id in decision.evaluated_bid_ids:
            if bid_id in updates:
                raise EvaluationIntegrityError(
                    f"Bid {bid_id} assigned more than once (player {decision.player_id})"
                )
            updates[bid_id] = decision.status_for(bid_id)
    return updates


def apply_decisions(bids: Iterable[Bid], decisions: Iterable[PlayerDecision]) -> List[Bid]:
    """
    New Bid objects with decided statuses applied.

    Bids not covered by any decision are returned unchanged.
    """
    updates = collect_status_updates(decisions)
    return [
        replace(bid, status=updates[bid.bid_id]) if bid.bid_id in updates else bid
        for bid in bids
    ]


_default_evaluator = BidEvaluator()


def evaluate_cycle(
    bids: Iterable[Bid],
    players: Union[Mapping[str, Player], Iterable[Player]],
    market: MarketContext,
    settings: Optional[FreeAgencySettings] = None
) -> List[PlayerDecision]:
    """Evaluate one week's pending bids with the default evaluator."""
    return _default_evaluator.evaluate_cycle(bids, players, market, settings)
