"""
Free Agency System

Weekly sealed-bid free agency for dynasty leagues: bid evaluation, market
pressure and demand, market ripple after signings, and open-FA signings.
"""

from .models import (
    BidStatus,
    SeasonStage,
    MarketTrend,
    MarketImpact,
    LeagueHealth,
    FAPhase,
    Player,
    Guarantee,
    ContractOffer,
    Contract,
    Bid,
    LeagueRosterInfo,
    SigningRecord,
    MarketContext,
    ContractAnalysis,
    MarketFactors,
    PlayerDecision,
    MarketShift,
    LeagueCapContext,
    MarketRippleContext,
    FAWeek,
    OpenFASigning,
)
from .bid_evaluator import (
    BidEvaluator,
    EvaluationIntegrityError,
    apply_decisions,
    collect_status_updates,
    evaluate_cycle,
)
from .market_ripple import (
    EnhancedMinimumCalculator,
    MarketRippleAnalyzer,
    analyze_market_ripple,
    enhanced_minimum,
    record_signing,
)
from .positional_demand import calculate_positional_demand
from .market_pressure import calculate_market_pressure
from .fa_week_manager import FAWeekManager

__all__ = [
    'BidStatus',
    'SeasonStage',
    'MarketTrend',
    'MarketImpact',
    'LeagueHealth',
    'FAPhase',
    'Player',
    'Guarantee',
    'ContractOffer',
    'Contract',
    'Bid',
    'LeagueRosterInfo',
    'SigningRecord',
    'MarketContext',
    'ContractAnalysis',
    'MarketFactors',
    'PlayerDecision',
    'MarketShift',
    'LeagueCapContext',
    'MarketRippleContext',
    'FAWeek',
    'OpenFASigning',
    'BidEvaluator',
    'EvaluationIntegrityError',
    'apply_decisions',
    'collect_status_updates',
    'evaluate_cycle',
    'EnhancedMinimumCalculator',
    'MarketRippleAnalyzer',
    'analyze_market_ripple',
    'enhanced_minimum',
    'record_signing',
    'calculate_positional_demand',
    'calculate_market_pressure',
    'FAWeekManager',
]
