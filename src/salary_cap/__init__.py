"""
Dynasty Salary Cap System

Cap accounting for dynasty fantasy leagues: per-year cap hits, signing bonus
proration, dead money, affordability checks, contract structure validation
and tier-based contract minimums.

Core Components:
- CapCalculator: Mathematical operations for cap calculations
- contract_validator: Structural checks returning error lists
- ContractMinimumCalculator: Player tiers and minimum contract values
"""

from .cap_calculator import (
    CapCalculator,
    DeadMoney,
    AffordabilityResult,
    cap_hit,
    dead_money,
    can_afford_by_year,
)
from .contract_validator import validate_contract, validate_offer, is_rookie_contract
from .contract_minimum import ContractMinimumCalculator, MinimumValidation

__version__ = "1.0.0"

__all__ = [
    "CapCalculator",
    "DeadMoney",
    "AffordabilityResult",
    "cap_hit",
    "dead_money",
    "can_afford_by_year",
    "validate_contract",
    "validate_offer",
    "is_rookie_contract",
    "ContractMinimumCalculator",
    "MinimumValidation",
]
