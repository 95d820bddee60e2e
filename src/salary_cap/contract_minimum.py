"""
Contract Minimum Calculator

Classifies players into value tiers and derives the minimum contract value
a player will entertain, either from the veteran tier scale or from the
rookie scale by draft round. Minimums are percentages of the salary cap so
they scale automatically as the cap grows.

Unknown positions fall back to a neutral 0.5 modifier; nothing here raises
for out-of-range inputs.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional
import logging

from constants.player_tiers import PlayerTier
from constants.positions import position_key


@dataclass(frozen=True)
class MinimumValidation:
    """Result of checking a contract against the player's minimum."""

    is_valid: bool
    minimum_required: int
    current_value: int
    tier: Optional[PlayerTier]
    message: str

    @property
    def shortfall(self) -> int:
        return max(0, self.minimum_required - self.current_value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "minimum_required": self.minimum_required,
            "current_value": self.current_value,
            "tier": self.tier.value if self.tier else None,
            "message": self.message,
        }


class ContractMinimumCalculator:
    """
    Minimum acceptable contract values.

    Formula (veterans):
        minimum = cap * tier_base * age_modifier * position_modifier
    """

    TIER_BASE = {
        PlayerTier.ELITE: 0.20,
        PlayerTier.STARTER: 0.10,
        PlayerTier.DEPTH: 0.03,
    }

    POSITION_MODIFIERS = {
        "QB": 1.0,
        "RB": 0.8,
        "WR": 0.8,
        "TE": 0.6,
        "K": 0.2,
        "DEF": 0.5,
    }
    DEFAULT_POSITION_MODIFIER = 0.5

    # Round -> share of cap. Round 1 is split by pick (see calculate_rookie_minimum)
    ROOKIE_ROUND_PERCENT = {
        2: 0.04,
        3: 0.03,
        4: 0.025,
        5: 0.02,
        6: 0.015,
        7: 0.01,
    }
    ROUND_1_PICK_BANDS = ((8, 0.08), (16, 0.07))
    ROUND_1_LATE_PERCENT = 0.06
    UNDRAFTED_PERCENT = 0.005

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    # ========================================================================
    # TIERING
    # ========================================================================

    def determine_tier(self, overall: int, years_exp: int, position=None) -> PlayerTier:
        """
        Classify a player.

        - Elite: overall >= 85, or a proven veteran (3+ years) at 80+
        - Starter: overall >= 75, or a young player (<= 2 years) at 70+
        - Depth: everyone else

        Position is accepted for interface stability; the table ignores it.
        """
        if overall >= 85 or (years_exp >= 3 and overall >= 80):
            return PlayerTier.ELITE
        if overall >= 75 or (years_exp <= 2 and overall >= 70):
            return PlayerTier.STARTER
        return PlayerTier.DEPTH

    # ========================================================================
    # MODIFIERS
    # ========================================================================

    def get_tier_base(self, tier: PlayerTier) -> float:
        return self.TIER_BASE.get(tier, self.TIER_BASE[PlayerTier.STARTER])

    def get_age_modifier(self, age: int) -> float:
        if age < 24:
            return 0.8
        if age <= 29:
            return 1.0
        if age <= 33:
            return 0.7
        return 0.5

    def get_position_modifier(self, position) -> float:
        return self.POSITION_MODIFIERS.get(position_key(position), self.DEFAULT_POSITION_MODIFIER)

    # ========================================================================
    # MINIMUMS
    # ========================================================================

    def calculate_minimum_contract(
        self,
        tier: PlayerTier,
        age: int,
        position,
        salary_cap: int
    ) -> int:
        """
        Veteran minimum contract value.

        Example:
            Starter WR age 27, $200M cap -> 200M * 0.10 * 1.0 * 0.8 = $16M
        """
        minimum_pct = (
            self.get_tier_base(tier)
            * self.get_age_modifier(age)
            * self.get_position_modifier(position)
        )
        return round(salary_cap * minimum_pct)

    def calculate_rookie_minimum(
        self,
        draft_round: Optional[int],
        salary_cap: int,
        pick_in_round: Optional[int] = None
    ) -> int:
        """
        Rookie scale minimum by draft round.

        Round 1 is banded by pick: 1-8 -> 8%, 9-16 -> 7%, 17+ -> 6%. When the
        pick is unknown a first-rounder is placed in the top band. Anything
        outside rounds 1-7 is treated as undrafted (0.5%).
        """
        if draft_round == 1:
            pick = pick_in_round if pick_in_round is not None else 1
            percentage = self.ROUND_1_LATE_PERCENT
            for last_pick, band_percent in self.ROUND_1_PICK_BANDS:
                if pick <= last_pick:
                    percentage = band_percent
                    break
        else:
            percentage = self.ROOKIE_ROUND_PERCENT.get(draft_round, self.UNDRAFTED_PERCENT)

        return round(salary_cap * percentage)

    def calculate_player_minimum(self, player, salary_cap: int) -> int:
        """Tier-scale minimum for a Player record."""
        tier = self.determine_tier(player.overall, player.years_exp, player.position)
        return self.calculate_minimum_contract(tier, player.age, player.position, salary_cap)

    # ========================================================================
    # VALIDATION
    # ========================================================================

    def validate_contract_minimum(
        self,
        contract,
        player,
        salary_cap: int,
        is_rookie: bool = False,
        draft_round: Optional[int] = None,
        pick_in_round: Optional[int] = None
    ) -> MinimumValidation:
        """
        Check a contract's value against the player's minimum.

        Contract value is the sum of base salaries plus the signing bonus.

        Returns:
            MinimumValidation with a message suitable for surfacing to the
            team when the contract falls short
        """
        tier: Optional[PlayerTier] = None
        if is_rookie and draft_round:
            minimum_required = self.calculate_rookie_minimum(draft_round, salary_cap, pick_in_round)
        else:
            tier = self.determine_tier(player.overall, player.years_exp, player.position)
            minimum_required = self.calculate_minimum_contract(
                tier, player.age, player.position, salary_cap
            )

        current_value = self.calculate_contract_value(contract)
        is_valid = current_value >= minimum_required

        message = ""
        if not is_valid:
            minimum_millions = minimum_required / 1_000_000
            if tier is None:
                message = (
                    f"Rookie contract must be at least ${minimum_millions:.1f}M "
                    f"(Round {draft_round} minimum)"
                )
            else:
                message = (
                    f"{tier.value.capitalize()} {position_key(player.position)} "
                    f"age {player.age} minimum: ${minimum_millions:.1f}M"
                )
            self.logger.debug(f"Contract for {player.player_id} below minimum: {message}")

        return MinimumValidation(
            is_valid=is_valid,
            minimum_required=minimum_required,
            current_value=current_value,
            tier=tier,
            message=message,
        )

    def calculate_contract_value(self, contract) -> int:
        """Sum of base salaries plus signing bonus."""
        base_total = sum(salary or 0 for salary in contract.base_salary.values())
        return base_total + (contract.signing_bonus or 0)
