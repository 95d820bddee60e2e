"""
Salary Cap Calculator

Core mathematical operations for dynasty-league salary cap accounting:
- Per-year cap hits (base salary + prorated signing bonus)
- Signing bonus proration (5-year max rule)
- Dead money on release, with June 1 designation splits
- Affordability checks against all contracts active in a year
- Cap holds for pending free agency bids

All methods are pure. Contracts are read through their start_year, end_year,
base_salary, signing_bonus and guarantees attributes, so both Contract and
ContractOffer work. A missing base salary entry for an in-range year counts
as zero so aggregation over malformed contracts stays total.
"""

from dataclasses import dataclass
from typing import Dict, Any, Iterable, Optional
import logging


@dataclass(frozen=True)
class DeadMoney:
    """Dead money split between the release year and the following year."""

    current_year: int
    next_year: int

    @property
    def total(self) -> int:
        return self.current_year + self.next_year

    def to_dict(self) -> Dict[str, int]:
        return {"current_year": self.current_year, "next_year": self.next_year}


@dataclass(frozen=True)
class AffordabilityResult:
    """Outcome of checking a new contract against a team's books for one year."""

    can_afford: bool
    current_hit: int
    new_hit: int
    remaining_cap: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "can_afford": self.can_afford,
            "current_hit": self.current_hit,
            "new_hit": self.new_hit,
            "remaining_cap": self.remaining_cap,
        }


class CapCalculator:
    """
    Salary cap calculation engine.

    Key Rules:
    - Signing bonus prorates over the contract length, 5 years maximum
    - A contract counts against the cap for every year from start_year
      through end_year inclusive
    - Pre-June 1 releases accelerate all remaining bonus into the current year
    """

    MAX_PRORATION_YEARS = 5

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    # ========================================================================
    # CAP HITS
    # ========================================================================

    def calculate_cap_hit(self, contract, year: int) -> int:
        """
        Cap hit for a contract in one season.

        Args:
            contract: Contract or ContractOffer
            year: Season year

        Returns:
            Base salary for the year plus prorated signing bonus, or 0 when the
            year falls outside the contract
        """
        start_year, end_year = self._span(contract)
        if year < start_year or year > end_year:
            return 0

        base_salary = contract.base_salary.get(year, 0) or 0
        return base_salary + self.calculate_prorated_bonus(contract, year)

    def calculate_prorated_bonus(self, contract, year: Optional[int] = None) -> int:
        """
        Annual signing bonus proration.

        Examples:
            - 4-year, $20M bonus -> $5M/year
            - 7-year, $35M bonus -> $7M/year ($35M / 5 years, NOT 7)

        The year argument is accepted for symmetry with calculate_cap_hit;
        proration is flat across the proration window.
        """
        signing_bonus = contract.signing_bonus or 0
        if signing_bonus <= 0:
            return 0

        proration_years = min(self._length(contract), self.MAX_PRORATION_YEARS)
        return signing_bonus // proration_years

    def calculate_remaining_bonus(self, contract, through_year: int) -> int:
        """
        Signing bonus not yet amortized after through_year has been charged.

        Returns:
            Remaining bonus, never negative
        """
        signing_bonus = contract.signing_bonus or 0
        if signing_bonus <= 0:
            return 0

        start_year, _ = self._span(contract)
        annual_proration = self.calculate_prorated_bonus(contract)
        years_elapsed = max(0, through_year - start_year + 1)
        prorated_so_far = annual_proration * years_elapsed

        return max(0, signing_bonus - prorated_so_far)

    def calculate_team_cap_hit(self, contracts: Iterable, year: int) -> int:
        """Total cap hit of every contract active in a season."""
        return sum(
            self.calculate_cap_hit(contract, year)
            for contract in contracts
            if self._is_active(contract, year)
        )

    # ========================================================================
    # DEAD MONEY
    # ========================================================================

    def calculate_dead_money(
        self,
        contract,
        cut_year: int,
        pre_june_1: bool = False
    ) -> DeadMoney:
        """
        Dead money cap charge from releasing a player.

        Args:
            contract: Contract being terminated
            cut_year: Season in which the release happens
            pre_june_1: Release before June 1

        Returns:
            DeadMoney(current_year, next_year)

        Notes:
            - Pre-June 1: the whole unamortized bonus hits the current year
            - Post-June 1: the current year keeps its normal proration, the
              rest accelerates into next year
        """
        remaining_bonus = self.calculate_remaining_bonus(contract, cut_year - 1)

        if pre_june_1:
            return DeadMoney(current_year=remaining_bonus, next_year=0)

        current_year_proration = self.calculate_prorated_bonus(contract, cut_year)
        next_year_acceleration = remaining_bonus - current_year_proration

        return DeadMoney(
            current_year=current_year_proration,
            next_year=max(0, next_year_acceleration),
        )

    # ========================================================================
    # AFFORDABILITY
    # ========================================================================

    def can_afford_by_year(
        self,
        team_id: str,
        new_contract,
        existing_contracts: Iterable,
        year: int,
        salary_cap: int
    ) -> AffordabilityResult:
        """
        Check whether a team fits a new contract under the cap for one season.

        Args:
            team_id: Team taking on the contract
            new_contract: Candidate Contract or ContractOffer
            existing_contracts: Contracts already on the team's books
            year: Season being checked
            salary_cap: Cap ceiling for that season

        Returns:
            AffordabilityResult with current and new hits and remaining cap
            (negative when over the cap)
        """
        current_hit = self.calculate_team_cap_hit(existing_contracts, year)
        new_hit = self.calculate_cap_hit(new_contract, year)
        total_hit = current_hit + new_hit
        remaining_cap = salary_cap - total_hit

        can_afford = total_hit <= salary_cap
        if not can_afford:
            self.logger.debug(
                f"Team {team_id} over {year} cap by ${abs(remaining_cap):,} "
                f"(current ${current_hit:,} + new ${new_hit:,})"
            )

        return AffordabilityResult(
            can_afford=can_afford,
            current_hit=current_hit,
            new_hit=new_hit,
            remaining_cap=remaining_cap,
        )

    # ========================================================================
    # UTILITY CALCULATIONS
    # ========================================================================

    def calculate_guaranteed_money(self, contract, through_year: int) -> int:
        """Guaranteed money vested in years up to and including through_year."""
        return sum(
            guarantee.amount
            for guarantee in (contract.guarantees or ())
            if guarantee.year <= through_year
        )

    def calculate_cap_hold(self, offer) -> int:
        """
        Cap reserved while a bid is pending.

        The hold is the first contract year's base salary plus one year of
        signing bonus proration.
        """
        if not offer.base_salary:
            return self.calculate_prorated_bonus(offer)

        first_year = min(offer.base_salary)
        return (offer.base_salary.get(first_year, 0) or 0) + self.calculate_prorated_bonus(offer)

    def calculate_cap_hit_by_year(self, contract) -> Dict[int, int]:
        """Cap hit for every season of a contract."""
        start_year, end_year = self._span(contract)
        return {
            year: self.calculate_cap_hit(contract, year)
            for year in range(start_year, end_year + 1)
        }

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _span(self, contract):
        """(start_year, end_year) for a Contract or ContractOffer."""
        return contract.start_year, contract.end_year

    def _length(self, contract) -> int:
        start_year, end_year = self._span(contract)
        return max(1, end_year - start_year + 1)

    def _is_active(self, contract, year: int) -> bool:
        start_year, end_year = self._span(contract)
        return start_year <= year <= end_year


_default_calculator = CapCalculator()


def cap_hit(contract, year: int) -> int:
    """Cap hit for a contract in one season."""
    return _default_calculator.calculate_cap_hit(contract, year)


def dead_money(contract, cut_year: int, pre_june_1: bool = False) -> DeadMoney:
    """Dead money from releasing a contract in cut_year."""
    return _default_calculator.calculate_dead_money(contract, cut_year, pre_june_1)


def can_afford_by_year(
    team_id: str,
    new_contract,
    existing_contracts: Iterable,
    year: int,
    salary_cap: int
) -> AffordabilityResult:
    """Whether a team fits a new contract under the cap for one season."""
    return _default_calculator.can_afford_by_year(
        team_id, new_contract, existing_contracts, year, salary_cap
    )
