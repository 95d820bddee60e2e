"""
Tests for CapCalculator

Covers cap hits, bonus proration, dead money, affordability and cap holds.
"""

import pytest

from free_agency.models import Contract, ContractOffer, Guarantee
from salary_cap.cap_calculator import (
    AffordabilityResult,
    CapCalculator,
    DeadMoney,
    can_afford_by_year,
    cap_hit,
    dead_money,
)


@pytest.fixture
def calculator():
    return CapCalculator()


@pytest.fixture
def four_year_contract():
    """4 years 2025-2028, escalating salary, $20M bonus ($5M/year proration)."""
    return Contract(
        contract_id="c1",
        player_id="p1",
        team_id="team1",
        start_year=2025,
        end_year=2028,
        base_salary={2025: 5_000_000, 2026: 6_000_000, 2027: 7_000_000, 2028: 8_000_000},
        signing_bonus=20_000_000,
        guarantees=(Guarantee(5_000_000, 2025), Guarantee(6_000_000, 2026)),
    )


def _flat_contract(contract_id, start_year, end_year, salary, bonus=0, team_id="team1"):
    return Contract(
        contract_id=contract_id,
        player_id=f"player_{contract_id}",
        team_id=team_id,
        start_year=start_year,
        end_year=end_year,
        base_salary={year: salary for year in range(start_year, end_year + 1)},
        signing_bonus=bonus,
    )


class TestCapHit:
    """Per-year cap hit calculation."""

    def test_first_year_includes_proration(self, calculator, four_year_contract):
        assert calculator.calculate_cap_hit(four_year_contract, 2025) == 10_000_000

    def test_final_year_counts(self, calculator, four_year_contract):
        assert calculator.calculate_cap_hit(four_year_contract, 2028) == 13_000_000

    def test_outside_contract_is_zero(self, calculator, four_year_contract):
        assert calculator.calculate_cap_hit(four_year_contract, 2024) == 0
        assert calculator.calculate_cap_hit(four_year_contract, 2029) == 0

    def test_missing_salary_entry_counts_as_zero(self, calculator):
        contract = Contract(
            contract_id="c2", player_id="p2", team_id="team1",
            start_year=2025, end_year=2026,
            base_salary={2025: 4_000_000},
            signing_bonus=2_000_000,
        )
        assert calculator.calculate_cap_hit(contract, 2026) == 1_000_000

    def test_offer_is_accepted(self, calculator):
        offer = ContractOffer(years=2, base_salary={2025: 3_000_000, 2026: 3_000_000}, signing_bonus=1_000_000)
        assert calculator.calculate_cap_hit(offer, 2026) == 3_500_000

    def test_round_trip_without_bonus(self, calculator):
        contract = Contract(
            contract_id="c3", player_id="p3", team_id="team1",
            start_year=2025, end_year=2027,
            base_salary={2025: 1_250_000, 2026: 2_500_000, 2027: 4_000_000},
        )
        total = sum(calculator.calculate_cap_hit(contract, year) for year in range(2025, 2028))
        assert total == sum(contract.base_salary.values())

    def test_module_level_wrapper(self, four_year_contract):
        assert cap_hit(four_year_contract, 2026) == 11_000_000

    def test_cap_hit_by_year(self, calculator, four_year_contract):
        assert calculator.calculate_cap_hit_by_year(four_year_contract) == {
            2025: 10_000_000,
            2026: 11_000_000,
            2027: 12_000_000,
            2028: 13_000_000,
        }


class TestBonusProration:
    """Signing bonus proration with the 5-year maximum."""

    def test_four_year_bonus(self, calculator, four_year_contract):
        assert calculator.calculate_prorated_bonus(four_year_contract) == 5_000_000

    def test_seven_year_bonus_uses_five_years(self, calculator):
        contract = _flat_contract("c7", 2025, 2031, 1_000_000, bonus=35_000_000)
        assert calculator.calculate_prorated_bonus(contract) == 7_000_000

    def test_no_bonus(self, calculator):
        contract = _flat_contract("c0", 2025, 2026, 1_000_000)
        assert calculator.calculate_prorated_bonus(contract) == 0

    def test_remaining_bonus(self, calculator, four_year_contract):
        assert calculator.calculate_remaining_bonus(four_year_contract, 2025) == 15_000_000
        assert calculator.calculate_remaining_bonus(four_year_contract, 2024) == 20_000_000
        assert calculator.calculate_remaining_bonus(four_year_contract, 2030) == 0


class TestDeadMoney:
    """Dead money on release."""

    def test_pre_june_1_accelerates_everything(self, calculator, four_year_contract):
        result = calculator.calculate_dead_money(four_year_contract, 2026, pre_june_1=True)
        assert result == DeadMoney(current_year=15_000_000, next_year=0)

    def test_post_june_1_splits(self, calculator, four_year_contract):
        result = calculator.calculate_dead_money(four_year_contract, 2026, pre_june_1=False)
        assert result.current_year == 5_000_000
        assert result.next_year == 10_000_000
        assert result.total == 15_000_000

    def test_release_in_final_year(self, calculator, four_year_contract):
        result = calculator.calculate_dead_money(four_year_contract, 2028)
        assert result == DeadMoney(current_year=5_000_000, next_year=0)

    @pytest.mark.parametrize("cut_year", [2025, 2026, 2027, 2028])
    @pytest.mark.parametrize("pre_june_1", [True, False])
    def test_next_year_never_negative(self, calculator, cut_year, pre_june_1):
        # Bonus that does not divide evenly by the proration years
        contract = _flat_contract("odd", 2025, 2028, 2_000_000, bonus=10_000_001)
        assert calculator.calculate_dead_money(contract, cut_year, pre_june_1).next_year >= 0

    def test_no_bonus_no_dead_money(self, calculator):
        contract = _flat_contract("c0", 2025, 2027, 3_000_000)
        assert dead_money(contract, 2026).total == 0

    def test_to_dict(self):
        assert DeadMoney(1, 2).to_dict() == {"current_year": 1, "next_year": 2}


class TestAffordability:
    """Checks against a single season's cap."""

    @pytest.fixture
    def existing(self):
        return [
            _flat_contract("a", 2024, 2026, 100_000_000),
            _flat_contract("b", 2023, 2025, 50_000_000),
            _flat_contract("expired", 2022, 2024, 40_000_000),
        ]

    @pytest.fixture
    def new_offer(self):
        return ContractOffer(years=1, base_salary={2025: 10_000_000})

    def test_contract_ending_this_year_counts(self, calculator, existing, new_offer):
        result = calculator.can_afford_by_year("team1", new_offer, existing, 2025, 200_000_000)
        assert result.current_hit == 150_000_000
        assert result.new_hit == 10_000_000
        assert result.remaining_cap == 40_000_000
        assert result.can_afford is True

    def test_over_cap(self, existing, new_offer):
        result = can_afford_by_year("team1", new_offer, existing, 2025, 155_000_000)
        assert result == AffordabilityResult(
            can_afford=False,
            current_hit=150_000_000,
            new_hit=10_000_000,
            remaining_cap=-5_000_000,
        )

    def test_exactly_at_cap_is_affordable(self, calculator, existing, new_offer):
        result = calculator.can_afford_by_year("team1", new_offer, existing, 2025, 160_000_000)
        assert result.can_afford is True
        assert result.remaining_cap == 0


class TestUtilityCalculations:

    def test_guaranteed_money(self, calculator, four_year_contract):
        assert calculator.calculate_guaranteed_money(four_year_contract, 2025) == 5_000_000
        assert calculator.calculate_guaranteed_money(four_year_contract, 2028) == 11_000_000

    def test_cap_hold(self, calculator):
        offer = ContractOffer(
            years=3,
            base_salary={2025: 10_000_000, 2026: 10_000_000, 2027: 10_000_000},
            signing_bonus=6_000_000,
        )
        assert calculator.calculate_cap_hold(offer) == 12_000_000

    def test_team_cap_hit(self, calculator):
        contracts = [
            _flat_contract("a", 2025, 2026, 4_000_000),
            _flat_contract("b", 2026, 2027, 6_000_000),
        ]
        assert calculator.calculate_team_cap_hit(contracts, 2026) == 10_000_000
        assert calculator.calculate_team_cap_hit(contracts, 2025) == 4_000_000
