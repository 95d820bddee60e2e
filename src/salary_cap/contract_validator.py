"""
Contract Structure Validation

Structural checks for signed contracts and bid offers. Problems are
reported as a list of human-readable error strings; nothing here raises.
"""

from typing import List


MAX_CONTRACT_YEARS = 7
ROOKIE_CONTRACT_YEARS = 4


def validate_contract(contract) -> List[str]:
    """
    Validate a signed contract's structure.

    Args:
        contract: Contract with start_year, end_year, base_salary,
                  signing_bonus and guarantees

    Returns:
        List of error messages (empty when valid)
    """
    errors: List[str] = []

    if contract.start_year > contract.end_year:
        errors.append("Start year must be before or equal to end year")

    if contract.end_year - contract.start_year + 1 > MAX_CONTRACT_YEARS:
        errors.append(f"Contract cannot exceed {MAX_CONTRACT_YEARS} years")

    if (contract.signing_bonus or 0) < 0:
        errors.append("Signing bonus cannot be negative")

    for year in range(contract.start_year, contract.end_year + 1):
        salary = contract.base_salary.get(year)
        if salary is None or salary < 0:
            errors.append(f"Invalid base salary for year {year}")

    errors.extend(_validate_guarantees(contract.guarantees, contract.start_year, contract.end_year))

    return errors


def validate_offer(offer) -> List[str]:
    """
    Validate bid terms.

    Beyond the signed-contract checks, the salary map must hold exactly
    `years` entries for consecutive seasons.
    """
    errors: List[str] = []

    salary_years = sorted(offer.base_salary)
    if len(salary_years) != offer.years:
        errors.append(
            f"Contract length is {offer.years} years but {len(salary_years)} "
            f"base salary entries were provided"
        )
    elif salary_years and salary_years[-1] - salary_years[0] + 1 != offer.years:
        errors.append("Base salary years must be consecutive")

    if offer.years > MAX_CONTRACT_YEARS:
        errors.append(f"Contract cannot exceed {MAX_CONTRACT_YEARS} years")

    if (offer.signing_bonus or 0) < 0:
        errors.append("Signing bonus cannot be negative")

    for year in salary_years:
        if offer.base_salary[year] < 0:
            errors.append(f"Invalid base salary for year {year}")

    if salary_years:
        errors.extend(_validate_guarantees(offer.guarantees, salary_years[0], salary_years[-1]))

    return errors


def is_rookie_contract(contract) -> bool:
    """Rookie deals run exactly four seasons."""
    return contract.end_year - contract.start_year + 1 == ROOKIE_CONTRACT_YEARS


def _validate_guarantees(guarantees, start_year: int, end_year: int) -> List[str]:
    errors = []
    for index, guarantee in enumerate(guarantees or (), start=1):
        if guarantee.amount < 0:
            errors.append(f"Guarantee {index} amount cannot be negative")
        if guarantee.year < start_year or guarantee.year > end_year:
            errors.append(f"Guarantee {index} year must be within contract period")
    return errors
