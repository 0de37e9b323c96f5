"""
Eligibility gate.

A household is automatically eligible when it has a senior or disabled
member, receives disability benefits, or takes part in a designated
assistance program. Otherwise its total income must not exceed the gross
income limit for its size.
"""

import logging
from dataclasses import dataclass

from .household import HouseholdInput
from .income import IncomeResult
from .inputs import InputError
from .outcome import Failure, Outcome, Success
from .parameters import ProgramParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EligibilityResult:
    """Outcome of the gross income test."""

    gross_income_limit: float
    automatically_eligible: bool
    above_income_limit: bool

    @property
    def eligible(self) -> bool:
        return self.automatically_eligible or not self.above_income_limit


def is_automatically_eligible(household: HouseholdInput) -> bool:
    """Categorical eligibility from the household's current answers."""
    return bool(
        household.has_senior_or_disabled_member
        or household.receives_disability_benefits
        or household.receives_designated_assistance
    )


def gross_income_limit(household_size: int, params: ProgramParameters) -> float:
    """Gross monthly income limit for a household size."""
    return params.gross_income_limit_for(household_size)


def check_eligibility(
    household: HouseholdInput,
    income: IncomeResult,
    params: ProgramParameters,
) -> Outcome[EligibilityResult]:
    """
    Apply the gross income test.

    Args:
        household: Current household entries
        income: Result of compute_income for the same entries
        params: Program parameter table

    Returns:
        Success with an EligibilityResult, or Failure if the household size
        is invalid
    """
    try:
        size = household.size()
    except InputError as e:
        return Failure.of(e)

    limit = gross_income_limit(size, params)
    result = EligibilityResult(
        gross_income_limit=limit,
        automatically_eligible=is_automatically_eligible(household),
        above_income_limit=income.total_income > limit,
    )
    logger.debug(
        "Eligibility for household of %d: income %.2f, limit %.2f, automatic=%s",
        size,
        income.total_income,
        limit,
        result.automatically_eligible,
    )
    return Success(result)
