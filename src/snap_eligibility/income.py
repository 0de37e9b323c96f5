"""
Income calculator.

Totals earned and unearned income and applies the 20% earned income
disregard. Households with a senior or disabled member are totalled on net
earned income; everyone else on gross. That asymmetry is a program rule.
"""

import logging
from dataclasses import dataclass

from .household import HouseholdInput
from .inputs import sum_amounts
from .outcome import Failure, Outcome, Success
from .parameters import ProgramParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IncomeResult:
    """Monthly income totals, full precision."""

    gross_earned_income: float
    net_earned_income: float
    total_unearned_income: float
    total_income: float

    @property
    def income_before_deductions(self) -> float:
        """Net earned plus unearned income, the base for the deduction step."""
        return self.net_earned_income + self.total_unearned_income


def compute_income(household: HouseholdInput, params: ProgramParameters) -> Outcome[IncomeResult]:
    """
    Compute income totals for a household.

    Args:
        household: Current household entries
        params: Program parameter table

    Returns:
        Success with an IncomeResult, or Failure naming each bad income line
    """
    gross_earned, errors = sum_amounts(household.earned_income_items, "earned_income")
    unearned, unearned_errors = sum_amounts(household.unearned_income_items, "unearned_income")
    errors.extend(unearned_errors)
    if errors:
        logger.debug("Income rejected: %s", errors[0])
        return Failure.of(*errors)

    net_earned = (1 - params.earned_income_disregard) * gross_earned
    if household.has_senior_or_disabled_member:
        total = net_earned + unearned
    else:
        total = gross_earned + unearned

    result = IncomeResult(
        gross_earned_income=gross_earned,
        net_earned_income=net_earned,
        total_unearned_income=unearned,
        total_income=total,
    )
    logger.debug("Income computed: %s", result)
    return Success(result)
