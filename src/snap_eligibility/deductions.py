"""
Deduction calculator.

Adjusted income is net earned plus unearned income, less the standard
deduction, any other claimed deductions and (for households with a senior or
disabled member) the medical deduction, floored at zero.
"""

import logging
from dataclasses import dataclass

from .household import HouseholdInput
from .income import IncomeResult
from .inputs import InputError, parse_positive_number, round_currency, sum_amounts
from .outcome import Failure, Outcome, Success
from .parameters import ProgramParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeductionResult:
    """Deductions and the resulting adjusted income."""

    standard_deduction: float
    medical_deduction: float
    total_deduction: float
    adjusted_income: int


def standard_deduction(household_size: int, params: ProgramParameters) -> float:
    """Standard deduction for a household size; sizes over 6 use the size-6 tier."""
    return params.standard_deduction_for(household_size)


def medical_deduction(medical_expenses: float, params: ProgramParameters) -> float:
    """
    Medical deduction for monthly out-of-pocket medical expenses.

    Expenses from $35 to $173 (inclusive) get the flat medical standard
    deduction. Above $173 the deduction is everything over $35. Below $35
    there is none.
    """
    if params.medical_expense_threshold <= medical_expenses <= params.medical_standard_ceiling:
        return params.medical_standard_deduction
    if medical_expenses > params.medical_standard_ceiling:
        return medical_expenses - params.medical_expense_threshold
    return 0.0


def compute_adjusted_income(
    household: HouseholdInput,
    params: ProgramParameters,
    income: IncomeResult,
) -> Outcome[DeductionResult]:
    """
    Compute deductions and adjusted income.

    Every entered deduction line must be a positive amount. Medical expenses
    are only read for households with a senior or disabled member; a blank
    entry there counts as no expenses.

    Args:
        household: Current household entries
        params: Program parameter table
        income: Result of compute_income for the same entries

    Returns:
        Success with a DeductionResult, or Failure naming each bad field
    """
    errors: list[InputError] = []
    size = None
    try:
        size = household.size()
    except InputError as e:
        errors.append(e)

    claimed, item_errors = sum_amounts(household.deduction_items, "deduction", allow_zero=False)
    errors.extend(item_errors)

    medical = 0.0
    if household.has_senior_or_disabled_member:
        raw = household.medical_expenses
        if raw is not None and not (isinstance(raw, str) and not raw.strip()):
            try:
                expenses = parse_positive_number(raw, field="medical_expenses")
                medical = medical_deduction(expenses, params)
            except InputError as e:
                errors.append(e)

    if errors:
        logger.debug("Deductions rejected: %s", errors[0])
        return Failure.of(*errors)

    standard = standard_deduction(size, params)
    total = standard + claimed + medical
    adjusted = round_currency(max(0.0, income.income_before_deductions - total))

    result = DeductionResult(
        standard_deduction=standard,
        medical_deduction=medical,
        total_deduction=total,
        adjusted_income=adjusted,
    )
    logger.debug("Deductions computed: %s", result)
    return Success(result)
