"""
Full eligibility calculation.

Chains income -> eligibility gate -> deductions -> shelter and benefit,
threading each step's result object into the next. A household that fails
the gross income test stops at the gate.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Optional

from .benefit import ShelterResult, compute_shelter_and_benefit
from .deductions import DeductionResult, compute_adjusted_income
from .eligibility import EligibilityResult, check_eligibility
from .household import HouseholdInput
from .income import IncomeResult, compute_income
from .inputs import round_currency
from .outcome import Outcome, Success
from .parameters import ProgramParameters, get_parameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationResult:
    """
    Every derived figure for one household.

    Built only from a HouseholdInput and ProgramParameters. Fields after the
    eligibility gate are None when the household is not eligible.
    """

    gross_earned_income: float
    net_earned_income: float
    total_unearned_income: float
    total_income: float
    gross_income_limit: float
    automatically_eligible: bool
    above_income_limit: bool
    standard_deduction: Optional[float] = None
    medical_deduction: Optional[float] = None
    total_deduction: Optional[float] = None
    adjusted_income: Optional[float] = None
    total_shelter_cost: Optional[float] = None
    shelter_deduction: Optional[float] = None
    monthly_net_income: Optional[float] = None
    benefit_allotment: Optional[float] = None

    @property
    def eligible(self) -> bool:
        return self.automatically_eligible or not self.above_income_limit

    @property
    def receives_benefit(self) -> bool:
        return self.benefit_allotment is not None and self.benefit_allotment > 0

    @classmethod
    def from_steps(
        cls,
        income: IncomeResult,
        eligibility: EligibilityResult,
        deductions: Optional[DeductionResult] = None,
        shelter: Optional[ShelterResult] = None,
    ) -> "CalculationResult":
        fields: dict[str, Any] = dict(
            gross_earned_income=income.gross_earned_income,
            net_earned_income=income.net_earned_income,
            total_unearned_income=income.total_unearned_income,
            total_income=income.total_income,
            gross_income_limit=eligibility.gross_income_limit,
            automatically_eligible=eligibility.automatically_eligible,
            above_income_limit=eligibility.above_income_limit,
        )
        if deductions is not None:
            fields.update(asdict(deductions))
        if shelter is not None:
            fields.update(
                total_shelter_cost=shelter.total_shelter_cost,
                shelter_deduction=shelter.shelter_deduction,
                monthly_net_income=shelter.monthly_net_income,
                benefit_allotment=shelter.benefit_allotment,
            )
        return cls(**fields)

    def display(self) -> dict[str, Any]:
        """All fields with amounts rounded to whole currency units."""
        out = {}
        for name, value in asdict(self).items():
            if isinstance(value, bool) or value is None:
                out[name] = value
            else:
                out[name] = round_currency(value)
        out["eligible"] = self.eligible
        return out


def calculate(
    household: HouseholdInput,
    params: Optional[ProgramParameters] = None,
) -> Outcome[CalculationResult]:
    """
    Run the whole calculation for a household.

    Args:
        household: Current household entries
        params: Program parameter table (default: the active table)

    Returns:
        Success with a CalculationResult, or the first step's Failure
    """
    params = params or get_parameters()

    income = compute_income(household, params)
    if not income.ok:
        return income

    gate = check_eligibility(household, income.value, params)
    if not gate.ok:
        return gate
    if not gate.value.eligible:
        logger.debug("Household above gross income limit; stopping at eligibility gate")
        return Success(CalculationResult.from_steps(income.value, gate.value))

    deductions = compute_adjusted_income(household, params, income.value)
    if not deductions.ok:
        return deductions

    shelter = compute_shelter_and_benefit(
        household,
        params,
        deductions.value.adjusted_income,
        household.has_senior_or_disabled_member,
    )
    if not shelter.ok:
        return shelter

    result = CalculationResult.from_steps(income.value, gate.value, deductions.value, shelter.value)
    logger.debug("Benefit allotment %.2f", result.benefit_allotment)
    return Success(result)
