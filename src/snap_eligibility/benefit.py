"""
Shelter deduction and benefit allotment.

Shelter costs plus the standard utility allowance, less half of adjusted
income, give the excess shelter deduction. It is capped for households
without a senior or disabled member. The allotment is the maximum benefit
for the household size less 30% of what remains, rounded up.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from .household import HouseholdInput
from .inputs import InputError, sum_amounts
from .outcome import Failure, Outcome, Success
from .parameters import ProgramParameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShelterResult:
    """Shelter costs, the deduction they earn, and the final allotment."""

    utility_allowance: float
    total_shelter_cost: float
    excess_shelter_cost: float
    shelter_deduction: float
    monthly_net_income: float
    benefit_allotment: float


def maximum_benefit(household_size: int, params: ProgramParameters) -> float:
    """Maximum monthly allotment for a household size."""
    return params.maximum_benefit_for(household_size)


def calc_benefit_allotment(
    monthly_net_income: float,
    household_size: int,
    params: ProgramParameters,
) -> float:
    """
    Monthly benefit allotment.

    Args:
        monthly_net_income: Adjusted income after the shelter deduction
        household_size: Number of people in the household
        params: Program parameter table

    Returns:
        Maximum benefit less the rounded-up benefit reduction. Not floored:
        a high net income gives a zero or negative figure, meaning no benefit.
    """
    max_benefit = maximum_benefit(household_size, params)
    if monthly_net_income <= 0:
        return max_benefit
    # Round away float noise first so 30% of $100 is 30, not 31
    reduction = math.ceil(round(params.benefit_reduction_rate * monthly_net_income, 6))
    return max_benefit - reduction


def compute_shelter_and_benefit(
    household: HouseholdInput,
    params: ProgramParameters,
    adjusted_income: float,
    has_senior_or_disabled: Optional[bool] = None,
) -> Outcome[ShelterResult]:
    """
    Compute the shelter deduction, monthly net income and benefit.

    Args:
        household: Current household entries
        params: Program parameter table
        adjusted_income: Adjusted income from the deduction step
        has_senior_or_disabled: Lifts the shelter deduction cap. Defaults to
            the household's own answer.

    Returns:
        Success with a ShelterResult, or Failure naming each bad field
    """
    if has_senior_or_disabled is None:
        has_senior_or_disabled = household.has_senior_or_disabled_member

    errors: list[InputError] = []
    size = None
    try:
        size = household.size()
    except InputError as e:
        errors.append(e)

    costs, item_errors = sum_amounts(household.shelter_cost_items, "shelter_cost", allow_zero=False)
    errors.extend(item_errors)
    if errors:
        logger.debug("Shelter costs rejected: %s", errors[0])
        return Failure.of(*errors)

    utility = params.utility_allowance(household.utility_tier)
    total_shelter = costs + utility
    excess = total_shelter - adjusted_income / 2
    deduction = max(0.0, excess)
    if not has_senior_or_disabled:
        deduction = min(deduction, params.shelter_deduction_cap)

    monthly_net = max(0.0, adjusted_income - deduction)
    result = ShelterResult(
        utility_allowance=utility,
        total_shelter_cost=total_shelter,
        excess_shelter_cost=excess,
        shelter_deduction=deduction,
        monthly_net_income=monthly_net,
        benefit_allotment=calc_benefit_allotment(monthly_net, size, params),
    )
    logger.debug("Shelter and benefit computed: %s", result)
    return Success(result)
