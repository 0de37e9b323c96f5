"""
snap-eligibility: 3SquaresVT (Vermont SNAP) eligibility and benefit calculator.

The engine is a set of pure functions over a household's entries and a
program parameter table. The table is data: swap it with load_parameters()
or $SNAP_ELIGIBILITY_PARAMETERS when new figures are published.
"""

__version__ = "0.2.0"

from .benefit import calc_benefit_allotment, compute_shelter_and_benefit
from .deductions import compute_adjusted_income, medical_deduction, standard_deduction
from .eligibility import check_eligibility, gross_income_limit, is_automatically_eligible
from .engine import CalculationResult, calculate
from .household import HouseholdInput
from .income import compute_income
from .inputs import (
    EmptyValueError,
    InputError,
    NegativeValueError,
    NotANumberError,
    parse_household_size,
    parse_positive_integer,
    parse_positive_number,
)
from .outcome import Failure, Success
from .parameters import (
    ParameterError,
    ProgramParameters,
    UtilityTier,
    get_parameters,
    load_parameters,
)
from .wizard import Step, Wizard

__all__ = [
    "calculate",
    "CalculationResult",
    "HouseholdInput",
    "compute_income",
    "check_eligibility",
    "gross_income_limit",
    "is_automatically_eligible",
    "compute_adjusted_income",
    "standard_deduction",
    "medical_deduction",
    "compute_shelter_and_benefit",
    "calc_benefit_allotment",
    "parse_positive_number",
    "parse_positive_integer",
    "parse_household_size",
    "InputError",
    "EmptyValueError",
    "NotANumberError",
    "NegativeValueError",
    "Success",
    "Failure",
    "ProgramParameters",
    "ParameterError",
    "UtilityTier",
    "load_parameters",
    "get_parameters",
    "Wizard",
    "Step",
]
