"""
Validation module: run the eligibility engine over a batch of households and
compare its figures with reference figures.

Use this after every parameter table update: run last year's checked
households (with this year's expected figures) and review the mismatches.
"""

from .comparator import FIGURES, Comparator, ComparisonConfig, ComparisonResults, validate
from .loader import household_from_row, load_households
from .runners import run_engine, run_with_expected

__all__ = [
    "FIGURES",
    "Comparator",
    "ComparisonConfig",
    "ComparisonResults",
    "validate",
    "load_households",
    "household_from_row",
    "run_engine",
    "run_with_expected",
]
