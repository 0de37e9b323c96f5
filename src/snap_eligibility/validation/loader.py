"""
Load household records for batch runs.

One row per household. Multi-line entries (income lines, deductions, shelter
costs) are ``;``-separated in a single cell. Cells are read as text so the
engine sees exactly what was entered, blanks included.

Columns:
    household_id, household_size, has_senior_or_disabled_member,
    receives_disability_benefits, receives_designated_assistance,
    earned_income, unearned_income, deductions, medical_expenses,
    shelter_costs, utility_tier
    expected_benefit, expected_total_income, expected_adjusted_income (optional)
"""

from pathlib import Path
from typing import Union

import pandas as pd

from ..household import HouseholdInput
from ..parameters import UtilityTier

ITEM_SEPARATOR = ";"

ITEM_COLUMNS = {
    "earned_income": "earned_income_items",
    "unearned_income": "unearned_income_items",
    "deductions": "deduction_items",
    "shelter_costs": "shelter_cost_items",
}

FLAG_COLUMNS = (
    "has_senior_or_disabled_member",
    "receives_disability_benefits",
    "receives_designated_assistance",
)

_TRUTHY = {"yes", "y", "true", "t", "1"}


def load_households(csv_path: Union[str, Path]) -> pd.DataFrame:
    """
    Read a household CSV.

    Args:
        csv_path: Path to the CSV file

    Returns:
        DataFrame of text cells, with a household_id column added
        (row number) if the file has none
    """
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    if "household_id" not in df.columns:
        df.insert(0, "household_id", [str(i) for i in range(len(df))])
    if "household_size" not in df.columns:
        raise ValueError(f"{csv_path} has no household_size column")
    return df


def split_items(cell) -> list[str]:
    """Split a ``;``-separated cell into entries; blank cells have none."""
    if cell is None or (isinstance(cell, float) and pd.isna(cell)):
        return []
    text = str(cell).strip()
    if not text:
        return []
    return [part.strip() for part in text.split(ITEM_SEPARATOR)]


def parse_flag(cell) -> bool:
    if isinstance(cell, bool):
        return cell
    if cell is None or (isinstance(cell, float) and pd.isna(cell)):
        return False
    return str(cell).strip().lower() in _TRUTHY


def household_from_row(row) -> HouseholdInput:
    """Build a HouseholdInput from one CSV row (a Series or dict)."""
    household = HouseholdInput(household_size=row.get("household_size", ""))
    for column in FLAG_COLUMNS:
        setattr(household, column, parse_flag(row.get(column)))
    for column, attr in ITEM_COLUMNS.items():
        setattr(household, attr, split_items(row.get(column)))

    medical = row.get("medical_expenses")
    household.medical_expenses = "" if medical is None else medical

    tier = str(row.get("utility_tier") or "").strip()
    if tier:
        household.utility_tier = UtilityTier(tier)
    return household
