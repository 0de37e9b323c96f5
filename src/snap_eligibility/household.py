"""Household data as entered, before any calculation."""

from dataclasses import dataclass, field

from .inputs import RawValue, parse_household_size
from .parameters import UtilityTier


@dataclass
class HouseholdInput:
    """
    Everything the user has declared so far.

    Amount fields hold the raw entries (text or numbers). They are validated
    by the calculators each time, never here, so an edit is always seen by
    the next calculation.
    """

    household_size: RawValue = 1
    has_senior_or_disabled_member: bool = False
    receives_disability_benefits: bool = False
    receives_designated_assistance: bool = False
    earned_income_items: list[RawValue] = field(default_factory=list)
    unearned_income_items: list[RawValue] = field(default_factory=list)
    deduction_items: list[RawValue] = field(default_factory=list)
    medical_expenses: RawValue = 0
    shelter_cost_items: list[RawValue] = field(default_factory=list)
    utility_tier: UtilityTier = UtilityTier.WITH_HEAT

    def size(self) -> int:
        """Validated household size; raises InputError."""
        return parse_household_size(self.household_size)
