"""Tests for the full calculation chain."""

import pytest

from snap_eligibility.engine import CalculationResult, calculate
from snap_eligibility.household import HouseholdInput
from snap_eligibility.inputs import NotANumberError


def _working_single(**overrides) -> HouseholdInput:
    fields = dict(household_size="1", earned_income_items=["1000"], shelter_cost_items=["400"])
    fields.update(overrides)
    return HouseholdInput(**fields)


class TestCalculate:
    """Tests for calculate()."""

    def test_working_single(self, params):
        """Single earner, $1000 wages, $400 rent."""
        result = calculate(_working_single(), params).unwrap()
        assert result.total_income == 1000
        assert result.gross_income_limit == 1860
        assert result.automatically_eligible is False
        assert result.above_income_limit is False
        assert result.standard_deduction == 160
        assert result.adjusted_income == 640
        assert result.total_shelter_cost == 1208
        assert result.shelter_deduction == 504
        assert result.monthly_net_income == 136
        assert result.benefit_allotment == 151
        assert result.eligible
        assert result.receives_benefit

    def test_senior_household(self, params):
        """Senior household: net earnings, medical deduction, uncapped shelter."""
        household = HouseholdInput(
            household_size="2",
            has_senior_or_disabled_member=True,
            earned_income_items=["500"],
            unearned_income_items=["900"],
            deduction_items=["50"],
            medical_expenses="200",
            shelter_cost_items=["700"],
        )
        result = calculate(household, params).unwrap()
        assert result.total_income == pytest.approx(1300)
        assert result.automatically_eligible is True
        assert result.medical_deduction == 165
        assert result.adjusted_income == 925
        assert result.shelter_deduction == pytest.approx(1045.5)
        assert result.monthly_net_income == 0
        assert result.benefit_allotment == 352

    def test_ineligible_stops_at_gate(self, params):
        """Above the limit and not automatic: no deduction or benefit figures."""
        household = HouseholdInput(household_size="3", unearned_income_items=["3200"])
        result = calculate(household, params).unwrap()
        assert result.eligible is False
        assert result.above_income_limit is True
        assert result.adjusted_income is None
        assert result.benefit_allotment is None
        assert result.receives_benefit is False

    def test_first_failing_step_is_returned(self, params):
        """A bad income line fails before anything else is checked."""
        household = _working_single(earned_income_items=["ten"], shelter_cost_items=["0"])
        outcome = calculate(household, params)
        assert not outcome.ok
        assert isinstance(outcome.error, NotANumberError)
        assert outcome.field == "earned_income[0]"

    def test_shelter_failure(self, params):
        """A bad shelter line fails the chain."""
        outcome = calculate(_working_single(shelter_cost_items=["-5"]), params)
        assert outcome.field == "shelter_cost[0]"

    def test_uses_active_table_by_default(self):
        """Without a table, the active parameter table is used."""
        assert calculate(_working_single()).unwrap().benefit_allotment == 151

    def test_idempotent(self, params):
        """Recalculating unchanged input gives identical output."""
        household = _working_single(unearned_income_items=["123.45"])
        assert calculate(household, params) == calculate(household, params)

    def test_reflects_edits(self, params):
        """Editing the household changes the next calculation."""
        household = _working_single()
        before = calculate(household, params).unwrap()
        household.earned_income_items = ["1500"]
        after = calculate(household, params).unwrap()
        assert before.benefit_allotment == 151
        assert after.benefit_allotment == 31


class TestCalculationResultDisplay:
    """Tests for CalculationResult.display()."""

    def test_whole_dollars(self, params):
        """Amounts are rounded for display; flags and gaps are kept."""
        household = _working_single(earned_income_items=["1000.60"])
        shown = calculate(household, params).unwrap().display()
        assert shown["gross_earned_income"] == 1001
        assert shown["net_earned_income"] == 800
        assert shown["automatically_eligible"] is False
        assert shown["eligible"] is True

    def test_none_kept(self):
        """Fields past the gate stay None."""
        result = CalculationResult(
            gross_earned_income=0,
            net_earned_income=0,
            total_unearned_income=3200,
            total_income=3200,
            gross_income_limit=3149,
            automatically_eligible=False,
            above_income_limit=True,
        )
        shown = result.display()
        assert shown["benefit_allotment"] is None
        assert shown["eligible"] is False
