"""
Step sequencer for the eligibility interview.

Household -> earned income -> unearned income -> eligibility -> deductions
-> shelter costs -> result. Leaving a step runs that step's calculation and
only moves on if it succeeds. Going back never invalidates anything: every
calculation reads the current entries, so rerunning is always safe.
"""

import logging
from dataclasses import fields
from enum import Enum
from typing import Any, Optional

from .benefit import ShelterResult, compute_shelter_and_benefit
from .deductions import DeductionResult, compute_adjusted_income
from .eligibility import EligibilityResult, check_eligibility, is_automatically_eligible
from .engine import CalculationResult
from .household import HouseholdInput
from .income import IncomeResult, compute_income
from .inputs import InputError
from .outcome import Failure, Outcome, Success
from .parameters import ProgramParameters, get_parameters

logger = logging.getLogger(__name__)

_HOUSEHOLD_FIELDS = {f.name for f in fields(HouseholdInput)}


class Step(Enum):
    HOUSEHOLD = 1
    EARNED_INCOME = 2
    UNEARNED_INCOME = 3
    ELIGIBILITY = 4
    DEDUCTIONS = 5
    SHELTER = 6
    RESULT = 7

    @property
    def next(self) -> "Step":
        return Step(min(self.value + 1, Step.RESULT.value))

    @property
    def previous(self) -> "Step":
        return Step(max(self.value - 1, Step.HOUSEHOLD.value))


class Wizard:
    """
    One user's pass through the calculator.

    Usage:
        wizard = Wizard()
        wizard.update(household_size="3", earned_income_items=["1200"])
        outcome = wizard.advance()
        if not outcome.ok:
            show_error(outcome.field, outcome.error)
    """

    def __init__(
        self,
        params: Optional[ProgramParameters] = None,
        household: Optional[HouseholdInput] = None,
    ):
        self.params = params or get_parameters()
        self.household = household or HouseholdInput()
        self.step = Step.HOUSEHOLD
        self.income: Optional[IncomeResult] = None
        self.eligibility: Optional[EligibilityResult] = None
        self.deductions: Optional[DeductionResult] = None
        self.shelter: Optional[ShelterResult] = None

    @property
    def automatically_eligible(self) -> bool:
        return is_automatically_eligible(self.household)

    @property
    def ineligible(self) -> bool:
        """True once the gross income test has been failed."""
        return self.eligibility is not None and not self.eligibility.eligible

    def update(self, **changes: Any) -> None:
        """Edit household entries."""
        unknown = set(changes) - _HOUSEHOLD_FIELDS
        if unknown:
            raise TypeError(f"unknown household fields: {sorted(unknown)}")
        for name, value in changes.items():
            setattr(self.household, name, value)

    def advance(self) -> Outcome:
        """
        Validate the current step and move to the next one.

        Returns:
            The step's outcome. On Failure the wizard stays put and earlier
            results are left as they were. A household that is above the
            gross income limit stays on, or goes back to, the eligibility
            step (the outcome is still a Success).
        """
        outcome = self._run(self.step)
        if not outcome.ok:
            logger.warning("Step %s rejected: %s", self.step.name, outcome.error)
            return outcome

        if self.step is Step.UNEARNED_INCOME:
            # The eligibility step shows the test as soon as it is entered
            gate = self._run(Step.ELIGIBILITY)
            if not gate.ok:
                return gate
        elif self.step.value >= Step.ELIGIBILITY.value and self.ineligible:
            logger.info("Household is above the gross income limit")
            self.step = Step.ELIGIBILITY
            return outcome

        self.step = self.step.next
        return outcome

    def back(self) -> Step:
        self.step = self.step.previous
        return self.step

    def recalculate(self) -> Outcome:
        """Rerun the chain up to the last step passed, from the current entries."""
        if self.step is Step.HOUSEHOLD:
            return Success(None)
        return self._run(self.step.previous)

    def result(self) -> Optional[CalculationResult]:
        """Figures published so far, or None before income is known."""
        if self.income is None or self.eligibility is None:
            return None
        if self.ineligible:
            return CalculationResult.from_steps(self.income, self.eligibility)
        return CalculationResult.from_steps(self.income, self.eligibility, self.deductions, self.shelter)

    def _run(self, step: Step) -> Outcome:
        """
        Run the chain from income up to ``step`` on the current entries.

        Each result is published as soon as its own calculation succeeds, so a
        failure further along leaves the earlier figures current and the later
        ones as they were.
        """
        if step is Step.HOUSEHOLD:
            try:
                return Success(self.household.size())
            except InputError as e:
                return Failure.of(e)

        income = compute_income(self.household, self.params)
        if not income.ok:
            return income
        self.income = income.value
        if step in (Step.EARNED_INCOME, Step.UNEARNED_INCOME):
            return income

        gate = check_eligibility(self.household, self.income, self.params)
        if not gate.ok:
            return gate
        self.eligibility = gate.value
        if step is Step.ELIGIBILITY or self.ineligible:
            return gate

        deductions = compute_adjusted_income(self.household, self.params, self.income)
        if not deductions.ok:
            return deductions
        self.deductions = deductions.value
        if step is Step.DEDUCTIONS:
            return deductions

        shelter = compute_shelter_and_benefit(
            self.household,
            self.params,
            self.deductions.adjusted_income,
            self.household.has_senior_or_disabled_member,
        )
        if not shelter.ok:
            return shelter
        self.shelter = shelter.value
        if step is Step.SHELTER:
            return shelter

        return Success(self.result())
