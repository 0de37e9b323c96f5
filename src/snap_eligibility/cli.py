"""
Command-line interface for snap-eligibility.

Usage:
    snap-eligibility calculate --household-size 2 --earned 1200 --shelter 650
    snap-eligibility params [--params table.json]
    snap-eligibility interview
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .engine import CalculationResult, calculate
from .household import HouseholdInput
from .parameters import ParameterError, UtilityTier, load_parameters
from .wizard import Step, Wizard

REPORT_LINES = [
    ("gross_earned_income", "Gross earned income"),
    ("net_earned_income", "Net earned income"),
    ("total_unearned_income", "Unearned income"),
    ("total_income", "Total income"),
    ("gross_income_limit", "Gross income limit"),
    ("standard_deduction", "Standard deduction"),
    ("medical_deduction", "Medical deduction"),
    ("total_deduction", "Total deductions"),
    ("adjusted_income", "Adjusted income"),
    ("total_shelter_cost", "Total shelter costs"),
    ("shelter_deduction", "Shelter deduction"),
    ("monthly_net_income", "Monthly net income"),
    ("benefit_allotment", "Benefit allotment"),
]


def format_report(result: CalculationResult) -> str:
    """Whole-dollar summary of a calculation."""
    shown = result.display()
    lines = []
    for name, label in REPORT_LINES:
        if shown[name] is not None:
            lines.append(f"{label + ':':<24}${shown[name]:,}")
    if result.automatically_eligible:
        lines.append("Automatically eligible (gross income test does not apply).")
    elif not result.eligible:
        lines.append("Total income is above the gross income limit: not eligible.")
    if result.eligible and not result.receives_benefit:
        lines.append("Net income is too high for a monthly benefit.")
    return "\n".join(lines)


def _add_household_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--household-size",
        default="1",
        help="Number of people in the household (default: 1)",
    )
    parser.add_argument(
        "--senior",
        action="store_true",
        help="Household has a member who is 60 or older or disabled",
    )
    parser.add_argument(
        "--disability-benefits",
        action="store_true",
        help="Household receives disability benefits",
    )
    parser.add_argument(
        "--assistance",
        action="store_true",
        help="Household takes part in a designated assistance program",
    )
    parser.add_argument("--earned", action="append", default=[], metavar="AMOUNT",
                        help="Monthly earned income line (repeatable)")
    parser.add_argument("--unearned", action="append", default=[], metavar="AMOUNT",
                        help="Monthly unearned income line (repeatable)")
    parser.add_argument("--deduction", action="append", default=[], metavar="AMOUNT",
                        help="Other monthly deduction, e.g. dependent care (repeatable)")
    parser.add_argument("--medical", default="0", metavar="AMOUNT",
                        help="Monthly out-of-pocket medical expenses (senior/disabled only)")
    parser.add_argument("--shelter", action="append", default=[], metavar="AMOUNT",
                        help="Monthly shelter cost, e.g. rent or property tax (repeatable)")
    parser.add_argument(
        "--utility",
        choices=[t.value for t in UtilityTier],
        default=UtilityTier.WITH_HEAT.value,
        help="Standard utility allowance tier (default: with_heat)",
    )


def _household_from_args(args) -> HouseholdInput:
    return HouseholdInput(
        household_size=args.household_size,
        has_senior_or_disabled_member=args.senior,
        receives_disability_benefits=args.disability_benefits,
        receives_designated_assistance=args.assistance,
        earned_income_items=args.earned,
        unearned_income_items=args.unearned,
        deduction_items=args.deduction,
        medical_expenses=args.medical,
        shelter_cost_items=args.shelter,
        utility_tier=UtilityTier(args.utility),
    )


def _ask(prompt: str) -> str:
    return input(prompt).strip()


def _ask_yes_no(prompt: str) -> bool:
    return _ask(f"{prompt} [y/N] ").lower() in ("y", "yes")


def _ask_items(prompt: str) -> list[str]:
    print(f"{prompt} (one amount per line, blank line to finish)")
    items = []
    while True:
        line = _ask("  $")
        if not line:
            return items
        items.append(line)


def run_interview(wizard: Wizard) -> int:
    """Walk through the steps on stdin/stdout. Returns an exit code."""
    while True:
        step = wizard.step
        if step is Step.HOUSEHOLD:
            wizard.update(
                household_size=_ask("How many people are in your household? "),
                has_senior_or_disabled_member=_ask_yes_no(
                    "Is anyone 60 or older, or disabled?"
                ),
                receives_disability_benefits=_ask_yes_no(
                    "Does anyone receive disability benefits?"
                ),
                receives_designated_assistance=_ask_yes_no(
                    "Does the household receive Reach Up or other designated assistance?"
                ),
            )
        elif step is Step.EARNED_INCOME:
            wizard.update(earned_income_items=_ask_items("Monthly earned income before taxes"))
        elif step is Step.UNEARNED_INCOME:
            wizard.update(unearned_income_items=_ask_items("Monthly unearned income"))
        elif step is Step.ELIGIBILITY:
            gate = wizard.eligibility
            if gate.automatically_eligible:
                print("Your household is automatically eligible for the income test.")
            else:
                above = "above" if gate.above_income_limit else "below"
                print(
                    f"Your total income of ${wizard.income.total_income:,.0f} is {above} "
                    f"the limit of ${gate.gross_income_limit:,.0f}."
                )
            if wizard.ineligible:
                print("You are not eligible for 3SquaresVT.")
                return 0
        elif step is Step.DEDUCTIONS:
            wizard.update(deduction_items=_ask_items("Other monthly deductions"))
            if wizard.household.has_senior_or_disabled_member:
                wizard.update(medical_expenses=_ask("Monthly out-of-pocket medical expenses: $"))
        elif step is Step.SHELTER:
            wizard.update(shelter_cost_items=_ask_items("Monthly shelter costs"))
        else:
            print()
            print(format_report(wizard.result()))
            return 0

        outcome = wizard.advance()
        if not outcome.ok:
            print(f"Error: {outcome.error}")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="snap-eligibility",
        description="Estimate 3SquaresVT (SNAP) eligibility and monthly benefit",
    )
    parser.add_argument(
        "--params",
        type=Path,
        help="Parameter table (JSON or YAML, default: bundled table)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Calculate command
    calc_parser = subparsers.add_parser(
        "calculate",
        help="Calculate eligibility and benefit for one household",
    )
    _add_household_arguments(calc_parser)
    calc_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )

    # Params command
    subparsers.add_parser(
        "params",
        help="Show the active parameter table",
    )

    # Interview command
    subparsers.add_parser(
        "interview",
        help="Answer the calculator's questions step by step",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.params and not args.params.exists():
        print(f"Error: {args.params} not found", file=sys.stderr)
        sys.exit(1)
    try:
        params = load_parameters(args.params)
    except ParameterError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.command == "calculate":
        outcome = calculate(_household_from_args(args), params)
        if not outcome.ok:
            for error in outcome.errors:
                print(f"Error: {error}", file=sys.stderr)
            sys.exit(1)
        if args.json:
            print(json.dumps(outcome.value.display(), indent=2))
        else:
            print(format_report(outcome.value))

    elif args.command == "params":
        print(json.dumps(params.to_dict(), indent=2))

    elif args.command == "interview":
        try:
            code = run_interview(Wizard(params=params))
        except (EOFError, KeyboardInterrupt):
            print("\nAborted.", file=sys.stderr)
            code = 1
        sys.exit(code)


if __name__ == "__main__":
    main()
