"""
CLI for running the validation pipeline.

Usage:
    python -m snap_eligibility.validation.cli households.csv [options]
    snap-eligibility-validate households.csv [options]  # if installed

Examples:
    # Check a worksheet export against the bundled parameter table
    snap-eligibility-validate households.csv --output-dir out/

    # Check next year's table before publishing it
    snap-eligibility-validate households.csv --params fy2026.json
"""

import argparse
import logging
import sys
from pathlib import Path

from ..parameters import ParameterError, load_parameters
from .comparator import ComparisonConfig, validate


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="snap-eligibility-validate",
        description="Validate the eligibility engine against reference figures",
    )

    parser.add_argument(
        "csv_path",
        type=Path,
        help="Household CSV with expected_* columns",
    )

    parser.add_argument(
        "--params",
        type=Path,
        help="Parameter table (JSON or YAML, default: bundled table)",
    )

    parser.add_argument(
        "--output-dir",
        type=str,
        help="Directory to save results",
    )

    # Tolerance overrides
    parser.add_argument(
        "--benefit-tolerance",
        type=float,
        default=1.0,
        help="Benefit tolerance in dollars (default: 1)",
    )

    parser.add_argument(
        "--income-tolerance",
        type=float,
        default=1.0,
        help="Total and adjusted income tolerance in dollars (default: 1)",
    )

    parser.add_argument(
        "--min-match-rate",
        type=float,
        default=100.0,
        help="Exit 1 if any variable matches below this percentage (default: 100)",
    )

    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the progress bar",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.csv_path.exists():
        print(f"Error: {args.csv_path} not found", file=sys.stderr)
        sys.exit(1)

    config = ComparisonConfig(
        benefit_tolerance=args.benefit_tolerance,
        total_income_tolerance=args.income_tolerance,
        adjusted_income_tolerance=args.income_tolerance,
    )

    try:
        params = load_parameters(args.params)
        results = validate(
            args.csv_path,
            params=params,
            output_dir=args.output_dir,
            config=config,
            show_progress=not args.no_progress,
        )
    except (OSError, ParameterError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(results.report())

    lowest = results.lowest_match_rate()
    if lowest is not None and lowest < args.min_match_rate:
        print(f"\nWarning: Lowest match rate is {lowest:.1f}%")
        sys.exit(1)


if __name__ == "__main__":
    main()
