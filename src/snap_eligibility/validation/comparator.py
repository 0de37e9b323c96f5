"""
Comparator: check engine figures against reference figures.

Reference figures are whatever the maintainer trusts for a household: a
caseworker's worksheet, the state's published examples, or last year's
calculator run. A figure matches when it is within a dollar tolerance.
Households the engine rejected, and blank reference cells, are not counted.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import numpy as np
import pandas as pd

from ..parameters import ProgramParameters

logger = logging.getLogger(__name__)

# figure -> (engine column, reference column)
FIGURES = {
    "benefit": ("engine_benefit", "expected_benefit"),
    "total_income": ("engine_total_income", "expected_total_income"),
    "adjusted_income": ("engine_adjusted_income", "expected_adjusted_income"),
}

MISMATCH_COLUMNS = ["household_id", "figure", "engine", "expected", "difference", "pct_difference"]


@dataclass
class ComparisonConfig:
    """Dollar tolerances per figure, and the id column to report."""

    benefit_tolerance: float = 1.0
    total_income_tolerance: float = 1.0
    adjusted_income_tolerance: float = 1.0
    id_col: str = "household_id"

    def tolerance(self, figure: str) -> float:
        return getattr(self, f"{figure}_tolerance")


@dataclass
class ComparisonResults:
    """
    Outcome of one comparison run.

    ``stats`` has one row per figure checked (``compared``, ``matched``,
    ``match_rate``, ``tolerance``). ``mismatches`` has one row per household
    and figure outside tolerance, in ``MISMATCH_COLUMNS``.
    """

    total_households: int
    rejected_households: int
    stats: pd.DataFrame
    mismatches: pd.DataFrame
    full_data: Optional[pd.DataFrame] = None

    @property
    def figures(self) -> list[str]:
        return list(self.stats.index)

    def mismatches_for(self, figure: str) -> pd.DataFrame:
        return self.mismatches[self.mismatches["figure"] == figure]

    def lowest_match_rate(self) -> Optional[float]:
        """Worst match rate over figures that had reference data."""
        checked = self.stats[self.stats["compared"] > 0]
        if checked.empty:
            return None
        return float(checked["match_rate"].min())

    def report(self, worst: int = 5) -> str:
        """Plain-text report: counts, per-figure rates, largest differences."""
        out = [
            "3SquaresVT engine check",
            f"  households: {self.total_households:,}  rejected: {self.rejected_households:,}",
            "",
        ]
        for figure, row in self.stats.iterrows():
            heading = f"{figure.replace('_', ' ')} (tolerance ${row['tolerance']:g})"
            if row["compared"] == 0:
                out.append(f"{heading}: no reference figures")
                continue
            out.append(
                f"{heading}: {int(row['matched'])}/{int(row['compared'])} match "
                f"({row['match_rate']:.1f}%)"
            )
            rows = self.mismatches_for(figure)
            largest = rows["difference"].abs().sort_values(ascending=False).index[:worst]
            for _, m in rows.loc[largest].iterrows():
                out.append(
                    f"  {m['household_id']}: engine {m['engine']:.0f}, "
                    f"expected {m['expected']:.0f} ({m['difference']:+.0f})"
                )
        return "\n".join(out)

    def save(self, output_dir: Union[str, Path]) -> None:
        """Write ``report.txt``, ``households.csv`` and ``mismatches.csv``."""
        output_dir = Path(output_dir)
        output_dir.mkdir(exist_ok=True, parents=True)
        (output_dir / "report.txt").write_text(self.report() + "\n")
        if self.full_data is not None:
            self.full_data.to_csv(output_dir / "households.csv", index=False)
        self.mismatches.to_csv(output_dir / "mismatches.csv", index=False)
        logger.info("Wrote validation results to %s", output_dir)


class Comparator:
    """Compare engine figures with expected figures."""

    def __init__(self, config: Optional[ComparisonConfig] = None):
        self.config = config or ComparisonConfig()

    def compare(self, df: pd.DataFrame) -> ComparisonResults:
        """
        Compare engine and expected figures.

        Args:
            df: Output of ``runners.run_with_expected``. Figures whose engine
                or reference column is absent are left out.

        Returns:
            ComparisonResults
        """
        stats = []
        mismatches = []
        for figure, (engine_col, expected_col) in FIGURES.items():
            if engine_col not in df.columns or expected_col not in df.columns:
                continue
            engine = pd.to_numeric(df[engine_col], errors="coerce")
            expected = pd.to_numeric(df[expected_col], errors="coerce")
            tolerance = self.config.tolerance(figure)

            checked = engine.notna() & expected.notna()
            close = pd.Series(
                np.isclose(engine, expected, atol=tolerance, rtol=0), index=df.index
            )
            compared = int(checked.sum())
            matched = int((checked & close).sum())
            stats.append({
                "figure": figure,
                "compared": compared,
                "matched": matched,
                "match_rate": matched / compared * 100 if compared else np.nan,
                "tolerance": tolerance,
            })

            off = checked & ~close
            if off.any():
                difference = engine[off] - expected[off]
                mismatches.append(pd.DataFrame({
                    "household_id": df.loc[off, self.config.id_col],
                    "figure": figure,
                    "engine": engine[off],
                    "expected": expected[off],
                    "difference": difference,
                    "pct_difference": difference / expected[off].replace(0, np.nan) * 100,
                }))
            logger.debug("%s: %d of %d within $%g", figure, matched, compared, tolerance)

        rejected = int(df["error"].notna().sum()) if "error" in df.columns else 0
        return ComparisonResults(
            total_households=len(df),
            rejected_households=rejected,
            stats=pd.DataFrame(
                stats, columns=["figure", "compared", "matched", "match_rate", "tolerance"]
            ).set_index("figure"),
            mismatches=(
                pd.concat(mismatches, ignore_index=True)
                if mismatches else pd.DataFrame(columns=MISMATCH_COLUMNS)
            ),
            full_data=df,
        )


def validate(
    csv_path: Union[str, Path],
    params: Optional[ProgramParameters] = None,
    output_dir: Optional[Union[str, Path]] = None,
    config: Optional[ComparisonConfig] = None,
    show_progress: bool = True,
) -> ComparisonResults:
    """
    Run the engine over a household CSV and compare it with the CSV's
    ``expected_*`` columns. Results are written to ``output_dir`` if given.
    """
    from .loader import load_households
    from .runners import run_with_expected

    df = load_households(csv_path)
    logger.info("Loaded %s households from %s", f"{len(df):,}", csv_path)

    results = Comparator(config).compare(
        run_with_expected(df, params=params, show_progress=show_progress)
    )
    if output_dir:
        results.save(output_dir)
    return results
