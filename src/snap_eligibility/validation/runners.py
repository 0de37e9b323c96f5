"""
Runners for batch validation: execute the engine on household records.

Each household is run through the full calculation. Rejected households get
an error message and field instead of figures, so one bad row never stops a
batch.
"""

import logging
from typing import Optional

import numpy as np
import pandas as pd
from tqdm import tqdm

from ..engine import calculate
from ..inputs import InputError
from ..parameters import ProgramParameters, get_parameters
from .loader import household_from_row

logger = logging.getLogger(__name__)

ENGINE_COLUMNS = [
    "engine_total_income",
    "engine_gross_income_limit",
    "engine_eligible",
    "engine_adjusted_income",
    "engine_monthly_net_income",
    "engine_benefit_allotment",
    "engine_benefit",
]


def _empty_row(household_id) -> dict:
    row = {"household_id": household_id}
    row.update({col: np.nan for col in ENGINE_COLUMNS})
    row["error"] = None
    row["error_field"] = None
    return row


def run_engine(
    df: pd.DataFrame,
    params: Optional[ProgramParameters] = None,
    show_progress: bool = True,
) -> pd.DataFrame:
    """
    Run the eligibility engine on household records.

    Args:
        df: DataFrame with household data (from load_households)
        params: Program parameter table (default: the active table)
        show_progress: Show progress bar

    Returns:
        DataFrame with household_id, engine_* figures, error and error_field.
        ``engine_benefit`` is what the household would receive: zero when
        ineligible or when the allotment formula goes to zero or below.
    """
    params = params or get_parameters()
    results = []
    iterator = (
        tqdm(df.iterrows(), total=len(df), desc="Engine")
        if show_progress
        else df.iterrows()
    )

    for _, row in iterator:
        out = _empty_row(row["household_id"])
        try:
            household = household_from_row(row)
        except ValueError as e:
            out["error"] = str(e)
            out["error_field"] = "utility_tier"
            results.append(out)
            continue

        outcome = calculate(household, params)
        if not outcome.ok:
            error: InputError = outcome.error
            out["error"] = error.reason
            out["error_field"] = error.field
            results.append(out)
            continue

        result = outcome.value
        out["engine_total_income"] = result.total_income
        out["engine_gross_income_limit"] = result.gross_income_limit
        out["engine_eligible"] = result.eligible
        if result.eligible:
            out["engine_adjusted_income"] = result.adjusted_income
            out["engine_monthly_net_income"] = result.monthly_net_income
            out["engine_benefit_allotment"] = result.benefit_allotment
            out["engine_benefit"] = max(0.0, result.benefit_allotment)
        else:
            out["engine_benefit"] = 0.0
        results.append(out)

    errors = sum(1 for r in results if r["error"])
    if errors:
        logger.warning("%d of %d households were rejected by input validation", errors, len(results))
    return pd.DataFrame(results, columns=["household_id", *ENGINE_COLUMNS, "error", "error_field"])


def run_with_expected(
    df: pd.DataFrame,
    params: Optional[ProgramParameters] = None,
    show_progress: bool = True,
) -> pd.DataFrame:
    """
    Run the engine and join its figures onto the input's expected_* columns.

    Returns:
        DataFrame keyed by household_id with engine_* and numeric expected_*
        columns (blank expectations become NaN)
    """
    engine_df = run_engine(df, params=params, show_progress=show_progress)
    expected_cols = [c for c in df.columns if c.startswith("expected_")]
    expected = df[["household_id", *expected_cols]].copy()
    for col in expected_cols:
        expected[col] = pd.to_numeric(expected[col], errors="coerce")
    return engine_df.merge(expected, on="household_id", how="left")
