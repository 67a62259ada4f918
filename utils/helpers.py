"""
utils/helpers.py
----------------
Small general-purpose helper functions used across sections.
These are pure Python with no Streamlit or Plotly dependencies
so they can also be used safely inside processing scripts.

Import example:
    from utils.helpers import borough_totals, fmt_slope, fmt_count
"""

import pandas as pd


# ── DataFrame helpers ─────────────────────────────────────────────


def borough_totals(records: pd.DataFrame, year: int) -> pd.DataFrame:
    """
    Total offences per borough for one year, largest first.

    Args:
        records: Clean offence records (year, borough, offences,
                 number_of_offences).
        year:    Year to total.
    """
    one_year = records[records["year"] == year]
    return (
        one_year.groupby("borough", observed=True, as_index=False)["number_of_offences"]
        .sum()
        .sort_values("number_of_offences", ascending=False)
        .reset_index(drop=True)
    )


def pct_change(before: float, after: float) -> float:
    """Percentage change, NaN when the starting value is zero."""
    if not before:
        return float("nan")
    return round((after - before) / before * 100, 1)


def steepest_panels(cognostics: pd.DataFrame) -> tuple:
    """
    The panels with the largest and smallest defined slope.

    Returns (rising, falling) rows, or (None, None) when no panel has
    enough years for a slope.
    """
    defined = cognostics.dropna(subset=["slope"])
    if defined.empty:
        return None, None
    return defined.nlargest(1, "slope").iloc[0], defined.nsmallest(1, "slope").iloc[0]


# ── Formatting helpers ────────────────────────────────────────────

def fmt_pct(value: float, sign: bool = True, decimals: int = 0) -> str:
    """
    Format a float as a percentage string.

    Returns e.g. '+53%', '-18.5%', '7.1%'.
    """
    fmt = f"+.{decimals}f" if sign else f".{decimals}f"
    return f"{value:{fmt}}%"


def fmt_count(value: float | int) -> str:
    """Format a number with thousands separator."""
    return f"{int(value):,}"


def fmt_slope(value: float) -> str:
    """Signed trend with two decimals; 'n/a' when undefined."""
    if value is None or pd.isna(value):
        return "n/a"
    return f"{value:+,.2f}"


# ── Validation helpers ────────────────────────────────────────────

def check_required_columns(
    df: pd.DataFrame,
    required: list[str],
    label: str = "DataFrame",
) -> list[str]:
    """
    Check that all required columns are present.

    Returns a list of missing column names (empty list if all present).
    Useful for giving clear error messages in processing scripts.
    """
    missing = [c for c in required if c not in df.columns]
    if missing:
        print(f"  WARNING [{label}]: missing columns: {missing}")
    return missing
