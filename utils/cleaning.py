"""
utils/cleaning.py
-----------------
Column cleanup, year extraction and aggregation for the recorded crime
rates file. Pure pandas, no Streamlit or Plotly, so the functions can be
used from the processing scripts and the tests alike.

The result of clean_crime_rates() is one row per (year, borough,
offences) key with the summed number_of_offences.

Import example:
    from utils.cleaning import clean_crime_rates
"""

import re

import pandas as pd

from utils.constants import (
    ALL_OFFENCES_LABEL,
    EXCLUDED_AREAS,
    REQUIRED_COLUMNS,
    YEAR_MAX,
    YEAR_MIN,
    YEAR_PATTERN,
)

KEY_COLUMNS = ["year", "borough", "offences"]


def clean_column_names(df: pd.DataFrame) -> pd.DataFrame:
    """
    Lowercase snake_case column names.

    'Number of Offences' -> 'number_of_offences', 'Borough ' -> 'borough'.
    Any run of characters other than letters and digits becomes one '_'.
    """
    df = df.copy()
    df.columns = [
        re.sub(r"[^0-9a-z]+", "_", str(c).strip().lower()).strip("_")
        for c in df.columns
    ]
    return df


def require_columns(df: pd.DataFrame, required: list = REQUIRED_COLUMNS):
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise KeyError(
            f"Crime rates data is missing columns: {missing}. "
            f"Found: {list(df.columns)}"
        )


def extract_year(df: pd.DataFrame, col: str = "year") -> pd.DataFrame:
    """
    Replace *col* with the 4-digit year found in it, as an int.

    Financial-year labels such as '2003-04' become 2003. Rows whose
    value contains no year between YEAR_MIN and YEAR_MAX are dropped.
    """
    years = df[col].astype(str).str.extract(YEAR_PATTERN, expand=False)
    years = pd.to_numeric(years, errors="coerce")
    keep = years.between(YEAR_MIN, YEAR_MAX)

    out = df.loc[keep].copy()
    out[col] = years[keep].astype("int64")
    return out


def coerce_counts(df: pd.DataFrame, col: str = "number_of_offences") -> pd.DataFrame:
    """
    Cast offence counts to int64.

    Raises ValueError for values that are not numbers, are missing, or
    are negative.
    """
    counts = pd.to_numeric(df[col], errors="raise")
    if counts.isna().any():
        raise ValueError(f"{counts.isna().sum():,} rows have no {col} value.")
    if (counts < 0).any():
        raise ValueError(f"{col} contains negative counts.")

    out = df.copy()
    out[col] = counts.astype("int64")
    return out


def aggregate_offences(df: pd.DataFrame) -> pd.DataFrame:
    """
    Sum number_of_offences per (year, borough, offences).

    Applying this to its own output returns the same frame.
    """
    agg = (
        df.groupby(KEY_COLUMNS, observed=True, as_index=False)["number_of_offences"]
        .sum()
        .sort_values(KEY_COLUMNS)
        .reset_index(drop=True)
    )
    agg["number_of_offences"] = agg["number_of_offences"].astype("int64")
    return agg


def drop_rollups(
    df: pd.DataFrame,
    excluded_areas: set = EXCLUDED_AREAS,
    all_label: str = ALL_OFFENCES_LABEL,
) -> pd.DataFrame:
    """Remove the all-offences total and non-borough geographic totals."""
    mask = (
        (df["offences"].astype(str) != all_label) &
        (~df["borough"].astype(str).isin(excluded_areas))
    )
    out = df.loc[mask].copy()
    for col in ("borough", "offences"):
        if isinstance(out[col].dtype, pd.CategoricalDtype):
            out[col] = out[col].cat.remove_unused_categories()
    return out.reset_index(drop=True)


def clean_crime_rates(raw: pd.DataFrame) -> pd.DataFrame:
    """Full cleaning chain: names, year, counts, aggregation, roll-up removal."""
    df = clean_column_names(raw)
    require_columns(df)

    df = df[REQUIRED_COLUMNS]
    df = extract_year(df)
    df = coerce_counts(df)
    df = aggregate_offences(df)
    df = drop_rollups(df)

    if df.empty:
        raise ValueError(
            "No borough rows left after cleaning. Check the year range "
            f"({YEAR_MIN}-{YEAR_MAX}) and the excluded area names."
        )
    return df
