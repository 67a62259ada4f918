"""
02_clean_aggregate.py
---------------------
Reads data/raw/crime_rates.csv, cleans column names, extracts the
year, sums offences per (year, borough, offence) and removes the
all-offences total and the non-borough roll-ups.

Output:
    data/processed/borough_offences.csv

Run from project root:
    python run_all.py --only 02

or directly, once the project is installed (pip install -e .):
    python processing/02_clean_aggregate.py
"""

import os

from utils.cleaning import clean_column_names, clean_crime_rates, extract_year
from utils.constants import (
    EXCLUDED_AREAS,
    EXPECTED_OFFENCES,
    OFFENCES_PATH,
    RAW_PATH,
)
from utils.fetch import read_crime_rates


def validate(raw, clean_df):
    print(f"\n── Validation ───────────────────────────────")
    print(f"  Total rows:       {len(clean_df):,}")
    print(f"  Year range:       {clean_df['year'].min()} to {clean_df['year'].max()}")
    print(f"  Boroughs:         {clean_df['borough'].nunique()}")
    print(f"  Offence types:    {clean_df['offences'].nunique()}")

    named = clean_column_names(raw)
    dropped_years = len(named) - len(extract_year(named))
    if dropped_years:
        print(f"  WARNING - {dropped_years:,} rows had no year in range and were dropped.")

    leftover = set(clean_df["borough"].astype(str)) & EXCLUDED_AREAS
    if leftover:
        print(f"  WARNING - roll-up areas still present: {leftover}")

    unknown = set(clean_df["offences"].astype(str)) - EXPECTED_OFFENCES
    if unknown:
        print(f"  WARNING - unexpected offence types: {unknown}")
    else:
        print(f"  Offence types:    all expected")

    duplicated = clean_df.duplicated(["year", "borough", "offences"]).sum()
    if duplicated:
        raise ValueError(f"{duplicated:,} duplicate (year, borough, offences) keys after aggregation.")


# ── Main ──────────────────────────────────────────────────────────

def main():
    print("02_clean_aggregate.py")
    print("=" * 50)

    if not os.path.exists(RAW_PATH):
        raise FileNotFoundError(
            f"{RAW_PATH} not found. Run 01_fetch_crime_rates.py first."
        )

    print("Loading raw crime rates...")
    raw = read_crime_rates(RAW_PATH)
    print(f"  {len(raw):,} raw rows loaded")

    print("Cleaning and aggregating...")
    clean_df = clean_crime_rates(raw)
    print(f"  {len(clean_df):,} rows after cleaning")

    validate(raw, clean_df)

    os.makedirs(os.path.dirname(OFFENCES_PATH), exist_ok=True)
    clean_df.to_csv(OFFENCES_PATH, index=False)
    print(f"\n✓ Written to {OFFENCES_PATH}")


if __name__ == "__main__":
    main()
