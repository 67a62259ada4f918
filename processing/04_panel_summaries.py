"""
04_panel_summaries.py
---------------------
Computes the cognostics for every (borough, offence) panel: trend
slope in offences per year, mean count and interquartile range.

Panels with a single year of data get a NaN slope and are listed.

Output:
    data/processed/panel_cognostics.csv

Run from project root:
    python run_all.py --only 04

or directly, once the project is installed (pip install -e .):
    python processing/04_panel_summaries.py
"""

import os

import pandas as pd

from utils.cognostics import summarise_panels
from utils.constants import COGNOSTICS_PATH, OFFENCES_PATH, REQUIRED_COLUMNS
from utils.helpers import check_required_columns


def main():
    print("04_panel_summaries.py")
    print("=" * 50)

    if not os.path.exists(OFFENCES_PATH):
        raise FileNotFoundError(
            f"{OFFENCES_PATH} not found. Run 02_clean_aggregate.py first."
        )

    records = pd.read_csv(OFFENCES_PATH)
    if check_required_columns(records, REQUIRED_COLUMNS, "borough_offences.csv"):
        raise KeyError(
            f"{OFFENCES_PATH} has the wrong columns. Rerun 02_clean_aggregate.py."
        )
    print(f"  {len(records):,} offence records")

    print("  Summarising panels...")
    summaries = summarise_panels(records, with_charts=False)
    print(f"    ✓ {len(summaries):,} panels")

    undefined = summaries[summaries["slope"].isna()]
    if len(undefined):
        print(f"  WARNING - {len(undefined)} panels have fewer than two years "
              "and no trend:")
        for _, row in undefined.iterrows():
            print(f"    {row['borough']} / {row['offences']}")

    print("\n  Steepest rises:")
    for _, row in summaries.head(5).iterrows():
        print(f"    {row['slope']:+9.2f}  {row['borough']} / {row['offences']}")

    os.makedirs(os.path.dirname(COGNOSTICS_PATH), exist_ok=True)
    summaries.to_csv(COGNOSTICS_PATH, index=False)
    print(f"\n✓ Written to {COGNOSTICS_PATH}")


if __name__ == "__main__":
    main()
