"""
01_fetch_crime_rates.py
-----------------------
Downloads the London Datastore "Recorded Crime Rates" CSV and saves
it to data/raw/crime_rates.csv.

An existing raw file is reused; pass --refresh to download again.
Network errors are not retried: fix the connection and rerun.

Run from project root:
    python run_all.py --only 01

or directly, once the project is installed (pip install -e .):
    python processing/01_fetch_crime_rates.py [--refresh]
"""

import argparse
import os

from utils.constants import CRIME_RATES_URL, RAW_PATH
from utils.fetch import download_csv, read_crime_rates


def validate(raw):
    print(f"\n── Validation ───────────────────────────────")
    print(f"  Rows:     {len(raw):,}")
    print(f"  Columns:  {list(raw.columns)}")
    for col in raw.select_dtypes(include="category").columns:
        print(f"  {col}: {raw[col].nunique():,} distinct values")


def main():
    parser = argparse.ArgumentParser(description="Download the recorded crime rates CSV")
    parser.add_argument(
        "--refresh", action="store_true",
        help="Download again even if the raw file already exists"
    )
    args = parser.parse_args()

    print("01_fetch_crime_rates.py")
    print("=" * 50)

    if os.path.exists(RAW_PATH) and not args.refresh:
        print(f"Using existing {RAW_PATH} (pass --refresh to download again)")
    else:
        print(f"Downloading {CRIME_RATES_URL}...")
        content = download_csv(CRIME_RATES_URL, dest=RAW_PATH)
        print(f"  {len(content) / 1024:.0f} KB saved to {RAW_PATH}")

    # Parse now so a broken download fails here, not in script 02
    raw = read_crime_rates(RAW_PATH)
    validate(raw)

    print(f"\n✓ Raw data ready at {RAW_PATH}")


if __name__ == "__main__":
    main()
