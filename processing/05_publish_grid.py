"""
05_publish_grid.py
------------------
Builds the interactive panel grid: one line + point chart per
(borough, offence) with its cognostics, sorted by trend slope
(steepest rise first) and written as static files.

Output folder:
    site/trellis/   index.html, grid.js, panels.js, panels.json,
                    cognostics.csv, plotly.min.js

Run from project root:
    python run_all.py --only 05

or directly, once the project is installed (pip install -e .):
    python processing/05_publish_grid.py [--nrow 2] [--ncol 3]
"""

import argparse
import os

import pandas as pd

from utils.cognostics import summarise_panels
from utils.constants import (
    DEFAULT_THEME,
    GRID_NCOL,
    GRID_NROW,
    OFFENCES_PATH,
    REQUIRED_COLUMNS,
    TRELLIS_DIR,
)
from utils.helpers import check_required_columns
from utils.trellis import publish_grid


def main():
    parser = argparse.ArgumentParser(description="Publish the interactive panel grid")
    parser.add_argument("--nrow", type=int, default=GRID_NROW, help="Panel rows per page")
    parser.add_argument("--ncol", type=int, default=GRID_NCOL, help="Panel columns per page")
    args = parser.parse_args()

    print("05_publish_grid.py")
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

    print("  Building panel charts...")
    summaries = summarise_panels(records, DEFAULT_THEME, with_charts=True)
    print(f"    ✓ {len(summaries):,} panels")

    print(f"  Writing {args.nrow}x{args.ncol} grid to {TRELLIS_DIR}...")
    written = publish_grid(
        summaries, TRELLIS_DIR, nrow=args.nrow, ncol=args.ncol, theme=DEFAULT_THEME,
    )
    for name, path in written.items():
        print(f"    ✓ {name}  ({os.path.getsize(path) / 1024:,.0f} KB)")

    print(f"\n✓ Grid published to {TRELLIS_DIR}/index.html")


if __name__ == "__main__":
    main()
