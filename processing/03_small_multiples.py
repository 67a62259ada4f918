"""
03_small_multiples.py
---------------------
Builds the static small-multiples chart: one panel per borough, one
line per offence type, free y-scale per panel.

Outputs:
    data/processed/borough_small_multiples.html  — standalone figure
    data/processed/borough_small_multiples.json  — Plotly JSON for the article

Run from project root:
    python run_all.py --only 03

or directly, once the project is installed (pip install -e .):
    python processing/03_small_multiples.py
"""

import os

import pandas as pd

from utils.charts import small_multiples_chart
from utils.constants import (
    DEFAULT_THEME,
    OFFENCES_PATH,
    REQUIRED_COLUMNS,
    SMALL_MULT_HTML,
    SMALL_MULT_JSON,
    SMALL_MULTIPLES_COLS,
)
from utils.helpers import check_required_columns


def main():
    print("03_small_multiples.py")
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

    print(f"  Building {records['borough'].nunique()} panels, "
          f"{SMALL_MULTIPLES_COLS} per row...")
    fig = small_multiples_chart(records, DEFAULT_THEME, ncols=SMALL_MULTIPLES_COLS)

    os.makedirs(os.path.dirname(SMALL_MULT_HTML), exist_ok=True)
    fig.write_html(SMALL_MULT_HTML, include_plotlyjs="cdn", full_html=True)
    print(f"    ✓ {SMALL_MULT_HTML}")
    fig.write_json(SMALL_MULT_JSON)
    print(f"    ✓ {SMALL_MULT_JSON}")

    print(f"\n✓ Small multiples written to {os.path.dirname(SMALL_MULT_HTML)}")


if __name__ == "__main__":
    main()
