"""
tests/test_pipeline.py
----------------------
Schema and sanity tests for the files written by the processing
scripts. Each test is skipped when its file has not been built yet,
so the unit tests can run on a fresh checkout.

Build first, then run from the project root:
    python run_all.py
    pytest tests/test_pipeline.py -v
"""

import json
import os

import pandas as pd
import pytest

from utils.constants import (
    ALL_OFFENCES_LABEL,
    COGNOSTICS_PATH,
    EXCLUDED_AREAS,
    OFFENCES_PATH,
    SMALL_MULT_JSON,
    TRELLIS_DIR,
    YEAR_MAX,
    YEAR_MIN,
)


# ── Helpers ───────────────────────────────────────────────────────

def require(path: str) -> str:
    if not os.path.exists(path):
        pytest.skip(f"{path} not built. Run python run_all.py first.")
    return path


def assert_columns(df: pd.DataFrame, required_cols: list, filename: str):
    missing = [c for c in required_cols if c not in df.columns]
    assert not missing, (
        f"{filename} is missing columns: {missing}. "
        f"Found: {list(df.columns)}"
    )


def assert_not_empty(df: pd.DataFrame, filename: str):
    assert not df.empty, f"{filename} is empty."


# ══════════════════════════════════════════════════════════════════
# 02 — borough_offences.csv
# ══════════════════════════════════════════════════════════════════

class TestBoroughOffences:
    REQUIRED = ["year", "borough", "offences", "number_of_offences"]

    @pytest.fixture(scope="class")
    def df(self):
        return pd.read_csv(require(OFFENCES_PATH))

    def test_columns(self, df):
        assert_columns(df, self.REQUIRED, "borough_offences.csv")

    def test_not_empty(self, df):
        assert_not_empty(df, "borough_offences.csv")

    def test_no_rollups(self, df):
        leftover = set(df["borough"]) & EXCLUDED_AREAS
        assert not leftover, f"borough_offences.csv still has roll-up areas: {leftover}"
        assert not (df["offences"] == ALL_OFFENCES_LABEL).any()

    def test_years_in_range(self, df):
        assert df["year"].between(YEAR_MIN, YEAR_MAX).all()

    def test_unique_keys(self, df):
        assert not df.duplicated(["year", "borough", "offences"]).any()

    def test_counts_non_negative(self, df):
        assert (df["number_of_offences"] >= 0).all()

    def test_borough_count_plausible(self, df):
        # 32 boroughs plus the City of London, if it is reported
        n = df["borough"].nunique()
        assert 30 <= n <= 33, f"borough_offences.csv has {n} boroughs."


# ══════════════════════════════════════════════════════════════════
# 03 — small multiples
# ══════════════════════════════════════════════════════════════════

def test_small_multiples_has_panel_per_borough():
    with open(require(SMALL_MULT_JSON), encoding="utf-8") as fh:
        fig = json.load(fh)
    offences = pd.read_csv(require(OFFENCES_PATH))
    titles = {a["text"] for a in fig["layout"].get("annotations", [])}
    assert titles == set(offences["borough"].unique())


# ══════════════════════════════════════════════════════════════════
# 04 — panel_cognostics.csv
# ══════════════════════════════════════════════════════════════════

class TestPanelCognostics:
    REQUIRED = ["borough", "offences", "slope", "mean_count", "iqr", "n_years"]

    @pytest.fixture(scope="class")
    def df(self):
        return pd.read_csv(require(COGNOSTICS_PATH))

    def test_columns(self, df):
        assert_columns(df, self.REQUIRED, "panel_cognostics.csv")

    def test_one_row_per_panel(self, df):
        assert not df.duplicated(["borough", "offences"]).any()

    def test_sorted_by_slope(self, df):
        slopes = df["slope"].dropna()
        assert slopes.is_monotonic_decreasing
        # Undefined slopes sit at the end
        assert df["slope"].iloc[len(slopes):].isna().all()

    def test_iqr_non_negative(self, df):
        assert (df["iqr"] >= 0).all()


# ══════════════════════════════════════════════════════════════════
# 05 — site/trellis
# ══════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("filename", [
    "index.html", "grid.js", "panels.js", "panels.json", "cognostics.csv", "plotly.min.js",
])
def test_trellis_asset_exists(filename):
    require(os.path.join(TRELLIS_DIR, "index.html"))
    assert os.path.exists(os.path.join(TRELLIS_DIR, filename)), (
        f"{filename} not found in {TRELLIS_DIR}. Rerun processing/05_publish_grid.py."
    )


def test_trellis_panels_match_cognostics():
    with open(require(os.path.join(TRELLIS_DIR, "panels.json")), encoding="utf-8") as fh:
        payload = json.load(fh)
    cognostics = pd.read_csv(require(COGNOSTICS_PATH))
    assert len(payload["panels"]) == len(cognostics)
