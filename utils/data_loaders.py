"""
utils/data_loaders.py
---------------------
All data loading functions for the article.
Every function is decorated with @st.cache_data so that data is only
read from disk once per session.

Each loader points at the processing script that produces its file,
so a missing output shows a clear message instead of a traceback.
"""

import json
import os

import pandas as pd
import plotly.io as pio
import streamlit as st

from utils.constants import (
    COGNOSTICS_PATH,
    OFFENCES_PATH,
    SMALL_MULT_JSON,
    TRELLIS_DIR,
)
from utils.trellis import INDEX_FILE, inline_document


def _missing(path: str, script: str):
    st.error(f"{os.path.basename(path)} not found. Run processing/{script} first.")
    st.stop()


@st.cache_data
def load_offences() -> pd.DataFrame:
    try:
        df = pd.read_csv(OFFENCES_PATH)
        df["borough"]  = df["borough"].astype("category")
        df["offences"] = df["offences"].astype("category")
        return df
    except FileNotFoundError:
        _missing(OFFENCES_PATH, "02_clean_aggregate.py")
    except Exception as e:
        st.error(f"Could not load offence records: {e}")
        st.stop()


@st.cache_data
def load_cognostics() -> pd.DataFrame:
    try:
        return pd.read_csv(COGNOSTICS_PATH)
    except FileNotFoundError:
        _missing(COGNOSTICS_PATH, "04_panel_summaries.py")
    except Exception as e:
        st.error(f"Could not load panel cognostics: {e}")
        st.stop()


@st.cache_data
def load_small_multiples_json() -> str:
    # Figures are not picklable by st.cache_data, so cache the JSON text
    try:
        with open(SMALL_MULT_JSON, encoding="utf-8") as fh:
            return fh.read()
    except FileNotFoundError:
        _missing(SMALL_MULT_JSON, "03_small_multiples.py")


def load_small_multiples():
    return pio.from_json(load_small_multiples_json())


@st.cache_data
def load_grid_document() -> str:
    if not os.path.exists(os.path.join(TRELLIS_DIR, INDEX_FILE)):
        _missing(os.path.join(TRELLIS_DIR, INDEX_FILE), "05_publish_grid.py")
    try:
        return inline_document(TRELLIS_DIR)
    except (OSError, json.JSONDecodeError, KeyError) as e:
        st.error(f"Could not load the panel grid from {TRELLIS_DIR}: {e}")
        st.stop()
