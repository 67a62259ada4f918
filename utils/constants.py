"""
utils/constants.py
------------------
Shared constants used across the processing scripts and the article
sections. Import from here rather than defining locally.

The chart theme is an explicit ChartTheme object passed into every
chart builder in utils/charts.py. Nothing here mutates Plotly's global
template state.
"""

import os
from dataclasses import dataclass, field

# ── Source data ───────────────────────────────────────────────────
# London Datastore, "Recorded Crime Rates" (financial years 1999-00 to 2016-17)
CRIME_RATES_URL = (
    "https://data.london.gov.uk/download/recorded_crime_rates/"
    "c051c7ec-c3ad-4534-bbfe-6bdfee2ef6bb/crime%20rates.csv"
)
HTTP_TIMEOUT = 60

# Columns expected after clean_column_names()
REQUIRED_COLUMNS = ["year", "borough", "offences", "number_of_offences"]

# Only years in this range are valid; the raw year field is e.g. '2003-04'
YEAR_MIN = 1999
YEAR_MAX = 2017
YEAR_PATTERN = r"\b(1999|20(?:0\d|1[0-7]))\b"

# ── Rows removed during cleaning ──────────────────────────────────
ALL_OFFENCES_LABEL = "All recorded offences"

# Geographic roll-ups that appear alongside the boroughs in the raw file
EXCLUDED_AREAS = {
    "England and Wales",
    "England",
    "Wales",
    "London",
    "Inner London",
    "Outer London",
    "Met Police Area",
}

EXPECTED_OFFENCES = {
    "Burglary",
    "Criminal Damage",
    "Drugs",
    "Fraud or Forgery",
    "Other Notifiable Offences",
    "Robbery",
    "Sexual Offences",
    "Theft and Handling",
    "Violence Against the Person",
}

# ── Paths ─────────────────────────────────────────────────────────
RAW_PATH          = os.path.join("data", "raw", "crime_rates.csv")
PROCESSED_DIR     = os.path.join("data", "processed")
OFFENCES_PATH     = os.path.join(PROCESSED_DIR, "borough_offences.csv")
COGNOSTICS_PATH   = os.path.join(PROCESSED_DIR, "panel_cognostics.csv")
SMALL_MULT_HTML   = os.path.join(PROCESSED_DIR, "borough_small_multiples.html")
SMALL_MULT_JSON   = os.path.join(PROCESSED_DIR, "borough_small_multiples.json")
TRELLIS_DIR       = os.path.join("site", "trellis")

# ── Plotly chart config ───────────────────────────────────────────
CHART_CONFIG = {'displayModeBar': False, 'scrollZoom': False}

# ── Colour palette ────────────────────────────────────────────────
# Sequential base palette, stretched to one colour per offence type
BASE_PALETTE = ["#0d0887", "#7e03a8", "#cc4778", "#f89540", "#f0f921"]
N_OFFENCE_COLOURS = 9

# ── Shared layout defaults applied to all Plotly figures ─────────
BASE_LAYOUT = dict(
    plot_bgcolor='rgba(0,0,0,0)',
    paper_bgcolor='rgba(0,0,0,0)',
    dragmode=False,
    hovermode='x unified',
)

AXIS_DEFAULTS = dict(
    showspikes=False,
    gridcolor='rgba(255,255,255,0.05)',
)

LEGEND_TOP = dict(
    orientation='h',
    yanchor='bottom',
    y=1.02,
)

# ── Small multiples / grid layout ─────────────────────────────────
SMALL_MULTIPLES_COLS = 4
SMALL_MULTIPLES_ROW_HEIGHT = 180
GRID_NROW = 2
GRID_NCOL = 3
GRID_HEIGHT = 720

# Cognostic columns shown in the grid, in display order
COGNOSTIC_LABELS = {
    'slope':      'Trend (offences / year)',
    'mean_count': 'Mean offences',
    'iqr':        'Interquartile range',
    'n_years':    'Years of data',
}

# ── DataFrame column rename mappings ─────────────────────────────
COGNOSTICS_RENAME = {
    'borough':    'Borough',
    'offences':   'Offence',
    'slope':      'Trend',
    'mean_count': 'Mean',
    'iqr':        'IQR',
    'n_years':    'Years',
}


@dataclass(frozen=True)
class ChartTheme:
    """
    Styling passed explicitly into each chart builder.

    base_palette is the short ramp that gets interpolated to one colour
    per offence type. layout and axis are merged into every figure's
    layout and axes respectively.
    """
    base_palette: list = field(default_factory=lambda: list(BASE_PALETTE))
    n_colours: int = N_OFFENCE_COLOURS
    layout: dict = field(default_factory=lambda: dict(BASE_LAYOUT))
    axis: dict = field(default_factory=lambda: dict(AXIS_DEFAULTS))
    template: str = "plotly_dark"
    line_width: float = 1.5
    marker_size: int = 6


DEFAULT_THEME = ChartTheme()
