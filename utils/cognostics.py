"""
utils/cognostics.py
-------------------
Per-panel summary statistics ("cognostics") used to sort and filter the
interactive grid: the linear trend in offences per year, the mean
count and the interquartile range of counts.

A panel with fewer than two distinct years has no defined trend; its
slope is NaN and it sorts after every panel with a slope.
"""

import numpy as np
import pandas as pd
from scipy import stats

from utils.charts import offence_colour_map, panel_chart
from utils.constants import DEFAULT_THEME, ChartTheme

PANEL_KEYS = ["borough", "offences"]

COGNOSTIC_COLUMNS = [
    "borough", "offences", "slope", "mean_count", "iqr",
    "n_years", "first_year", "last_year",
]


def trend_slope(years, counts, decimals: int = 2) -> float:
    """
    Ordinary least squares slope of counts on years, rounded.

    Returns NaN when fewer than two distinct years are present.
    """
    x = np.asarray(years, dtype=float)
    y = np.asarray(counts, dtype=float)
    if len(np.unique(x)) < 2:
        return float("nan")

    slope, intercept, r, p, se = stats.linregress(x, y)
    return round(float(slope), decimals)


def mean_count(counts) -> float:
    return float(np.mean(np.asarray(counts, dtype=float)))


def interquartile_range(counts) -> float:
    """Q3 - Q1 with linear interpolation between order statistics."""
    return float(stats.iqr(np.asarray(counts, dtype=float), interpolation="linear"))


def summarise_group(group: pd.DataFrame) -> dict:
    years  = group["year"]
    counts = group["number_of_offences"]
    return {
        "slope":      trend_slope(years, counts),
        "mean_count": round(mean_count(counts), 2),
        "iqr":        round(interquartile_range(counts), 2),
        "n_years":    int(years.nunique()),
        "first_year": int(years.min()),
        "last_year":  int(years.max()),
    }


def sort_by_slope(summaries: pd.DataFrame, ascending: bool = False) -> pd.DataFrame:
    """Sort on slope; NaN slopes always go last whatever the direction."""
    return (
        summaries
        .sort_values(["slope", "borough", "offences"],
                     ascending=[ascending, True, True],
                     na_position="last")
        .reset_index(drop=True)
    )


def summarise_panels(
    records: pd.DataFrame,
    theme: ChartTheme = DEFAULT_THEME,
    with_charts: bool = True,
) -> pd.DataFrame:
    """
    One row per (borough, offences) panel with its cognostics.

    When *with_charts* is True a 'chart' column holds the panel's Plotly
    figure, coloured by offence type so it matches the small multiples.
    Rows are sorted by slope, descending.
    """
    df = records.copy()
    df["borough"]  = df["borough"].astype(str)
    df["offences"] = df["offences"].astype(str)
    colours = offence_colour_map(df["offences"], theme)

    rows = []
    for (borough, offence), group in df.groupby(PANEL_KEYS, sort=True):
        row = {"borough": borough, "offences": offence, **summarise_group(group)}
        if with_charts:
            row["chart"] = panel_chart(group, theme, colour=colours[offence])
        rows.append(row)

    columns = COGNOSTIC_COLUMNS + (["chart"] if with_charts else [])
    summaries = pd.DataFrame(rows, columns=columns)
    return sort_by_slope(summaries)
