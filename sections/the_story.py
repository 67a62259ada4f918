"""
sections/the_story.py
---------------------
'The Story' section — headline figures for London's boroughs and a
short narrative pointing at the two exploration sections.
"""

import plotly.graph_objects as go
import streamlit as st

from utils.charts import apply_base_layout, offence_colour_map, style_xaxis, style_yaxis
from utils.constants import CHART_CONFIG, DEFAULT_THEME, LEGEND_TOP
from utils.data_loaders import load_cognostics, load_offences
from utils.helpers import (
    borough_totals,
    fmt_count,
    fmt_pct,
    fmt_slope,
    pct_change,
    steepest_panels,
)


def _london_by_offence_chart(records):
    """All boroughs summed: one line per offence type over time."""
    totals = (
        records.groupby(["offences", "year"], observed=True, as_index=False)["number_of_offences"]
        .sum()
    )
    colours = offence_colour_map(totals["offences"].astype(str), DEFAULT_THEME)

    fig = go.Figure()
    for offence, colour in colours.items():
        line = totals[totals["offences"].astype(str) == offence].sort_values("year")
        fig.add_trace(go.Scatter(
            x=line["year"],
            y=line["number_of_offences"],
            name=offence,
            mode="lines",
            line=dict(color=colour, width=2),
            hovertemplate="%{x}: %{y:,}<extra>" + offence + "</extra>",
        ))

    fig = apply_base_layout(fig, DEFAULT_THEME, height=440, legend=LEGEND_TOP)
    fig = style_xaxis(fig, DEFAULT_THEME, show_labels=True)
    fig = style_yaxis(fig, DEFAULT_THEME, title="Recorded offences")
    return fig


def render():
    st.title("Seventeen Years of Recorded Crime in London's Boroughs")
    st.markdown("""
    Every year the Metropolitan Police record hundreds of thousands of
    offences across London's boroughs. Taken together the totals look
    steady, but borough by borough and offence by offence the picture is
    far more uneven: some categories fell for most of two decades while
    others climbed in the same places.

    This article starts with every borough side by side, then lets you
    page through each borough and offence on its own, sorted by how fast
    it has been rising or falling.
    """)

    records    = load_offences()
    cognostics = load_cognostics()

    first_year = int(records["year"].min())
    last_year  = int(records["year"].max())
    first      = borough_totals(records, first_year)["number_of_offences"].sum()
    last       = borough_totals(records, last_year)["number_of_offences"].sum()

    rising, falling = steepest_panels(cognostics)

    # ── Headline metrics ──────────────────────────────────────────
    st.caption(
        f"Recorded offences, London boroughs, {first_year} to {last_year}. "
        "Regional and national totals are excluded."
    )
    col1, col2, col3, col4 = st.columns(4)
    col1.metric(f"Offences in {last_year}", fmt_count(last))
    col2.metric(f"Change since {first_year}", fmt_pct(pct_change(first, last)))
    if rising is None:
        # Every panel has a single year of data
        col3.metric("Steepest rise", "n/a")
        col4.metric("Steepest fall", "n/a")
    else:
        col3.metric(
            "Steepest rise",
            f"{rising['borough']}",
            f"{fmt_slope(rising['slope'])} / yr {rising['offences']}",
        )
        col4.metric(
            "Steepest fall",
            f"{falling['borough']}",
            f"{fmt_slope(falling['slope'])} / yr {falling['offences']}",
        )

    st.divider()

    st.subheader("London as a whole")
    st.markdown("""
    Summed across every borough, each line is one offence category.
    Theft and handling and violence against the person dominate the
    totals, so smaller categories are easier to read in the borough
    panels that follow.
    """)
    fig = _london_by_offence_chart(records)
    st.plotly_chart(fig, use_container_width=True, config=CHART_CONFIG)

    st.markdown("""
    Use the navigation on the left to see every borough side by side, or
    to explore each borough and offence as its own panel.
    """)

    st.caption("Source: London Datastore, Recorded Crime Rates (Metropolitan Police Service)")
