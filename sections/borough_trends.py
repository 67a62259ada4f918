"""
sections/borough_trends.py
--------------------------
'Every Borough' section — the static small-multiples chart built by
processing/03_small_multiples.py.
"""

import streamlit as st

from utils.constants import CHART_CONFIG
from utils.data_loaders import load_small_multiples


def render():
    st.title("Every Borough, Every Offence")
    st.markdown("""
    Each panel is one borough and each line one offence category. The
    vertical scale is set per panel, so compare the shape of the lines
    between boroughs rather than their height: the City of London and
    Westminster would otherwise flatten everyone else.
    """)

    fig = load_small_multiples()
    st.plotly_chart(fig, use_container_width=True, config=CHART_CONFIG)

    st.caption("Source: London Datastore, Recorded Crime Rates (Metropolitan Police Service)")
