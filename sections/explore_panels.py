"""
sections/explore_panels.py
--------------------------
'Explore the Panels' section — embeds the static panel grid published
by processing/05_publish_grid.py in an inline frame, followed by the
cognostics as a sortable table.
"""

import streamlit as st
import streamlit.components.v1 as components

from utils.constants import COGNOSTICS_RENAME, GRID_HEIGHT
from utils.data_loaders import load_cognostics, load_grid_document


def render():
    st.title("Explore the Panels")
    st.markdown("""
    Every borough and offence category gets its own panel below, sorted by
    its trend: the slope of a straight line fitted through the yearly
    counts, in offences per year. The steepest rises come first. Use the
    controls to sort by the average count or the interquartile range
    instead, or to narrow the grid to one borough or one offence.
    """)

    components.html(load_grid_document(), height=GRID_HEIGHT, scrolling=True)

    with st.expander("All panel statistics"):
        st.markdown("""
        A panel with only one year of data has no trend and is listed last.
        The interquartile range is the spread of the middle half of the
        yearly counts.
        """)
        table = load_cognostics()[list(COGNOSTICS_RENAME)].rename(columns=COGNOSTICS_RENAME)
        st.dataframe(table, use_container_width=True, hide_index=True)
