import streamlit as st

from sections import borough_trends, explore_panels, the_story

st.set_page_config(
    page_title="London Borough Crime",
    page_icon="🔍",
    layout="wide"
)

# ── Sidebar ───────────────────────────────────────────────────────

SECTIONS = {
    "The Story":          the_story.render,
    "Every Borough":      borough_trends.render,
    "Explore the Panels": explore_panels.render,
}

st.sidebar.title("London Borough Crime")
section = st.sidebar.radio("Navigate", list(SECTIONS))

SECTIONS[section]()
