"""
tests/test_charts.py
--------------------
Colour ramp, small multiples and per-panel charts.

Run with:
    pytest tests/test_charts.py -v
"""

import pytest
from plotly.colors import hex_to_rgb

from utils.charts import (
    colour_ramp,
    offence_colour_map,
    panel_chart,
    small_multiples_chart,
)
from utils.constants import BASE_PALETTE, DEFAULT_THEME, ChartTheme, EXPECTED_OFFENCES


# ══════════════════════════════════════════════════════════════════
# Colour ramp
# ══════════════════════════════════════════════════════════════════

class TestColourRamp:

    def test_nine_colours_keep_endpoints(self):
        ramp = colour_ramp(BASE_PALETTE, 9)
        assert len(ramp) == 9
        assert ramp[0] == BASE_PALETTE[0].lower()
        assert ramp[-1] == BASE_PALETTE[-1].lower()

    def test_base_colours_hit_at_their_stops(self):
        # 5 base colours on a 9-step ramp land on every other step
        ramp = colour_ramp(BASE_PALETTE, 9)
        assert ramp[::2] == [c.lower() for c in BASE_PALETTE]

    def test_midpoint(self):
        assert colour_ramp(["#000000", "#ffffff"], 3) == ["#000000", "#808080", "#ffffff"]

    def test_monotonic_between_two_colours(self):
        ramp = colour_ramp(["#000000", "#ffffff"], 9)
        reds = [hex_to_rgb(c)[0] for c in ramp]
        assert reds == sorted(reds)
        assert len(set(ramp)) == 9

    def test_single_colour_request(self):
        assert colour_ramp(BASE_PALETTE, 1) == [BASE_PALETTE[0].lower()]

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            colour_ramp(BASE_PALETTE, 0)
        with pytest.raises(ValueError):
            colour_ramp(["#000000"], 3)


def test_offence_colour_map_one_colour_each():
    colours = offence_colour_map(sorted(EXPECTED_OFFENCES))
    assert list(colours) == sorted(EXPECTED_OFFENCES)
    assert len(set(colours.values())) == 9


def test_offence_colour_map_uses_theme_palette():
    theme = ChartTheme(base_palette=["#000000", "#ffffff"], n_colours=2)
    assert offence_colour_map(["Drugs", "Burglary"], theme) == {
        "Burglary": "#000000",
        "Drugs":    "#ffffff",
    }


# ══════════════════════════════════════════════════════════════════
# Small multiples
# ══════════════════════════════════════════════════════════════════

class TestSmallMultiples:

    @pytest.fixture
    def fig(self, clean_records):
        return small_multiples_chart(clean_records, DEFAULT_THEME, ncols=4)

    def test_one_panel_per_borough(self, fig):
        titles = {a.text for a in fig.layout.annotations}
        assert titles == {"Camden", "Hackney"}

    def test_one_line_per_borough_offence(self, fig):
        assert len(fig.data) == 4
        assert {t.name for t in fig.data} == {"Burglary", "Drugs"}

    def test_free_y_scales(self, fig):
        assert all(ax.matches is None for ax in fig.select_yaxes())

    def test_offence_colours_consistent(self, fig, clean_records):
        colours = offence_colour_map(clean_records["offences"])
        for trace in fig.data:
            assert trace.line.color == colours[trace.name]

    def test_theme_applied(self, clean_records):
        theme = ChartTheme(template="plotly_white")
        fig = small_multiples_chart(clean_records, theme)
        assert fig.layout.paper_bgcolor == "rgba(0,0,0,0)"
        assert fig.layout.template.layout.paper_bgcolor == "white"


# ══════════════════════════════════════════════════════════════════
# Panel chart
# ══════════════════════════════════════════════════════════════════

def test_panel_chart_orders_points_by_year(clean_records):
    group = clean_records[
        (clean_records["borough"] == "Hackney") & (clean_records["offences"] == "Burglary")
    ].iloc[::-1]
    fig = panel_chart(group, DEFAULT_THEME, colour="#cc4778")

    line, points = fig.data
    assert line.mode == "lines"
    assert points.mode == "markers"
    assert list(line.x) == [2010, 2011, 2012]
    assert list(points.y) == [100, 150, 300]
    assert points.marker.color == "#cc4778"
    assert fig.layout.hovermode == "closest"
