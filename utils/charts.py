"""
utils/charts.py
---------------
Chart builders shared by the processing scripts and the article.
All builders take an explicit ChartTheme and return a Plotly figure.

Import example:
    from utils.charts import small_multiples_chart, panel_chart
"""

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from plotly.colors import hex_to_rgb

from utils.constants import (
    DEFAULT_THEME,
    LEGEND_TOP,
    SMALL_MULTIPLES_COLS,
    SMALL_MULTIPLES_ROW_HEIGHT,
    ChartTheme,
)


# ── Colour helpers ────────────────────────────────────────────────

def colour_ramp(base: list, n: int) -> list:
    """
    Stretch a short hex palette to *n* colours.

    The base colours are placed evenly on [0, 1] and each RGB channel is
    interpolated linearly between neighbours, so the result is a
    continuous ramp in the base palette's order. The first and last
    colours are the base palette's first and last.

    Usage:
        colour_ramp(['#0d0887', '#cc4778', '#f0f921'], 9)
    """
    if n < 1:
        raise ValueError(f"colour_ramp needs n >= 1, got {n}")
    if len(base) < 2:
        raise ValueError("colour_ramp needs at least two base colours")

    rgb    = np.array([hex_to_rgb(c) for c in base], dtype=float)
    stops  = np.linspace(0, 1, len(base))
    points = np.linspace(0, 1, n)

    channels = np.column_stack([
        np.interp(points, stops, rgb[:, i]) for i in range(3)
    ])
    return [
        "#{:02x}{:02x}{:02x}".format(*(int(round(v)) for v in row))
        for row in channels
    ]


def offence_colour_map(offences, theme: ChartTheme = DEFAULT_THEME) -> dict:
    """Map each offence type (sorted) to a colour from the theme's ramp."""
    names   = sorted(str(o) for o in pd.unique(pd.Series(offences)))
    colours = colour_ramp(theme.base_palette, max(theme.n_colours, len(names)))
    return dict(zip(names, colours))


# ── Layout helpers ────────────────────────────────────────────────

def apply_base_layout(
    fig: go.Figure,
    theme: ChartTheme = DEFAULT_THEME,
    height: int = 420,
    **kwargs,
) -> go.Figure:
    """
    Apply the theme's template and base layout to a figure. Additional
    layout kwargs are passed through so callers can override
    individual properties.

    Usage:
        fig = apply_base_layout(fig, theme, height=360, hovermode='closest')
    """
    layout = {"template": theme.template, **theme.layout, "height": height, **kwargs}
    fig.update_layout(**layout)
    return fig


def style_xaxis(fig: go.Figure, theme: ChartTheme = DEFAULT_THEME,
                show_labels: bool = True, **kwargs) -> go.Figure:
    props = {**theme.axis, "showticklabels": show_labels, **kwargs}
    fig.update_xaxes(**props)
    return fig


def style_yaxis(fig: go.Figure, theme: ChartTheme = DEFAULT_THEME,
                title: str = "", **kwargs) -> go.Figure:
    props = {**theme.axis, "title": title, **kwargs}
    fig.update_yaxes(**props)
    return fig


# ── Static small multiples ────────────────────────────────────────

def small_multiples_chart(
    records: pd.DataFrame,
    theme: ChartTheme = DEFAULT_THEME,
    ncols: int = SMALL_MULTIPLES_COLS,
    row_height: int = SMALL_MULTIPLES_ROW_HEIGHT,
) -> go.Figure:
    """
    One line chart per borough, one line per offence type.

    Panels wrap at *ncols* columns. Each panel keeps its own y-range so
    that small boroughs are not flattened by Westminster.
    """
    df = records.copy()
    df["borough"]  = df["borough"].astype(str)
    df["offences"] = df["offences"].astype(str)
    df = df.sort_values(["borough", "offences", "year"])

    boroughs = sorted(df["borough"].unique())
    colours  = offence_colour_map(df["offences"], theme)
    nrows    = max(1, -(-len(boroughs) // ncols))

    fig = px.line(
        df,
        x="year",
        y="number_of_offences",
        color="offences",
        facet_col="borough",
        facet_col_wrap=ncols,
        facet_row_spacing=min(0.04, 0.5 / nrows),
        facet_col_spacing=0.04,
        category_orders={"borough": boroughs, "offences": list(colours)},
        color_discrete_map=colours,
        labels={
            "year": "",
            "number_of_offences": "",
            "offences": "Offence",
        },
    )

    fig.update_traces(line=dict(width=theme.line_width))
    # Facet titles arrive as 'borough=Camden'
    fig.for_each_annotation(lambda a: a.update(text=a.text.split("=")[-1]))

    fig = apply_base_layout(
        fig, theme,
        height=nrows * row_height + 120,
        hovermode="closest",
        legend={**LEGEND_TOP, "title": dict(text="")},
    )
    fig = style_xaxis(fig, theme, show_labels=True, dtick=4)
    fig = style_yaxis(fig, theme, matches=None, showticklabels=True, rangemode="tozero")
    return fig


# ── Per-panel interactive chart ───────────────────────────────────

def panel_chart(
    group: pd.DataFrame,
    theme: ChartTheme = DEFAULT_THEME,
    colour: str | None = None,
    height: int = 300,
) -> go.Figure:
    """
    Line through the year-ordered points with point markers on top.
    Hovering a marker shows the year and the count.
    """
    g = group.sort_values("year")
    colour = colour or theme.base_palette[len(theme.base_palette) // 2]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=g["year"],
        y=g["number_of_offences"],
        mode="lines",
        line=dict(color=colour, width=theme.line_width),
        hoverinfo="skip",
        showlegend=False,
    ))
    fig.add_trace(go.Scatter(
        x=g["year"],
        y=g["number_of_offences"],
        mode="markers",
        marker=dict(color=colour, size=theme.marker_size),
        hovertemplate="%{x}<br>%{y:,} offences<extra></extra>",
        showlegend=False,
    ))

    fig = apply_base_layout(
        fig, theme,
        height=height,
        hovermode="closest",
        margin=dict(l=40, r=10, t=10, b=30),
    )
    fig = style_xaxis(fig, theme, show_labels=True, dtick=2)
    fig = style_yaxis(fig, theme, rangemode="tozero")
    return fig
