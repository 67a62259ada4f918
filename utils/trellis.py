"""
utils/trellis.py
----------------
Publishes the per-panel summaries as a static, browsable grid.

The grid only needs (chart spec, cognostic fields) records. Everything
it needs is written into one folder that works from file:// without a
server:

    index.html     page shell (Jinja2 template)
    grid.js        sorting, filtering and paging in the browser
    panels.js      the panel records, assigned to window.TRELLIS
    panels.json    the same records as plain JSON
    cognostics.csv cognostics without the charts
    plotly.min.js  bundled Plotly.js

Import example:
    from utils.trellis import publish_grid
"""

import json
import math
import os
from pathlib import Path

import pandas as pd
import plotly.io as pio
from jinja2 import Environment, FileSystemLoader
from plotly.offline import get_plotlyjs
from plotly.utils import PlotlyJSONEncoder

from utils.constants import (
    COGNOSTIC_LABELS,
    DEFAULT_THEME,
    GRID_NCOL,
    GRID_NROW,
    TRELLIS_DIR,
    ChartTheme,
)

_TEMPLATES = Path(__file__).parent / "templates"
_STATIC    = Path(__file__).parent / "static"

INDEX_FILE      = "index.html"
GRID_JS_FILE    = "grid.js"
PANELS_JS_FILE  = "panels.js"
PANELS_FILE     = "panels.json"
COGNOSTICS_FILE = "cognostics.csv"
PLOTLY_JS_FILE  = "plotly.min.js"


def _get_template_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _clean_number(value):
    """JSON has no NaN; undefined cognostics become null."""
    if value is None:
        return None
    value = float(value)
    return None if math.isnan(value) else value


def _figure_spec(fig) -> dict:
    # The theme template is shipped once in the payload, not per panel
    spec = json.loads(fig.to_json())
    spec.get("layout", {}).pop("template", None)
    return {"data": spec.get("data", []), "layout": spec.get("layout", {})}


# ── Payload ───────────────────────────────────────────────────────

def panel_records(summaries: pd.DataFrame) -> list:
    """
    Convert the summary frame into grid records, keeping its row order.
    A 'chart' column, when present, is exported as a Plotly spec.
    """
    records = []
    for i, row in enumerate(summaries.itertuples(index=False)):
        row = row._asdict()
        record = {
            "id":         i,
            "borough":    str(row["borough"]),
            "offences":   str(row["offences"]),
            "slope":      _clean_number(row["slope"]),
            "mean_count": _clean_number(row["mean_count"]),
            "iqr":        _clean_number(row["iqr"]),
            "n_years":    int(row["n_years"]),
            "first_year": int(row["first_year"]),
            "last_year":  int(row["last_year"]),
        }
        if row.get("chart") is not None:
            record["figure"] = _figure_spec(row["chart"])
        records.append(record)
    return records


SORT_KEYS = list(COGNOSTIC_LABELS) + ["borough", "offences"]


def sort_orders(records: list, keys: list = SORT_KEYS) -> dict:
    """
    Panel ids in display order for every sort key and direction.

    Records missing the key sort last in both directions; ties keep id
    order. The browser only looks these up, it never compares values.
    """
    orders = {}
    for key in keys:
        present = [r for r in records if r.get(key) is not None]
        missing = [r["id"] for r in records if r.get(key) is None]
        asc  = sorted(present, key=lambda r: (r[key], r["id"]))
        desc = sorted(present, key=lambda r: (r[key], -r["id"]), reverse=True)
        orders[key] = {
            "asc":  [r["id"] for r in asc] + missing,
            "desc": [r["id"] for r in desc] + missing,
        }
    return orders


def grid_payload(
    summaries: pd.DataFrame,
    nrow: int = GRID_NROW,
    ncol: int = GRID_NCOL,
    theme: ChartTheme = DEFAULT_THEME,
    title: str = "Recorded offences by borough",
) -> dict:
    if nrow < 1 or ncol < 1:
        raise ValueError(f"Grid needs at least one row and column, got {nrow}x{ncol}")

    records = panel_records(summaries)
    template = pio.templates[theme.template].to_plotly_json()
    return {
        "config": {
            "title":      title,
            "nrow":       nrow,
            "ncol":       ncol,
            "sort":       {"key": "slope", "dir": "desc"},
            "labels":     ["borough", "offences", "slope"],
            "cognostics": COGNOSTIC_LABELS,
        },
        "template": template,
        "panels":   records,
        "orders":   sort_orders(records),
    }


def to_json(payload: dict) -> str:
    return json.dumps(payload, cls=PlotlyJSONEncoder)


def to_script(payload: dict) -> str:
    # '</' would close an inline <script> early
    body = to_json(payload).replace("</", "<\\/")
    return f"window.TRELLIS = {body};\n"


# ── Page ──────────────────────────────────────────────────────────

def read_grid_js() -> str:
    return (_STATIC / "trellis_grid.js").read_text(encoding="utf-8")


def render_index(
    title: str,
    inline: bool = False,
    plotly_js: str = "",
    grid_js: str = "",
    panels_js: str = "",
) -> str:
    """
    Render the grid page.

    With inline=False the page references the sibling asset files. With
    inline=True the three scripts are embedded so the page is a single
    document, which is what the article puts in its inline frame.
    """
    env = _get_template_env()
    template = env.get_template("trellis_index.html.j2")
    return template.render(
        title=title,
        inline=inline,
        plotly_js=plotly_js,
        grid_js=grid_js,
        panels_js=panels_js,
        plotly_js_file=PLOTLY_JS_FILE,
        grid_js_file=GRID_JS_FILE,
        panels_js_file=PANELS_JS_FILE,
    )


def publish_grid(
    summaries: pd.DataFrame,
    out_dir: str = TRELLIS_DIR,
    nrow: int = GRID_NROW,
    ncol: int = GRID_NCOL,
    theme: ChartTheme = DEFAULT_THEME,
    title: str = "Recorded offences by borough",
) -> dict:
    """
    Write the grid assets into *out_dir* and return {file name: path}.
    """
    payload = grid_payload(summaries, nrow=nrow, ncol=ncol, theme=theme, title=title)
    os.makedirs(out_dir, exist_ok=True)

    contents = {
        INDEX_FILE:     render_index(title),
        GRID_JS_FILE:   read_grid_js(),
        PANELS_JS_FILE: to_script(payload),
        PANELS_FILE:    to_json(payload),
        PLOTLY_JS_FILE: get_plotlyjs(),
    }

    written = {}
    for name, text in contents.items():
        path = os.path.join(out_dir, name)
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
        written[name] = path

    cognostics = summaries.drop(columns=["chart"], errors="ignore")
    path = os.path.join(out_dir, COGNOSTICS_FILE)
    cognostics.to_csv(path, index=False)
    written[COGNOSTICS_FILE] = path

    return written


def inline_document(site_dir: str = TRELLIS_DIR) -> str:
    """Re-render a published grid as one self-contained HTML document."""
    def read(name):
        with open(os.path.join(site_dir, name), encoding="utf-8") as fh:
            return fh.read()

    with open(os.path.join(site_dir, PANELS_FILE), encoding="utf-8") as fh:
        title = json.load(fh)["config"]["title"]

    return render_index(
        title,
        inline=True,
        plotly_js=read(PLOTLY_JS_FILE),
        grid_js=read(GRID_JS_FILE),
        panels_js=read(PANELS_JS_FILE),
    )
