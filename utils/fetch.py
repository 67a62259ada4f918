"""
utils/fetch.py
--------------
Download and parse the London Datastore recorded crime CSV.

There is no retry logic: this runs once per document build and any
network or parse failure should stop the build.

Import example:
    from utils.fetch import fetch_crime_rates
"""

import io
import os

import pandas as pd
import requests

from utils.constants import CRIME_RATES_URL, HTTP_TIMEOUT

_HEADERS = {
    "User-Agent": "london-borough-crime/1.0 (+https://data.london.gov.uk)",
    "Accept": "text/csv,text/plain,*/*",
}


def download_csv(url: str = CRIME_RATES_URL, dest: str | None = None,
                 timeout: int = HTTP_TIMEOUT) -> bytes:
    """
    GET *url* and return the response body.

    Raises requests.HTTPError on a non-2xx status. When *dest* is given
    the raw bytes are also written there (parent folders created).
    """
    resp = requests.get(url, headers=_HEADERS, timeout=timeout)
    resp.raise_for_status()
    content = resp.content

    if dest:
        os.makedirs(os.path.dirname(dest) or ".", exist_ok=True)
        with open(dest, "wb") as fh:
            fh.write(content)

    return content


def read_crime_rates(source) -> pd.DataFrame:
    """
    Parse the crime rates CSV into typed columns.

    *source* may be a path, a file-like object or raw bytes. Text
    columns that identify a borough or offence are stored as pandas
    categoricals; counts are parsed with ',' as thousands separator.
    """
    if isinstance(source, bytes):
        source = io.BytesIO(source)

    df = pd.read_csv(source, thousands=",", skipinitialspace=True)
    if df.empty:
        raise ValueError("Crime rates CSV contains no rows.")

    for col in df.columns:
        key = col.strip().lower()
        if key in ("borough", "offences"):
            df[col] = df[col].astype(str).str.strip().astype("category")
    return df


def fetch_crime_rates(url: str = CRIME_RATES_URL, dest: str | None = None) -> pd.DataFrame:
    return read_crime_rates(download_csv(url, dest=dest))
