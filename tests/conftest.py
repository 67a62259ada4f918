"""
tests/conftest.py
-----------------
Synthetic crime rates tables shared by the unit tests. They mimic the
raw London Datastore layout: financial-year labels, borough rows mixed
with regional roll-ups, and an 'All recorded offences' total.
"""

import pandas as pd
import pytest


@pytest.fixture
def raw_crime_rates() -> pd.DataFrame:
    rows = [
        # Year,    Borough,             Offences,                Rate,  Number of Offences
        ("1999-00", "Camden",            "Burglary",              12.1, 400),
        ("1999-00", "Camden",            "Burglary",              12.1, 100),   # split row, summed
        ("2000-01", "Camden",            "Burglary",              11.0, 450),
        ("2001-02", "Camden",            "Burglary",              10.2, 420),
        ("1999-00", "Camden",            "Drugs",                  3.0, 90),
        ("2000-01", "Camden",            "Drugs",                  3.3, 95),
        ("2001-02", "Camden",            "Drugs",                  3.9, 130),
        ("1999-00", "Hackney",           "Burglary",              14.0, 600),
        ("2000-01", "Hackney",           "Burglary",              13.1, 560),
        ("2001-02", "Hackney",           "Burglary",              12.5, 530),
        ("1999-00", "Hackney",           "Drugs",                  4.0, 150),
        ("1999-00", "Camden",            "All recorded offences", 99.0, 3000),
        ("1999-00", "Inner London",      "Burglary",              13.0, 9000),
        ("2000-01", "Inner London",      "Drugs",                  3.5, 2500),
        ("1999-00", "England and Wales", "Burglary",               9.0, 500000),
        ("1999-00", "Met Police Area",   "Burglary",              12.0, 60000),
        ("2000-01", "Met Police Area",   "Drugs",                  3.4, 18000),
        ("1998-99", "Camden",            "Burglary",              12.9, 480),   # before range
        ("2018-19", "Camden",            "Burglary",               9.9, 380),   # after range
        ("Total",   "Camden",            "Burglary",               0.0, 1850),  # no year
    ]
    return pd.DataFrame(
        rows,
        columns=["Year", "Borough", "Offences", "Rate", "Number of Offences"],
    )


@pytest.fixture
def clean_records() -> pd.DataFrame:
    """Already-clean records with one single-year panel (Hackney / Drugs)."""
    rows = [
        (2010, "Camden",  "Burglary", 300),
        (2011, "Camden",  "Burglary", 250),
        (2012, "Camden",  "Burglary", 200),
        (2010, "Camden",  "Drugs",    10),
        (2011, "Camden",  "Drugs",    20),
        (2012, "Camden",  "Drugs",    30),
        (2010, "Hackney", "Burglary", 100),
        (2011, "Hackney", "Burglary", 150),
        (2012, "Hackney", "Burglary", 300),
        (2012, "Hackney", "Drugs",    40),
    ]
    return pd.DataFrame(rows, columns=["year", "borough", "offences", "number_of_offences"])
