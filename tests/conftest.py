"""
Shared fixtures for the hazard report tests.

Fixtures are small, hand-checkable tables: three provinces with a handful
of zones each, plus one non-Canadian row that the Canada filter must drop.
"""

import sys
from pathlib import Path

import pandas as pd
import pytest

# Add src/ to path so tests can import the helper modules and numbered steps
SRC_DIR = Path(__file__).parent.parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

HAZARD_CSV = (
    "Geohash,Country,State,City,ISO_3166_2,SeverityScore,IncidentsTotal\n"
    "dpz83,Canada,Ontario,Toronto,CA-ON,0.2,10\n"
    "dpz84,Canada,Ontario,Toronto,CA-ON,0.4,20\n"
    "f244m,Canada,Ontario,Ottawa,CA-ON,0.6,30\n"
    "f25dv,Canada,Québec,Montréal,CA-QC,0.5,40\n"
    "f25ds,Canada,Quebec,Laval,CA-QC,0.3,10\n"
    "c3nfk,Canada,Alberta,Calgary,CA-AB,0.9,5\n"
    "c23nb,United States,Washington,Seattle,US-WA,1.0,100\n"
)

POPULATION_CSV = (
    "Province,Population\n"
    "Canada,27000000\n"
    "Ontario,\"15,000,000\"\n"
    "Quebec,8000000\n"
    "Alberta,4000000\n"
)


@pytest.fixture
def hazard_csv(tmp_path):
    path = tmp_path / "hazardous_areas.csv"
    path.write_text(HAZARD_CSV, encoding="utf-8")
    return path


@pytest.fixture
def population_csv(tmp_path):
    path = tmp_path / "population.csv"
    path.write_text(POPULATION_CSV, encoding="utf-8")
    return path


@pytest.fixture
def hazard_df():
    from io import StringIO

    return pd.read_csv(StringIO(HAZARD_CSV))


@pytest.fixture
def zones(hazard_df):
    from hazard_data import filter_canada, select_zone_columns

    return select_zone_columns(filter_canada(hazard_df))


@pytest.fixture
def population():
    return pd.DataFrame({"province": ["AB", "ON", "QC"], "population": [4_000_000, 15_000_000, 8_000_000]})


@pytest.fixture
def lookups():
    """Round-number road lengths and fatality rates for easy arithmetic."""
    return pd.DataFrame(
        {
            "province": ["AB", "ON", "QC"],
            "province_name": ["Alberta", "Ontario", "Quebec"],
            "road_length_km": [2000.0, 1000.0, 500.0],
            "fatality_rate_per_100k": [6.0, 4.0, 5.0],
        }
    )
