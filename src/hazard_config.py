import os
from pathlib import Path

# -----------------------------
# PATHS
# -----------------------------
ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = ROOT / "data"
OUT_DIR = ROOT / "outputs"

HAZARD_PATH = Path(os.environ.get("HAZARD_DATA_PATH", DATA_DIR / "hazardous_areas.csv"))
POPULATION_PATH = Path(os.environ.get("POPULATION_DATA_PATH", DATA_DIR / "population_by_province.csv"))

REPORT_PATH = OUT_DIR / "hazard_report.html"

# -----------------------------
# COLUMN GUESSING
# -----------------------------
COUNTRY_COLS = ["country", "country_name", "nation"]
PROVINCE_COLS = ["state", "province", "state_name", "province_name", "region"]
ISO_COLS = ["iso_3166_2", "iso 3166 2", "iso_code", "iso"]
CITY_COLS = ["city", "municipality", "town"]
SEVERITY_COLS = ["severityscore", "severity score", "severity_score", "severity"]
INCIDENT_COLS = ["incidentstotal", "incidents total", "incidents_total", "incidents", "incident_count"]

POP_GEO_COLS = ["geo", "province", "geography", "province_name", "region", "name"]
POP_VALUE_COLS = ["population", "value", "pop", "total"]
POP_DATE_COLS = ["ref_date", "reference date", "year", "date"]

CANADA_VALUES = {"canada", "ca", "can"}

# -----------------------------
# PROVINCES + INLINE LOOKUPS
# -----------------------------
PROVINCES = {
    "NL": "Newfoundland and Labrador",
    "PE": "Prince Edward Island",
    "NS": "Nova Scotia",
    "NB": "New Brunswick",
    "QC": "Quebec",
    "ON": "Ontario",
    "MB": "Manitoba",
    "SK": "Saskatchewan",
    "AB": "Alberta",
    "BC": "British Columbia",
    "YT": "Yukon",
    "NT": "Northwest Territories",
    "NU": "Nunavut",
}

# French names and common variants (accents are stripped before lookup)
PROVINCE_ALIASES = {
    "newfoundland": "NL",
    "terre neuve et labrador": "NL",
    "nfld": "NL",
    "pei": "PE",
    "ile du prince edouard": "PE",
    "nouvelle ecosse": "NS",
    "nouveau brunswick": "NB",
    "qc": "QC",
    "que": "QC",
    "colombie britannique": "BC",
    "yukon territory": "YT",
    "territoires du nord ouest": "NT",
    "nwt": "NT",
}

# Road fatalities per 100,000 population (national collision statistics, 2019)
FATALITY_RATE_PER_100K = {
    "NL": 5.0,
    "PE": 6.4,
    "NS": 5.5,
    "NB": 8.5,
    "QC": 3.9,
    "ON": 3.9,
    "MB": 6.4,
    "SK": 8.0,
    "AB": 5.4,
    "BC": 5.5,
    "YT": 7.1,
    "NT": 8.9,
    "NU": 7.7,
}

# Public road network, two-lane-equivalent km
ROAD_LENGTH_KM = {
    "NL": 19_600,
    "PE": 6_100,
    "NS": 27_100,
    "NB": 31_300,
    "QC": 185_600,
    "ON": 313_100,
    "MB": 85_900,
    "SK": 228_200,
    "AB": 226_300,
    "BC": 71_300,
    "YT": 4_900,
    "NT": 3_300,
    "NU": 400,
}

# -----------------------------
# DANGER SCORE
# -----------------------------
DEFAULT_INDICATORS = ["mean_severity", "zone_density", "fatality_rate_per_100k"]
OPTIONAL_INDICATORS = ["incidents_per_100k"]

DEFAULT_WEIGHTS = {name: 1.0 for name in DEFAULT_INDICATORS}

INDICATOR_LABELS = {
    "mean_severity": "Mean severity",
    "zone_density": "Zones per 1,000 km road",
    "fatality_rate_per_100k": "Fatalities per 100k",
    "incidents_per_100k": "Incidents per 100k",
}

TOP_CITIES = 15
