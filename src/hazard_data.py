from __future__ import annotations

import re
import unicodedata
from pathlib import Path

import pandas as pd

import hazard_config as cfg


def load_csv_safely(path: Path) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found: {path}")

    for enc in ["utf-8", "utf-8-sig", "latin1", "cp1252"]:
        try:
            return pd.read_csv(path, encoding=enc, low_memory=False)
        except UnicodeDecodeError:
            continue
    return pd.read_csv(path, encoding="utf-8", encoding_errors="replace", low_memory=False)


def _norm(s: str) -> str:
    s = str(s).strip().lower()
    s = re.sub(r"[^a-z0-9]+", "_", s)
    s = re.sub(r"_+", "_", s).strip("_")
    return s


def find_col(df: pd.DataFrame, candidates: list[str]) -> str | None:
    norm_map = {_norm(c): c for c in df.columns}

    for cand in candidates:
        key = _norm(cand)
        if key in norm_map:
            return norm_map[key]

    for cand in candidates:
        key = _norm(cand)
        for nc, original in norm_map.items():
            if key and key in nc:
                return original

    return None


def require_col(df: pd.DataFrame, candidates: list[str], label: str) -> str:
    col = find_col(df, candidates)
    if col is None:
        raise ValueError(
            f"Could not find a {label} column (tried {candidates}). "
            f"Columns: {df.columns.tolist()}"
        )
    return col


# -----------------------------
# PROVINCE NAMES
# -----------------------------
def _plain(value) -> str:
    text = unicodedata.normalize("NFKD", str(value))
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = re.sub(r"[^a-z0-9]+", " ", text.lower())
    return " ".join(text.split())


def _build_alias_map() -> dict[str, str]:
    aliases = {}
    for code, name in cfg.PROVINCES.items():
        aliases[_plain(code)] = code
        aliases[_plain(name)] = code
        aliases[_plain(f"CA-{code}")] = code
    for alias, code in cfg.PROVINCE_ALIASES.items():
        aliases[_plain(alias)] = code
    return aliases


_ALIASES = _build_alias_map()


def canonical_province(value) -> str | None:
    """Map a province name, code or ISO 3166-2 code to its two-letter code."""
    if value is None or pd.isna(value):
        return None
    return _ALIASES.get(_plain(value))


def province_name(code: str) -> str:
    return cfg.PROVINCES.get(code, code)


# -----------------------------
# HAZARD ZONES
# -----------------------------
def filter_canada(df: pd.DataFrame) -> pd.DataFrame:
    """
    Keep Canadian rows and add a canonical `province` code column.

    Uses the country column when present, otherwise the ISO 3166-2 prefix.
    Rows whose province cannot be recognised are dropped with a warning.
    """
    country_col = find_col(df, cfg.COUNTRY_COLS)
    iso_col = find_col(df, cfg.ISO_COLS)
    province_col = find_col(df, cfg.PROVINCE_COLS)

    if country_col:
        country = df[country_col].fillna("").astype(str).str.strip().str.lower()
        mask = country.isin(cfg.CANADA_VALUES)
    elif iso_col:
        mask = df[iso_col].fillna("").astype(str).str.upper().str.startswith("CA-")
    else:
        raise ValueError(
            f"Need a country or ISO 3166-2 column to filter Canadian rows. Columns: {df.columns.tolist()}"
        )

    out = df.loc[mask].copy()
    if out.empty:
        raise ValueError("No Canadian records found in the hazard dataset.")

    if province_col is None and iso_col is None:
        raise ValueError(f"Could not find a province column. Columns: {df.columns.tolist()}")

    province = out[province_col].map(canonical_province) if province_col else pd.Series(None, index=out.index)
    if iso_col:
        province = province.fillna(out[iso_col].map(canonical_province))
    out["province"] = province

    unknown = out["province"].isna()
    if unknown.any():
        raw = out.loc[unknown, province_col or iso_col].astype(str).unique().tolist()
        print(f"⚠️ Dropping {int(unknown.sum())} rows with unrecognised province: {sorted(raw)[:10]}")
        out = out.loc[~unknown]

    if out.empty:
        raise ValueError("No Canadian records with a recognised province.")

    return out


def select_zone_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Tidy zone table: province, province_name, city, severity_score, incidents_total."""
    if "province" not in df.columns:
        raise ValueError("Run filter_canada() first: no 'province' column.")

    severity_col = require_col(df, cfg.SEVERITY_COLS, "severity score")
    incident_col = require_col(df, cfg.INCIDENT_COLS, "incident count")
    city_col = find_col(df, cfg.CITY_COLS)

    zones = pd.DataFrame(
        {
            "province": df["province"].astype(str),
            "city": df[city_col].fillna("Unknown").astype(str).str.strip() if city_col else "Unknown",
            "severity_score": pd.to_numeric(df[severity_col], errors="coerce"),
            "incidents_total": pd.to_numeric(df[incident_col], errors="coerce"),
        },
        index=df.index,
    )
    zones.insert(1, "province_name", zones["province"].map(province_name))

    bad = zones[["severity_score", "incidents_total"]].isna().any(axis=1)
    if bad.any():
        print(f"⚠️ Dropping {int(bad.sum())} zones with non-numeric severity or incident values.")
        zones = zones.loc[~bad]

    return zones.reset_index(drop=True)


def load_zones(path: Path = cfg.HAZARD_PATH) -> pd.DataFrame:
    df = load_csv_safely(path)
    return select_zone_columns(filter_canada(df))


# -----------------------------
# AUXILIARY TABLES
# -----------------------------
def _to_number(series: pd.Series) -> pd.Series:
    cleaned = series.astype(str).str.replace(",", "", regex=False).str.strip()
    return pd.to_numeric(cleaned, errors="coerce")


def load_population(path: Path = cfg.POPULATION_PATH) -> pd.DataFrame:
    """
    Population per province from a plain or Statistics Canada style table.

    With a reference-date column only the latest date is kept. Remaining
    duplicates (sex / age breakdowns) collapse to the largest value, which
    is the all-persons total.
    """
    df = load_csv_safely(path)

    geo_col = require_col(df, cfg.POP_GEO_COLS, "geography")
    value_col = require_col(df, cfg.POP_VALUE_COLS, "population")
    date_col = find_col(df, cfg.POP_DATE_COLS)

    pop = pd.DataFrame(
        {
            "province": df[geo_col].map(canonical_province),
            "population": _to_number(df[value_col]),
        }
    )
    if date_col:
        pop["_date"] = df[date_col].astype(str)

    pop = pop.dropna(subset=["province", "population"])

    if date_col:
        latest = pop.groupby("province")["_date"].transform("max")
        pop = pop[pop["_date"] == latest].drop(columns=["_date"])

    pop = pop.groupby("province", as_index=False)["population"].max()

    if pop.empty:
        raise ValueError(f"No province rows recognised in population table: {path}")

    return pop.sort_values("province").reset_index(drop=True)


def lookup_table() -> pd.DataFrame:
    """Inline road-length and fatality-rate tables as one frame."""
    codes = sorted(set(cfg.ROAD_LENGTH_KM) & set(cfg.FATALITY_RATE_PER_100K))
    return pd.DataFrame(
        {
            "province": codes,
            "province_name": [province_name(c) for c in codes],
            "road_length_km": [float(cfg.ROAD_LENGTH_KM[c]) for c in codes],
            "fatality_rate_per_100k": [float(cfg.FATALITY_RATE_PER_100K[c]) for c in codes],
        }
    )
