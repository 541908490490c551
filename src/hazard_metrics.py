from __future__ import annotations

import numpy as np
import pandas as pd
from sklearn.preprocessing import MinMaxScaler

import hazard_config as cfg


# -----------------------------
# AGGREGATES
# -----------------------------
def province_summary(zones: pd.DataFrame) -> pd.DataFrame:
    summary = (
        zones.groupby(["province", "province_name"])
        .agg(
            zones=("severity_score", "size"),
            incidents_total=("incidents_total", "sum"),
            mean_severity=("severity_score", "mean"),
            median_severity=("severity_score", "median"),
            max_severity=("severity_score", "max"),
            mean_incidents_per_zone=("incidents_total", "mean"),
            median_incidents_per_zone=("incidents_total", "median"),
        )
        .reset_index()
        .sort_values(["incidents_total", "province"], ascending=[False, True])
        .reset_index(drop=True)
    )
    return summary


def national_summary(zones: pd.DataFrame) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "zones": int(len(zones)),
                "incidents_total": float(zones["incidents_total"].sum()),
                "mean_severity": float(zones["severity_score"].mean()),
                "median_severity": float(zones["severity_score"].median()),
                "provinces": int(zones["province"].nunique()),
            }
        ]
    )


def top_cities(zones: pd.DataFrame, n: int = cfg.TOP_CITIES) -> pd.DataFrame:
    return (
        zones.groupby(["city", "province"])
        .agg(
            zones=("severity_score", "size"),
            incidents_total=("incidents_total", "sum"),
            mean_severity=("severity_score", "mean"),
        )
        .reset_index()
        .sort_values(["incidents_total", "city"], ascending=[False, True])
        .head(n)
        .reset_index(drop=True)
    )


def _warn_unmatched(left: pd.DataFrame, right: pd.DataFrame, what: str) -> None:
    missing = sorted(set(left["province"]) - set(right["province"]))
    if missing:
        print(f"⚠️ No {what} for {missing}; dropped from the ranking.")


def add_population(summary: pd.DataFrame, population: pd.DataFrame) -> pd.DataFrame:
    _warn_unmatched(summary, population, "population")

    out = summary.merge(population[["province", "population"]], on="province", how="inner")
    out["incidents_per_capita"] = out["incidents_total"] / out["population"]
    out["incidents_per_100k"] = out["incidents_per_capita"] * 100_000
    return out


def add_lookups(summary: pd.DataFrame, lookups: pd.DataFrame) -> pd.DataFrame:
    _warn_unmatched(summary, lookups, "road length / fatality rate")

    cols = ["province", "road_length_km", "fatality_rate_per_100k"]
    out = summary.merge(lookups[cols], on="province", how="inner")
    out["zone_density"] = out["zones"] / out["road_length_km"] * 1_000
    return out


# -----------------------------
# NORMALIZATION + SCORE
# -----------------------------
def minmax_normalize(df: pd.DataFrame, columns: list[str]) -> pd.DataFrame:
    """Add `<col>_norm` in [0, 1] for each column; a constant column maps to 0."""
    df = df.copy()
    if df.empty:
        for col in columns:
            df[f"{col}_norm"] = pd.Series(dtype=float)
        return df

    scaled = MinMaxScaler().fit_transform(df[columns].astype(float))
    for i, col in enumerate(columns):
        df[f"{col}_norm"] = np.clip(scaled[:, i], 0.0, 1.0)
    return df


def resolve_weights(weights: dict[str, float] | None = None) -> dict[str, float]:
    if weights is None:
        weights = cfg.DEFAULT_WEIGHTS

    allowed = set(cfg.DEFAULT_INDICATORS) | set(cfg.OPTIONAL_INDICATORS)
    unknown = sorted(set(weights) - allowed)
    if unknown:
        raise ValueError(f"Unknown indicators {unknown}. Choose from {sorted(allowed)}.")

    non_finite = {k: w for k, w in weights.items() if not np.isfinite(w)}
    if non_finite:
        raise ValueError(f"Weights must be finite numbers: {non_finite}")

    negative = {k: w for k, w in weights.items() if w < 0}
    if negative:
        raise ValueError(f"Weights must be non-negative: {negative}")

    total = float(sum(weights.values()))
    if not np.isfinite(total):
        raise ValueError("Weights are too large to combine.")
    if total <= 0:
        raise ValueError("At least one weight must be positive.")

    return {k: float(w) / total for k, w in weights.items() if w > 0}


def parse_weights(text: str | None) -> dict[str, float] | None:
    """Parse 'mean_severity=2,zone_density=1' into a weights dict."""
    if text is None or not text.strip():
        return None

    weights = {}
    for pair in text.split(","):
        if not pair.strip():
            continue
        name, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"Expected name=value, got '{pair.strip()}'")
        name = name.strip()
        if name in weights:
            raise ValueError(f"Weight for '{name}' given more than once")
        try:
            weights[name] = float(value)
        except ValueError:
            raise ValueError(f"Weight for '{name}' is not a number: '{value.strip()}'") from None
    return weights


def danger_score(df: pd.DataFrame, weights: dict[str, float] | None = None) -> pd.DataFrame:
    """
    Composite danger score: weighted average of min-max normalized indicators.

    Higher means more dangerous. Indicators with zero weight are ignored.
    """
    w = resolve_weights(weights)

    missing = [k for k in w if k not in df.columns]
    if missing:
        raise ValueError(f"Indicators missing from table: {missing}")

    out = minmax_normalize(df, list(w))
    score = pd.Series(0.0, index=out.index)
    for name, weight in w.items():
        score = score + weight * out[f"{name}_norm"]
    out["danger_score"] = score.clip(0.0, 1.0)
    return out


def rank_provinces(df: pd.DataFrame) -> pd.DataFrame:
    """Sort by danger score (desc), ties by province code, and number 1..n."""
    ranked = df.sort_values(["danger_score", "province"], ascending=[False, True]).reset_index(drop=True)
    ranked.insert(0, "rank", np.arange(1, len(ranked) + 1))
    return ranked


def build_ranking(
    zones: pd.DataFrame,
    population: pd.DataFrame,
    lookups: pd.DataFrame,
    weights: dict[str, float] | None = None,
) -> pd.DataFrame:
    summary = province_summary(zones)
    summary = add_population(summary, population)
    summary = add_lookups(summary, lookups)
    return rank_provinces(danger_score(summary, weights))
