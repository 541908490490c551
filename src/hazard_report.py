"""
Standalone HTML rendering of the hazardous driving zone report.

The document reads top to bottom like the analysis: national totals,
per-province aggregates, the composite danger ranking, then the plots.
"""
from __future__ import annotations

import html
from pathlib import Path

import pandas as pd

import hazard_config as cfg
import hazard_plots as plots
from hazard_metrics import (
    add_lookups,
    add_population,
    danger_score,
    national_summary,
    province_summary,
    rank_provinces,
    resolve_weights,
    top_cities,
)

STYLE = """
body { font-family: -apple-system, Segoe UI, Helvetica, Arial, sans-serif; max-width: 1100px; margin: 2rem auto; color: #222; }
h1 { margin-bottom: 0.2rem; }
table { border-collapse: collapse; margin: 1rem 0; font-size: 0.9rem; }
th, td { border: 1px solid #ddd; padding: 4px 8px; text-align: right; }
th { background: #f3f3f3; }
td:first-child, th:first-child { text-align: left; }
.caption { color: #666; }
"""


def _table(df: pd.DataFrame) -> str:
    return df.to_html(index=False, border=0, float_format=lambda x: f"{x:,.3f}")


def _weights_text(weights: dict[str, float]) -> str:
    return ", ".join(f"{cfg.INDICATOR_LABELS.get(k, k)} ({v:.0%})" for k, v in weights.items())


def build_report_tables(
    zones: pd.DataFrame,
    population: pd.DataFrame,
    lookups: pd.DataFrame,
    weights: dict[str, float] | None = None,
) -> dict[str, pd.DataFrame]:
    summary = add_population(province_summary(zones), population)
    scored = add_lookups(summary, lookups)
    ranked = rank_provinces(danger_score(scored, weights))
    return {
        "national": national_summary(zones),
        "provinces": summary,
        "ranking": ranked,
        "cities": top_cities(zones),
    }


def render_report(
    zones: pd.DataFrame,
    population: pd.DataFrame,
    lookups: pd.DataFrame,
    weights: dict[str, float] | None = None,
    tables: dict[str, pd.DataFrame] | None = None,
) -> str:
    """Render the HTML document; pass `tables` to reuse an earlier build_report_tables()."""
    w = resolve_weights(weights)
    if tables is None:
        tables = build_report_tables(zones, population, lookups, w)
    national = tables["national"].iloc[0]
    ranked = tables["ranking"]

    figures = [
        plots.zones_by_province_bar(tables["provinces"]),
        plots.incidents_per_capita_bar(tables["provinces"]),
        plots.severity_box(zones),
        plots.danger_score_bar(ranked),
        plots.indicator_breakdown_bar(ranked, w),
    ]
    fig_html = [
        fig.to_html(full_html=False, include_plotlyjs="cdn" if i == 0 else False)
        for i, fig in enumerate(figures)
    ]

    top = ranked.iloc[0]["province_name"] if len(ranked) else "n/a"

    province_cols = [
        "province_name", "zones", "incidents_total", "mean_severity", "median_severity",
        "population", "incidents_per_100k",
    ]
    ranking_cols = [
        "rank", "province_name", "danger_score", "mean_severity", "zone_density",
        "fatality_rate_per_100k",
    ]

    parts = [
        "<!DOCTYPE html>",
        "<html><head><meta charset='utf-8'>",
        "<title>Hazardous Driving Zones in Canada</title>",
        f"<style>{STYLE}</style></head><body>",
        "<h1>Hazardous Driving Zones in Canada</h1>",
        "<p class='caption'>Where are Canada's hazardous driving zones, and which provinces look most dangerous once "
        "severity, zone density and fatality rates are combined?</p>",
        "<h2>1. National overview</h2>",
        f"<p>The dataset contains <b>{int(national['zones']):,}</b> Canadian hazardous zones across "
        f"<b>{int(national['provinces'])}</b> provinces and territories, with <b>{national['incidents_total']:,.0f}</b> "
        f"recorded incidents. The mean severity score is <b>{national['mean_severity']:.3f}</b> "
        f"(median {national['median_severity']:.3f}).</p>",
        _table(tables["national"]),
        "<h2>2. Provinces</h2>",
        "<p>Raw zone counts follow population, so incidents are also shown per 100,000 residents.</p>",
        _table(tables["provinces"][province_cols]),
        fig_html[0],
        fig_html[1],
        fig_html[2],
        "<h2>3. Top cities</h2>",
        _table(tables["cities"]),
        "<h2>4. Composite danger score</h2>",
        f"<p>Each indicator is min-max normalized to [0, 1] and combined with weights: "
        f"{html.escape(_weights_text(w))}. The most dangerous province on this measure is "
        f"<b>{html.escape(str(top))}</b>.</p>",
        _table(ranked[ranking_cols]),
        fig_html[3],
        fig_html[4],
        "</body></html>",
    ]
    return "\n".join(parts)


def write_report(
    path: Path,
    zones: pd.DataFrame,
    population: pd.DataFrame,
    lookups: pd.DataFrame,
    weights: dict[str, float] | None = None,
    tables: dict[str, pd.DataFrame] | None = None,
) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_report(zones, population, lookups, weights, tables), encoding="utf-8")
    return path
