import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

import hazard_config as cfg
from hazard_metrics import resolve_weights


def zones_by_province_bar(summary: pd.DataFrame) -> go.Figure:
    data = summary.sort_values("zones", ascending=True)
    fig = px.bar(
        data,
        x="zones",
        y="province_name",
        orientation="h",
        hover_data=["incidents_total", "mean_severity"],
        labels={"zones": "Hazardous zones", "province_name": ""},
        title="Hazardous driving zones by province",
    )
    return fig


def incidents_per_capita_bar(summary: pd.DataFrame) -> go.Figure:
    data = summary.sort_values("incidents_per_100k", ascending=True)
    fig = px.bar(
        data,
        x="incidents_per_100k",
        y="province_name",
        orientation="h",
        hover_data=["incidents_total", "population"],
        labels={"incidents_per_100k": "Incidents per 100,000 residents", "province_name": ""},
        title="Incidents per capita",
    )
    return fig


def severity_box(zones: pd.DataFrame) -> go.Figure:
    order = (
        zones.groupby("province_name")["severity_score"]
        .median()
        .sort_values(ascending=False)
        .index.tolist()
    )
    fig = px.box(
        zones,
        x="province_name",
        y="severity_score",
        category_orders={"province_name": order},
        labels={"severity_score": "Severity score", "province_name": ""},
        title="Severity score distribution by province",
    )
    return fig


def danger_score_bar(ranked: pd.DataFrame) -> go.Figure:
    data = ranked.sort_values("rank", ascending=False)
    fig = px.bar(
        data,
        x="danger_score",
        y="province_name",
        orientation="h",
        text="rank",
        hover_data=["mean_severity", "zone_density", "fatality_rate_per_100k"],
        labels={"danger_score": "Composite danger score (0-1)", "province_name": ""},
        title="Provinces ranked by composite danger score",
    )
    fig.update_xaxes(range=[0, 1])
    return fig


def indicator_breakdown_bar(ranked: pd.DataFrame, weights: dict | None = None) -> go.Figure:
    """Stacked weighted contribution of each normalized indicator."""
    w = resolve_weights(weights)

    parts = []
    for name, weight in w.items():
        parts.append(
            pd.DataFrame(
                {
                    "province_name": ranked["province_name"],
                    "indicator": cfg.INDICATOR_LABELS.get(name, name),
                    "contribution": ranked[f"{name}_norm"] * weight,
                }
            )
        )
    long = pd.concat(parts, ignore_index=True)

    order = ranked.sort_values("rank")["province_name"].tolist()
    fig = px.bar(
        long,
        x="province_name",
        y="contribution",
        color="indicator",
        category_orders={"province_name": order},
        labels={"contribution": "Weighted contribution", "province_name": "", "indicator": "Indicator"},
        title="What drives each province's danger score",
    )
    fig.update_layout(barmode="stack")
    return fig
