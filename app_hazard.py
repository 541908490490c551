import sys
from pathlib import Path

import pandas as pd
import streamlit as st

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT / "src"))

import hazard_config as cfg  # noqa: E402
import hazard_plots as plots  # noqa: E402
from hazard_data import load_zones, load_population, lookup_table  # noqa: E402
from hazard_metrics import (  # noqa: E402
    add_lookups,
    add_population,
    danger_score,
    national_summary,
    province_summary,
    rank_provinces,
    resolve_weights,
    top_cities,
)


# -----------------------------
# Config
# -----------------------------
st.set_page_config(page_title="Canadian Hazardous Driving Zones", layout="wide")

st.title("Hazardous Driving Zones in Canada")
st.caption(
    "Where hazardous driving zones cluster, how severe they are, and which provinces rank "
    "most dangerous once severity, zone density and fatality rates are combined."
)

with st.container():
    st.info(
        "**What this report does**\n\n"
        "- **Overview:** national totals and per-province zone counts, incidents and severity\n"
        "- **Per capita:** incidents per 100,000 residents\n"
        "- **Danger score:** min-max normalized indicators, weighted and averaged into a 0–1 score\n"
        "- **Ranking:** provinces ordered by that score (weights adjustable in the sidebar)"
    )


# -----------------------------
# Load data
# -----------------------------
@st.cache_data
def load_inputs(hazard_path: str, population_path: str):
    return load_zones(Path(hazard_path)), load_population(Path(population_path))


for path, what in [(cfg.HAZARD_PATH, "hazard zones"), (cfg.POPULATION_PATH, "population")]:
    if not path.exists():
        st.error(f"{what.capitalize()} dataset not found at: {path}\n\nPut `{path.name}` inside: `data/`")
        st.stop()

try:
    zones, population = load_inputs(str(cfg.HAZARD_PATH), str(cfg.POPULATION_PATH))
except ValueError as e:
    st.error(f"Could not prepare the data: {e}")
    st.stop()

lookups = lookup_table()


# -----------------------------
# Sidebar
# -----------------------------
st.sidebar.header("Filters")

names = sorted(zones["province_name"].unique().tolist())
pick = st.sidebar.multiselect("Province / territory", names, default=[])
zones_view = zones[zones["province_name"].isin(pick)] if pick else zones

st.sidebar.divider()
st.sidebar.header("Danger score weights")

raw_weights = {}
for name in cfg.DEFAULT_INDICATORS + cfg.OPTIONAL_INDICATORS:
    default = cfg.DEFAULT_WEIGHTS.get(name, 0.0)
    raw_weights[name] = st.sidebar.slider(cfg.INDICATOR_LABELS[name], 0.0, 5.0, float(default), 0.5)

st.sidebar.divider()
st.sidebar.write("Zones:", len(zones_view))

with st.sidebar.expander("Glossary"):
    st.markdown(
        "- **Severity score**: per-zone metric supplied by the dataset\n"
        "- **Incidents per capita**: province incidents / population\n"
        "- **Zone density**: hazardous zones per 1,000 km of public road\n"
        "- **Danger score**: weighted average of min-max normalized indicators (0–1)"
    )

try:
    weights = resolve_weights(raw_weights)
except ValueError as e:
    st.warning(f"{e} Falling back to equal weights.")
    weights = resolve_weights(None)


# -----------------------------
# Tabs
# -----------------------------
tab1, tab2, tab3 = st.tabs(["Overview", "Per capita", "Danger ranking"])

summary = add_population(province_summary(zones_view), population)

with tab1:
    st.subheader("Overview")

    nat = national_summary(zones_view).iloc[0]
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Hazardous zones", f"{int(nat['zones']):,}")
    c2.metric("Incidents", f"{nat['incidents_total']:,.0f}")
    c3.metric("Mean severity", f"{nat['mean_severity']:.3f}")
    c4.metric("Median severity", f"{nat['median_severity']:.3f}")

    st.divider()
    st.plotly_chart(plots.zones_by_province_bar(summary), use_container_width=True)
    st.plotly_chart(plots.severity_box(zones_view), use_container_width=True)

    st.markdown("### Provinces")
    st.dataframe(summary, use_container_width=True)

    st.markdown("### Top cities by incidents")
    st.dataframe(top_cities(zones_view), use_container_width=True)

with tab2:
    st.subheader("Incidents per capita")
    st.caption("Raw counts follow population; per-capita rates make provinces comparable.")
    st.plotly_chart(plots.incidents_per_capita_bar(summary), use_container_width=True)
    st.dataframe(
        summary[["province_name", "incidents_total", "population", "incidents_per_100k"]]
        .sort_values("incidents_per_100k", ascending=False),
        use_container_width=True,
    )

with tab3:
    st.subheader("Composite danger score")

    with st.expander("How the score works", expanded=True):
        st.markdown(
            "- Each indicator is scaled to **0–1** across provinces (min-max)\n"
            "- The score is the **weighted average** of the scaled indicators\n"
            "- **Rank 1** is the most dangerous province; ties go to the province code"
        )

    ranked = rank_provinces(danger_score(add_lookups(summary, lookups), weights))

    if len(ranked) < 2:
        st.info("Select at least two provinces to compare danger scores.")

    c1, c2 = st.columns([1, 1])
    with c1:
        st.plotly_chart(plots.danger_score_bar(ranked), use_container_width=True)
    with c2:
        st.plotly_chart(plots.indicator_breakdown_bar(ranked, weights), use_container_width=True)

    st.dataframe(
        ranked[["rank", "province_name", "danger_score"] + list(weights)].round(3),
        use_container_width=True,
    )

    st.divider()
    st.download_button(
        "Download ranking (CSV)",
        data=ranked.to_csv(index=False).encode("utf-8"),
        file_name="province_danger_ranking.csv",
        mime="text/csv",
    )
