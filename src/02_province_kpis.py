import pandas as pd

import hazard_config as cfg
from hazard_data import load_zones, load_population
from hazard_metrics import province_summary, national_summary, add_population, top_cities


def main():
    print("📂 Loading hazard zones:", cfg.HAZARD_PATH)
    zones = load_zones(cfg.HAZARD_PATH)
    print(f"Canadian zones: {len(zones):,}")

    print("📂 Loading population:", cfg.POPULATION_PATH)
    population = load_population(cfg.POPULATION_PATH)

    # -----------------------------
    # KPI 1 — NATIONAL TOTALS
    # -----------------------------
    national = national_summary(zones)
    print("\n🇨🇦 National summary:")
    print(national.to_string(index=False))

    # -----------------------------
    # KPI 2 — PER PROVINCE
    # -----------------------------
    summary = add_population(province_summary(zones), population)
    print("\n🗺️ Provinces by total incidents:")
    with pd.option_context("display.width", 160, "display.float_format", "{:,.2f}".format):
        print(summary.to_string(index=False))

    # -----------------------------
    # KPI 3 — INCIDENTS PER CAPITA
    # -----------------------------
    per_capita = summary.sort_values("incidents_per_100k", ascending=False)
    print("\n👥 Incidents per 100,000 residents:")
    print(per_capita[["province_name", "incidents_total", "population", "incidents_per_100k"]].round(2).to_string(index=False))

    # -----------------------------
    # KPI 4 — CITIES
    # -----------------------------
    cities = top_cities(zones)
    print(f"\n🏙️ Top {len(cities)} cities by incidents:")
    print(cities.round(2).to_string(index=False))

    # -----------------------------
    # SAVE SUMMARY TABLES
    # -----------------------------
    cfg.OUT_DIR.mkdir(exist_ok=True)
    national.to_csv(cfg.OUT_DIR / "national_summary.csv", index=False)
    summary.to_csv(cfg.OUT_DIR / "province_summary.csv", index=False)
    cities.to_csv(cfg.OUT_DIR / "top_cities.csv", index=False)

    print("\n✅ Province KPIs complete — outputs saved.")


if __name__ == "__main__":
    main()
