import argparse

import hazard_config as cfg
from hazard_data import load_zones, load_population, lookup_table
from hazard_metrics import parse_weights
from hazard_report import build_report_tables, write_report


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render the hazardous driving zones HTML report.")
    parser.add_argument("--weights", default=None, help="Custom danger-score weights (name=value,...)")
    parser.add_argument("--out", default=str(cfg.REPORT_PATH), help="Output HTML path")
    args = parser.parse_args(argv)

    weights = parse_weights(args.weights)

    print("📂 Loading:", cfg.HAZARD_PATH, "+", cfg.POPULATION_PATH)
    zones = load_zones(cfg.HAZARD_PATH)
    population = load_population(cfg.POPULATION_PATH)
    lookups = lookup_table()

    tables = build_report_tables(zones, population, lookups, weights)
    out = write_report(args.out, zones, population, lookups, weights, tables)

    # keep CSV copies of every printed table next to the report
    for name, table in tables.items():
        table.to_csv(out.parent / f"report_{name}.csv", index=False)

    print(f"✅ Report rendered: {out}")
    print(f"Saved tables: {', '.join(f'report_{n}.csv' for n in tables)}")


if __name__ == "__main__":
    main()
