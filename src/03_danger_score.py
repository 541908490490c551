# src/03_danger_score.py
from __future__ import annotations

import argparse

import pandas as pd

import hazard_config as cfg
from hazard_data import load_zones, load_population, lookup_table
from hazard_metrics import build_ranking, parse_weights, resolve_weights

RANKING_COLS = [
    "rank",
    "province_name",
    "danger_score",
    "mean_severity",
    "zone_density",
    "fatality_rate_per_100k",
    "incidents_per_100k",
]


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Rank provinces by composite danger score.")
    parser.add_argument(
        "--weights",
        default=None,
        help="Custom weights, e.g. 'mean_severity=2,zone_density=1,fatality_rate_per_100k=1'",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    weights = resolve_weights(parse_weights(args.weights))

    zones = load_zones(cfg.HAZARD_PATH)
    population = load_population(cfg.POPULATION_PATH)

    ranked = build_ranking(zones, population, lookup_table(), weights)

    cfg.OUT_DIR.mkdir(exist_ok=True)
    out_path = cfg.OUT_DIR / "province_danger_ranking.csv"
    ranked.to_csv(out_path, index=False)

    print("✅ Danger score created.")
    print("Weights:", ", ".join(f"{k}={v:.2f}" for k, v in weights.items()))
    print()
    with pd.option_context("display.width", 160):
        print(ranked[RANKING_COLS].round(3).to_string(index=False))
    print(f"\nSaved: {out_path}")


if __name__ == "__main__":
    main()
