"""End-to-end tests for the report and the numbered step scripts."""

import importlib

import pandas as pd
import pytest

import hazard_config as cfg
from hazard_data import load_population, load_zones
from hazard_report import build_report_tables, render_report, write_report


@pytest.fixture
def inputs(hazard_csv, population_csv, lookups):
    return load_zones(hazard_csv), load_population(population_csv), lookups


@pytest.fixture
def configured(monkeypatch, tmp_path, hazard_csv, population_csv):
    """Point the config at temp inputs and a temp output dir."""
    monkeypatch.setattr(cfg, "HAZARD_PATH", hazard_csv)
    monkeypatch.setattr(cfg, "POPULATION_PATH", population_csv)
    monkeypatch.setattr(cfg, "OUT_DIR", tmp_path / "outputs")
    monkeypatch.setattr(cfg, "REPORT_PATH", tmp_path / "outputs" / "hazard_report.html")
    return tmp_path / "outputs"


def test_build_report_tables(inputs):
    tables = build_report_tables(*inputs)

    assert set(tables) == {"national", "provinces", "ranking", "cities"}
    assert tables["national"].loc[0, "zones"] == 6
    assert tables["ranking"]["rank"].tolist() == [1, 2, 3]


def test_render_report_contains_tables_and_plots(inputs):
    doc = render_report(*inputs)

    assert doc.startswith("<!DOCTYPE html>")
    assert "Hazardous Driving Zones in Canada" in doc
    assert "<table" in doc
    assert doc.count("plotly-graph-div") >= 5
    assert "cdn.plot.ly" in doc
    assert "most dangerous province on this measure is <b>Alberta</b>" in doc


def test_render_report_custom_weights(inputs):
    doc = render_report(*inputs, weights={"zone_density": 1})
    assert "most dangerous province on this measure is <b>Quebec</b>" in doc


def test_write_report(tmp_path, inputs):
    out = write_report(tmp_path / "nested" / "report.html", *inputs)
    assert out.exists()
    assert "Composite danger score" in out.read_text(encoding="utf-8")


def test_province_kpis_step(configured, capsys):
    step = importlib.import_module("02_province_kpis")
    step.main()

    summary = pd.read_csv(configured / "province_summary.csv")
    assert summary["province"].tolist() == ["ON", "QC", "AB"]
    assert (configured / "top_cities.csv").exists()
    assert "Province KPIs complete" in capsys.readouterr().out


def test_danger_score_step(configured, capsys):
    step = importlib.import_module("03_danger_score")
    step.main(["--weights", "mean_severity=1,fatality_rate_per_100k=1"])

    ranked = pd.read_csv(configured / "province_danger_ranking.csv")
    assert ranked["rank"].tolist() == [1, 2, 3]
    assert ranked.loc[0, "province"] == "AB"
    assert "Danger score created" in capsys.readouterr().out


def test_danger_score_step_rejects_bad_weights(configured):
    step = importlib.import_module("03_danger_score")
    with pytest.raises(ValueError, match="Unknown indicators"):
        step.main(["--weights", "weather=1"])


def test_render_report_step(configured):
    step = importlib.import_module("04_render_report")
    step.main([])

    assert (configured / "hazard_report.html").exists()
    assert (configured / "report_ranking.csv").exists()


def test_render_report_step_builds_tables_once(configured, monkeypatch):
    import hazard_report

    step = importlib.import_module("04_render_report")
    calls = []

    def counting(*args, **kwargs):
        calls.append(1)
        return build_report_tables(*args, **kwargs)

    monkeypatch.setattr(hazard_report, "build_report_tables", counting)
    monkeypatch.setattr(step, "build_report_tables", counting)
    step.main([])

    assert len(calls) == 1
    assert (configured / "report_cities.csv").exists()


def test_render_report_reuses_given_tables(inputs):
    tables = build_report_tables(*inputs)
    tables["ranking"].loc[0, "province_name"] = "Reused Province"

    doc = render_report(*inputs, tables=tables)
    assert "most dangerous province on this measure is <b>Reused Province</b>" in doc
