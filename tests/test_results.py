"""Tests for results export."""

import json
import sys

import pandas as pd
import pytest

from infrastress.settings import loader
from infrastress.simulation.results import (
    BASE_COLUMNS,
    main,
    results_to_dataframe,
    write_daily_results,
    write_results,
)
from infrastress.simulation.simulation import run_scenario
from infrastress.simulation.state import SimulationResult


def make_result(region_id, date, stress, **extras):
    return SimulationResult(
        date=date, region_id=region_id, region_name=f"Region {region_id}",
        demand=100.123456, supply=90.987654, stress=stress,
        domain="energy", extras=extras,
    )


class TestResultsDataFrame:
    def test_column_order_and_rounding(self):
        df = results_to_dataframe([make_result("A", "2024-01-01", 0.123456789, shortfall_kwh=9.1)])
        assert list(df.columns) == BASE_COLUMNS + ["shortfall_kwh"]
        assert df.loc[0, "demand"] == pytest.approx(100.12)
        assert df.loc[0, "supply"] == pytest.approx(90.99)
        assert df.loc[0, "stress"] == pytest.approx(0.1235)

    def test_empty(self):
        df = results_to_dataframe([])
        assert df.empty
        assert list(df.columns) == BASE_COLUMNS

    def test_write_daily_results(self, tmp_path):
        path = tmp_path / "daily.csv"
        results = [make_result("A", "2024-01-01", 0.1), make_result("B", "2024-01-01", 0.2)]
        write_daily_results(results, path)
        df = pd.read_csv(path)
        assert len(df) == 2
        assert list(df["region_id"]) == ["A", "B"]


class TestWriteResults:
    def test_writes_all_files(self, tmp_path, water_scenario, data_source, capsys):
        response = run_scenario(water_scenario, data_source)
        output_dir = write_results(response, tmp_path / "out")

        assert (output_dir / "daily_results.csv").exists()
        with open(output_dir / "summary.json", encoding="utf-8") as f:
            summary = json.load(f)
        assert "critical_shortage_days" in summary
        with open(output_dir / "scenario.json", encoding="utf-8") as f:
            scenario = json.load(f)
        assert scenario["domain"] == "water"
        assert (output_dir / "economic_analysis.json").exists()
        assert "daily_results.csv: 4 rows" in capsys.readouterr().out

    def test_timestamped_directory(self, tmp_path, energy_scenario, data_source):
        response = run_scenario(energy_scenario, data_source, include_economics=False)
        output_dir = write_results(response, base_path=tmp_path)
        assert output_dir.parent == tmp_path
        assert output_dir.name.startswith("energy_")
        assert not (output_dir / "economic_analysis.json").exists()


SCENARIO_YAML = """\
scenario:
  name: Short drought
  domain: water

parameters:
  water_demand_growth_pct: 20
  rainfall_change_pct: -30
  conservation_rate_pct: 0
  start_date: "2024-01-01"
  end_date: "2024-01-05"
"""


class TestMain:
    def run_main(self, tmp_path, monkeypatch):
        scenario_path = tmp_path / "drought.yaml"
        scenario_path.write_text(SCENARIO_YAML, encoding="utf-8")
        out_dir = tmp_path / "out"
        monkeypatch.setattr(sys, "argv", ["results", str(scenario_path), str(out_dir)])
        main()
        return out_dir

    def test_runs_without_settings_directory(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(loader, "DEFAULT_ECONOMICS_PATH", tmp_path / "missing.yaml")
        out_dir = self.run_main(tmp_path, monkeypatch)

        assert "using built-in cost constants" in capsys.readouterr().out
        df = pd.read_csv(out_dir / "daily_results.csv")
        assert len(df) == 14 * 5
        assert (out_dir / "economic_analysis.json").exists()

    def test_reads_economics_file_when_present(self, tmp_path, monkeypatch, capsys):
        out_dir = self.run_main(tmp_path, monkeypatch)
        assert "built-in cost constants" not in capsys.readouterr().out
        assert (out_dir / "summary.json").exists()

    def test_usage_without_arguments(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["results"])
        with pytest.raises(SystemExit):
            main()
        assert "Usage:" in capsys.readouterr().out
