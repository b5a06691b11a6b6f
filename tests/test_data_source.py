"""Tests for the in-memory data source and the sample data builder."""

import math

import pandas as pd
import pytest

from infrastress.domains import WaterScenario
from infrastress.errors import DataFetchError
from infrastress.simulation.data_source import DataFrameDataSource, HistoricalDataSource
from infrastress.simulation.sample_data import EL_SALVADOR_REGIONS, build_sample_data_source
from infrastress.simulation.simulation import run_scenario


class TestDataFrameDataSource:
    def test_regions(self, data_source, regions):
        assert data_source.get_regions() == regions

    def test_regions_from_dataframe(self):
        frame = pd.DataFrame({"id": ["SS"], "name": ["San Salvador"]})
        source = DataFrameDataSource(frame, {})
        assert source.get_regions() == {"SS": "San Salvador"}

    def test_date_filter_is_inclusive_and_sorted(self):
        frame = pd.DataFrame([
            {"region_id": "A", "date": "2024-01-03", "demand_kwh": 3.0},
            {"region_id": "A", "date": "2024-01-01", "demand_kwh": 1.0},
            {"region_id": "A", "date": "2024-01-02", "demand_kwh": 2.0},
            {"region_id": "A", "date": "2024-01-04", "demand_kwh": 4.0},
        ])
        source = DataFrameDataSource({"A": "Alpha"}, {"energy": frame})
        records = source.get_daily_records("energy", "2024-01-01", "2024-01-03")
        assert [r["date"] for r in records] == ["2024-01-01", "2024-01-02", "2024-01-03"]
        assert [r["demand_kwh"] for r in records] == [1.0, 2.0, 3.0]

    def test_unknown_domain(self, data_source):
        with pytest.raises(KeyError):
            data_source.get_daily_records("transport", "2024-01-01", "2024-01-31")

    def test_missing_columns(self):
        frame = pd.DataFrame([{"region_id": "A", "date": "2024-01-01"}])
        with pytest.raises(ValueError, match="missing columns: water_demand_m3, water_supply_m3"):
            DataFrameDataSource({}, {"water": frame})

    def test_missing_reservoir_means_no_buffer(self):
        frame = pd.DataFrame([
            {"region_id": "A", "date": "2024-01-01", "water_demand_m3": 100.0,
             "water_supply_m3": 50.0, "reservoir_level_pct": 100.0},
            {"region_id": "A", "date": "2024-01-02", "water_demand_m3": 100.0,
             "water_supply_m3": 50.0, "reservoir_level_pct": float("nan")},
        ])
        source = DataFrameDataSource({"A": "Alpha"}, {"water": frame})
        scenario = WaterScenario(0, 0, 0, "2024-01-01", "2024-01-31")
        results = run_scenario(scenario, source).daily_results
        assert results[0].stress == pytest.approx(0.35)
        assert results[1].stress == pytest.approx(0.5)

    def test_base_class_is_abstract(self):
        with pytest.raises(NotImplementedError):
            HistoricalDataSource().get_regions()

    def test_unknown_domain_surfaces_as_fetch_error(self, regions):
        source = DataFrameDataSource(regions, {})
        scenario = WaterScenario(0, 0, 0, "2024-01-01", "2024-01-31")
        with pytest.raises(DataFetchError, match="No water records loaded"):
            run_scenario(scenario, source)


class TestSampleData:
    def test_row_counts(self):
        source = build_sample_data_source("2024-09-16", "2024-10-15")
        assert len(source.get_regions()) == 14
        agriculture = source.get_daily_records("agriculture", "2024-09-16", "2024-10-15")
        assert len(agriculture) == 14 * 4 * 30
        water = source.get_daily_records("water", "2024-09-16", "2024-10-15")
        assert len(water) == 14 * 30

    def test_sample_water_coverage(self):
        source = build_sample_data_source("2024-01-01", "2024-01-10")
        for record in source.get_daily_records("water", "2024-01-01", "2024-01-10"):
            coverage = record["water_supply_m3"] / record["water_demand_m3"]
            assert 0.85 <= coverage <= 0.95

    def test_drought_scenario_runs(self):
        source = build_sample_data_source("2024-01-01", "2024-01-31")
        scenario = WaterScenario(25, -40, 5, "2024-01-01", "2024-01-31")
        response = run_scenario(scenario, source)
        assert len(response.daily_results) == 14 * 31
        assert {r.region_name for r in response.daily_results} == set(EL_SALVADOR_REGIONS.values())
        assert len(response.summary.top_stressed_regions) == 5
        for value in response.economic_analysis.to_dict().values():
            assert math.isfinite(value)
