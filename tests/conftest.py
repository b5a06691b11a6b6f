"""Shared fixtures: small region directories, record sets and scenarios."""

import pandas as pd
import pytest

from infrastress.domains import EnergyScenario, WaterScenario, AgricultureScenario
from infrastress.simulation.data_source import DataFrameDataSource


@pytest.fixture
def regions():
    return {
        "SS": "San Salvador",
        "SA": "Santa Ana",
        "MO": "Morazán",
    }


@pytest.fixture
def energy_records():
    return [
        {"region_id": "SS", "date": "2024-01-01", "demand_kwh": 1000.0},
        {"region_id": "SA", "date": "2024-01-01", "demand_kwh": 500.0},
        {"region_id": "SS", "date": "2024-01-02", "demand_kwh": 1200.0},
        {"region_id": "SA", "date": "2024-01-02", "demand_kwh": 400.0},
    ]


@pytest.fixture
def water_records():
    """Two regions, two days; supply covers 85-95% of demand."""
    return [
        {"region_id": "SS", "date": "2024-01-01", "water_demand_m3": 165000.0,
         "water_supply_m3": 145000.0, "reservoir_level_pct": 72.0},
        {"region_id": "SA", "date": "2024-01-01", "water_demand_m3": 95000.0,
         "water_supply_m3": 88000.0, "reservoir_level_pct": 75.0},
        {"region_id": "SS", "date": "2024-01-02", "water_demand_m3": 165000.0,
         "water_supply_m3": 145000.0, "reservoir_level_pct": 70.0},
        {"region_id": "SA", "date": "2024-01-02", "water_demand_m3": 95000.0,
         "water_supply_m3": 88000.0, "reservoir_level_pct": 74.0},
    ]


@pytest.fixture
def agriculture_records():
    return [
        {"region_id": "SA", "date": "2024-09-16", "crop_type": "coffee",
         "rainfall_mm": 35.0, "temperature_c": 21.0, "soil_moisture_pct": 50.0,
         "baseline_yield_kg": 1000.0},
        {"region_id": "SA", "date": "2024-09-16", "crop_type": "corn",
         "rainfall_mm": 35.0, "temperature_c": 21.0, "soil_moisture_pct": 50.0,
         "baseline_yield_kg": 2750.0},
        {"region_id": "MO", "date": "2024-09-16", "crop_type": "coffee",
         "rainfall_mm": 20.0, "temperature_c": 20.0, "soil_moisture_pct": 30.0,
         "baseline_yield_kg": 1000.0},
    ]


@pytest.fixture
def energy_scenario():
    return EnergyScenario(
        solar_growth_pct=0, rainfall_change_pct=0,
        start_date="2024-01-01", end_date="2024-01-31",
    )


@pytest.fixture
def water_scenario():
    return WaterScenario(
        water_demand_growth_pct=0, rainfall_change_pct=0, conservation_rate_pct=0,
        start_date="2024-01-01", end_date="2024-01-31",
    )


@pytest.fixture
def agriculture_scenario():
    return AgricultureScenario(
        rainfall_change_pct=0, temperature_change_c=0, irrigation_improvement_pct=0,
        crop_type="all", start_date="2024-09-01", end_date="2024-09-30",
    )


@pytest.fixture
def data_source(regions, energy_records, water_records, agriculture_records):
    return DataFrameDataSource(
        regions,
        {
            "energy": pd.DataFrame(energy_records),
            "water": pd.DataFrame(water_records),
            "agriculture": pd.DataFrame(agriculture_records),
        },
    )
