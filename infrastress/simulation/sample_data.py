# Sample historical data for regional stress simulation
# Layer 3: Simulation Engine
#
# Builds a deterministic DataFrameDataSource for El Salvador's 14
# departments so scenarios can be run without an external data store:
#   - energy: demand scales with population and a weekly cycle
#   - water: demand of 150 L/person/day, supply slightly below demand,
#     reservoir level following a seasonal curve
#   - agriculture: one row per crop per region per day, rainfall following
#     the rainy season, soil moisture carried over from the previous day
#
# Values follow smooth seasonal curves; there is no random component.

import numpy as np
import pandas as pd

from infrastress.domains.agriculture import CROP_TYPES
from infrastress.settings.loader import DEFAULT_COST_CONSTANTS
from infrastress.simulation.data_source import DataFrameDataSource

EL_SALVADOR_REGIONS = {
    "AH": "Ahuachapán",
    "CA": "Cabañas",
    "CH": "Chalatenango",
    "CU": "Cuscatlán",
    "LI": "La Libertad",
    "LP": "La Paz",
    "LU": "La Unión",
    "MO": "Morazán",
    "SA": "Santa Ana",
    "SM": "San Miguel",
    "SO": "Sonsonate",
    "SS": "San Salvador",
    "SV": "San Vicente",
    "US": "Usulután",
}

# Altitude band drives base temperature
REGION_ALTITUDE = {
    "AH": "high", "CA": "medium", "CH": "high", "CU": "medium",
    "LI": "low", "LP": "low", "LU": "low", "MO": "high",
    "SA": "high", "SM": "medium", "SO": "low", "SS": "medium",
    "SV": "medium", "US": "low",
}
BASE_TEMPERATURE_C = {"high": 20.0, "medium": 24.0, "low": 28.0}

BASELINE_YIELD_KG = {
    "coffee": 1000.0,
    "sugar_cane": 70000.0,
    "corn": 2750.0,
    "beans": 1150.0,
}

ENERGY_KWH_PER_CAPITA_DAY = 0.2
WATER_M3_PER_CAPITA_DAY = 0.15


def _seasonal(day_index, period_days):
    """Smooth 0..1 curve over a period."""
    return 0.5 + 0.5 * np.sin(2 * np.pi * day_index / period_days)


def build_energy_frame(dates, regions=EL_SALVADOR_REGIONS, constants=DEFAULT_COST_CONSTANTS):
    rows = []
    day_index = np.arange(len(dates))
    weekly = 0.9 + 0.2 * _seasonal(day_index, 7)
    for region_id, name in regions.items():
        base = constants.population(name) * ENERGY_KWH_PER_CAPITA_DAY
        for d, factor in zip(dates, weekly):
            rows.append({
                "region_id": region_id,
                "date": d,
                "demand_kwh": round(base * factor, 1),
            })
    return pd.DataFrame(rows)


def build_water_frame(dates, regions=EL_SALVADOR_REGIONS, constants=DEFAULT_COST_CONSTANTS):
    rows = []
    day_index = np.arange(len(dates))
    season = _seasonal(day_index, 365)
    for i, (region_id, name) in enumerate(regions.items()):
        demand = constants.population(name) * WATER_M3_PER_CAPITA_DAY
        # Coverage between 85% and 95% depending on region and season
        coverage = 0.85 + 0.05 * (i % 3) / 2 + 0.05 * season
        reservoir = 60 + 20 * season
        for d, cov, level in zip(dates, coverage, reservoir):
            rows.append({
                "region_id": region_id,
                "date": d,
                "water_demand_m3": round(demand, 1),
                "water_supply_m3": round(demand * cov, 1),
                "reservoir_level_pct": round(level, 1),
            })
    return pd.DataFrame(rows)


def build_agriculture_frame(dates, regions=EL_SALVADOR_REGIONS):
    rows = []
    n_days = len(dates)
    day_index = np.arange(n_days)
    season = np.sin(day_index / max(n_days, 1) * np.pi)
    rainfall = np.maximum(10.0, (40 + 60 * day_index / max(n_days, 1)) * (0.5 + 0.5 * season))

    for region_id in regions:
        base_temp = BASE_TEMPERATURE_C[REGION_ALTITUDE.get(region_id, "medium")]
        moisture = 50.0
        for d, rain, s in zip(dates, rainfall, season):
            moisture = min(85.0, max(20.0, moisture * 0.6 + rain / 150 * 40))
            for crop in CROP_TYPES:
                rows.append({
                    "region_id": region_id,
                    "date": d,
                    "crop_type": crop,
                    "rainfall_mm": round(float(rain), 1),
                    "temperature_c": round(base_temp + 3 * float(s), 1),
                    "soil_moisture_pct": round(moisture, 1),
                    "baseline_yield_kg": BASELINE_YIELD_KG[crop],
                })
    return pd.DataFrame(rows)


def build_sample_data_source(start_date, end_date, regions=EL_SALVADOR_REGIONS):
    """Build a DataFrameDataSource covering [start_date, end_date].

    Args:
        start_date: First day, "YYYY-MM-DD" or date
        end_date: Last day, "YYYY-MM-DD" or date
        regions: {region_id: name}; populations come from the default
            cost constants

    Returns:
        DataFrameDataSource with energy, water and agriculture frames
    """
    dates = pd.date_range(start_date, end_date, freq="D").strftime("%Y-%m-%d").tolist()
    return DataFrameDataSource(
        regions,
        {
            "energy": build_energy_frame(dates, regions),
            "water": build_water_frame(dates, regions),
            "agriculture": build_agriculture_frame(dates, regions),
        },
    )
