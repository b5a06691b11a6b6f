# Historical data sources for regional stress simulation
# Layer 3: Simulation Engine
#
# The engine reads regions and daily records through a HistoricalDataSource.
# Storage and ingestion live outside the engine; DataFrameDataSource serves
# records held in memory as pandas DataFrames (one per domain).

import logging
from datetime import date

import pandas as pd

logger = logging.getLogger(__name__)

# Columns each domain's records must carry
REQUIRED_COLUMNS = {
    "energy": ["region_id", "date", "demand_kwh"],
    "water": ["region_id", "date", "water_demand_m3", "water_supply_m3"],
    "agriculture": [
        "region_id", "date", "crop_type", "rainfall_mm",
        "temperature_c", "baseline_yield_kg",
    ],
}


class HistoricalDataSource:
    """Base class for providers of regions and daily records."""

    def get_regions(self):
        """Return the region directory as {region_id: display_name}."""
        raise NotImplementedError("Subclasses must implement get_regions()")

    def get_daily_records(self, domain, start_date, end_date):
        """Return daily records for a domain within [start_date, end_date].

        Records are dicts ordered by date ascending.
        """
        raise NotImplementedError("Subclasses must implement get_daily_records()")


def _to_timestamp(value):
    if isinstance(value, date):
        return pd.Timestamp(value)
    return pd.to_datetime(value, format="%Y-%m-%d")


class DataFrameDataSource(HistoricalDataSource):
    """Serve regions and records from in-memory pandas DataFrames.

    Args:
        regions: {region_id: name} dict, or a DataFrame with "id" (or
            "region_id") and "name" columns
        frames: {domain: DataFrame} of daily records; "date" may hold
            strings or datetimes
    """

    def __init__(self, regions, frames):
        self._regions = self._normalize_regions(regions)
        self._frames = {}
        for domain, df in frames.items():
            missing = [c for c in REQUIRED_COLUMNS.get(domain, ["region_id", "date"])
                       if c not in df.columns]
            if missing:
                raise ValueError(
                    f"{domain} records missing columns: {', '.join(missing)}"
                )
            df = df.copy()
            df["date"] = pd.to_datetime(df["date"])
            self._frames[domain] = df

    @staticmethod
    def _normalize_regions(regions):
        if isinstance(regions, pd.DataFrame):
            id_col = "id" if "id" in regions.columns else "region_id"
            return dict(zip(regions[id_col].astype(str), regions["name"].astype(str)))
        return dict(regions)

    def get_regions(self):
        return dict(self._regions)

    def get_daily_records(self, domain, start_date, end_date):
        if domain not in self._frames:
            raise KeyError(f"No {domain} records loaded")
        df = self._frames[domain]
        start = _to_timestamp(start_date)
        end = _to_timestamp(end_date)
        mask = (df["date"] >= start) & (df["date"] <= end)
        selected = df.loc[mask].sort_values("date", kind="mergesort").copy()
        selected["date"] = selected["date"].dt.strftime("%Y-%m-%d")
        logger.debug(
            "Selected %d %s records between %s and %s",
            len(selected), domain, start.date(), end.date(),
        )
        return selected.to_dict("records")
