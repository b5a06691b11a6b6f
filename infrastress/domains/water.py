# Water domain model for regional stress simulation
# Layer 2: Design configuration
#
# Records carry both demand and supply (m3/day). The scenario grows demand
# and then applies conservation; supply splits into groundwater (40%, fixed)
# and surface water (60%, rainfall-driven). Reservoir level buffers stress.

from dataclasses import dataclass
from typing import ClassVar

from infrastress.domains.base import (
    BaseDomainModel,
    DomainConfig,
    SupplyShare,
    FIXED,
    RAINFALL,
)


@dataclass(frozen=True)
class WaterScenario:
    """What-if parameters for a water simulation.

    Args:
        water_demand_growth_pct: Change in water demand (%, -50 to 200)
        rainfall_change_pct: Change in rainfall feeding surface water (%, -100 to 200)
        conservation_rate_pct: Demand removed by conservation (%, 0 to 100)
        start_date: First simulated day, "YYYY-MM-DD"
        end_date: Last simulated day, "YYYY-MM-DD"
    """
    water_demand_growth_pct: float
    rainfall_change_pct: float
    conservation_rate_pct: float
    start_date: str
    end_date: str

    domain: ClassVar[str] = "water"
    PARAMETER_RANGES: ClassVar[dict] = {
        "water_demand_growth_pct": (-50, 200),
        "rainfall_change_pct": (-100, 200),
        "conservation_rate_pct": (0, 100),
    }


class WaterModel(BaseDomainModel):
    """Groundwater and surface supply against grown, conserved demand.

    Unmet demand (m3) is tracked per record and totalled in the summary.
    """

    name = "water"
    scenario_class = WaterScenario

    @classmethod
    def default_config(cls):
        return DomainConfig(
            supply_shares=[
                SupplyShare("groundwater", 0.40, FIXED),
                SupplyShare("surface", 0.60, RAINFALL),
            ],
            critical_threshold=0.7,
            critical_days_key="critical_shortage_days",
            unmet_demand_key="total_unmet_demand_m3",
            buffer_field="reservoir_level_pct",
        )

    def adjusted_demand(self, record, scenario):
        demand = float(record["water_demand_m3"])
        demand *= 1 + scenario.water_demand_growth_pct / 100
        demand *= 1 - scenario.conservation_rate_pct / 100
        return max(0.0, demand)

    def baseline_supply(self, record):
        return float(record["water_supply_m3"])

    def describe(self) -> str:
        return "water: Groundwater and rainfall-fed surface supply, reservoir-buffered"
