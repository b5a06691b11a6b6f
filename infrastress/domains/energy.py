# Energy domain model for regional stress simulation
# Layer 2: Design configuration
#
# Recorded demand is the day's electricity demand (kWh). Baseline supply is
# assumed to cover 95% of demand and is split across three sources:
#   - grid (60%, unaffected by the scenario)
#   - solar (25%, scaled by solar_growth_pct)
#   - hydro (15%, scaled by rainfall_change_pct through the pass-through)
# Energy has no stress buffer and reports no unmet demand total.

from dataclasses import dataclass
from typing import ClassVar

from infrastress.domains.base import (
    BaseDomainModel,
    DomainConfig,
    SupplyShare,
    FIXED,
    GROWTH,
    RAINFALL,
)


@dataclass(frozen=True)
class EnergyScenario:
    """What-if parameters for an energy simulation.

    Args:
        solar_growth_pct: Change in solar generation (%, -100 to 200)
        rainfall_change_pct: Change in rainfall feeding hydro (%, -100 to 200)
        start_date: First simulated day, "YYYY-MM-DD"
        end_date: Last simulated day, "YYYY-MM-DD"
    """
    solar_growth_pct: float
    rainfall_change_pct: float
    start_date: str
    end_date: str

    domain: ClassVar[str] = "energy"
    PARAMETER_RANGES: ClassVar[dict] = {
        "solar_growth_pct": (-100, 200),
        "rainfall_change_pct": (-100, 200),
    }


class EnergyModel(BaseDomainModel):
    """Grid/solar/hydro supply mix against recorded electricity demand.

    Demand is left unchanged by the scenario. Each record reports the
    shortfall in kWh alongside the stress ratio.
    """

    name = "energy"
    scenario_class = EnergyScenario

    def __init__(self, config=None, baseline_supply_ratio=0.95):
        super().__init__(config)
        self.baseline_supply_ratio = baseline_supply_ratio

    @classmethod
    def default_config(cls):
        return DomainConfig(
            supply_shares=[
                SupplyShare("grid", 0.60, FIXED),
                SupplyShare("solar", 0.25, GROWTH),
                SupplyShare("hydro", 0.15, RAINFALL),
            ],
            critical_threshold=0.6,
            critical_days_key="high_stress_days",
        )

    def adjusted_demand(self, record, scenario):
        return float(record["demand_kwh"])

    def baseline_supply(self, record):
        return float(record["demand_kwh"]) * self.baseline_supply_ratio

    def growth_pct(self, scenario):
        return scenario.solar_growth_pct

    def extra_fields(self, record, scenario, demand, supply, stress):
        return {"shortfall_kwh": max(0.0, demand - supply)}

    def summary_extras(self, results):
        total = sum(r.extras.get("shortfall_kwh", 0.0) for r in results)
        return {"total_shortfall_kwh": round(total, 2)}

    def get_parameters(self):
        params = super().get_parameters()
        params["baseline_supply_ratio"] = self.baseline_supply_ratio
        return params

    def describe(self) -> str:
        return "energy: Grid, solar and hydro supply against recorded demand"
