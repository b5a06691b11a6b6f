# Agriculture domain model for regional stress simulation
# Layer 2: Design configuration
#
# Demand is the crop water requirement (mm per record day), raised 5% per
# degree C of warming. Recorded rainfall is taken as the rainfall share of
# total water available to the crop; irrigation supplies the rest and scales
# with irrigation_improvement_pct. Soil moisture buffers stress.
#
# Each record also carries the yield consequence of its stress:
#   actual_yield_kg = baseline_yield_kg * (1 - stress * yield_sensitivity)

import logging
import math
from dataclasses import dataclass
from typing import ClassVar

from infrastress.domains.base import (
    BaseDomainModel,
    DomainConfig,
    SupplyShare,
    GROWTH,
    RAINFALL,
)

logger = logging.getLogger(__name__)

CROP_TYPES = ("coffee", "sugar_cane", "corn", "beans")
ALL_CROPS = "all"

# Water requirement per record day (mm) at baseline temperature
DEFAULT_CROP_WATER_REQUIREMENT_MM = {
    "coffee": 50.0,
    "sugar_cane": 80.0,
    "corn": 60.0,
    "beans": 45.0,
}

# Fraction of stress that turns into yield loss
DEFAULT_YIELD_SENSITIVITY = {
    "coffee": 0.9,
    "sugar_cane": 0.7,
    "corn": 0.8,
    "beans": 0.85,
}


@dataclass(frozen=True)
class AgricultureScenario:
    """What-if parameters for an agriculture simulation.

    Args:
        rainfall_change_pct: Change in rainfall (%, -100 to 200)
        temperature_change_c: Warming in degrees C (-5 to 10)
        irrigation_improvement_pct: Extra irrigation delivery (%, 0 to 100)
        crop_type: "all" or one of coffee, sugar_cane, corn, beans
        start_date: First simulated day, "YYYY-MM-DD"
        end_date: Last simulated day, "YYYY-MM-DD"
    """
    rainfall_change_pct: float
    temperature_change_c: float
    irrigation_improvement_pct: float
    crop_type: str
    start_date: str
    end_date: str

    domain: ClassVar[str] = "agriculture"
    PARAMETER_RANGES: ClassVar[dict] = {
        "rainfall_change_pct": (-100, 200),
        "temperature_change_c": (-5, 10),
        "irrigation_improvement_pct": (0, 100),
    }
    CROP_CHOICES: ClassVar[tuple] = (ALL_CROPS,) + CROP_TYPES


class AgricultureModel(BaseDomainModel):
    """Rainfall plus irrigation against temperature-adjusted crop demand."""

    name = "agriculture"
    scenario_class = AgricultureScenario

    def __init__(
        self,
        config=None,
        crop_water_requirement_mm=None,
        yield_sensitivity=None,
        temperature_demand_factor=0.05,
        default_water_requirement_mm=60.0,
        default_yield_sensitivity=0.8,
    ):
        super().__init__(config)
        self.crop_water_requirement_mm = dict(
            crop_water_requirement_mm or DEFAULT_CROP_WATER_REQUIREMENT_MM
        )
        self.yield_sensitivity = dict(yield_sensitivity or DEFAULT_YIELD_SENSITIVITY)
        self.temperature_demand_factor = temperature_demand_factor
        self.default_water_requirement_mm = default_water_requirement_mm
        self.default_yield_sensitivity = default_yield_sensitivity

    @classmethod
    def default_config(cls):
        return DomainConfig(
            supply_shares=[
                SupplyShare("rainfall", 0.70, RAINFALL),
                SupplyShare("irrigation", 0.30, GROWTH),
            ],
            critical_threshold=0.6,
            critical_days_key="high_stress_days",
            unmet_demand_key="total_water_deficit_mm",
            buffer_field="soil_moisture_pct",
        )

    def select_records(self, records, scenario):
        if scenario.crop_type == ALL_CROPS:
            return list(records)
        return [r for r in records if r.get("crop_type") == scenario.crop_type]

    def water_requirement(self, crop):
        if crop not in self.crop_water_requirement_mm:
            logger.warning(
                "No water requirement for crop '%s', using %.1f mm",
                crop, self.default_water_requirement_mm,
            )
            return self.default_water_requirement_mm
        return self.crop_water_requirement_mm[crop]

    def adjusted_demand(self, record, scenario):
        requirement = self.water_requirement(record.get("crop_type"))
        warming = 1 + self.temperature_demand_factor * scenario.temperature_change_c
        return max(0.0, requirement * warming)

    def baseline_supply(self, record):
        # Recorded rainfall is the rainfall-driven slice of total supply
        rainfall = max(0.0, float(record["rainfall_mm"]))
        rainfall_share = sum(
            s.fraction for s in self.config.supply_shares if s.driver == RAINFALL
        )
        if rainfall_share <= 0:
            return rainfall
        return rainfall / rainfall_share

    def growth_pct(self, scenario):
        return scenario.irrigation_improvement_pct

    def extra_fields(self, record, scenario, demand, supply, stress):
        crop = record.get("crop_type")
        baseline_yield = float(record.get("baseline_yield_kg") or 0.0)
        if not math.isfinite(baseline_yield):
            baseline_yield = 0.0
        sensitivity = self.yield_sensitivity.get(crop, self.default_yield_sensitivity)
        actual_yield = baseline_yield * (1 - stress * sensitivity)
        if baseline_yield > 0:
            yield_change_pct = (actual_yield - baseline_yield) / baseline_yield * 100
        else:
            yield_change_pct = 0.0
        return {
            "crop_type": crop,
            "baseline_yield_kg": baseline_yield,
            "actual_yield_kg": actual_yield,
            "yield_change_pct": yield_change_pct,
        }

    def summary_extras(self, results):
        """Yield loss totals, per crop and overall.

        The most affected crop is the one losing the largest share of its
        baseline yield, not the largest mass.
        """
        baseline_by_crop = {}
        loss_by_crop = {}
        for r in results:
            crop = r.extras.get("crop_type")
            baseline = r.extras.get("baseline_yield_kg", 0.0)
            loss = baseline - r.extras.get("actual_yield_kg", baseline)
            baseline_by_crop[crop] = baseline_by_crop.get(crop, 0.0) + baseline
            loss_by_crop[crop] = loss_by_crop.get(crop, 0.0) + loss

        total_baseline = sum(baseline_by_crop.values())
        total_loss = sum(loss_by_crop.values())
        total_loss_pct = total_loss / total_baseline * 100 if total_baseline > 0 else 0.0

        most_affected = ""
        worst_pct = -1.0
        for crop, loss in loss_by_crop.items():
            baseline = baseline_by_crop[crop]
            pct = loss / baseline * 100 if baseline > 0 else 0.0
            if pct > worst_pct:
                most_affected, worst_pct = crop, pct

        return {
            "total_yield_loss_kg": round(total_loss, 2),
            "total_yield_loss_pct": round(total_loss_pct, 2),
            "most_affected_crop": most_affected,
            "yield_loss_by_crop": {
                crop: round(loss, 2) for crop, loss in loss_by_crop.items()
            },
        }

    def get_parameters(self):
        params = super().get_parameters()
        params.update({
            "crop_water_requirement_mm": dict(self.crop_water_requirement_mm),
            "yield_sensitivity": dict(self.yield_sensitivity),
            "temperature_demand_factor": self.temperature_demand_factor,
        })
        return params

    def describe(self) -> str:
        return "agriculture: Rainfall and irrigation against crop water requirement"
