# Result containers for regional stress simulation
# Layer 3: Simulation Engine
#
# Dataclasses passed between the simulator, the summary aggregator, the
# economic analyzer and the results writers.

from dataclasses import dataclass, field, asdict, is_dataclass
from typing import Optional


@dataclass
class SimulationResult:
    """Projected demand, supply and stress for one region on one day.

    Args:
        date: Record date, "YYYY-MM-DD"
        region_id: Region identifier from the record
        region_name: Display name, or the id when the region is unknown
        demand: Scenario-adjusted demand
        supply: Scenario-adjusted supply
        stress: Stress ratio in [0, 1]
        domain: Domain that produced the result
        unmet_demand: max(0, demand - supply) for domains that track it
        extras: Domain-specific fields (shortfall_kwh, actual_yield_kg, ...)
    """
    date: str
    region_id: str
    region_name: str
    demand: float
    supply: float
    stress: float
    domain: str = ""
    unmet_demand: Optional[float] = None
    extras: dict = field(default_factory=dict)

    def to_dict(self):
        row = {
            "date": self.date,
            "region_id": self.region_id,
            "region_name": self.region_name,
            "demand": self.demand,
            "supply": self.supply,
            "stress": self.stress,
        }
        if self.unmet_demand is not None:
            row["unmet_demand"] = self.unmet_demand
        row.update(self.extras)
        return row


def _as_dict(value):
    if value is None:
        return None
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if is_dataclass(value):
        return asdict(value)
    return dict(value)


@dataclass
class SimulationResponse:
    """Everything one scenario run produces.

    Args:
        daily_results: List of SimulationResult in input order
        summary: SummaryStatistics over daily_results
        economic_analysis: EconomicAnalysis, None when not requested
        scenario: The scenario dataclass that was simulated
        execution_time_ms: Wall time of the run
    """
    daily_results: list
    summary: object
    economic_analysis: object = None
    scenario: object = None
    execution_time_ms: float = 0.0

    def to_dict(self):
        scenario = _as_dict(self.scenario)
        if scenario is not None:
            scenario = {"domain": getattr(self.scenario, "domain", ""), **scenario}
        return {
            "daily_results": [r.to_dict() for r in self.daily_results],
            "summary": _as_dict(self.summary),
            "economic_analysis": _as_dict(self.economic_analysis),
            "scenario": scenario,
            "execution_time_ms": self.execution_time_ms,
        }
