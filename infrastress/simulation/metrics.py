# Summary aggregator for regional stress simulation
# Layer 3: Simulation Engine
#
# Reduces a list of SimulationResult into summary statistics:
# 1. Average and maximum stress (3 decimals)
# 2. Top 5 regions by mean stress
# 3. Critical-day count above the domain threshold
# 4. Total unmet demand, for domains that track it
# 5. Domain extras (energy shortfall, agriculture yield loss)

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from infrastress.domains import get_domain_model, DOMAIN_MODELS

logger = logging.getLogger(__name__)

TOP_REGION_COUNT = 5


@dataclass
class TopStressedRegion:
    """One entry of the top-stressed ranking."""
    region_id: str
    region_name: str
    avg_stress: float

    def to_dict(self):
        return {
            "region_id": self.region_id,
            "region_name": self.region_name,
            "avg_stress": self.avg_stress,
        }


@dataclass
class SummaryStatistics:
    """Aggregate view of one simulation run.

    Args:
        domain: Domain name, "" when unknown
        avg_stress: Mean stress over all results
        max_stress: Maximum stress over all results
        top_stressed_regions: Up to 5 TopStressedRegion, highest first
        critical_days: Results with stress above critical_threshold
        critical_threshold: Threshold used for critical_days
        critical_days_key: Output key for critical_days
        total_unmet_demand: Sum of unmet demand, 0 when not tracked
        unmet_demand_key: Output key for total_unmet_demand, None when
            the domain does not report it
        extras: Domain-specific totals
    """
    domain: str = ""
    avg_stress: float = 0.0
    max_stress: float = 0.0
    top_stressed_regions: list = field(default_factory=list)
    critical_days: int = 0
    critical_threshold: float = 0.0
    critical_days_key: str = "critical_days"
    total_unmet_demand: float = 0.0
    unmet_demand_key: Optional[str] = None
    extras: dict = field(default_factory=dict)

    def to_dict(self):
        summary = {
            "avg_stress": self.avg_stress,
            "max_stress": self.max_stress,
            "top_stressed_regions": [r.to_dict() for r in self.top_stressed_regions],
            self.critical_days_key: self.critical_days,
        }
        if self.unmet_demand_key is not None:
            summary[self.unmet_demand_key] = self.total_unmet_demand
        summary.update(self.extras)
        return summary


def rank_regions(results, limit=TOP_REGION_COUNT):
    """Rank regions by mean stress, highest first.

    Ties keep the order in which regions first appear in results.

    Returns:
        list of TopStressedRegion, at most `limit` entries
    """
    grouped = {}
    for r in results:
        entry = grouped.setdefault(r.region_id, {"name": r.region_name, "stress": []})
        entry["stress"].append(r.stress)

    ranked = [
        (region_id, entry["name"], float(np.mean(entry["stress"])))
        for region_id, entry in grouped.items()
    ]
    ranked.sort(key=lambda item: item[2], reverse=True)
    return [
        TopStressedRegion(region_id, name, round(avg, 3))
        for region_id, name, avg in ranked[:limit]
    ]


def summarize(results, domain=None, model=None):
    """Aggregate simulation results into SummaryStatistics.

    Args:
        results: List of SimulationResult
        domain: Domain name; inferred from the results when omitted
        model: Optional domain model carrying a custom DomainConfig

    Returns:
        SummaryStatistics. An empty result list yields all-zero statistics.
    """
    if domain is None and model is not None:
        domain = model.name
    if domain is None and results:
        domain = results[0].domain
    if model is None and domain in DOMAIN_MODELS:
        model = get_domain_model(domain)

    if model is None:
        if results:
            logger.warning("Summarizing results without a known domain: %r", domain)
        summary = SummaryStatistics(domain=domain or "")
    else:
        summary = SummaryStatistics(
            domain=domain,
            critical_threshold=model.config.critical_threshold,
            critical_days_key=model.config.critical_days_key,
            unmet_demand_key=model.config.unmet_demand_key,
            extras=model.summary_extras([]),
        )

    if not results:
        return summary

    stresses = np.array([r.stress for r in results], dtype=float)
    summary.avg_stress = round(float(stresses.mean()), 3)
    summary.max_stress = round(float(stresses.max()), 3)
    summary.top_stressed_regions = rank_regions(results)

    if model is not None:
        summary.critical_days = int(np.sum(stresses > model.config.critical_threshold))
        if model.tracks_unmet_demand:
            unmet = sum(r.unmet_demand or 0.0 for r in results)
            summary.total_unmet_demand = round(unmet, 2)
        summary.extras = model.summary_extras(results)

    return summary
