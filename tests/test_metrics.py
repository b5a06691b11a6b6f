"""Tests for summary statistics."""

import math

import pytest

from infrastress.domains import get_domain_model
from infrastress.simulation.metrics import summarize, rank_regions
from infrastress.simulation.state import SimulationResult


def result(region_id, stress, domain="water", unmet=None, name=None, **extras):
    return SimulationResult(
        date="2024-01-01",
        region_id=region_id,
        region_name=name or f"Region {region_id}",
        demand=100.0,
        supply=100.0 * (1 - stress),
        stress=stress,
        domain=domain,
        unmet_demand=unmet,
        extras=extras,
    )


class TestEmptySummary:
    @pytest.mark.parametrize("domain", ["energy", "water", "agriculture", None])
    def test_all_zero(self, domain):
        summary = summarize([], domain)
        assert summary.avg_stress == 0.0
        assert summary.max_stress == 0.0
        assert summary.top_stressed_regions == []
        assert summary.critical_days == 0
        assert summary.total_unmet_demand == 0.0
        for value in summary.to_dict().values():
            if isinstance(value, float):
                assert not math.isnan(value)

    def test_water_keys(self):
        data = summarize([], "water").to_dict()
        assert data["critical_shortage_days"] == 0
        assert data["total_unmet_demand_m3"] == 0.0

    def test_energy_has_no_unmet_demand_key(self):
        data = summarize([], "energy").to_dict()
        assert data["high_stress_days"] == 0
        assert "total_unmet_demand_m3" not in data


class TestAggregates:
    def test_avg_and_max_rounded_to_3_decimals(self):
        summary = summarize([result("A", 0.1234), result("B", 0.5678)], "water")
        assert summary.avg_stress == 0.346
        assert summary.max_stress == 0.568

    def test_domain_inferred_from_results(self):
        summary = summarize([result("A", 0.2, domain="energy")])
        assert summary.domain == "energy"
        assert summary.critical_days_key == "high_stress_days"

    def test_water_critical_days_above_0_7(self):
        results = [result("A", 0.71), result("A", 0.7), result("B", 0.9)]
        assert summarize(results, "water").critical_days == 2

    def test_energy_high_stress_days_above_0_6(self):
        results = [result("A", 0.61, "energy"), result("A", 0.6, "energy")]
        assert summarize(results, "energy").critical_days == 1

    def test_custom_threshold_from_model(self):
        model = get_domain_model("water", config={"critical_threshold": 0.5})
        results = [result("A", 0.55), result("A", 0.45)]
        assert summarize(results, model=model).critical_days == 1

    def test_total_unmet_demand(self):
        results = [result("A", 0.2, unmet=150.0), result("B", 0.1, unmet=50.5)]
        assert summarize(results, "water").total_unmet_demand == pytest.approx(200.5)

    def test_agriculture_extras(self):
        results = [
            result("A", 0.2, "agriculture", unmet=10.0, crop_type="coffee",
                   baseline_yield_kg=1000.0, actual_yield_kg=820.0),
            result("B", 0.0, "agriculture", unmet=0.0, crop_type="corn",
                   baseline_yield_kg=2750.0, actual_yield_kg=2750.0),
        ]
        data = summarize(results, "agriculture").to_dict()
        assert data["total_water_deficit_mm"] == pytest.approx(10.0)
        assert data["total_yield_loss_kg"] == pytest.approx(180.0)
        assert data["most_affected_crop"] == "coffee"
        assert data["yield_loss_by_crop"] == {"coffee": 180.0, "corn": 0.0}


class TestTopRegions:
    def test_at_most_five_sorted_descending(self):
        stresses = {"A": 0.1, "B": 0.7, "C": 0.3, "D": 0.9, "E": 0.5, "F": 0.2, "G": 0.8}
        results = [result(rid, s) for rid, s in stresses.items()]
        top = summarize(results, "water").top_stressed_regions
        assert [r.region_id for r in top] == ["D", "G", "B", "E", "C"]
        assert [r.avg_stress for r in top] == [0.9, 0.8, 0.7, 0.5, 0.3]

    def test_mean_per_region(self):
        results = [result("A", 0.8), result("A", 0.6), result("A", 0.4), result("B", 0.5)]
        top = rank_regions(results)
        assert top[0].region_id == "A"
        assert top[0].avg_stress == pytest.approx(0.6)

    def test_single_region_mean(self):
        stresses = [0.2, 0.5, 0.9, 0.4]
        top = summarize([result("SS", s) for s in stresses], "water").top_stressed_regions
        assert len(top) == 1
        assert top[0].region_id == "SS"
        assert top[0].avg_stress == pytest.approx(sum(stresses) / len(stresses))

    def test_ties_keep_first_appearance(self):
        results = [result("B", 0.5), result("A", 0.5), result("C", 0.5)]
        assert [r.region_id for r in rank_regions(results)] == ["B", "A", "C"]

    def test_region_name_carried(self):
        top = rank_regions([result("SS", 0.4, name="San Salvador")])
        assert top[0].to_dict() == {
            "region_id": "SS", "region_name": "San Salvador", "avg_stress": 0.4,
        }
