"""Tests for the stress ratio."""

import math

import pytest

from infrastress.simulation.stress import calculate_stress


class TestCalculateStress:
    def test_shortfall_ratio(self):
        assert calculate_stress(100, 90) == pytest.approx(0.1)
        assert calculate_stress(100, 10) == pytest.approx(0.9)

    def test_surplus_is_zero(self):
        assert calculate_stress(100, 150) == 0.0
        assert calculate_stress(100, 100) == 0.0

    def test_no_demand_is_zero(self):
        assert calculate_stress(0, 50) == 0.0
        assert calculate_stress(-5, 10) == 0.0
        assert calculate_stress(0, 0) == 0.0

    def test_no_supply_is_full_stress(self):
        assert calculate_stress(100, 0) == 1.0
        assert calculate_stress(100, -1) == 1.0

    def test_small_demand_uses_unit_floor(self):
        """Shortage 0.25 is divided by max(0.5, 1) = 1."""
        assert calculate_stress(0.5, 0.25) == pytest.approx(0.25)

    def test_full_buffer_relieves_30_percent(self):
        """0.5 * (1 - 0.3) = 0.35."""
        assert calculate_stress(100, 50, 100) == pytest.approx(0.35)

    def test_partial_buffer(self):
        """0.5 * (1 - 0.3 * 0.5) = 0.425."""
        assert calculate_stress(100, 50, 50) == pytest.approx(0.425)

    def test_buffer_capped_at_100(self):
        assert calculate_stress(100, 50, 250) == pytest.approx(0.35)

    @pytest.mark.parametrize("buffer", [None, 0, -20, float("nan")])
    def test_missing_or_non_positive_buffer_ignored(self, buffer):
        assert calculate_stress(100, 50, buffer) == pytest.approx(0.5)

    def test_nan_inputs_give_zero(self):
        assert calculate_stress(float("nan"), 10) == 0.0
        assert calculate_stress(100, float("nan")) == 0.0

    def test_infinite_demand(self):
        assert calculate_stress(float("inf"), 10) == 1.0

    def test_always_within_unit_interval(self):
        values = [-10, 0, 0.3, 1, 7.5, 99, 1e6]
        buffers = [None, 0, 30, 100, 500]
        for demand in values:
            for supply in values:
                for buffer in buffers:
                    stress = calculate_stress(demand, supply, buffer)
                    assert 0.0 <= stress <= 1.0
                    assert not math.isnan(stress)
