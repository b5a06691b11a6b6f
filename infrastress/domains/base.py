# Domain model base for regional stress simulation
# Layer 2: Design configuration
#
# A domain model tells the generic simulate() loop in simulation.py how to
# read one historical record for its domain:
#   - which baseline demand the record carries and how the scenario moves it
#   - how baseline supply splits into components, and which scenario driver
#     (fixed, growth, rainfall) scales each component
#   - which record field buffers stress (reservoir, soil moisture)
#   - which extra per-record fields and summary totals the domain reports
#
# Models are stateless strategy objects. Per-domain constants live in a
# DomainConfig so they can be overridden from settings/domains.yaml.

from dataclasses import dataclass, field, asdict
from typing import Optional

FIXED = "fixed"
GROWTH = "growth"
RAINFALL = "rainfall"
SUPPLY_DRIVERS = (FIXED, GROWTH, RAINFALL)

# Fraction of a rainfall change that reaches rainfall-driven supply
DEFAULT_RAINFALL_PASS_THROUGH = 0.66


@dataclass
class SupplyShare:
    """One component of baseline supply.

    Args:
        name: Component label (e.g., "grid", "surface")
        fraction: Share of baseline supply (0-1)
        driver: Scenario driver scaling this component: "fixed", "growth"
            or "rainfall"
    """
    name: str
    fraction: float
    driver: str = FIXED

    def __post_init__(self):
        if self.driver not in SUPPLY_DRIVERS:
            valid = ", ".join(SUPPLY_DRIVERS)
            raise ValueError(
                f"Unknown supply driver '{self.driver}' for share '{self.name}'. "
                f"Available: {valid}"
            )
        if not 0 <= self.fraction <= 1:
            raise ValueError(
                f"Supply share '{self.name}' fraction must be within [0, 1], "
                f"got {self.fraction}"
            )


@dataclass
class DomainConfig:
    """Tunable constants of one domain model.

    Args:
        supply_shares: List of SupplyShare; fractions must sum to 1.0
        rainfall_pass_through: Fraction of rainfall change applied to
            rainfall-driven shares
        critical_threshold: Stress above which a record counts as a
            critical day
        critical_days_key: Summary key for the critical-day count
        unmet_demand_key: Summary key for total unmet demand, or None when
            the domain does not report unmet demand
        buffer_field: Record field holding the 0-100 buffer level, or None
    """
    supply_shares: list = field(default_factory=list)
    rainfall_pass_through: float = DEFAULT_RAINFALL_PASS_THROUGH
    critical_threshold: float = 0.7
    critical_days_key: str = "critical_days"
    unmet_demand_key: Optional[str] = None
    buffer_field: Optional[str] = None

    def __post_init__(self):
        self.supply_shares = [
            share if isinstance(share, SupplyShare) else SupplyShare(**share)
            for share in self.supply_shares
        ]
        total = sum(share.fraction for share in self.supply_shares)
        if self.supply_shares and abs(total - 1.0) > 0.01:
            raise ValueError(
                f"Supply share fractions must sum to 1.0, got {total:.3f}"
            )
        if not 0 <= self.critical_threshold <= 1:
            raise ValueError(
                f"critical_threshold must be within [0, 1], got {self.critical_threshold}"
            )


class BaseDomainModel:
    """Base class for domain stress models."""

    name = "base"
    scenario_class = None

    def __init__(self, config=None):
        self.config = config if config is not None else self.default_config()

    @classmethod
    def default_config(cls):
        raise NotImplementedError("Subclasses must implement default_config()")

    # --- Record handling ---

    def select_records(self, records, scenario):
        """Return the records this scenario simulates (all by default)."""
        return list(records)

    def adjusted_demand(self, record, scenario):
        raise NotImplementedError("Subclasses must implement adjusted_demand()")

    def baseline_supply(self, record):
        raise NotImplementedError("Subclasses must implement baseline_supply()")

    def supply_components(self, record):
        """Split baseline supply into (name, amount, driver) components."""
        baseline = self.baseline_supply(record)
        return [
            (share.name, baseline * share.fraction, share.driver)
            for share in self.config.supply_shares
        ]

    def growth_pct(self, scenario):
        """Scenario percentage applied 1:1 to growth-driven shares."""
        return 0.0

    def driver_multiplier(self, driver, scenario):
        if driver == GROWTH:
            return 1 + self.growth_pct(scenario) / 100
        if driver == RAINFALL:
            change = scenario.rainfall_change_pct / 100
            return 1 + change * self.config.rainfall_pass_through
        return 1.0

    def adjusted_supply(self, record, scenario):
        """Recombine scenario-adjusted supply components, floored at zero."""
        total = 0.0
        for _name, amount, driver in self.supply_components(record):
            total += max(0.0, amount * self.driver_multiplier(driver, scenario))
        return total

    def buffer_level(self, record):
        if self.config.buffer_field is None:
            return None
        return record.get(self.config.buffer_field)

    def extra_fields(self, record, scenario, demand, supply, stress):
        """Domain-specific fields attached to each SimulationResult."""
        return {}

    def summary_extras(self, results):
        """Domain-specific totals added to the summary."""
        return {}

    @property
    def tracks_unmet_demand(self):
        return self.config.unmet_demand_key is not None

    def get_parameters(self) -> dict:
        return asdict(self.config)

    def describe(self) -> str:
        return f"{self.name}: {self.__class__.__doc__}"
