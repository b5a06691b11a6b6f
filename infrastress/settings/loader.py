# Settings loader for regional stress simulation
# Layer 2: Bridges YAML configuration to simulation runtime
#
# Loads three kinds of YAML files into structured objects:
#   - settings/economics.yaml        -> CostConstants
#   - settings/domains.yaml          -> domain model overrides
#   - settings/scenarios/<name>.yaml -> typed scenario dataclass

import logging
from dataclasses import dataclass, field, fields
from datetime import date
from pathlib import Path

import yaml

from infrastress.domains import DOMAIN_MODELS, get_domain_model, get_scenario_class

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_ECONOMICS_PATH = PROJECT_ROOT / "settings" / "economics.yaml"
DEFAULT_DOMAINS_PATH = PROJECT_ROOT / "settings" / "domains.yaml"


# ---------------------------------------------------------------------------
# Cost constants
# ---------------------------------------------------------------------------

@dataclass
class EnergyCostConstants:
    """Power outage costs and grid/solar investment costs."""
    cost_per_outage_hour_per_capita: float = 5.00
    business_cost_per_outage_hour: float = 50.00
    people_per_business: float = 50
    extended_outage_threshold_hours: float = 4
    extended_outage_cost_per_capita: float = 2.00
    outage_hours_per_stress: float = 100  # stress 1.0 -> 100 outage hours/year
    solar_cost_per_kw: float = 1_200
    solar_baseline_capacity_mw: float = 500
    grid_upgrade_base_cost_per_region: float = 2_000_000  # per 10% capacity increase
    remote_region_multiplier: float = 1.5
    benefit_realization: float = 0.80


@dataclass
class WaterCostConstants:
    """Water shortage costs and water infrastructure costs."""
    health_cost_per_shortage_day_per_capita: float = 10.00
    time_cost_per_shortage_day_per_capita: float = 6.00
    shortage_days_per_stress: float = 60  # stress 1.0 -> 60 shortage days/year
    per_capita_capacity_m3_day: float = 0.15
    treatment_cost_per_100k_m3_day: float = 5_000_000
    desalination_cost_per_100k_m3_day: float = 10_000_000
    pipes_cost_per_10km: float = 1_000_000
    benefit_realization: float = 0.85


def _default_crop_prices():
    return {"coffee": 2.50, "sugar_cane": 0.08, "corn": 0.40, "beans": 1.20}


@dataclass
class AgricultureCostConstants:
    """Crop prices and irrigation investment costs."""
    crop_price_per_kg: dict = field(default_factory=_default_crop_prices)
    gdp_multiplier: float = 1.3
    drip_irrigation_cost_per_ha: float = 3_000
    sprinkler_irrigation_cost_per_ha: float = 2_000
    annual_maintenance_rate: float = 0.05
    maintenance_years: int = 5
    hectares_per_stressed_region: float = 5_000
    max_affected_hectares: float = 50_000
    benefit_realization: float = 0.70


def _default_population():
    return {
        "San Salvador": 1_800_000,
        "La Libertad": 750_000,
        "Santa Ana": 550_000,
        "San Miguel": 520_000,
        "Sonsonate": 480_000,
        "La Paz": 340_000,
        "Usulután": 370_000,
        "Chalatenango": 220_000,
        "Cuscatlán": 250_000,
        "Ahuachapán": 340_000,
        "Morazán": 190_000,
        "La Unión": 270_000,
        "San Vicente": 180_000,
        "Cabañas": 160_000,
    }


def _default_remote_regions():
    return ["Morazán", "La Unión", "Cabañas", "Chalatenango"]


@dataclass
class CostConstants:
    """All constants the economic analyzer needs.

    Defaults are the El Salvador reference values also shipped in
    settings/economics.yaml.

    Args:
        population_by_region: {region display name: population}
        remote_regions: Region names with higher infrastructure costs
        discount_rate: Annual discount rate for ROI and NPV
        escalation_rate: Annual growth of costs when no action is taken
        delay_months: Delay used for the opportunity cost
        delay_penalty_rate: Monthly penalty on delayed savings (linear)
        analysis_years: Horizon for ROI, NPV and cost of inaction
        payback_cap_months: Upper bound for the payback period
        investment_stress_threshold: Region stress above which
            infrastructure investment is required
    """
    population_by_region: dict = field(default_factory=_default_population)
    remote_regions: list = field(default_factory=_default_remote_regions)
    discount_rate: float = 0.05
    escalation_rate: float = 0.05
    delay_months: float = 6
    delay_penalty_rate: float = 0.02
    analysis_years: int = 5
    payback_cap_months: int = 60
    investment_stress_threshold: float = 0.6
    energy: EnergyCostConstants = field(default_factory=EnergyCostConstants)
    water: WaterCostConstants = field(default_factory=WaterCostConstants)
    agriculture: AgricultureCostConstants = field(default_factory=AgricultureCostConstants)

    def population(self, region_name):
        """Population of a region, 0 when the region is not listed."""
        return self.population_by_region.get(region_name, 0)

    def is_remote(self, region_name):
        return region_name in self.remote_regions


DEFAULT_COST_CONSTANTS = CostConstants()


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------

def _parse_date(date_str):
    """Parse date string in YYYY-MM-DD format."""
    parts = date_str.split("-")
    if len(parts) != 3:
        raise ValueError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")
    return date(int(parts[0]), int(parts[1]), int(parts[2]))


def _require(data, key, context=""):
    """Get required key from dict, raise if missing."""
    if key not in data:
        ctx = f" in {context}" if context else ""
        raise KeyError(f"Missing required key '{key}'{ctx}")
    return data[key]


def _read_yaml(path, kind):
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{kind} file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{kind} file must contain a mapping: {path}")
    return data


def _build_section(cls, data, context):
    """Build a flat constants dataclass, requiring every field."""
    if not isinstance(data, dict):
        raise ValueError(f"Section '{context}' must be a mapping")
    unknown = set(data) - {f.name for f in fields(cls)}
    if unknown:
        raise ValueError(
            f"Unknown keys in {context}: {', '.join(sorted(unknown))}"
        )
    return cls(**{f.name: _require(data, f.name, context) for f in fields(cls)})


def _as_date_string(value, key):
    """Normalize a YAML date (PyYAML parses unquoted dates) to YYYY-MM-DD."""
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a date in YYYY-MM-DD format, got {value!r}")
    return _parse_date(value).isoformat()


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------

def load_cost_constants(path=None):
    """Load economic cost constants from YAML.

    Args:
        path: Path to economics YAML; defaults to settings/economics.yaml

    Returns:
        CostConstants

    Raises:
        FileNotFoundError: If the file doesn't exist
        KeyError: If a required key is missing
        ValueError: If a section is malformed or has unknown keys
    """
    data = _read_yaml(path or DEFAULT_ECONOMICS_PATH, "Economics")

    regions = _require(data, "regions", "root")
    financial = _require(data, "financial", "root")

    constants = CostConstants(
        population_by_region=dict(_require(regions, "population", "regions")),
        remote_regions=list(regions.get("remote", [])),
        discount_rate=_require(financial, "discount_rate", "financial"),
        escalation_rate=_require(financial, "escalation_rate", "financial"),
        delay_months=_require(financial, "delay_months", "financial"),
        delay_penalty_rate=_require(financial, "delay_penalty_rate", "financial"),
        analysis_years=_require(financial, "analysis_years", "financial"),
        payback_cap_months=_require(financial, "payback_cap_months", "financial"),
        investment_stress_threshold=_require(
            financial, "investment_stress_threshold", "financial"
        ),
        energy=_build_section(EnergyCostConstants, _require(data, "energy", "root"), "energy"),
        water=_build_section(WaterCostConstants, _require(data, "water", "root"), "water"),
        agriculture=_build_section(
            AgricultureCostConstants, _require(data, "agriculture", "root"), "agriculture"
        ),
    )
    for name in constants.remote_regions:
        if name not in constants.population_by_region:
            logger.warning("Remote region '%s' has no population entry", name)
    return constants


def load_domain_settings(path=None):
    """Load per-domain model overrides.

    Each top-level key names a domain. Its optional "config" mapping
    overrides DomainConfig fields; its optional "parameters" mapping is
    passed to the model constructor.

    Returns:
        dict: {domain: {"config": {...}, **parameters}} ready for
            get_domain_model(domain, **entry)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a domain name is unknown
    """
    data = _read_yaml(path or DEFAULT_DOMAINS_PATH, "Domain settings")
    settings = {}
    for domain, entry in data.items():
        if domain not in DOMAIN_MODELS:
            valid = ", ".join(DOMAIN_MODELS.keys())
            raise ValueError(f"Unknown domain: '{domain}'. Available: {valid}")
        entry = entry or {}
        settings[domain] = {
            "config": dict(entry.get("config") or {}),
            **(entry.get("parameters") or {}),
        }
    return settings


def load_domain_models(path=None):
    """Instantiate every domain model configured in a domain settings file."""
    return {
        domain: get_domain_model(domain, **entry)
        for domain, entry in load_domain_settings(path).items()
    }


def load_scenario(path):
    """Load a scenario YAML file into its typed scenario dataclass.

    The file has a "scenario" block (name, description, domain) and a
    "parameters" block holding the scenario fields.

    Returns:
        EnergyScenario, WaterScenario or AgricultureScenario

    Raises:
        FileNotFoundError: If scenario file doesn't exist
        KeyError: If required configuration is missing
        ValueError: If the domain is unknown or dates are malformed
    """
    data = _read_yaml(path, "Scenario")
    meta = _require(data, "scenario", "root")
    params = dict(_require(data, "parameters", "root"))
    domain = _require(meta, "domain", "scenario")

    scenario_cls = get_scenario_class(domain)
    values = {}
    for f in fields(scenario_cls):
        value = _require(params, f.name, "parameters")
        if f.name in ("start_date", "end_date"):
            value = _as_date_string(value, f.name)
        values[f.name] = value

    unknown = set(params) - set(values)
    if unknown:
        raise ValueError(f"Unknown keys in parameters: {', '.join(sorted(unknown))}")

    logger.info("Loaded %s scenario '%s' from %s", domain, meta.get("name", ""), path)
    return scenario_cls(**values)
