# Domain model exports and registry
# Layer 2: Design configuration

from dataclasses import asdict

from infrastress.domains.base import (
    BaseDomainModel,
    DomainConfig,
    SupplyShare,
    FIXED,
    GROWTH,
    RAINFALL,
    SUPPLY_DRIVERS,
    DEFAULT_RAINFALL_PASS_THROUGH,
)
from infrastress.domains.energy import EnergyScenario, EnergyModel
from infrastress.domains.water import WaterScenario, WaterModel
from infrastress.domains.agriculture import (
    AgricultureScenario,
    AgricultureModel,
    CROP_TYPES,
    ALL_CROPS,
)


# ---------------------------------------------------------------------------
# Domain registry
# ---------------------------------------------------------------------------

DOMAIN_MODELS = {
    "energy": EnergyModel,
    "water": WaterModel,
    "agriculture": AgricultureModel,
}


def get_domain_model(name, config=None, **kwargs):
    """Get a domain model instance by name.

    Args:
        name: Domain name ("energy", "water", "agriculture")
        config: Optional DomainConfig, or a dict of DomainConfig fields that
            override the domain defaults
        **kwargs: Model-specific parameters passed to the constructor

    Returns:
        Instantiated domain model

    Raises:
        ValueError: If domain name not found
    """
    if name not in DOMAIN_MODELS:
        valid = ", ".join(DOMAIN_MODELS.keys())
        raise ValueError(f"Unknown domain: '{name}'. Available: {valid}")
    model_cls = DOMAIN_MODELS[name]
    if isinstance(config, dict):
        merged = asdict(model_cls.default_config())
        merged.update(config)
        config = DomainConfig(**merged)
    return model_cls(config=config, **kwargs)


def get_scenario_class(name):
    """Get the scenario dataclass for a domain name.

    Raises:
        ValueError: If domain name not found
    """
    if name not in DOMAIN_MODELS:
        valid = ", ".join(DOMAIN_MODELS.keys())
        raise ValueError(f"Unknown domain: '{name}'. Available: {valid}")
    return DOMAIN_MODELS[name].scenario_class
