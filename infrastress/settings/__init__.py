# Settings exports for regional stress simulation
# Layer 2: Design configuration

from infrastress.settings.loader import (
    CostConstants,
    EnergyCostConstants,
    WaterCostConstants,
    AgricultureCostConstants,
    DEFAULT_COST_CONSTANTS,
    load_cost_constants,
    load_domain_settings,
    load_domain_models,
    load_scenario,
)
