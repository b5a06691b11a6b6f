# Economic analyzer for regional stress simulation
# Layer 3: Simulation Engine
#
# Turns summary statistics into an investment case:
# 1. Infrastructure investment for regions above the stress threshold
# 2. Annual costs prevented (outages, shortages, crop losses)
# 3. Financial metrics: ROI, NPV, payback, opportunity cost, cost of inaction
#
# Region stress maps to yearly impact: stress 1.0 is 100 outage hours or
# 60 shortage days per year. All USD outputs are whole dollars.

import logging
import math
from dataclasses import dataclass, asdict

from infrastress.settings.loader import DEFAULT_COST_CONSTANTS

logger = logging.getLogger(__name__)


@dataclass
class EconomicAnalysis:
    """Investment case derived from one simulation summary."""
    infrastructure_investment_usd: float = 0
    annual_savings_usd: float = 0
    annual_costs_prevented_usd: float = 0
    roi_5_year: float = 0.0
    payback_period_months: int = 0
    net_present_value_usd: float = 0
    opportunity_cost_6mo_delay_usd: float = 0
    total_economic_exposure_usd: float = 0
    cost_of_inaction_5_year_usd: float = 0

    def to_dict(self):
        return asdict(self)


def _finite(value):
    """Replace NaN and infinities with 0.0."""
    return value if math.isfinite(value) else 0.0


# ---------------------------------------------------------------------------
# Infrastructure investment
# ---------------------------------------------------------------------------

def calculate_solar_investment(capacity_mw, constants=DEFAULT_COST_CONSTANTS):
    """Installed cost of solar capacity (USD)."""
    return capacity_mw * constants.energy.solar_cost_per_kw * 1000


def calculate_grid_upgrade(region, capacity_increase_pct, constants=DEFAULT_COST_CONSTANTS):
    """Cost of raising a region's grid capacity.

    Base cost buys a 10% increase; remote regions cost more.

    Args:
        region: Region display name
        capacity_increase_pct: Capacity increase in percent (20 = 20%)
        constants: CostConstants

    Returns:
        float: Upgrade cost in USD
    """
    energy = constants.energy
    multiplier = energy.remote_region_multiplier if constants.is_remote(region) else 1.0
    return energy.grid_upgrade_base_cost_per_region * (capacity_increase_pct / 10) * multiplier


def calculate_water_infrastructure(kind, capacity_or_length, constants=DEFAULT_COST_CONSTANTS):
    """Cost of a water infrastructure project.

    Args:
        kind: "treatment" or "desalination" (capacity in m3/day), or
            "pipes" (length in km)
        capacity_or_length: Capacity in m3/day, or length in km for pipes
        constants: CostConstants

    Returns:
        float: Cost in USD

    Raises:
        ValueError: If kind is not recognized
    """
    water = constants.water
    if kind == "pipes":
        return water.pipes_cost_per_10km * (capacity_or_length / 10)
    unit_costs = {
        "treatment": water.treatment_cost_per_100k_m3_day,
        "desalination": water.desalination_cost_per_100k_m3_day,
    }
    if kind not in unit_costs:
        raise ValueError(
            f"Unknown water infrastructure: '{kind}'. Available: treatment, desalination, pipes"
        )
    return unit_costs[kind] * (capacity_or_length / 100_000)


def calculate_irrigation_system(hectares, system_type="drip", constants=DEFAULT_COST_CONSTANTS):
    """Installation plus maintenance cost of an irrigation system.

    Returns:
        float: Installation cost plus annual maintenance over the
            maintenance horizon (USD)

    Raises:
        ValueError: If system_type is not "drip" or "sprinkler"
    """
    ag = constants.agriculture
    unit_costs = {
        "drip": ag.drip_irrigation_cost_per_ha,
        "sprinkler": ag.sprinkler_irrigation_cost_per_ha,
    }
    if system_type not in unit_costs:
        raise ValueError(f"Unknown irrigation system: '{system_type}'. Available: drip, sprinkler")
    installation = hectares * unit_costs[system_type]
    maintenance = installation * ag.annual_maintenance_rate * ag.maintenance_years
    return installation + maintenance


# ---------------------------------------------------------------------------
# Social and economic costs
# ---------------------------------------------------------------------------

def calculate_power_outage_cost(population, outage_hours_per_year, constants=DEFAULT_COST_CONSTANTS):
    """Annual cost of power outages: productivity, business and extended-outage impact."""
    energy = constants.energy
    productivity = population * energy.cost_per_outage_hour_per_capita * outage_hours_per_year
    businesses = population / energy.people_per_business if energy.people_per_business else 0.0
    business = businesses * energy.business_cost_per_outage_hour * outage_hours_per_year
    extended = 0.0
    if outage_hours_per_year > energy.extended_outage_threshold_hours:
        extended = population * energy.extended_outage_cost_per_capita
    return productivity + business + extended


def calculate_water_shortage_cost(population, shortage_days_per_year, constants=DEFAULT_COST_CONSTANTS):
    """Annual cost of water shortages: health plus time spent finding water."""
    water = constants.water
    per_day = (
        water.health_cost_per_shortage_day_per_capita
        + water.time_cost_per_shortage_day_per_capita
    )
    return population * per_day * shortage_days_per_year


def calculate_crop_loss(yield_reduction_kg, crop_type, constants=DEFAULT_COST_CONSTANTS):
    """Economic loss of lost yield, including the GDP multiplier."""
    ag = constants.agriculture
    if crop_type not in ag.crop_price_per_kg:
        logger.warning("No price for crop '%s', crop loss valued at 0", crop_type)
        return 0.0
    return yield_reduction_kg * ag.crop_price_per_kg[crop_type] * ag.gdp_multiplier


# ---------------------------------------------------------------------------
# Financial metrics
# ---------------------------------------------------------------------------

def calculate_npv(investment, annual_cashflows, discount_rate=0.05):
    """Net Present Value of cash flows.

    NPV = -investment + Σ(cashflow(t) / (1+r)^t) for t=1..N

    Args:
        investment: Initial investment (positive value)
        annual_cashflows: list of yearly cash flows [year1, year2, ...]
        discount_rate: Annual discount rate (e.g., 0.05 for 5%)

    Returns:
        float: NPV in USD
    """
    npv = -investment
    for t, cashflow in enumerate(annual_cashflows, start=1):
        npv += cashflow / ((1 + discount_rate) ** t)
    return npv


def calculate_roi(investment, annual_benefits, years=5, discount_rate=0.05):
    """Return on investment from discounted benefits.

    ROI = (Σ benefits/(1+r)^t - investment) / investment

    Returns:
        float: ROI as a multiple (4.2 means 420%), 0.0 without investment
    """
    if investment <= 0:
        return 0.0
    npv = calculate_npv(investment, [annual_benefits] * years, discount_rate)
    return npv / investment


def calculate_payback_period(investment, annual_savings, cap_months=60):
    """Months until savings repay the investment, capped.

    Returns:
        int: 0 without investment, cap_months without savings, otherwise
            min(cap_months, round(investment / annual_savings * 12))
    """
    if investment <= 0:
        return 0
    if annual_savings <= 0:
        return cap_months
    months = investment / annual_savings * 12
    if not math.isfinite(months):
        return cap_months
    return min(cap_months, round(months))


def calculate_opportunity_cost(annual_savings, delay_months=6, monthly_penalty_rate=0.02):
    """Savings forgone by delaying action, with a linear monthly penalty."""
    return annual_savings * delay_months / 12 * monthly_penalty_rate


def calculate_cost_of_inaction(annual_cost, years=5, escalation_rate=0.05):
    """Cumulative cost of doing nothing: Σ annual_cost × (1+e)^y for y=1..years."""
    return sum(annual_cost * (1 + escalation_rate) ** year for year in range(1, years + 1))


# ---------------------------------------------------------------------------
# Per-domain cost models
# ---------------------------------------------------------------------------

def _energy_costs(regions, constants, scenario):
    investment = 0.0
    costs = 0.0
    for name, population, stress in regions:
        if stress > constants.investment_stress_threshold:
            investment += calculate_grid_upgrade(name, (stress - 0.5) * 100, constants)
        outage_hours = stress * constants.energy.outage_hours_per_stress
        costs += calculate_power_outage_cost(population, outage_hours, constants)

    solar_growth = getattr(scenario, "solar_growth_pct", 0) or 0
    if solar_growth > 0:
        capacity_mw = solar_growth / 100 * constants.energy.solar_baseline_capacity_mw
        investment += calculate_solar_investment(capacity_mw, constants)
    return investment, costs, constants.energy.benefit_realization


def _water_costs(regions, constants, scenario):
    investment = 0.0
    costs = 0.0
    for _name, population, stress in regions:
        if stress > constants.investment_stress_threshold:
            capacity_m3_day = population * constants.water.per_capita_capacity_m3_day * stress
            investment += calculate_water_infrastructure("treatment", capacity_m3_day, constants)
        shortage_days = stress * constants.water.shortage_days_per_stress
        costs += calculate_water_shortage_cost(population, shortage_days, constants)
    return investment, costs, constants.water.benefit_realization


def _agriculture_costs(regions, constants, scenario, summary):
    ag = constants.agriculture
    stressed = [r for r in regions if r[2] > constants.investment_stress_threshold]
    hectares = min(ag.max_affected_hectares, len(stressed) * ag.hectares_per_stressed_region)
    investment = calculate_irrigation_system(hectares, "drip", constants)

    costs = 0.0
    for crop, loss_kg in summary.extras.get("yield_loss_by_crop", {}).items():
        costs += calculate_crop_loss(loss_kg, crop, constants)
    return investment, costs, ag.benefit_realization


def analyze_economics(summary, constants=None, scenario=None):
    """Build the investment case for a simulation summary.

    Regions come from summary.top_stressed_regions; populations are looked
    up by display name (unknown regions count as population 0). Regions
    above the investment threshold need infrastructure, and every listed
    region contributes to the costs prevented.

    Args:
        summary: SummaryStatistics from summarize()
        constants: CostConstants; DEFAULT_COST_CONSTANTS when omitted
        scenario: Scenario dataclass (energy uses solar_growth_pct)

    Returns:
        EconomicAnalysis with finite values. An unknown domain yields an
        all-zero analysis.
    """
    constants = constants or DEFAULT_COST_CONSTANTS
    regions = [
        (r.region_name, constants.population(r.region_name), r.avg_stress)
        for r in summary.top_stressed_regions
    ]
    for name, population, _stress in regions:
        if population == 0:
            logger.warning("No population for region '%s', costs use 0", name)

    if summary.domain == "energy":
        investment, costs, realization = _energy_costs(regions, constants, scenario)
    elif summary.domain == "water":
        investment, costs, realization = _water_costs(regions, constants, scenario)
    elif summary.domain == "agriculture":
        investment, costs, realization = _agriculture_costs(regions, constants, scenario, summary)
    else:
        logger.warning("No cost model for domain %r, returning empty analysis", summary.domain)
        return EconomicAnalysis()

    investment = _finite(investment)
    costs = _finite(costs)
    savings = costs * realization
    years = constants.analysis_years

    roi = calculate_roi(investment, savings, years, constants.discount_rate)
    npv = calculate_npv(investment, [savings] * years, constants.discount_rate)
    payback = calculate_payback_period(investment, savings, constants.payback_cap_months)
    opportunity = calculate_opportunity_cost(
        savings, constants.delay_months, constants.delay_penalty_rate
    )
    inaction = calculate_cost_of_inaction(costs, years, constants.escalation_rate)

    return EconomicAnalysis(
        infrastructure_investment_usd=round(investment),
        annual_savings_usd=round(savings),
        annual_costs_prevented_usd=round(costs),
        roi_5_year=round(_finite(roi), 1),
        payback_period_months=payback,
        net_present_value_usd=round(_finite(npv)),
        opportunity_cost_6mo_delay_usd=round(_finite(opportunity)),
        total_economic_exposure_usd=round(costs),
        cost_of_inaction_5_year_usd=round(_finite(inaction)),
    )
