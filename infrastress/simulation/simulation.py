# Scenario simulation engine for regional infrastructure stress
# Layer 3: Simulation Engine
#
# One generic loop serves every domain. For each historical record:
# 1. Look up the region display name
# 2. Adjust demand for the scenario
# 3. Split baseline supply into components, scale each by its driver, recombine
# 4. Compute stress (buffered by reservoir or soil moisture where available)
# 5. Attach unmet demand and domain extras
#
# run_scenario() wraps the loop with validation, data fetching, summary
# statistics and economic analysis.

import logging
import time

from infrastress.domains import get_domain_model
from infrastress.errors import DataFetchError, RateLimitExceeded, ScenarioValidationError
from infrastress.simulation.economics import analyze_economics
from infrastress.simulation.metrics import summarize
from infrastress.simulation.state import SimulationResult, SimulationResponse
from infrastress.simulation.stress import calculate_stress
from infrastress.simulation.validation import validate_params

logger = logging.getLogger(__name__)


def simulate(scenario, records, regions, model):
    """Project stress for every record under a scenario.

    Args:
        scenario: Validated scenario dataclass for the model's domain
        records: Iterable of daily record dicts, in the order to report them
        regions: {region_id: display name}
        model: Domain model (see infrastress.domains)

    Returns:
        list of SimulationResult, one per selected record, in input order
    """
    results = []
    unknown_regions = set()

    for record in model.select_records(records, scenario):
        region_id = record["region_id"]
        region_name = regions.get(region_id)
        if not region_name:
            if region_id not in unknown_regions:
                logger.warning("Unknown region '%s', using id as name", region_id)
                unknown_regions.add(region_id)
            region_name = region_id

        demand = model.adjusted_demand(record, scenario)
        supply = model.adjusted_supply(record, scenario)
        stress = calculate_stress(demand, supply, model.buffer_level(record))

        unmet = max(0.0, demand - supply) if model.tracks_unmet_demand else None
        results.append(SimulationResult(
            date=str(record["date"]),
            region_id=region_id,
            region_name=region_name,
            demand=demand,
            supply=supply,
            stress=stress,
            domain=model.name,
            unmet_demand=unmet,
            extras=model.extra_fields(record, scenario, demand, supply, stress),
        ))

    return results


def fetch_inputs(data_source, domain, scenario):
    """Read regions and records for a scenario from the data source.

    Raises:
        DataFetchError: If the data source fails; the message carries the
            upstream error text
    """
    try:
        regions = data_source.get_regions()
        records = data_source.get_daily_records(
            domain, scenario.start_date, scenario.end_date
        )
    except Exception as e:
        raise DataFetchError(f"Failed to fetch {domain} data: {e}", domain=domain) from e
    return regions, records


def run_scenario(
    scenario,
    data_source,
    cost_constants=None,
    model=None,
    rate_limiter=None,
    client_key="anonymous",
    validate=True,
    include_economics=True,
    verbose=False,
):
    """Run one scenario end to end.

    validate -> fetch -> simulate -> summarize -> analyze

    Args:
        scenario: EnergyScenario, WaterScenario or AgricultureScenario
        data_source: HistoricalDataSource
        cost_constants: CostConstants for the economic analysis
        model: Domain model; the registry default for scenario.domain when omitted
        rate_limiter: Optional RateLimiter checked before any work
        client_key: Key the rate limiter counts requests under
        validate: If True, reject invalid parameters before fetching data
        include_economics: If False, skip the economic analysis
        verbose: If True, print progress messages

    Returns:
        SimulationResponse

    Raises:
        RateLimitExceeded: If rate_limiter denies client_key
        ScenarioValidationError: If validate is True and parameters are invalid
        DataFetchError: If the data source fails
    """
    started = time.perf_counter()

    if rate_limiter is not None and not rate_limiter.check_and_record(client_key):
        raise RateLimitExceeded(client_key, rate_limiter.retry_after(client_key))

    if validate:
        check = validate_params(scenario)
        if not check.is_valid:
            raise ScenarioValidationError(check.error)

    domain = scenario.domain
    if model is None:
        model = get_domain_model(domain)

    regions, records = fetch_inputs(data_source, domain, scenario)
    if verbose:
        print(f"Fetched {len(records)} {domain} records for {len(regions)} regions "
              f"({scenario.start_date} to {scenario.end_date})")

    results = simulate(scenario, records, regions, model)
    summary = summarize(results, domain, model=model)
    if verbose:
        print(f"Simulated {len(results)} region-days: avg stress {summary.avg_stress:.3f}, "
              f"max {summary.max_stress:.3f}")

    analysis = None
    if include_economics:
        analysis = analyze_economics(summary, cost_constants, scenario)
        if verbose:
            print(f"Investment ${analysis.infrastructure_investment_usd:,.0f}, "
                  f"ROI {analysis.roi_5_year:.1f}x, "
                  f"payback {analysis.payback_period_months} months")

    elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
    logger.info(
        "%s scenario: %d results in %.2f ms", domain, len(results), elapsed_ms
    )
    return SimulationResponse(
        daily_results=results,
        summary=summary,
        economic_analysis=analysis,
        scenario=scenario,
        execution_time_ms=elapsed_ms,
    )


def _check_domain(scenario, domain):
    if getattr(scenario, "domain", None) != domain:
        raise ScenarioValidationError(
            f"Expected {domain} scenario, got {type(scenario).__name__}"
        )


def simulate_energy(scenario, data_source, **kwargs):
    """Run an EnergyScenario; see run_scenario() for keyword arguments."""
    _check_domain(scenario, "energy")
    return run_scenario(scenario, data_source, **kwargs)


def simulate_water(scenario, data_source, **kwargs):
    """Run a WaterScenario; see run_scenario() for keyword arguments."""
    _check_domain(scenario, "water")
    return run_scenario(scenario, data_source, **kwargs)


def simulate_agriculture(scenario, data_source, **kwargs):
    """Run an AgricultureScenario; see run_scenario() for keyword arguments."""
    _check_domain(scenario, "agriculture")
    return run_scenario(scenario, data_source, **kwargs)
