# Simulation engine exports
# Layer 3: Simulation Engine

from infrastress.simulation.stress import calculate_stress
from infrastress.simulation.validation import validate_params, ValidationResult
from infrastress.simulation.state import SimulationResult, SimulationResponse
from infrastress.simulation.metrics import summarize, SummaryStatistics, TopStressedRegion
from infrastress.simulation.economics import analyze_economics, EconomicAnalysis
from infrastress.simulation.data_source import HistoricalDataSource, DataFrameDataSource
from infrastress.simulation.rate_limit import RateLimiter, RATE_LIMITS
from infrastress.simulation.simulation import (
    simulate,
    run_scenario,
    simulate_energy,
    simulate_water,
    simulate_agriculture,
)
