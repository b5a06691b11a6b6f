# Stress calculator for regional infrastructure simulation
# Layer 3: Simulation Engine
#
# Stress is the unmet share of demand, reduced by up to 30% when a buffer
# (reservoir level, soil moisture) is available:
#   raw    = max(0, demand - supply) / max(demand, 1)
#   stress = raw * (1 - 0.3 * min(buffer / 100, 1))
# and always falls within [0, 1].

import math

MAX_BUFFER_RELIEF = 0.3


def calculate_stress(demand, supply, buffer=None):
    """Compute the stress ratio for one region-day.

    Args:
        demand: Demand in the domain's unit (kWh, m3, mm)
        supply: Supply in the same unit
        buffer: Optional buffer level in percent (0-100). None, NaN and
            non-positive values apply no relief.

    Returns:
        float: Stress in [0, 1]. Zero when there is no demand, one when
            there is demand but no supply.
    """
    if demand is None or supply is None:
        return 0.0
    demand = float(demand)
    supply = float(supply)
    if math.isnan(demand) or math.isnan(supply):
        return 0.0
    if demand <= 0:
        return 0.0
    if supply <= 0:
        return 1.0
    if math.isinf(demand):
        return 0.0 if math.isinf(supply) else 1.0

    shortage = max(0.0, demand - supply)
    stress = shortage / max(demand, 1.0)

    if buffer is not None:
        buffer = float(buffer)
        if not math.isnan(buffer) and buffer > 0:
            stress *= 1 - MAX_BUFFER_RELIEF * min(buffer / 100, 1.0)

    return min(1.0, max(0.0, stress))
