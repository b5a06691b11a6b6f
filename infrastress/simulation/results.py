# Results output for regional stress simulation
# Layer 3: Simulation Engine
#
# Writes a SimulationResponse to disk.
# Output structure:
#   /results/<domain>_YYYYMMDD_HHMMSS/
#     daily_results.csv
#     summary.json
#     economic_analysis.json
#     scenario.json

import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

import pandas as pd

BASE_COLUMNS = ["date", "region_id", "region_name", "demand", "supply", "stress"]


def create_output_directory(base_path="results", scenario_name="scenario"):
    """Create timestamped output directory.

    Args:
        base_path: Base results directory
        scenario_name: Name prefix for output folder

    Returns:
        Path to created directory
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_dir = Path(base_path) / f"{scenario_name}_{timestamp}"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def results_to_dataframe(results):
    """Flatten SimulationResult objects into a DataFrame.

    Columns start with date, region_id, region_name, demand, supply and
    stress, followed by unmet demand and domain extras in first-seen order.
    Demand and supply keep 2 decimals, stress 4.
    """
    rows = [r.to_dict() for r in results]
    if not rows:
        return pd.DataFrame(columns=BASE_COLUMNS)

    df = pd.DataFrame(rows)
    extra_columns = [c for c in df.columns if c not in BASE_COLUMNS]
    df = df[BASE_COLUMNS + extra_columns].copy()
    df[["demand", "supply"]] = df[["demand", "supply"]].round(2)
    df["stress"] = df["stress"].round(4)
    return df


def write_daily_results(results, output_path):
    """Write daily results to CSV.

    Args:
        results: List of SimulationResult
        output_path: Path to output CSV file

    Returns:
        DataFrame that was written
    """
    df = results_to_dataframe(results)
    df.to_csv(output_path, index=False)
    return df


def _write_json(data, output_path):
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def write_results(response, output_dir=None, base_path="results"):
    """Write all outputs of one scenario run.

    Args:
        response: SimulationResponse
        output_dir: Output directory (created if not provided)
        base_path: Parent of the timestamped directory when output_dir is None

    Returns:
        Path to output directory
    """
    domain = getattr(response.scenario, "domain", "scenario")
    if output_dir is None:
        output_dir = create_output_directory(base_path, scenario_name=domain)
    else:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

    print(f"Writing results to {output_dir}")

    daily_df = write_daily_results(response.daily_results, output_dir / "daily_results.csv")
    print(f"  - daily_results.csv: {len(daily_df)} rows")

    _write_json(response.summary.to_dict(), output_dir / "summary.json")
    print("  - summary.json")

    if response.economic_analysis is not None:
        _write_json(response.economic_analysis.to_dict(), output_dir / "economic_analysis.json")
        print("  - economic_analysis.json")

    if response.scenario is not None:
        scenario = {"domain": domain, **asdict(response.scenario)}
        scenario["execution_time_ms"] = response.execution_time_ms
        _write_json(scenario, output_dir / "scenario.json")
        print("  - scenario.json")

    return output_dir


def main():
    """Run a scenario file against the sample data and write results."""
    import sys

    from infrastress.settings import loader
    from infrastress.simulation.sample_data import build_sample_data_source
    from infrastress.simulation.simulation import run_scenario

    if len(sys.argv) < 2:
        print("Usage: python -m infrastress.simulation.results <scenario_file> [output_dir]")
        print("Example: python -m infrastress.simulation.results settings/scenarios/water_drought.yaml")
        sys.exit(1)

    scenario_path = sys.argv[1]
    output_dir = sys.argv[2] if len(sys.argv) > 2 else None

    print(f"Loading scenario: {scenario_path}")
    scenario = loader.load_scenario(scenario_path)
    # settings/ lives in the source checkout, not in an installed package
    if loader.DEFAULT_ECONOMICS_PATH.exists():
        constants = loader.load_cost_constants()
    else:
        print(f"No {loader.DEFAULT_ECONOMICS_PATH}, using built-in cost constants")
        constants = loader.DEFAULT_COST_CONSTANTS
    data_source = build_sample_data_source(scenario.start_date, scenario.end_date)

    print("Running simulation...")
    response = run_scenario(scenario, data_source, cost_constants=constants, verbose=True)

    output_path = write_results(response, output_dir)
    print(f"\nDone! Results saved to: {output_path}")


if __name__ == "__main__":
    main()
