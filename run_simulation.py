#!/usr/bin/env python3
"""
Airport tick simulation CLI entry point

Usage:
    # Default flights, unlimited ticks (Ctrl+C to stop)
    python run_simulation.py

    # Scenario file, 20 ticks, no pacing, export results
    python run_simulation.py --scenario config/scenario_base.yaml --ticks 20 --delay-ms 0 --output output

    # Flights from CSV, reproducible run with charts
    python run_simulation.py --flights-csv data/flights.csv --seed 42 --ticks 30 --output output --chart
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from airportsim.analysis.charts import ChartGenerator
from airportsim.analysis.statistics import StatisticsCalculator
from airportsim.exceptions import AirportSimError
from airportsim.io.console import ConsoleRenderer
from airportsim.io.exporter import ResultExporter
from airportsim.io.loader import DataLoader, Scenario
from airportsim.logging_config import configure_from_env, enable_console_logging, enable_file_logging
from airportsim.simulation.driver import SimulationResult, TickDriver


logger = logging.getLogger("airportsim.cli")


def build_scenario(args: argparse.Namespace) -> Scenario:
    """Assemble the scenario from CLI arguments."""
    if args.scenario:
        print(f"Loading scenario: {args.scenario}")
        scenario = DataLoader.load_scenario_yaml(args.scenario)
    else:
        scenario = DataLoader.default_scenario()

    if args.flights_csv:
        print(f"Loading flights: {args.flights_csv}")
        scenario.flights = DataLoader.load_flights_csv(args.flights_csv)

    if args.seed is not None:
        scenario.config.random_seed = args.seed
    if args.ticks is not None:
        scenario.config.max_ticks = args.ticks

    return scenario


def report(result: SimulationResult, output_dir: Optional[str], chart: bool):
    """Print a summary and optionally write result files."""
    stats = StatisticsCalculator(result).calculate_overall_stats()

    print("\n--- Summary ---")
    print(f"Ticks run:          {stats.ticks_run}")
    print(f"Passengers arrived: {stats.passengers_arrived}")
    print(f"Flights departed:   {stats.flights_departed}")
    print(f"Boarded / missed:   {stats.passengers_boarded} / {stats.passengers_missed}")
    print(f"Mean load factor:   {stats.mean_load_factor:.0%}")

    if not output_dir:
        return

    exporter = ResultExporter(output_dir)
    files = exporter.export_all(result)

    if chart:
        charts = ChartGenerator()
        files['queue_chart'] = charts.generate_queue_chart(
            result, str(Path(output_dir) / "queue_chart.png")
        )
        files['load_chart'] = charts.generate_load_factor_chart(
            result, str(Path(output_dir) / "load_chart.png")
        )

    print("\nOutput files:")
    for name, path in files.items():
        print(f"  {name}: {path}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Airport operations tick simulator",
    )
    parser.add_argument(
        "--scenario", "-s",
        type=str,
        help="Scenario YAML file",
    )
    parser.add_argument(
        "--flights-csv",
        type=str,
        help="Flights CSV file (overrides scenario flights)",
    )
    parser.add_argument(
        "--ticks", "-t",
        type=int,
        help="Number of ticks to run, 0 = until Ctrl+C (default: from scenario)",
    )
    parser.add_argument(
        "--delay-ms",
        type=int,
        help="Delay between ticks in milliseconds (default: from scenario)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed",
    )
    parser.add_argument(
        "--stop-when-idle",
        action="store_true",
        help="Stop once all flights have departed and queues are empty",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output directory for CSV/JSON results",
    )
    parser.add_argument(
        "--chart",
        action="store_true",
        help="Also write queue and load factor charts (requires --output)",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Do not print the status board every tick",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Enable engine logging at this level",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Write engine logs to this file instead of stderr",
    )

    args = parser.parse_args(argv)

    if args.chart and not args.output:
        parser.error("--chart requires --output")

    if args.log_file:
        enable_file_logging(args.log_file, level=args.log_level or "INFO")
    elif args.log_level:
        enable_console_logging(level=args.log_level)
    else:
        configure_from_env()

    try:
        scenario = build_scenario(args)
        clock = scenario.create_clock()
    except (OSError, AirportSimError) as e:
        parser.error(str(e))

    driver = TickDriver(
        clock,
        tick_delay_ms=args.delay_ms,
        on_tick=None if args.quiet else ConsoleRenderer(),
        stop_when_idle=args.stop_when_idle,
    )

    if not driver.max_ticks:
        print("Unlimited mode. Press Ctrl+C to stop.")

    try:
        result = driver.run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        result = driver.result()

    print(f"\nSimulation finished after {result.ticks_run} tick(s).")
    report(result, args.output, args.chart)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
