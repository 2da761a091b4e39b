"""Data loading utilities."""

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import yaml

from ..exceptions import ConfigError
from ..simulation.engine import SimulationClock, SimulationConfig


@dataclass
class FlightSpec:
    """A flight as read from a scenario file."""

    flight_number: str
    destination: str
    departure_time: int
    capacity: int


@dataclass
class Scenario:
    """Configuration plus the startup flight list."""

    config: SimulationConfig
    flights: List[FlightSpec] = field(default_factory=list)

    def create_clock(self, rng: Optional[np.random.Generator] = None) -> SimulationClock:
        """
        Build a clock with all scenario flights scheduled.

        Args:
            rng: Optional random generator overriding the configured seed

        Returns:
            Ready-to-run SimulationClock
        """
        clock = SimulationClock(config=self.config, rng=rng)
        for f in self.flights:
            clock.add_flight(f.flight_number, f.destination, f.departure_time, f.capacity)
        return clock


class DataLoader:
    """Loads scenario input files."""

    @staticmethod
    def default_flights() -> List[FlightSpec]:
        """Startup flight list used when no scenario is given."""
        return [
            FlightSpec("PS101", "Kyiv", 8, 6),
            FlightSpec("PS202", "Lviv", 10, 4),
            FlightSpec("PS303", "Odesa", 12, 5),
        ]

    @staticmethod
    def default_scenario() -> Scenario:
        return Scenario(config=SimulationConfig(), flights=DataLoader.default_flights())

    @staticmethod
    def load_scenario_yaml(file_path: str) -> Scenario:
        """
        Load scenario YAML file.

        Expected format:
        simulation:
          registration_counters: 3
          security_checks: 2
          boarding_rate: 5
          new_passenger_prob: 0.6
          tick_delay_ms: 400
          max_ticks: 0
          history_limit: 1000  # optional
        random_seed: 42
        flights:
          - {flight_number: PS101, destination: Kyiv, departure_time: 8, capacity: 6}

        Args:
            file_path: Path to scenario YAML

        Returns:
            Scenario with config and flights
        """
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        return DataLoader.scenario_from_dict(data or {})

    @staticmethod
    def scenario_from_dict(data: Dict) -> Scenario:
        """
        Create scenario from dictionary.

        A missing ``flights`` key falls back to the default flight list; an
        explicit empty list means no flights.

        Args:
            data: Scenario dictionary

        Returns:
            Scenario
        """
        if not isinstance(data, dict):
            raise ConfigError("Scenario must be a mapping")

        config = DataLoader.config_from_dict(data)

        if 'flights' in data:
            flights = [DataLoader._flight_from_dict(row) for row in (data['flights'] or [])]
        else:
            flights = DataLoader.default_flights()

        return Scenario(config=config, flights=flights)

    @staticmethod
    def config_from_dict(data: Dict) -> SimulationConfig:
        """
        Create config from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            SimulationConfig
        """
        sim = data.get('simulation', {}) or {}
        defaults = SimulationConfig()

        try:
            return SimulationConfig(
                registration_counters=int(sim.get('registration_counters', defaults.registration_counters)),
                security_checks=int(sim.get('security_checks', defaults.security_checks)),
                boarding_rate=int(sim.get('boarding_rate', defaults.boarding_rate)),
                new_passenger_prob=float(sim.get('new_passenger_prob', defaults.new_passenger_prob)),
                tick_delay_ms=int(sim.get('tick_delay_ms', defaults.tick_delay_ms)),
                max_ticks=int(sim.get('max_ticks', defaults.max_ticks)),
                history_limit=None if sim.get('history_limit') is None else int(sim['history_limit']),
                random_seed=data.get('random_seed'),
            )
        except ConfigError:
            raise
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid simulation settings: {e}") from e

    @staticmethod
    def load_flights_csv(file_path: str) -> List[FlightSpec]:
        """
        Load flights CSV file.

        Expected format:
        flight_number,destination,departure_time,capacity
        PS101,Kyiv,8,6
        ...

        Args:
            file_path: Path to flights CSV

        Returns:
            List of FlightSpec objects
        """
        with open(file_path, 'r', encoding='utf-8') as f:
            return DataLoader.load_flights_from_string(f.read())

    @staticmethod
    def load_flights_from_string(content: str) -> List[FlightSpec]:
        """
        Load flights from CSV string content.

        Args:
            content: CSV content as string

        Returns:
            List of FlightSpec objects
        """
        flights = []
        lines = content.strip().split('\n')

        if not lines or not lines[0]:
            return flights

        reader = csv.DictReader(lines)

        for row in reader:
            flight_number = (row.get('flight_number') or '').strip()
            if flight_number:
                flights.append(DataLoader._flight_from_dict(row))

        return flights

    @staticmethod
    def save_scenario_yaml(scenario: Scenario, file_path: str) -> str:
        """
        Write a scenario back to YAML.

        Args:
            scenario: Scenario to save
            file_path: Output path

        Returns:
            Path to output file
        """
        cfg = scenario.config
        data = {
            'simulation': {
                'registration_counters': cfg.registration_counters,
                'security_checks': cfg.security_checks,
                'boarding_rate': cfg.boarding_rate,
                'new_passenger_prob': cfg.new_passenger_prob,
                'tick_delay_ms': cfg.tick_delay_ms,
                'max_ticks': cfg.max_ticks,
                'history_limit': cfg.history_limit,
            },
            'random_seed': cfg.random_seed,
            'flights': [
                {
                    'flight_number': f.flight_number,
                    'destination': f.destination,
                    'departure_time': f.departure_time,
                    'capacity': f.capacity,
                }
                for f in scenario.flights
            ],
        }

        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)

        return str(path)

    @staticmethod
    def _flight_from_dict(row: Dict) -> FlightSpec:
        """Parse one flight entry."""
        try:
            return FlightSpec(
                flight_number=str(row['flight_number']).strip(),
                destination=str(row.get('destination', '')).strip(),
                departure_time=int(row['departure_time']),
                capacity=int(row['capacity']),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid flight entry {row!r}: {e}") from e
