"""Tick-based airport operations simulator."""

import logging

from .exceptions import AirportSimError, ConfigError, FlightStatusError, FlightValidationError
from .logging_config import configure_from_env, enable_console_logging, enable_file_logging
from .models import Flight, FlightStatus, Passenger
from .simulation import SimulationClock, SimulationConfig, TickDriver, TickResult, WorldSnapshot

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "AirportSimError",
    "ConfigError",
    "FlightStatusError",
    "FlightValidationError",
    "configure_from_env",
    "enable_console_logging",
    "enable_file_logging",
    "Flight",
    "FlightStatus",
    "Passenger",
    "SimulationClock",
    "SimulationConfig",
    "TickDriver",
    "TickResult",
    "WorldSnapshot",
]
