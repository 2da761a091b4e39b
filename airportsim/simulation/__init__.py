"""Simulation package."""

from .engine import SimulationClock, SimulationConfig, TickResult, WorldSnapshot, FlightSnapshot
from .arrival import PassengerSpawner
from .processes import RegistrationStage, SecurityStage, BoardingAndDepartureStage
from .driver import TickDriver, SimulationResult

__all__ = [
    "SimulationClock",
    "SimulationConfig",
    "TickResult",
    "WorldSnapshot",
    "FlightSnapshot",
    "PassengerSpawner",
    "RegistrationStage",
    "SecurityStage",
    "BoardingAndDepartureStage",
    "TickDriver",
    "SimulationResult",
]
