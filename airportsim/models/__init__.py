"""Models package."""

from .passenger import Passenger, PassengerFactory
from .flight import Flight, FlightStatus, BOARDING_LEAD_TICKS
from .resources import AirportState, DepartureRecord, QueueSnapshot

__all__ = [
    "Passenger",
    "PassengerFactory",
    "Flight",
    "FlightStatus",
    "BOARDING_LEAD_TICKS",
    "AirportState",
    "DepartureRecord",
    "QueueSnapshot",
]
