"""Builders for hand-made world state."""

from airportsim.models.flight import Flight
from airportsim.models.passenger import Passenger
from airportsim.models.resources import AirportState


def add_flight(state: AirportState, number: str, departure_time: int = 10,
               capacity: int = 5, destination: str = "Kyiv") -> Flight:
    flight = Flight(
        flight_number=number,
        destination=destination,
        departure_time=departure_time,
        capacity=capacity,
    )
    state.add_flight(flight)
    return flight


def add_cleared(state: AirportState, name: str, flight_number: str) -> Passenger:
    """Add a ticketed, screened passenger that sits in no queue."""
    p = Passenger(name=name, flight_number=flight_number, has_ticket=True, passed_security=True)
    state.add_passenger(p)
    state.registration_queue.remove(p)
    return p


class ScriptedRng:
    """
    Stand-in for ``numpy.random.Generator`` replaying fixed draws.

    ``random()`` pops from ``rolls``; ``integers()`` pops from ``picks`` and
    checks the value lies in the requested range.
    """

    def __init__(self, rolls=(), picks=()):
        self.rolls = list(rolls)
        self.picks = list(picks)

    def random(self) -> float:
        return self.rolls.pop(0)

    def integers(self, low: int, high: int = None) -> int:
        if high is None:
            low, high = 0, low
        value = self.picks.pop(0)
        assert low <= value < high, f"scripted pick {value} outside [{low}, {high})"
        return value
