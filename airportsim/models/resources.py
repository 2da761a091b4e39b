"""World state shared by the simulation stages."""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional

from .flight import Flight, FlightStatus
from .passenger import Passenger


@dataclass
class QueueSnapshot:
    """Queue depths at the end of a tick."""

    tick: int
    registration_queue: int
    security_queue: int
    waiting_at_gate: int
    active_flights: int


@dataclass
class DepartureRecord:
    """Outcome of a single departure."""

    flight_number: str
    destination: str
    tick: int
    boarded: int
    capacity: int
    missed: int

    @property
    def load_factor(self) -> float:
        """Share of seats filled (0 for zero-capacity flights)."""
        if self.capacity == 0:
            return 0.0
        return self.boarded / self.capacity


class AirportState:
    """
    Container for everything the simulation mutates.

    Holds the active flights, the global passenger list, the two FIFO
    queues and a flight-number index over the passenger list. Both the list
    and the per-flight index keep spawn order, so scanning the index yields
    passengers in the same order as scanning the global list.
    """

    def __init__(self, history_limit: Optional[int] = None):
        """
        Args:
            history_limit: Number of queue snapshots to keep (None = all)
        """
        self.flights: List[Flight] = []
        self.passengers: List[Passenger] = []
        self.registration_queue: Deque[Passenger] = deque()
        self.security_queue: Deque[Passenger] = deque()

        self.departures: List[DepartureRecord] = []
        self.queue_history: Deque[QueueSnapshot] = deque(maxlen=history_limit)

        # Running totals, kept independent of the bounded history
        self.arrivals = 0
        self.registration_rejections = 0

        self._flights_by_number: Dict[str, Flight] = {}
        self._passengers_by_flight: Dict[str, List[Passenger]] = {}

    # --- flights -------------------------------------------------------

    def add_flight(self, flight: Flight):
        """Register an active flight (caller checks uniqueness)."""
        self.flights.append(flight)
        self._flights_by_number[flight.flight_number] = flight

    def get_flight(self, flight_number: str) -> Optional[Flight]:
        """Look up an active flight by number."""
        return self._flights_by_number.get(flight_number)

    def has_flight(self, flight_number: str) -> bool:
        return flight_number in self._flights_by_number

    def departed_flights(self) -> List[Flight]:
        return [f for f in self.flights if f.status == FlightStatus.DEPARTED]

    def remove_flight(self, flight: Flight):
        """
        Drop a flight and every passenger booked on it.

        Removes the flight's passengers from the global list and from both
        queues. Relative order of the remaining entries is preserved.

        Args:
            flight: Flight to remove
        """
        number = flight.flight_number

        if self._passengers_by_flight.pop(number, None) is not None:
            self.passengers = [p for p in self.passengers if p.flight_number != number]

        self.registration_queue = deque(
            p for p in self.registration_queue if p.flight_number != number
        )
        self.security_queue = deque(
            p for p in self.security_queue if p.flight_number != number
        )

        self.flights = [f for f in self.flights if f is not flight]
        if self._flights_by_number.get(number) is flight:
            del self._flights_by_number[number]

    # --- passengers ----------------------------------------------------

    def add_passenger(self, passenger: Passenger):
        """Add a new arrival to the passenger list and the registration queue."""
        self.passengers.append(passenger)
        self._passengers_by_flight.setdefault(passenger.flight_number, []).append(passenger)
        self.registration_queue.append(passenger)
        self.arrivals += 1

    def passengers_for(self, flight_number: str) -> List[Passenger]:
        """Passengers booked on a flight, in arrival order."""
        return list(self._passengers_by_flight.get(flight_number, ()))

    def eligible_for_boarding(self, flight_number: str, limit: int) -> List[Passenger]:
        """
        First ``limit`` cleared passengers of a flight who are not on board.

        Args:
            flight_number: Flight to scan
            limit: Maximum number of passengers to return

        Returns:
            Passengers in arrival order
        """
        ready = []
        if limit <= 0:
            return ready
        for p in self._passengers_by_flight.get(flight_number, ()):
            if p.is_waiting_at_gate:
                ready.append(p)
                if len(ready) >= limit:
                    break
        return ready

    def waiting_at_gate_count(self) -> int:
        """Cleared, unboarded passengers whose flight is still active."""
        return sum(
            1
            for number in self._flights_by_number
            for p in self._passengers_by_flight.get(number, ())
            if p.is_waiting_at_gate
        )

    # --- monitoring ----------------------------------------------------

    def record_snapshot(self, tick: int) -> QueueSnapshot:
        """Record current queue depths."""
        snapshot = QueueSnapshot(
            tick=tick,
            registration_queue=len(self.registration_queue),
            security_queue=len(self.security_queue),
            waiting_at_gate=self.waiting_at_gate_count(),
            active_flights=len(self.flights),
        )
        self.queue_history.append(snapshot)
        return snapshot

