"""Main simulation engine."""

from collections import deque
from dataclasses import dataclass, field
import logging
from typing import Deque, List, Optional, Tuple

import numpy as np

from ..exceptions import ConfigError, FlightValidationError
from ..models.flight import Flight, FlightStatus
from ..models.passenger import Passenger, PassengerFactory
from ..models.resources import AirportState
from .arrival import PassengerSpawner
from .processes import RegistrationStage, SecurityStage, BoardingAndDepartureStage


logger = logging.getLogger(__name__)

# Ticks of history kept when a run has no tick limit
DEFAULT_HISTORY_LIMIT = 1000


@dataclass
class SimulationConfig:
    """Configuration for the simulation."""

    # Throughput per tick
    registration_counters: int = 3
    security_checks: int = 2
    boarding_rate: int = 5

    # Arrivals
    new_passenger_prob: float = 0.6

    # Pacing (used by the driver, not by the clock)
    tick_delay_ms: int = 400
    max_ticks: int = 0  # 0 = run until stopped

    # Random seed
    random_seed: Optional[int] = None

    # Ticks of per-tick history to keep; None = all for bounded runs,
    # DEFAULT_HISTORY_LIMIT for unlimited ones
    history_limit: Optional[int] = None

    def __post_init__(self):
        for name in ("registration_counters", "security_checks", "boarding_rate",
                     "tick_delay_ms", "max_ticks"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ConfigError(f"{name} must be a non-negative integer, got {value!r}")

        if not 0.0 <= self.new_passenger_prob <= 1.0:
            raise ConfigError(
                f"new_passenger_prob must be within [0, 1], got {self.new_passenger_prob!r}"
            )

        if self.history_limit is not None and (
            not isinstance(self.history_limit, int)
            or isinstance(self.history_limit, bool)
            or self.history_limit < 1
        ):
            raise ConfigError(f"history_limit must be a positive integer, got {self.history_limit!r}")

    @property
    def effective_history_limit(self) -> Optional[int]:
        """Maximum number of ticks kept in history, None for unbounded."""
        if self.history_limit is not None:
            return self.history_limit
        if self.max_ticks == 0:
            return DEFAULT_HISTORY_LIMIT
        return None


@dataclass
class FlightSnapshot:
    """Read-only view of a flight after a tick."""

    flight_number: str
    destination: str
    status: FlightStatus
    departure_time: int
    boarded: int
    capacity: int


@dataclass
class WorldSnapshot:
    """State of the terminal at the end of a tick."""

    tick: int
    flights: List[FlightSnapshot]
    registration_queue: int
    security_queue: int
    waiting_at_gate: int


@dataclass
class TickResult:
    """Events and resulting snapshot of one tick."""

    tick: int
    events: List[str] = field(default_factory=list)
    snapshot: Optional[WorldSnapshot] = None


class SimulationClock:
    """
    Owns the tick counter and drives the stage pipeline.

    Each call to ``advance`` runs, in fixed order:
    spawn -> registration -> security -> boarding/departure.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Initialize simulation clock.

        Args:
            config: Simulation configuration (defaults when omitted)
            rng: Random generator; seeded from ``config.random_seed`` if omitted
        """
        self.config = config or SimulationConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.random_seed)

        history_limit = self.config.effective_history_limit
        self.state = AirportState(history_limit=history_limit)
        self.history: Deque[TickResult] = deque(maxlen=history_limit)
        self.total_events = 0
        self._tick = 0

        self.spawner = PassengerSpawner(
            rng=self.rng,
            new_passenger_prob=self.config.new_passenger_prob,
            factory=PassengerFactory(self.rng),
        )
        self.registration = RegistrationStage(self.config.registration_counters)
        self.security = SecurityStage(self.config.security_checks)
        self.gates = BoardingAndDepartureStage(self.config.boarding_rate)

    # --- setup -----------------------------------------------------------

    def add_flight(
        self,
        flight_number: str,
        destination: str,
        departure_time: int,
        capacity: int,
    ) -> Flight:
        """
        Schedule a flight.

        Args:
            flight_number: Unique flight number among active flights
            destination: Destination name
            departure_time: Departure tick
            capacity: Number of seats (>= 0)

        Returns:
            The created Flight

        Raises:
            FlightValidationError: If any argument is invalid
        """
        if not isinstance(flight_number, str) or not flight_number.strip():
            raise FlightValidationError("flight_number must be a non-empty string")
        if self.state.has_flight(flight_number):
            raise FlightValidationError(f"Flight {flight_number} is already scheduled")
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity < 0:
            raise FlightValidationError(
                f"Flight {flight_number}: capacity must be a non-negative integer, got {capacity!r}"
            )
        if not isinstance(departure_time, int) or isinstance(departure_time, bool):
            raise FlightValidationError(
                f"Flight {flight_number}: departure_time must be an integer tick"
            )
        if departure_time <= self._tick + 1:
            raise FlightValidationError(
                f"Flight {flight_number}: departure_time {departure_time} leaves no boarding "
                f"tick after tick {self._tick}"
            )

        flight = Flight(
            flight_number=flight_number,
            destination=destination,
            departure_time=departure_time,
            capacity=capacity,
        )
        self.state.add_flight(flight)
        logger.info("Scheduled %r", flight)
        return flight

    def add_passenger(self, name: str, flight_number: str) -> Passenger:
        """
        Queue an externally arriving passenger for registration.

        The flight is not checked here; registration rejects unknown flights.
        """
        passenger = Passenger(name=name, flight_number=flight_number)
        self.state.add_passenger(passenger)
        return passenger

    # --- stepping --------------------------------------------------------

    def advance(self) -> TickResult:
        """
        Run one tick.

        Returns:
            TickResult with the ordered events and the post-tick snapshot
        """
        self._tick += 1
        tick = self._tick
        events: List[str] = []

        events.extend(self.spawner.spawn(self.state))
        events.extend(self.registration.process(self.state))
        events.extend(self.security.process(self.state))
        events.extend(self.gates.process(self.state, tick))

        self.state.record_snapshot(tick)
        result = TickResult(tick=tick, events=events, snapshot=self.snapshot())
        self.history.append(result)
        self.total_events += len(events)

        for event in events:
            logger.debug("[tick %d] %s", tick, event)

        return result

    # --- read-only accessors ---------------------------------------------

    @property
    def current_tick(self) -> int:
        return self._tick

    @property
    def flights(self) -> Tuple[Flight, ...]:
        return tuple(self.state.flights)

    @property
    def passengers(self) -> Tuple[Passenger, ...]:
        return tuple(self.state.passengers)

    @property
    def registration_queue_length(self) -> int:
        return len(self.state.registration_queue)

    @property
    def security_queue_length(self) -> int:
        return len(self.state.security_queue)

    def waiting_at_gate_count(self) -> int:
        return self.state.waiting_at_gate_count()

    def is_idle(self) -> bool:
        """True when no flights remain and both queues are empty."""
        return (
            not self.state.flights
            and not self.state.registration_queue
            and not self.state.security_queue
        )

    def snapshot(self) -> WorldSnapshot:
        """Build a snapshot of the current state."""
        return WorldSnapshot(
            tick=self._tick,
            flights=[
                FlightSnapshot(
                    flight_number=f.flight_number,
                    destination=f.destination,
                    status=f.status,
                    departure_time=f.departure_time,
                    boarded=f.boarded_count,
                    capacity=f.capacity,
                )
                for f in self.state.flights
            ],
            registration_queue=len(self.state.registration_queue),
            security_queue=len(self.state.security_queue),
            waiting_at_gate=self.state.waiting_at_gate_count(),
        )
