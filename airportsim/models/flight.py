"""Flight model."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ..exceptions import FlightStatusError
from .passenger import Passenger


# Boarding opens this many ticks before departure
BOARDING_LEAD_TICKS = 2


class FlightStatus(Enum):
    """Flight status."""
    ON_TIME = "OnTime"
    DELAYED = "Delayed"  # defined for display, never entered by the engine
    BOARDING = "Boarding"
    DEPARTED = "Departed"


_STATUS_ORDER = {
    FlightStatus.ON_TIME: 0,
    FlightStatus.DELAYED: 0,
    FlightStatus.BOARDING: 1,
    FlightStatus.DEPARTED: 2,
}


@dataclass(eq=False)
class Flight:
    """
    Scheduled flight with its boarding roster.
    
    Times are in ticks. Boarding is open during the half-open interval
    [boarding_start_time, departure_time).
    """
    
    flight_number: str
    destination: str
    departure_time: int
    capacity: int
    status: FlightStatus = FlightStatus.ON_TIME
    passengers_on_board: List[Passenger] = field(default_factory=list)
    
    @property
    def boarding_start_time(self) -> int:
        """Tick at which boarding opens."""
        return self.departure_time - BOARDING_LEAD_TICKS
    
    @property
    def boarded_count(self) -> int:
        return len(self.passengers_on_board)
    
    @property
    def seats_left(self) -> int:
        return self.capacity - len(self.passengers_on_board)
    
    @property
    def is_full(self) -> bool:
        return len(self.passengers_on_board) >= self.capacity
    
    def is_boarding_window(self, tick: int) -> bool:
        """Check whether a tick falls inside the boarding window."""
        return self.boarding_start_time <= tick < self.departure_time
    
    def advance_status(self, new_status: FlightStatus):
        """
        Move to a later status.
        
        Args:
            new_status: Target status
        
        Raises:
            FlightStatusError: If the target is not strictly later
        """
        if _STATUS_ORDER[new_status] <= _STATUS_ORDER[self.status]:
            raise FlightStatusError(
                f"Flight {self.flight_number}: cannot go from "
                f"{self.status.value} to {new_status.value}"
            )
        self.status = new_status
    
    def board(self, passenger: Passenger):
        """Seat a passenger on this flight."""
        passenger.is_on_board = True
        self.passengers_on_board.append(passenger)
    
    def __repr__(self) -> str:
        return (
            f"Flight({self.flight_number} -> {self.destination}, "
            f"status={self.status.value}, dep={self.departure_time}, "
            f"onboard={self.boarded_count}/{self.capacity})"
        )
