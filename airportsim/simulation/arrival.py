"""Passenger arrival generation."""

import logging
from typing import List, Optional

import numpy as np

from ..models.passenger import PassengerFactory
from ..models.resources import AirportState


logger = logging.getLogger(__name__)


class PassengerSpawner:
    """
    Spawns new passengers at the start of each tick.
    
    With probability ``new_passenger_prob`` a tick brings one or two new
    passengers, each booked on a uniformly chosen active flight.
    """
    
    MIN_ARRIVALS = 1
    MAX_ARRIVALS = 2
    
    def __init__(
        self,
        rng: np.random.Generator,
        new_passenger_prob: float = 0.6,
        factory: Optional[PassengerFactory] = None,
    ):
        """
        Initialize spawner.
        
        Args:
            rng: Random generator for the arrival roll and flight choice
            new_passenger_prob: Probability that a tick brings arrivals
            factory: Passenger factory; one sharing ``rng`` is created if omitted
        """
        self.rng = rng
        self.new_passenger_prob = new_passenger_prob
        self.factory = factory or PassengerFactory(rng)
    
    def spawn(self, state: AirportState) -> List[str]:
        """
        Roll for arrivals and enqueue them for registration.
        
        Args:
            state: World state to add passengers to
        
        Returns:
            One event line per new passenger
        """
        events = []
        
        if not state.flights:
            return events
        
        if self.rng.random() >= self.new_passenger_prob:
            return events
        
        count = int(self.rng.integers(self.MIN_ARRIVALS, self.MAX_ARRIVALS + 1))
        for _ in range(count):
            flight = state.flights[int(self.rng.integers(len(state.flights)))]
            passenger = self.factory.create(flight.flight_number)
            state.add_passenger(passenger)
            events.append(
                f"New passenger: {passenger.name} -> flight {flight.flight_number}. "
                f"Added to the registration queue."
            )
        
        logger.debug("Spawned %d passenger(s)", count)
        return events
