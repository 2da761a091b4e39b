"""Per-tick processing stages."""

import logging
from typing import List

from ..models.flight import Flight, FlightStatus
from ..models.resources import AirportState, DepartureRecord


logger = logging.getLogger(__name__)


class RegistrationStage:
    """
    Registration counters.
    
    Serves up to ``counters`` passengers from the head of the registration
    queue per tick. Passengers whose flight is active get a ticket and move
    to the security queue; the rest are dropped.
    """
    
    def __init__(self, counters: int = 3):
        self.counters = counters
    
    def process(self, state: AirportState) -> List[str]:
        events = []
        to_serve = min(self.counters, len(state.registration_queue))
        
        for _ in range(to_serve):
            p = state.registration_queue.popleft()
            
            if state.has_flight(p.flight_number):
                p.has_ticket = True
                state.security_queue.append(p)
                events.append(
                    f"{p.name} registered for flight {p.flight_number} and moved to security."
                )
            else:
                # Not re-queued: the passenger stays untracked by any stage
                logger.info("Rejected %s: unknown flight %s", p.name, p.flight_number)
                state.registration_rejections += 1
                events.append(
                    f"{p.name}: flight {p.flight_number} does not exist - passenger awaits redirection."
                )
        
        return events


class SecurityStage:
    """Security checkpoints. Every screened passenger passes."""
    
    def __init__(self, checks: int = 2):
        self.checks = checks
    
    def process(self, state: AirportState) -> List[str]:
        events = []
        to_serve = min(self.checks, len(state.security_queue))
        
        for _ in range(to_serve):
            p = state.security_queue.popleft()
            p.passed_security = True
            events.append(f"{p.name} passed security.")
        
        return events


class BoardingAndDepartureStage:
    """
    Gate operations for every active flight.
    
    For each flight, in order:
    1. Open boarding when the tick enters the boarding window
    2. Board up to ``boarding_rate`` cleared passengers, capped by capacity
    3. Depart once the departure tick is reached, reporting missed passengers
    
    Departed flights are purged together with their passengers only after
    all flights have been processed.
    """
    
    def __init__(self, boarding_rate: int = 5):
        self.boarding_rate = boarding_rate
    
    def process(self, state: AirportState, tick: int) -> List[str]:
        events = []
        
        for flight in state.flights:
            self._start_boarding(flight, tick, events)
            self._board(state, flight, tick, events)
            self._depart(state, flight, tick, events)
        
        for flight in state.departed_flights():
            state.remove_flight(flight)
            logger.debug("Removed departed flight %s", flight.flight_number)
        
        return events
    
    def _start_boarding(self, flight: Flight, tick: int, events: List[str]):
        if flight.status == FlightStatus.ON_TIME and flight.is_boarding_window(tick):
            flight.advance_status(FlightStatus.BOARDING)
            events.append(
                f"Boarding started for flight {flight.flight_number} to {flight.destination}."
            )
    
    def _board(self, state: AirportState, flight: Flight, tick: int, events: List[str]):
        if flight.status != FlightStatus.BOARDING or tick >= flight.departure_time:
            return
        
        ready = state.eligible_for_boarding(flight.flight_number, self.boarding_rate)
        for p in ready:
            if flight.is_full:
                break
            flight.board(p)
            events.append(f"{p.name} boarded flight {flight.flight_number}.")
    
    def _depart(self, state: AirportState, flight: Flight, tick: int, events: List[str]):
        if tick < flight.departure_time or flight.status == FlightStatus.DEPARTED:
            return
        
        flight.advance_status(FlightStatus.DEPARTED)
        
        late = [p for p in state.passengers_for(flight.flight_number) if not p.is_on_board]
        for p in late:
            events.append(f"Passenger {p.name} missed flight {flight.flight_number}!")
        
        events.append(
            f"Flight {flight.flight_number} departed to {flight.destination}. "
            f"On board: {flight.boarded_count}/{flight.capacity}."
        )
        
        state.departures.append(DepartureRecord(
            flight_number=flight.flight_number,
            destination=flight.destination,
            tick=tick,
            boarded=flight.boarded_count,
            capacity=flight.capacity,
            missed=len(late),
        ))
        logger.info(
            "Flight %s departed at tick %d (%d/%d on board, %d missed)",
            flight.flight_number, tick, flight.boarded_count, flight.capacity, len(late),
        )
