"""Passenger model and passenger factory."""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np


FIRST_NAMES = (
    "Dmytro", "Anna", "Mark", "Maria", "Sergiy",
    "Oleh", "Iryna", "Taras", "Olena", "Nazar",
)
LAST_NAMES = (
    "Shevchenko", "Koval", "Melnyk", "Bondar",
    "Tkachenko", "Ivanenko", "Petrenko", "Savchenko",
)


@dataclass(eq=False)
class Passenger:
    """
    A single passenger moving through the terminal.
    
    Progress is tracked with three flags that are only ever switched on:
    registration sets ``has_ticket``, security sets ``passed_security`` and
    boarding sets ``is_on_board``.
    """
    
    name: str
    flight_number: str
    has_ticket: bool = False
    passed_security: bool = False
    is_on_board: bool = False
    
    @property
    def is_cleared(self) -> bool:
        """Ticketed and screened."""
        return self.has_ticket and self.passed_security
    
    @property
    def is_waiting_at_gate(self) -> bool:
        """Cleared but not yet on board."""
        return self.is_cleared and not self.is_on_board
    
    def __repr__(self) -> str:
        return f"Passenger(name={self.name!r}, flight={self.flight_number})"


class PassengerFactory:
    """Creates passengers with unique display names."""
    
    def __init__(
        self,
        rng: np.random.Generator,
        first_names: Sequence[str] = FIRST_NAMES,
        last_names: Sequence[str] = LAST_NAMES,
    ):
        """
        Initialize factory.
        
        Args:
            rng: Random generator used for name selection
            first_names: Pool of first names
            last_names: Pool of last names
        """
        self.rng = rng
        self.first_names = list(first_names)
        self.last_names = list(last_names)
        
        self._next_id = 1
    
    def next_name(self) -> str:
        """Build a random name suffixed with a running id."""
        first = self.first_names[int(self.rng.integers(len(self.first_names)))]
        last = self.last_names[int(self.rng.integers(len(self.last_names)))]
        name = f"{first} {last} #{self._next_id}"
        self._next_id += 1
        return name
    
    def create(self, flight_number: str, name: Optional[str] = None) -> Passenger:
        """
        Create a passenger for a flight.
        
        Args:
            flight_number: Flight the passenger is booked on
            name: Explicit name; a random one is generated when omitted
        
        Returns:
            New Passenger instance
        """
        return Passenger(name=name or self.next_name(), flight_number=flight_number)
    
    def reset(self):
        """Reset the id counter."""
        self._next_id = 1
