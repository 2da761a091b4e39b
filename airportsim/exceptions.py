"""Exceptions raised by the airport simulator."""


class AirportSimError(Exception):
    """Base class for simulator errors."""


class ConfigError(AirportSimError, ValueError):
    """Invalid simulation configuration or scenario file."""


class FlightValidationError(AirportSimError, ValueError):
    """A flight could not be added to the schedule."""


class FlightStatusError(AirportSimError):
    """A flight status change would move backwards."""
