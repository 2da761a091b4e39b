"""IO package."""

from .loader import DataLoader, FlightSpec, Scenario
from .exporter import ResultExporter
from .console import ConsoleRenderer

__all__ = [
    "DataLoader",
    "FlightSpec",
    "Scenario",
    "ResultExporter",
    "ConsoleRenderer",
]
