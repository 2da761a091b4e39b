"""Statistics calculation for simulation results."""

from dataclasses import dataclass
from typing import Dict, List

import numpy as np
import pandas as pd

from ..simulation.driver import SimulationResult


QUEUE_FIELDS = ("registration_queue", "security_queue", "waiting_at_gate")


@dataclass
class QueueStats:
    """Statistics for one queue depth series."""
    
    queue_name: str
    mean_length: float
    p95_length: float
    max_length: int


@dataclass
class OverallStats:
    """Overall run statistics."""
    
    ticks_run: int
    total_events: int
    passengers_arrived: int
    registration_rejections: int
    flights_departed: int
    passengers_boarded: int
    passengers_missed: int
    mean_load_factor: float
    seats_offered: int


class StatisticsCalculator:
    """Calculate statistics from simulation results."""
    
    def __init__(self, result: SimulationResult):
        """
        Initialize calculator.
        
        Args:
            result: Simulation result to analyze
        """
        self.result = result
    
    def calculate_queue_stats(self) -> Dict[str, QueueStats]:
        """
        Calculate queue depth statistics.
        
        Returns:
            Dictionary of queue name to QueueStats (empty for an empty run)
        """
        stats = {}
        history = self.result.queue_history
        
        if not history:
            return stats
        
        for name in QUEUE_FIELDS:
            arr = np.array([getattr(s, name) for s in history])
            stats[name] = QueueStats(
                queue_name=name,
                mean_length=float(np.mean(arr)),
                p95_length=float(np.percentile(arr, 95)),
                max_length=int(np.max(arr)),
            )
        
        return stats
    
    def calculate_overall_stats(self) -> OverallStats:
        """
        Calculate overall run statistics.
        
        Returns:
            OverallStats object
        """
        departures = self.result.departures
        
        if departures:
            mean_load = float(np.mean([d.load_factor for d in departures]))
        else:
            mean_load = 0.0
        
        return OverallStats(
            ticks_run=self.result.ticks_run,
            total_events=self.result.total_events,
            passengers_arrived=self.result.passengers_arrived,
            registration_rejections=self.result.registration_rejections,
            flights_departed=len(departures),
            passengers_boarded=sum(d.boarded for d in departures),
            passengers_missed=sum(d.missed for d in departures),
            mean_load_factor=mean_load,
            seats_offered=sum(d.capacity for d in departures),
        )
    
    def tick_history_frame(self) -> pd.DataFrame:
        """Queue depths per tick, indexed by tick."""
        columns = ["tick", *QUEUE_FIELDS, "active_flights"]
        rows = [
            [getattr(s, c) for c in columns]
            for s in self.result.queue_history
        ]
        return pd.DataFrame(rows, columns=columns).set_index("tick")
    
    def departures_frame(self) -> pd.DataFrame:
        """One row per departed flight."""
        columns = ["flight_number", "destination", "tick", "boarded", "capacity", "missed", "load_factor"]
        rows = [
            [d.flight_number, d.destination, d.tick, d.boarded, d.capacity, d.missed, d.load_factor]
            for d in self.result.departures
        ]
        return pd.DataFrame(rows, columns=columns)
    
    def events_frame(self) -> pd.DataFrame:
        """Flattened event log with tick and sequence number."""
        rows: List[list] = [
            [r.tick, seq, message]
            for r in self.result.history
            for seq, message in enumerate(r.events)
        ]
        return pd.DataFrame(rows, columns=["tick", "seq", "message"])
