"""Result export utilities."""

import csv
import json
from pathlib import Path
from typing import Dict, List

import numpy as np

from ..simulation.driver import SimulationResult


class ResultExporter:
    """Exports simulation results to CSV and JSON."""

    def __init__(self, output_dir: str):
        """
        Initialize exporter.

        Args:
            output_dir: Directory for output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_events(
        self,
        result: SimulationResult,
        filename: str = "events.csv",
    ) -> str:
        """
        Export the event log, one row per event.

        Args:
            result: Simulation result
            filename: Output filename

        Returns:
            Path to output file
        """
        output_path = self.output_dir / filename

        with open(output_path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(['tick', 'seq', 'message'])

            for tick_result in result.history:
                for seq, message in enumerate(tick_result.events):
                    writer.writerow([tick_result.tick, seq, message])

        return str(output_path)

    def export_tick_history(
        self,
        result: SimulationResult,
        filename: str = "tick_history.csv",
    ) -> str:
        """
        Export queue depths per tick.

        Args:
            result: Simulation result
            filename: Output filename

        Returns:
            Path to output file
        """
        output_path = self.output_dir / filename

        with open(output_path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f)
            writer.writerow([
                'tick', 'registration_queue', 'security_queue',
                'waiting_at_gate', 'active_flights',
            ])

            for s in result.queue_history:
                writer.writerow([
                    s.tick,
                    s.registration_queue,
                    s.security_queue,
                    s.waiting_at_gate,
                    s.active_flights,
                ])

        return str(output_path)

    def export_departures(
        self,
        result: SimulationResult,
        filename: str = "departures.csv",
    ) -> str:
        """
        Export one row per departed flight.

        Args:
            result: Simulation result
            filename: Output filename

        Returns:
            Path to output file
        """
        output_path = self.output_dir / filename

        with open(output_path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.writer(f)
            writer.writerow([
                'flight_number', 'destination', 'tick',
                'boarded', 'capacity', 'missed', 'load_factor',
            ])

            for d in result.departures:
                writer.writerow([
                    d.flight_number,
                    d.destination,
                    d.tick,
                    d.boarded,
                    d.capacity,
                    d.missed,
                    f"{d.load_factor:.3f}",
                ])

        return str(output_path)

    def export_summary(
        self,
        result: SimulationResult,
        filename: str = "summary.json",
    ) -> str:
        """
        Export run summary as JSON.

        Args:
            result: Simulation result
            filename: Output filename

        Returns:
            Path to output file
        """
        cfg = result.config
        summary = {
            'config': {
                'registration_counters': cfg.registration_counters,
                'security_checks': cfg.security_checks,
                'boarding_rate': cfg.boarding_rate,
                'new_passenger_prob': cfg.new_passenger_prob,
                'tick_delay_ms': cfg.tick_delay_ms,
                'max_ticks': cfg.max_ticks,
                'random_seed': cfg.random_seed,
                'history_limit': cfg.history_limit,
            },
            'ticks_run': result.ticks_run,
            'total_events': result.total_events,
            'passengers_arrived': result.passengers_arrived,
            'registration_rejections': result.registration_rejections,
            'flights_departed': len(result.departures),
            'passengers_boarded': sum(d.boarded for d in result.departures),
            'passengers_missed': sum(d.missed for d in result.departures),
            'registration_queue': self._calc_stats(
                [s.registration_queue for s in result.queue_history]
            ),
            'security_queue': self._calc_stats(
                [s.security_queue for s in result.queue_history]
            ),
        }

        output_path = self.output_dir / filename
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(summary, f, indent=2, ensure_ascii=False)

        return str(output_path)

    def _calc_stats(self, values: List[int]) -> Dict:
        """Calculate statistics for a list of values."""
        if not values:
            return {'mean': 0.0, 'max': 0, 'count': 0}
        arr = np.array(values)
        return {
            'mean': float(np.mean(arr)),
            'max': int(np.max(arr)),
            'count': len(values),
        }

    def export_all(
        self,
        result: SimulationResult,
        prefix: str = "",
    ) -> Dict[str, str]:
        """
        Export all result files.

        Args:
            result: Simulation result
            prefix: Prefix for output filenames

        Returns:
            Dictionary of output type to file path
        """
        return {
            'events': self.export_events(result, f"{prefix}events.csv"),
            'tick_history': self.export_tick_history(result, f"{prefix}tick_history.csv"),
            'departures': self.export_departures(result, f"{prefix}departures.csv"),
            'summary': self.export_summary(result, f"{prefix}summary.json"),
        }
