"""Paced run loop around the simulation clock."""

from dataclasses import dataclass
import logging
from typing import Callable, List, Optional

import simpy
import simpy.rt

from ..models.resources import DepartureRecord, QueueSnapshot
from .engine import SimulationClock, SimulationConfig, TickResult


logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Results from a driven run."""

    config: SimulationConfig
    ticks_run: int
    history: List[TickResult]
    queue_history: List[QueueSnapshot]
    departures: List[DepartureRecord]
    total_events: int = 0
    passengers_arrived: int = 0
    registration_rejections: int = 0

    @classmethod
    def from_clock(cls, clock: SimulationClock, ticks_run: Optional[int] = None) -> "SimulationResult":
        """Collect results from a clock; ticks_run defaults to the clock's tick."""
        state = clock.state
        return cls(
            config=clock.config,
            ticks_run=clock.current_tick if ticks_run is None else ticks_run,
            history=list(clock.history),
            queue_history=list(state.queue_history),
            departures=list(state.departures),
            total_events=clock.total_events,
            passengers_arrived=state.arrivals,
            registration_rejections=state.registration_rejections,
        )


class TickDriver:
    """
    Runs a SimulationClock as a SimPy process, one tick per time unit.

    With a positive tick delay the run is paced in wall-clock time by a
    ``simpy.rt.RealtimeEnvironment``; otherwise ticks run back to back.
    """

    def __init__(
        self,
        clock: SimulationClock,
        tick_delay_ms: Optional[int] = None,
        max_ticks: Optional[int] = None,
        on_tick: Optional[Callable[[TickResult], None]] = None,
        should_stop: Optional[Callable[[], bool]] = None,
        stop_when_idle: bool = False,
    ):
        """
        Initialize driver.

        Args:
            clock: Clock to advance
            tick_delay_ms: Wall-clock delay between ticks (config value if None)
            max_ticks: Number of ticks to run, 0 for unlimited (config value if None)
            on_tick: Called with every TickResult, e.g. to render it
            should_stop: Polled before every tick; True ends the run
            stop_when_idle: End the run once no flights or queued passengers remain
        """
        self.clock = clock
        self.tick_delay_ms = clock.config.tick_delay_ms if tick_delay_ms is None else tick_delay_ms
        self.max_ticks = clock.config.max_ticks if max_ticks is None else max_ticks
        self.on_tick = on_tick
        self.should_stop = should_stop
        self.stop_when_idle = stop_when_idle

        self.ticks_run = 0
        self.env: Optional[simpy.Environment] = None

    def _create_environment(self) -> simpy.Environment:
        if self.tick_delay_ms > 0:
            return simpy.rt.RealtimeEnvironment(
                factor=self.tick_delay_ms / 1000.0,
                strict=False,
            )
        return simpy.Environment()

    def _finished(self) -> bool:
        if self.max_ticks and self.ticks_run >= self.max_ticks:
            return True
        if self.should_stop is not None and self.should_stop():
            logger.info("Stop requested after %d tick(s)", self.ticks_run)
            return True
        return False

    def _tick_process(self):
        """SimPy process advancing the clock once per time unit."""
        while not self._finished():
            result = self.clock.advance()
            self.ticks_run += 1

            if self.on_tick is not None:
                self.on_tick(result)

            if self.stop_when_idle and self.clock.is_idle():
                logger.info("No flights or queued passengers left at tick %d", result.tick)
                break

            yield self.env.timeout(1)

    def run(self) -> SimulationResult:
        """
        Run until a stop condition is met.

        Returns:
            SimulationResult for the ticks run so far
        """
        self.env = self._create_environment()
        process = self.env.process(self._tick_process())

        logger.info(
            "Starting run: max_ticks=%s, tick_delay_ms=%d",
            self.max_ticks or "unlimited", self.tick_delay_ms,
        )
        self.env.run(until=process)

        return self.result()

    def result(self) -> SimulationResult:
        """Collect results of the ticks run so far."""
        return SimulationResult.from_clock(self.clock, ticks_run=self.ticks_run)
