"""Console status board."""

from typing import Optional

from rich.console import Console
from rich.text import Text

from ..models.flight import FlightStatus
from ..simulation.engine import TickResult


STATUS_STYLES = {
    FlightStatus.ON_TIME: "grey70",
    FlightStatus.DELAYED: "yellow",
    FlightStatus.BOARDING: "cyan",
    FlightStatus.DEPARTED: "green",
}


class ConsoleRenderer:
    """Prints the terminal state after every tick, colored by flight status."""

    def __init__(self, console: Optional[Console] = None, show_events: bool = True):
        self.console = console or Console()
        self.show_events = show_events

    def render(self, result: TickResult):
        snap = result.snapshot
        out = self.console

        out.print(f"\n=== Tick {snap.tick} ===", style="bold")

        if not snap.flights:
            out.print("No active flights.", style="bright_black")
        else:
            for f in sorted(snap.flights, key=lambda f: f.departure_time):
                line = (
                    f"Flight {f.flight_number} -> {f.destination} | {f.status.value} | "
                    f"Dep @ {f.departure_time} | OnBoard {f.boarded}/{f.capacity}"
                )
                out.print(Text(line, style=STATUS_STYLES.get(f.status, "white")))

        out.print(f"Registration queue: {snap.registration_queue}")
        out.print(f"Security queue:     {snap.security_queue}")
        out.print(f"Waiting at gate:    {snap.waiting_at_gate}")

        if self.show_events and result.events:
            out.print("\nEvents:", style="magenta")
            for event in result.events:
                out.print(Text(f"• {event}"))

    __call__ = render
