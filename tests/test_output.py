"""
Tests for exporting, statistics, charts and console rendering.
"""

import csv
import json

import matplotlib
import pytest
from rich.console import Console

matplotlib.use("Agg")

from airportsim.analysis.charts import ChartGenerator
from airportsim.analysis.statistics import StatisticsCalculator
from airportsim.io.console import ConsoleRenderer
from airportsim.io.exporter import ResultExporter
from airportsim.simulation.driver import SimulationResult, TickDriver


@pytest.fixture
def finished_result(make_clock) -> SimulationResult:
    """A seeded run in which every flight departs."""
    clock = make_clock(seed=4, new_passenger_prob=0.8)
    clock.add_flight("PS101", "Kyiv", 6, 3)
    clock.add_flight("PS202", "Lviv", 9, 2)
    clock.add_passenger("Ghost", "ZZ999")
    return TickDriver(clock, max_ticks=10).run()


@pytest.fixture
def empty_result(make_clock) -> SimulationResult:
    return SimulationResult.from_clock(make_clock())


class TestResultExporter:

    def test_export_all(self, tmp_path, finished_result):
        files = ResultExporter(str(tmp_path)).export_all(finished_result, prefix="run_")

        assert set(files) == {"events", "tick_history", "departures", "summary"}
        for path in files.values():
            assert path.startswith(str(tmp_path))

        with open(files["tick_history"], encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert [int(r["tick"]) for r in rows] == list(range(1, 11))

        with open(files["departures"], encoding="utf-8") as f:
            departures = list(csv.DictReader(f))
        assert [d["flight_number"] for d in departures] == ["PS101", "PS202"]

        with open(files["events"], encoding="utf-8") as f:
            events = list(csv.DictReader(f))
        total = sum(len(r.events) for r in finished_result.history)
        assert len(events) == total
        assert any("ZZ999" in e["message"] for e in events)

        with open(files["summary"], encoding="utf-8") as f:
            summary = json.load(f)
        assert summary["ticks_run"] == 10
        assert summary["flights_departed"] == 2
        assert summary["registration_rejections"] == 1
        assert summary["config"]["history_limit"] is None
        assert summary["config"]["random_seed"] == 4

    def test_export_empty_run(self, tmp_path, empty_result):
        path = ResultExporter(str(tmp_path)).export_summary(empty_result)
        with open(path, encoding="utf-8") as f:
            summary = json.load(f)
        assert summary["registration_queue"] == {"mean": 0.0, "max": 0, "count": 0}


class TestStatisticsCalculator:

    def test_overall_stats(self, finished_result):
        stats = StatisticsCalculator(finished_result).calculate_overall_stats()

        assert stats.ticks_run == 10
        assert stats.flights_departed == 2
        assert stats.registration_rejections == 1
        assert stats.seats_offered == 5
        assert stats.passengers_boarded <= 5
        assert 0.0 <= stats.mean_load_factor <= 1.0
        assert stats.total_events == sum(len(r.events) for r in finished_result.history)
        spawned = sum(
            1 for r in finished_result.history for e in r.events if e.startswith("New passenger:")
        )
        assert stats.passengers_arrived == spawned + 1

    def test_queue_stats(self, finished_result):
        stats = StatisticsCalculator(finished_result).calculate_queue_stats()

        assert set(stats) == {"registration_queue", "security_queue", "waiting_at_gate"}
        reg = stats["registration_queue"]
        assert reg.max_length >= reg.p95_length >= 0
        assert reg.max_length >= reg.mean_length

    def test_frames(self, finished_result):
        calc = StatisticsCalculator(finished_result)

        history = calc.tick_history_frame()
        assert list(history.index) == list(range(1, 11))
        assert "waiting_at_gate" in history.columns

        departures = calc.departures_frame()
        assert list(departures["flight_number"]) == ["PS101", "PS202"]

        events = calc.events_frame()
        assert list(events.columns) == ["tick", "seq", "message"]

    def test_empty_run(self, empty_result):
        calc = StatisticsCalculator(empty_result)
        assert calc.calculate_queue_stats() == {}
        assert calc.calculate_overall_stats().mean_load_factor == 0.0
        assert calc.tick_history_frame().empty


class TestChartGenerator:

    def test_charts_written(self, tmp_path, finished_result):
        charts = ChartGenerator()
        queue = charts.generate_queue_chart(finished_result, str(tmp_path / "queue.png"))
        load = charts.generate_load_factor_chart(finished_result, str(tmp_path / "load.png"))
        assert (tmp_path / "queue.png").stat().st_size > 0
        assert load.endswith("load.png")
        assert queue.endswith("queue.png")

    def test_charts_without_data(self, tmp_path, empty_result):
        charts = ChartGenerator()
        charts.generate_queue_chart(empty_result, str(tmp_path / "queue.png"))
        charts.generate_load_factor_chart(empty_result, str(tmp_path / "load.png"))
        assert (tmp_path / "load.png").exists()


class TestConsoleRenderer:

    def test_render_board(self, quiet_clock):
        quiet_clock.add_flight("PS202", "Lviv", 10, 4)
        quiet_clock.add_flight("PS101", "Kyiv", 8, 6)
        quiet_clock.add_passenger("Anna", "PS101")
        console = Console(record=True, width=120)

        ConsoleRenderer(console)(quiet_clock.advance())

        text = console.export_text()
        assert "=== Tick 1 ===" in text
        assert text.index("PS101") < text.index("PS202")
        assert "Flight PS101 -> Kyiv | OnTime | Dep @ 8 | OnBoard 0/6" in text
        assert "Security queue:     0" in text
        assert "Anna passed security." in text

    def test_render_without_flights(self, quiet_clock):
        console = Console(record=True, width=120)
        ConsoleRenderer(console, show_events=False).render(quiet_clock.advance())
        assert "No active flights." in console.export_text()
