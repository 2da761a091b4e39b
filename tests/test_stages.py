"""
Tests for the spawn, registration, security and gate stages.
"""

import numpy as np

from airportsim.models.flight import FlightStatus
from airportsim.models.passenger import Passenger, PassengerFactory
from airportsim.models.resources import AirportState
from airportsim.simulation.arrival import PassengerSpawner
from airportsim.simulation.processes import (
    BoardingAndDepartureStage,
    RegistrationStage,
    SecurityStage,
)

from tests.helpers import add_cleared, add_flight


def queue_names(queue):
    return [p.name for p in queue]


class TestPassengerSpawner:

    def test_no_flights_no_passengers(self, state):
        spawner = PassengerSpawner(np.random.default_rng(0), new_passenger_prob=1.0)
        for _ in range(20):
            assert spawner.spawn(state) == []
        assert state.passengers == []

    def test_zero_probability_never_spawns(self, state):
        add_flight(state, "PS101")
        spawner = PassengerSpawner(np.random.default_rng(0), new_passenger_prob=0.0)
        for _ in range(50):
            assert spawner.spawn(state) == []

    def test_spawns_one_or_two_for_active_flights(self, state):
        add_flight(state, "PS101")
        add_flight(state, "PS202")
        spawner = PassengerSpawner(np.random.default_rng(3), new_passenger_prob=1.0)

        for _ in range(30):
            before = len(state.passengers)
            events = spawner.spawn(state)
            added = len(state.passengers) - before
            assert 1 <= added <= 2
            assert len(events) == added
            assert all(e.startswith("New passenger:") for e in events)

        assert {p.flight_number for p in state.passengers} <= {"PS101", "PS202"}
        assert list(state.registration_queue) == state.passengers
        assert len({p.name for p in state.passengers}) == len(state.passengers)

    def test_roll_must_be_below_probability(self, state, scripted_rng):
        add_flight(state, "PS101")
        rng = scripted_rng(rolls=[0.6, 0.59], picks=[1, 0])
        spawner = PassengerSpawner(
            rng, new_passenger_prob=0.6, factory=PassengerFactory(np.random.default_rng(0))
        )

        assert spawner.spawn(state) == []
        assert len(spawner.spawn(state)) == 1
        assert rng.rolls == [] and rng.picks == []

    def test_flight_choice_follows_draws(self, state, scripted_rng):
        add_flight(state, "PS101")
        add_flight(state, "PS202")
        add_flight(state, "PS303")
        rng = scripted_rng(rolls=[0.0], picks=[2, 2, 0])
        spawner = PassengerSpawner(
            rng, new_passenger_prob=0.5, factory=PassengerFactory(np.random.default_rng(0))
        )

        spawner.spawn(state)

        assert [p.flight_number for p in state.passengers] == ["PS303", "PS101"]
        assert state.arrivals == 2

    def test_same_seed_same_arrivals(self, state):
        other = AirportState()
        for s in (state, other):
            add_flight(s, "PS101")
            add_flight(s, "PS202")
        a = PassengerSpawner(np.random.default_rng(11), new_passenger_prob=0.5)
        b = PassengerSpawner(np.random.default_rng(11), new_passenger_prob=0.5)
        for _ in range(20):
            assert a.spawn(state) == b.spawn(other)


class TestRegistrationStage:

    def test_serves_at_most_counters_in_fifo_order(self, state):
        add_flight(state, "PS101")
        for i in range(5):
            state.add_passenger(Passenger(name=f"p{i}", flight_number="PS101"))

        events = RegistrationStage(counters=3).process(state)

        assert len(events) == 3
        assert queue_names(state.security_queue) == ["p0", "p1", "p2"]
        assert queue_names(state.registration_queue) == ["p3", "p4"]
        assert all(p.has_ticket for p in state.security_queue)
        assert not any(p.has_ticket for p in state.registration_queue)

    def test_unknown_flight_is_dropped(self, state):
        add_flight(state, "PS101")
        ghost = Passenger(name="Ghost", flight_number="ZZ999")
        state.add_passenger(ghost)
        state.add_passenger(Passenger(name="Anna", flight_number="PS101"))

        events = RegistrationStage(counters=3).process(state)

        assert events[0] == "Ghost: flight ZZ999 does not exist - passenger awaits redirection."
        assert events[1] == "Anna registered for flight PS101 and moved to security."
        assert ghost not in state.security_queue
        assert ghost not in state.registration_queue
        assert not ghost.has_ticket
        assert state.registration_rejections == 1
        assert state.arrivals == 2

    def test_empty_queue(self, state):
        assert RegistrationStage().process(state) == []


class TestSecurityStage:

    def test_screens_at_most_checks(self, state):
        add_flight(state, "PS101")
        for i in range(3):
            p = Passenger(name=f"p{i}", flight_number="PS101", has_ticket=True)
            state.security_queue.append(p)

        events = SecurityStage(checks=2).process(state)

        assert events == ["p0 passed security.", "p1 passed security."]
        assert queue_names(state.security_queue) == ["p2"]
        assert not state.security_queue[0].passed_security


class TestBoardingAndDepartureStage:

    def test_boarding_opens_in_window(self, state):
        flight = add_flight(state, "PS101", departure_time=8)
        stage = BoardingAndDepartureStage()

        assert stage.process(state, 5) == []
        assert flight.status == FlightStatus.ON_TIME

        events = stage.process(state, 6)
        assert events == ["Boarding started for flight PS101 to Kyiv."]
        assert flight.status == FlightStatus.BOARDING

        assert stage.process(state, 7) == []

    def test_boarding_stops_at_capacity(self, state):
        flight = add_flight(state, "PS101", departure_time=8, capacity=2)
        passengers = [add_cleared(state, f"p{i}", "PS101") for i in range(4)]

        events = BoardingAndDepartureStage(boarding_rate=5).process(state, 6)

        assert events[1:] == ["p0 boarded flight PS101.", "p1 boarded flight PS101."]
        assert flight.passengers_on_board == passengers[:2]
        assert not passengers[2].is_on_board

    def test_boarding_rate_limits_batch(self, state):
        flight = add_flight(state, "PS101", departure_time=8, capacity=10)
        for i in range(5):
            add_cleared(state, f"p{i}", "PS101")
        stage = BoardingAndDepartureStage(boarding_rate=2)

        stage.process(state, 6)
        assert [p.name for p in flight.passengers_on_board] == ["p0", "p1"]
        stage.process(state, 7)
        assert [p.name for p in flight.passengers_on_board] == ["p0", "p1", "p2", "p3"]

    def test_only_cleared_passengers_board(self, state):
        flight = add_flight(state, "PS101", departure_time=8, capacity=10)
        state.add_passenger(Passenger(name="queued", flight_number="PS101"))
        add_cleared(state, "ready", "PS101")

        BoardingAndDepartureStage().process(state, 6)

        assert [p.name for p in flight.passengers_on_board] == ["ready"]

    def test_departure_reports_missed_and_cleans_up(self, state):
        flight = add_flight(state, "PS101", departure_time=8, capacity=1)
        flight.advance_status(FlightStatus.BOARDING)
        boarded = add_cleared(state, "boarded", "PS101")
        flight.board(boarded)
        add_cleared(state, "late", "PS101")
        state.add_passenger(Passenger(name="queued", flight_number="PS101"))

        events = BoardingAndDepartureStage().process(state, 8)

        assert events == [
            "Passenger late missed flight PS101!",
            "Passenger queued missed flight PS101!",
            "Flight PS101 departed to Kyiv. On board: 1/1.",
        ]
        assert flight.status == FlightStatus.DEPARTED
        assert state.flights == []
        assert state.passengers == []
        assert len(state.registration_queue) == 0
        assert state.departures[0].missed == 2
        assert state.departures[0].boarded == 1

    def test_no_boarding_on_departure_tick(self, state):
        flight = add_flight(state, "PS101", departure_time=8, capacity=5)
        flight.advance_status(FlightStatus.BOARDING)
        add_cleared(state, "late", "PS101")

        events = BoardingAndDepartureStage().process(state, 8)

        assert flight.boarded_count == 0
        assert "Passenger late missed flight PS101!" in events

    def test_two_flights_depart_same_tick(self, state):
        add_flight(state, "PS101", departure_time=8)
        add_flight(state, "PS202", departure_time=8, destination="Lviv")
        add_flight(state, "PS303", departure_time=12, destination="Odesa")
        for name, number in [("a", "PS101"), ("c", "PS303"), ("b", "PS202"), ("d", "PS303")]:
            state.add_passenger(Passenger(name=name, flight_number=number))

        events = BoardingAndDepartureStage().process(state, 8)

        assert [f.flight_number for f in state.flights] == ["PS303"]
        assert queue_names(state.registration_queue) == ["c", "d"]
        assert [p.name for p in state.passengers] == ["c", "d"]
        assert sum(1 for e in events if "departed" in e) == 2
