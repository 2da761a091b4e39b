"""
Shared pytest fixtures for airportsim tests.
"""

import numpy as np
import pytest

from airportsim.models.resources import AirportState
from airportsim.simulation.engine import SimulationClock, SimulationConfig

from tests.helpers import ScriptedRng


@pytest.fixture
def quiet_config() -> SimulationConfig:
    """Config with arrivals switched off so tests control every passenger."""
    return SimulationConfig(new_passenger_prob=0.0, tick_delay_ms=0, random_seed=1)


@pytest.fixture
def quiet_clock(quiet_config) -> SimulationClock:
    return SimulationClock(config=quiet_config)


@pytest.fixture
def make_clock():
    """Factory for seeded clocks with optional config overrides."""
    def _make(seed: int = 42, **overrides) -> SimulationClock:
        overrides.setdefault("tick_delay_ms", 0)
        config = SimulationConfig(random_seed=seed, **overrides)
        return SimulationClock(config=config, rng=np.random.default_rng(seed))
    return _make


@pytest.fixture
def state() -> AirportState:
    return AirportState()


@pytest.fixture
def scripted_rng():
    """Factory for random sources that replay given rolls and integer picks."""
    def _make(rolls=(), picks=()) -> ScriptedRng:
        return ScriptedRng(rolls=rolls, picks=picks)
    return _make
