#!/usr/bin/env python3
"""
Airport tick simulator Streamlit web app

Usage:
    streamlit run app.py
"""

import streamlit as st
import pandas as pd

from airportsim.analysis.statistics import StatisticsCalculator
from airportsim.exceptions import AirportSimError
from airportsim.io.loader import DataLoader, Scenario
from airportsim.simulation.driver import SimulationResult, TickDriver
from airportsim.simulation.engine import SimulationConfig


# Page config
st.set_page_config(
    page_title="Airport Tick Simulator",
    page_icon="✈️",
    layout="wide",
    initial_sidebar_state="expanded",
)

STATUS_COLORS = {
    "OnTime": "#9e9e9e",
    "Delayed": "#f1c40f",
    "Boarding": "#00bcd4",
    "Departed": "#2ecc71",
}


def sidebar_config() -> SimulationConfig:
    """Render sidebar and return configuration."""
    st.sidebar.markdown("## ⚙️ Simulation settings")

    st.sidebar.markdown("### 🏗️ Throughput per tick")
    reg = st.sidebar.number_input("Registration counters", 0, 20, 3)
    sec = st.sidebar.number_input("Security checkpoints", 0, 20, 2)
    rate = st.sidebar.number_input("Boarding rate", 0, 50, 5)

    st.sidebar.markdown("### 👥 Arrivals")
    prob = st.sidebar.slider("New passenger probability", 0.0, 1.0, 0.6, 0.05)

    st.sidebar.markdown("### 🎲 Random seed")
    use_seed = st.sidebar.checkbox("Fixed seed", value=True)
    seed = st.sidebar.number_input("Seed", 0, 1_000_000, 42) if use_seed else None

    return SimulationConfig(
        registration_counters=int(reg),
        security_checks=int(sec),
        boarding_rate=int(rate),
        new_passenger_prob=float(prob),
        tick_delay_ms=0,
        random_seed=None if seed is None else int(seed),
    )


def render_flight_editor() -> str:
    """Editable flight CSV, defaults to the startup flights."""
    default_csv = "flight_number,destination,departure_time,capacity\n" + "\n".join(
        f"{f.flight_number},{f.destination},{f.departure_time},{f.capacity}"
        for f in DataLoader.default_flights()
    )
    return st.text_area("Flights (CSV)", value=default_csv, height=160)


def reset_simulation(config: SimulationConfig, flights_csv: str):
    """Create a fresh clock in session state."""
    try:
        flights = DataLoader.load_flights_from_string(flights_csv)
        st.session_state.clock = Scenario(config=config, flights=flights).create_clock()
        st.session_state.last_result = None
    except AirportSimError as e:
        st.error(f"Invalid scenario: {e}")


def render_board():
    """Flights, queue metrics and last tick's events."""
    clock = st.session_state.clock
    snap = clock.snapshot()

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Tick", snap.tick)
    col2.metric("Registration queue", snap.registration_queue)
    col3.metric("Security queue", snap.security_queue)
    col4.metric("Waiting at gate", snap.waiting_at_gate)

    st.markdown("### 🛫 Active flights")
    if snap.flights:
        df = pd.DataFrame([
            {
                "Flight": f.flight_number,
                "Destination": f.destination,
                "Status": f.status.value,
                "Departure": f.departure_time,
                "On board": f"{f.boarded}/{f.capacity}",
            }
            for f in sorted(snap.flights, key=lambda f: f.departure_time)
        ])
        st.dataframe(
            df.style.map(lambda v: f"color: {STATUS_COLORS.get(v, '')}", subset=["Status"]),
            use_container_width=True,
            hide_index=True,
        )
    else:
        st.info("No active flights.")

    result = st.session_state.last_result
    if result is not None and result.events:
        st.markdown("### 📋 Events")
        for event in result.events:
            st.text(f"• {event}")


def render_history():
    """Queue chart and departure table for the run so far."""
    calc = StatisticsCalculator(SimulationResult.from_clock(st.session_state.clock))

    history = calc.tick_history_frame()
    if not history.empty:
        st.markdown("### 📈 Queue depth")
        st.line_chart(history[["registration_queue", "security_queue", "waiting_at_gate"]])

    departures = calc.departures_frame()
    if not departures.empty:
        st.markdown("### ✅ Departures")
        st.dataframe(departures, use_container_width=True, hide_index=True)


def main():
    st.title("✈️ Airport Tick Simulator")

    config = sidebar_config()
    flights_csv = render_flight_editor()

    if 'clock' not in st.session_state:
        reset_simulation(config, flights_csv)
    if 'clock' not in st.session_state:
        return

    col1, col2, col3, col4 = st.columns([1, 1, 1, 2])
    if col1.button("🔄 Reset"):
        reset_simulation(config, flights_csv)
    if col2.button("▶️ Step"):
        st.session_state.last_result = st.session_state.clock.advance()
    ticks = col4.number_input("Ticks to run", 1, 500, 10)
    if col3.button("⏩ Run"):
        results = []
        driver = TickDriver(
            st.session_state.clock,
            tick_delay_ms=0,
            max_ticks=int(ticks),
            on_tick=results.append,
        )
        driver.run()
        if results:
            st.session_state.last_result = results[-1]

    render_board()
    render_history()


main()
