"""Simulation engine — pools, day events, scenarios, transitions, and summaries."""
from cashpool.simulation.pools import POOL_CONFIGS, PoolConfig, daily_rate
from cashpool.simulation.validation import ConfigurationError, validate_params
from cashpool.simulation.events import (
    EventSource,
    FixedEventSource,
    RandomEventSource,
    normalize_events,
)
from cashpool.simulation.scenarios import (
    ScenarioDefinition,
    drag_adjustment_for,
    facility_sizing_drag,
    get_scenario,
    list_scenarios,
)
from cashpool.simulation.state_transitions import DailyRates, EngineState, advance_day
from cashpool.simulation.aggregator import summarize, summarize_records
from cashpool.simulation.engine import run_simulation

__all__ = [
    "POOL_CONFIGS",
    "PoolConfig",
    "daily_rate",
    "ConfigurationError",
    "validate_params",
    "EventSource",
    "FixedEventSource",
    "RandomEventSource",
    "normalize_events",
    "ScenarioDefinition",
    "drag_adjustment_for",
    "facility_sizing_drag",
    "get_scenario",
    "list_scenarios",
    "DailyRates",
    "EngineState",
    "advance_day",
    "summarize",
    "summarize_records",
    "run_simulation",
]
