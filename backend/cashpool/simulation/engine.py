"""Liquidity simulation engine.

Runs one scenario over a fixed horizon of days, producing an immutable
DailyRecord per day plus a run-level SimulationSummary.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Optional

from cashpool.models.ledger import DailyRecord, SimulationResult
from cashpool.models.simulation import PoolKey, ScenarioKind, SimulationParams
from cashpool.simulation.aggregator import summarize
from cashpool.simulation.events import normalize_events
from cashpool.simulation.scenarios import DragAdjustment, drag_adjustment_for, get_scenario
from cashpool.simulation.state_transitions import DailyRates, EngineState, advance_day
from cashpool.simulation.validation import ConfigurationError, is_finite_number, validate_params

logger = logging.getLogger(__name__)


def run_simulation(
    params: SimulationParams,
    events: Sequence[Optional[Mapping[PoolKey | str, float]]] | None,
    scenario: ScenarioKind | str = ScenarioKind.internal,
    drag_adjustment: Optional[DragAdjustment] = None,
) -> SimulationResult:
    """Simulate `params.days` days of pool cash under one funding scenario.

    Args:
        params: Starting balances, annual rates and horizon.
        events: One mapping of pool key -> signed amount per day. Short
            sequences are padded with quiet days.
        scenario: Scenario id; selects the default drag adjustment.
        drag_adjustment: Overrides the scenario's cash pool drag adjustment.

    Raises:
        ConfigurationError: parameters or events are malformed.
    """
    scenario = get_scenario(scenario).kind
    validate_params(params)
    day_events = normalize_events(events, params.days)

    adjustment = drag_adjustment if drag_adjustment is not None else drag_adjustment_for(scenario)
    adjustment_drag = adjustment(params) if adjustment is not None else 0.0
    if not is_finite_number(adjustment_drag):
        raise ConfigurationError("drag adjustment must return a finite number")

    rates = DailyRates.from_params(params)
    state = EngineState.initial(params)
    records: list[DailyRecord] = []

    for day, event in enumerate(day_events, start=1):
        state, record = advance_day(state, day, event, rates, adjustment_drag)
        records.append(record)

    summary = summarize(state)
    logger.info(
        "Simulated %s over %d days: borrowed=%.4f repaid=%.4f ending cash pool=%.4f",
        scenario.value, params.days, summary.totals.borrowed, summary.totals.repaid,
        summary.cash_pool.ending_cash,
    )
    return SimulationResult(
        scenario=scenario,
        params=params,
        records=tuple(records),
        summary=summary,
    )
