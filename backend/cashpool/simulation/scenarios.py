"""Scenario definitions — named liquidity-funding policies.

Maps each scenario to its starting balances, rates, and an optional
drag adjustment the engine applies to the cash pool every day.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from cashpool.models.simulation import ScenarioKind, SimulationParams
from cashpool.simulation.pools import AVERAGE_EXPECTED_RETURN, daily_rate
from cashpool.simulation.validation import ConfigurationError

# Daily drag booked against the cash pool, given the run's parameters
DragAdjustment = Callable[[SimulationParams], float]

_EXTERNAL_LINE_SPREAD = 0.4  # 40 bps over the cash rate


@dataclass(frozen=True)
class ScenarioDefinition:
    """A named parameter preset."""
    kind: ScenarioKind
    name: str
    description: str
    params: SimulationParams


_BASELINE_PARAMS = SimulationParams(
    pe_cash=0.0,
    pc_cash=0.0,
    pre_cash=0.0,
    cash_pool=50.0,
    borrow_rate=4.25,
    idle_rate=4.25,
    days=30,
)

# Facility sizing notional: always the baseline starting cash pool,
# not the running balance or a scenario's own starting balance.
BASELINE_CASH_POOL_NOTIONAL = _BASELINE_PARAMS.cash_pool

_SCENARIOS: dict[ScenarioKind, ScenarioDefinition] = {
    ScenarioKind.prefunded: ScenarioDefinition(
        kind=ScenarioKind.prefunded,
        name="Pre-Funded Pools",
        description=(
            "Each investment pool begins with $30M cash which is used to fund commitments "
            "as they come in. Cash is assumed to earn 4.25% when idle."
        ),
        params=_BASELINE_PARAMS.model_copy(
            update={"pe_cash": 30.0, "pc_cash": 30.0, "pre_cash": 30.0, "cash_pool": 0.0}
        ),
    ),
    ScenarioKind.internal: ScenarioDefinition(
        kind=ScenarioKind.internal,
        name="Internal Cash Pool",
        description=(
            "Internally funded borrowing facility allows individual pools to hold zero "
            "starting cash and draw needed funds from a centralized pool to meet funding "
            "needs. Idle cash earns 4.25%. Pools borrow at 4.25%."
        ),
        params=_BASELINE_PARAMS,
    ),
    ScenarioKind.loc: ScenarioDefinition(
        kind=ScenarioKind.loc,
        name="External LOC",
        description=(
            "Pools tap an external bank line; draws cost cash rate (4.25%) + 40 bps "
            "and no idle cash is reserved."
        ),
        params=_BASELINE_PARAMS.model_copy(
            update={
                "borrow_rate": _BASELINE_PARAMS.borrow_rate + _EXTERNAL_LINE_SPREAD,
                "cash_pool": 0.0,
            }
        ),
    ),
}


def facility_sizing_drag(params: SimulationParams) -> float:
    """Standing cost of keeping the baseline facility funded instead of invested.

    BASELINE_CASH_POOL_NOTIONAL * (average expected return - idle rate), daily.
    Zero when the idle rate meets or beats the average expected return.
    """
    spread = daily_rate(AVERAGE_EXPECTED_RETURN - params.idle_rate)
    if spread > 0:
        return BASELINE_CASH_POOL_NOTIONAL * spread
    return 0.0


_DRAG_ADJUSTMENTS: dict[ScenarioKind, DragAdjustment] = {
    ScenarioKind.internal: facility_sizing_drag,
}


def get_scenario(kind: ScenarioKind | str) -> ScenarioDefinition:
    """Return a scenario preset by id."""
    try:
        return _SCENARIOS[ScenarioKind(kind)]
    except ValueError:
        raise ConfigurationError(f"unknown scenario {kind!r}") from None


def list_scenarios() -> list[ScenarioDefinition]:
    """Return every preset in display order."""
    return [_SCENARIOS[kind] for kind in (ScenarioKind.prefunded, ScenarioKind.internal, ScenarioKind.loc)]


def drag_adjustment_for(kind: ScenarioKind | str) -> Optional[DragAdjustment]:
    """Return the scenario's cash pool drag adjustment, if it has one."""
    return _DRAG_ADJUSTMENTS.get(get_scenario(kind).kind)
