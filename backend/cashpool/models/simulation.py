from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class PoolKey(str, Enum):
    """Investment pools sharing the cash facility, in display order."""
    PE = "PE"
    PC = "PC"
    PRE = "PRE"


DayEvent = dict[PoolKey, float]


class ScenarioKind(str, Enum):
    """Liquidity-funding policy being simulated."""
    prefunded = "prefunded"  # Pools hold their own starting cash
    internal = "internal"    # Pools draw from the centralized cash pool
    loc = "loc"              # Pools draw on an external bank line


def _amount(default: float, name: str, camel: str):
    return Field(default, ge=0, allow_inf_nan=False, validation_alias=AliasChoices(name, camel))


class SimulationParams(BaseModel):
    """Starting balances (millions), annual rates (percent) and horizon for one run.

    Accepts both snake_case and the camelCase names used by the web client.
    """
    pe_cash: float = _amount(0.0, "pe_cash", "peCash")
    pc_cash: float = _amount(0.0, "pc_cash", "pcCash")
    pre_cash: float = _amount(0.0, "pre_cash", "preCash")
    cash_pool: float = _amount(50.0, "cash_pool", "cashPool")
    borrow_rate: float = _amount(4.25, "borrow_rate", "borrowRate")
    idle_rate: float = _amount(4.25, "idle_rate", "idleRate")
    days: int = Field(30, ge=1)

    def starting_cash(self, key: PoolKey) -> float:
        return {
            PoolKey.PE: self.pe_cash,
            PoolKey.PC: self.pc_cash,
            PoolKey.PRE: self.pre_cash,
        }[PoolKey(key)]


class SimulationRequest(BaseModel):
    """Request body for a single scenario run."""
    scenario: ScenarioKind = ScenarioKind.internal
    params: Optional[SimulationParams] = None
    events: Optional[list[Optional[DayEvent]]] = None
    seed: Optional[int] = None


class ComparisonRequest(BaseModel):
    """Request body for running every scenario against one event sequence."""
    days: Optional[int] = Field(None, ge=1)
    seed: Optional[int] = None
    events: Optional[list[Optional[DayEvent]]] = None
