"""Immutable per-day snapshots and run summaries produced by the engine."""
from pydantic import BaseModel, ConfigDict

from cashpool.models.simulation import PoolKey, ScenarioKind, SimulationParams


class PoolState(BaseModel):
    """State of one investment pool at the close of a day."""
    model_config = ConfigDict(frozen=True)

    key: PoolKey
    name: str
    cash: float
    borrow: float
    interest_owed: float
    interest_paid: float
    interest_earned: float
    cash_drag: float
    borrow_drag: float


class CashPoolState(BaseModel):
    """State of the centralized cash pool at the close of a day.

    interest_receivable is a running reporting figure and is never settled
    against the pools' interest_owed / interest_paid.
    """
    model_config = ConfigDict(frozen=True)

    cash: float
    interest_earned: float
    interest_receivable: float
    cash_drag: float
    borrow_drag: float


class LedgerAmounts(BaseModel):
    """Read-only per-key day amounts for the three pools and the cash pool (CP).

    Supports `amounts["PE"]` and `amounts.get(key)` lookups; missing keys
    default to zero and item assignment is not supported.
    """
    model_config = ConfigDict(frozen=True)

    PE: float = 0.0
    PC: float = 0.0
    PRE: float = 0.0
    CP: float = 0.0

    def __getitem__(self, key: PoolKey | str) -> float:
        name = key.value if isinstance(key, PoolKey) else key
        if name not in type(self).model_fields:
            raise KeyError(key)
        return getattr(self, name)

    def get(self, key: PoolKey | str, default: float = 0.0) -> float:
        try:
            return self[key]
        except KeyError:
            return default


class DailyTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    borrowed: float
    repaid: float
    interest_by_pool: LedgerAmounts
    drag: float


class DailyRecord(BaseModel):
    """Snapshot of a single simulated day."""
    model_config = ConfigDict(frozen=True)

    day: int
    pools: tuple[PoolState, ...]
    cash_pool: CashPoolState
    activity: LedgerAmounts
    totals: DailyTotals

    def pool(self, key: PoolKey | str) -> PoolState:
        """Return the snapshot for a pool by key."""
        pool_key = PoolKey(key)
        for state in self.pools:
            if state.key == pool_key:
                return state
        raise KeyError(pool_key)


class PoolSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: PoolKey
    name: str
    interest_paid: float
    ending_cash: float
    ending_borrow: float


class CashPoolSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    interest_earned: float
    ending_cash: float


class RunTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    borrowed: float
    repaid: float
    days: int


class SimulationSummary(BaseModel):
    """Run-level reduction of the daily ledger."""
    model_config = ConfigDict(frozen=True)

    pools: tuple[PoolSummary, ...]
    cash_pool: CashPoolSummary
    totals: RunTotals


class SimulationResult(BaseModel):
    """Full output of one engine run."""
    model_config = ConfigDict(frozen=True)

    scenario: ScenarioKind
    params: SimulationParams
    records: tuple[DailyRecord, ...]
    summary: SimulationSummary
