"""Daily state transition — one day of cash movement for every pool.

advance_day() takes the closing state of day N-1 plus day N's events and
returns the closing state of day N with its DailyRecord. The input state is
never mutated; pending interest and run totals travel inside the state as
an explicit accumulator.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field

from cashpool.models.ledger import CashPoolState, DailyRecord, DailyTotals, PoolState
from cashpool.models.simulation import DayEvent, PoolKey, SimulationParams
from cashpool.simulation.pools import CASH_POOL_KEY, LEDGER_KEYS, POOL_CONFIGS, daily_rate


@dataclass(frozen=True)
class DailyRates:
    """Daily simple rates derived from the run's annual percentages."""
    borrow: float
    idle: float
    expected_returns: dict[PoolKey, float]

    @classmethod
    def from_params(cls, params: SimulationParams) -> "DailyRates":
        return cls(
            borrow=daily_rate(params.borrow_rate),
            idle=daily_rate(params.idle_rate),
            expected_returns={cfg.key: daily_rate(cfg.expected_return) for cfg in POOL_CONFIGS},
        )


@dataclass
class PoolAccount:
    key: PoolKey
    name: str
    cash: float
    borrow: float = 0.0
    interest_owed: float = 0.0
    interest_paid: float = 0.0
    interest_earned: float = 0.0
    cash_drag: float = 0.0
    borrow_drag: float = 0.0

    def snapshot(self) -> PoolState:
        return PoolState(
            key=self.key,
            name=self.name,
            cash=self.cash,
            borrow=self.borrow,
            interest_owed=self.interest_owed,
            interest_paid=self.interest_paid,
            interest_earned=self.interest_earned,
            cash_drag=self.cash_drag,
            borrow_drag=self.borrow_drag,
        )


@dataclass
class CashPoolAccount:
    cash: float
    interest_earned: float = 0.0
    interest_receivable: float = 0.0
    cash_drag: float = 0.0
    borrow_drag: float = 0.0

    def snapshot(self) -> CashPoolState:
        return CashPoolState(
            cash=self.cash,
            interest_earned=self.interest_earned,
            interest_receivable=self.interest_receivable,
            cash_drag=self.cash_drag,
            borrow_drag=self.borrow_drag,
        )


@dataclass
class RunAccumulator:
    """Values carried from one day to the next outside the account balances."""
    pending_pool_interest: dict[PoolKey, float] = field(
        default_factory=lambda: {cfg.key: 0.0 for cfg in POOL_CONFIGS}
    )
    pending_cash_pool_interest: float = 0.0
    total_borrowed: float = 0.0
    total_repaid: float = 0.0
    total_interest_earned: float = 0.0
    days_run: int = 0


@dataclass
class EngineState:
    pools: list[PoolAccount]
    cash_pool: CashPoolAccount
    accumulator: RunAccumulator = field(default_factory=RunAccumulator)

    @classmethod
    def initial(cls, params: SimulationParams) -> "EngineState":
        return cls(
            pools=[
                PoolAccount(key=cfg.key, name=cfg.name, cash=params.starting_cash(cfg.key))
                for cfg in POOL_CONFIGS
            ],
            cash_pool=CashPoolAccount(cash=params.cash_pool),
        )

    def total_borrow(self) -> float:
        return sum(pool.borrow for pool in self.pools)


@dataclass
class _DayLedger:
    """Flows booked during a single day."""
    activity: dict[str, float] = field(default_factory=lambda: dict.fromkeys(LEDGER_KEYS, 0.0))
    interest: dict[str, float] = field(default_factory=lambda: dict.fromkeys(LEDGER_KEYS, 0.0))
    borrowed: float = 0.0
    repaid: float = 0.0
    drag: float = 0.0


def advance_day(
    state: EngineState,
    day: int,
    event: DayEvent,
    rates: DailyRates,
    adjustment_drag: float = 0.0,
) -> tuple[EngineState, DailyRecord]:
    """Run one simulated day and snapshot the result.

    Order within the day:
      1. credit interest scheduled yesterday, reset today's earned interest
      2. apply capital calls / distributions
      3. convert negative pool cash into borrow drawn from the cash pool
      4. accrue borrow interest
      5. debt-service waterfall (interest first, then principal)
      6. idle interest on remaining pool cash, scheduled for tomorrow
      7. cash drag where the pool's expected return beats the idle rate
      8. informational interest receivable on the cash pool
      9. cash pool idle interest, scheduled for tomorrow
     10. scenario drag adjustment booked on the cash pool
    """
    state = copy.deepcopy(state)
    acc = state.accumulator
    cash_pool = state.cash_pool
    ledger = _DayLedger()

    _settle_pending_interest(state)

    for pool in state.pools:
        amount = event.get(pool.key, 0.0)
        pool.cash += amount
        ledger.activity[pool.key.value] += amount

        if pool.cash < 0:
            deficit = -pool.cash
            pool.borrow += deficit
            pool.cash = 0.0
            cash_pool.cash -= deficit
            ledger.activity[CASH_POOL_KEY] -= deficit
            ledger.borrowed += deficit

        if pool.borrow > 0:
            interest = pool.borrow * rates.borrow
            pool.interest_owed += interest
            pool.borrow_drag += interest
            ledger.drag += interest
            ledger.interest[pool.key.value] += interest

    for pool in state.pools:
        _service_debt(pool, cash_pool, ledger)

    for pool in state.pools:
        if pool.cash > 0:
            idle_interest = pool.cash * rates.idle
            pool.interest_earned = idle_interest
            acc.pending_pool_interest[pool.key] = idle_interest
            ledger.interest[pool.key.value] -= idle_interest
        else:
            pool.interest_earned = 0.0
            acc.pending_pool_interest[pool.key] = 0.0

    for pool in state.pools:
        expected = rates.expected_returns[pool.key]
        if pool.cash > 0 and expected > rates.idle:
            drag = pool.cash * (expected - rates.idle)
            pool.cash_drag += drag
            ledger.drag += drag

    outstanding = state.total_borrow()
    if outstanding > 0:
        receivable = outstanding * rates.borrow
        cash_pool.interest_receivable += receivable
        ledger.interest[CASH_POOL_KEY] += receivable

    if cash_pool.cash > 0:
        idle_interest = cash_pool.cash * rates.idle
        cash_pool.interest_earned = idle_interest
        acc.pending_cash_pool_interest = idle_interest
        acc.total_interest_earned += idle_interest
        ledger.interest[CASH_POOL_KEY] += idle_interest
    else:
        acc.pending_cash_pool_interest = 0.0

    if adjustment_drag > 0:
        cash_pool.cash_drag += adjustment_drag
        ledger.drag += adjustment_drag

    acc.total_borrowed += ledger.borrowed
    acc.total_repaid += ledger.repaid
    acc.days_run = day

    record = DailyRecord(
        day=day,
        pools=tuple(pool.snapshot() for pool in state.pools),
        cash_pool=cash_pool.snapshot(),
        activity=dict(ledger.activity),
        totals=DailyTotals(
            borrowed=ledger.borrowed,
            repaid=ledger.repaid,
            interest_by_pool=dict(ledger.interest),
            drag=ledger.drag,
        ),
    )
    return state, record


def _settle_pending_interest(state: EngineState) -> None:
    """Interest earned yesterday becomes spendable cash today."""
    acc = state.accumulator
    state.cash_pool.cash += acc.pending_cash_pool_interest
    acc.pending_cash_pool_interest = 0.0
    state.cash_pool.interest_earned = 0.0
    for pool in state.pools:
        pool.cash += acc.pending_pool_interest[pool.key]
        acc.pending_pool_interest[pool.key] = 0.0
        pool.interest_earned = 0.0


def _service_debt(pool: PoolAccount, cash_pool: CashPoolAccount, ledger: _DayLedger) -> None:
    """Apply available pool cash to interest owed, then to principal."""
    if pool.cash <= 0 or (pool.borrow == 0 and pool.interest_owed == 0):
        return

    available = pool.cash
    payment = 0.0

    if pool.interest_owed > 0:
        interest_payment = min(pool.interest_owed, available)
        pool.interest_owed -= interest_payment
        pool.interest_paid += interest_payment
        available -= interest_payment
        payment += interest_payment

    if available > 0 and pool.borrow > 0:
        principal_payment = min(pool.borrow, available)
        pool.borrow -= principal_payment
        available -= principal_payment
        payment += principal_payment

    pool.cash = available

    if payment > 0:
        cash_pool.cash += payment
        ledger.activity[CASH_POOL_KEY] += payment
        ledger.repaid += payment
