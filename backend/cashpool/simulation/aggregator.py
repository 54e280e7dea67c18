"""Reduce a run into its SimulationSummary."""
from __future__ import annotations

from collections.abc import Sequence

from cashpool.models.ledger import (
    CashPoolSummary,
    DailyRecord,
    PoolSummary,
    RunTotals,
    SimulationSummary,
)
from cashpool.simulation.state_transitions import EngineState


def summarize(state: EngineState) -> SimulationSummary:
    """Build the summary from the final engine state and its accumulator."""
    acc = state.accumulator
    return SimulationSummary(
        pools=tuple(
            PoolSummary(
                key=pool.key,
                name=pool.name,
                interest_paid=pool.interest_paid,
                ending_cash=pool.cash,
                ending_borrow=pool.borrow,
            )
            for pool in state.pools
        ),
        cash_pool=CashPoolSummary(
            interest_earned=acc.total_interest_earned,
            ending_cash=state.cash_pool.cash,
        ),
        totals=RunTotals(
            borrowed=acc.total_borrowed,
            repaid=acc.total_repaid,
            days=acc.days_run,
        ),
    )


def summarize_records(records: Sequence[DailyRecord]) -> SimulationSummary:
    """Build the same summary purely from the daily record sequence."""
    if not records:
        raise ValueError("cannot summarize an empty record sequence")

    last = records[-1]
    interest_earned = 0.0
    borrowed = 0.0
    repaid = 0.0
    for record in records:
        interest_earned += record.cash_pool.interest_earned
        borrowed += record.totals.borrowed
        repaid += record.totals.repaid

    return SimulationSummary(
        pools=tuple(
            PoolSummary(
                key=pool.key,
                name=pool.name,
                interest_paid=pool.interest_paid,
                ending_cash=pool.cash,
                ending_borrow=pool.borrow,
            )
            for pool in last.pools
        ),
        cash_pool=CashPoolSummary(
            interest_earned=interest_earned,
            ending_cash=last.cash_pool.cash,
        ),
        totals=RunTotals(borrowed=borrowed, repaid=repaid, days=len(records)),
    )
