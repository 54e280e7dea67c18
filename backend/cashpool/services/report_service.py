"""Tabular views of simulation output for CSV export and console reports."""
from __future__ import annotations

import pandas as pd

from cashpool.models.comparison import ScenarioComparison
from cashpool.models.ledger import SimulationResult
from cashpool.simulation.pools import CASH_POOL_KEY

_POOL_COLUMNS = (
    "cash", "borrow", "interest_owed", "interest_paid",
    "interest_earned", "cash_drag", "borrow_drag",
)
_CASH_POOL_COLUMNS = ("cash", "interest_earned", "interest_receivable", "cash_drag", "borrow_drag")


def records_frame(result: SimulationResult) -> pd.DataFrame:
    """One row per day with flattened per-pool, cash pool and total columns."""
    rows = []
    for record in result.records:
        row: dict[str, float | int] = {"day": record.day}
        for pool in record.pools:
            prefix = pool.key.value
            for col in _POOL_COLUMNS:
                row[f"{prefix}_{col}"] = getattr(pool, col)
            row[f"{prefix}_activity"] = record.activity.get(prefix, 0.0)
            row[f"{prefix}_day_interest"] = record.totals.interest_by_pool.get(prefix, 0.0)
        for col in _CASH_POOL_COLUMNS:
            row[f"{CASH_POOL_KEY}_{col}"] = getattr(record.cash_pool, col)
        row[f"{CASH_POOL_KEY}_activity"] = record.activity.get(CASH_POOL_KEY, 0.0)
        row[f"{CASH_POOL_KEY}_day_interest"] = record.totals.interest_by_pool.get(CASH_POOL_KEY, 0.0)
        row["borrowed"] = record.totals.borrowed
        row["repaid"] = record.totals.repaid
        row["drag"] = record.totals.drag
        rows.append(row)
    return pd.DataFrame(rows).set_index("day")


def comparison_frame(comparison: ScenarioComparison) -> pd.DataFrame:
    """Daily drag and running cumulative drag, one column pair per scenario."""
    rows = []
    for entry in comparison.daily_drag:
        row: dict[str, float | int] = {"day": entry.day}
        for kind, value in entry.drag.items():
            row[f"{kind.value}_drag"] = value
            row[f"{kind.value}_cumulative"] = entry.cumulative[kind]
        rows.append(row)
    return pd.DataFrame(rows).set_index("day")


def drag_summary_frame(comparison: ScenarioComparison) -> pd.DataFrame:
    """Horizon and annualized drag per scenario, in millions and dollars."""
    df = pd.DataFrame([s.model_dump(mode="json") for s in comparison.drag_summaries])
    df["horizon_drag_usd"] = (df["horizon_drag"] * 1_000_000).round(0)
    df["annualized_drag_usd"] = (df["annualized_drag"] * 1_000_000).round(0)
    return df.set_index("id")


def comparison_csv(comparison: ScenarioComparison) -> str:
    return comparison_frame(comparison).to_csv()
