"""Pool catalogue — the fixed set of investment pools and their return targets."""
from __future__ import annotations

from dataclasses import dataclass

from cashpool.models.simulation import PoolKey

DAYS_PER_YEAR = 365

CASH_POOL_KEY = "CP"


@dataclass(frozen=True)
class PoolConfig:
    key: PoolKey
    name: str
    expected_return: float  # annual percent


POOL_CONFIGS: tuple[PoolConfig, ...] = (
    PoolConfig(key=PoolKey.PE, name="Private Equity", expected_return=8.0),
    PoolConfig(key=PoolKey.PC, name="Private Credit", expected_return=8.2),
    PoolConfig(key=PoolKey.PRE, name="Private Real Estate", expected_return=7.2),
)

EXPECTED_RETURNS: dict[PoolKey, float] = {cfg.key: cfg.expected_return for cfg in POOL_CONFIGS}

AVERAGE_EXPECTED_RETURN = sum(EXPECTED_RETURNS.values()) / len(EXPECTED_RETURNS)

LEDGER_KEYS: tuple[str, ...] = tuple(cfg.key.value for cfg in POOL_CONFIGS) + (CASH_POOL_KEY,)


def daily_rate(annual_pct: float) -> float:
    """Convert an annual percentage rate to a simple daily rate.

    daily = annual / 100 / 365, no compounding adjustment.
    """
    return annual_pct / 100 / DAYS_PER_YEAR
