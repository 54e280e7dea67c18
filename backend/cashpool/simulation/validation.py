"""Boundary checks run before the day loop starts."""
from __future__ import annotations

import math

from cashpool.models.simulation import SimulationParams

_NON_NEGATIVE_FIELDS = ("pe_cash", "pc_cash", "pre_cash", "cash_pool", "borrow_rate", "idle_rate")


class ConfigurationError(ValueError):
    """Raised when simulation inputs cannot produce a meaningful ledger."""


def is_finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too large to convert to float
        return False


def validate_params(params: SimulationParams) -> None:
    """Reject parameters the engine would silently turn into garbage.

    SimulationParams already enforces these constraints on construction;
    this catches instances built with model_construct() or model_copy(update=...).
    """
    days = params.days
    if isinstance(days, bool) or not isinstance(days, int) or days < 1:
        raise ConfigurationError("days must be a positive integer")

    for name in _NON_NEGATIVE_FIELDS:
        value = getattr(params, name)
        if not is_finite_number(value) or value < 0:
            raise ConfigurationError(f"{name} must be finite and non-negative")
