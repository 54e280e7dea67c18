"""Day-event sources — capital calls and distributions fed to the engine.

Each simulated day carries one signed amount per pool (millions):
negative for a capital call that drains pool cash, positive for a
distribution, zero for no activity.
"""
from __future__ import annotations

import logging
import math
import random
from collections.abc import Mapping, Sequence
from typing import Optional, Protocol

from cashpool.config import settings
from cashpool.models.simulation import DayEvent, PoolKey
from cashpool.simulation.pools import POOL_CONFIGS
from cashpool.simulation.validation import ConfigurationError, is_finite_number

logger = logging.getLogger(__name__)


class EventSource(Protocol):
    def generate(self, days: int) -> list[DayEvent]:
        ...


def empty_day() -> DayEvent:
    return {cfg.key: 0.0 for cfg in POOL_CONFIGS}


def sample_normal_range(rng: random.Random, min_value: float, max_value: float) -> float:
    """Draw a normal value centered in [min, max] with sd = width / 6.

    Box-Muller on two uniforms; values outside the range are clamped to
    the nearest bound rather than resampled.
    """
    mean = (min_value + max_value) / 2
    std_dev = (max_value - min_value) / 6
    u = 0.0
    v = 0.0
    while u == 0.0:
        u = rng.random()
    while v == 0.0:
        v = rng.random()
    z = math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)
    value = mean + z * std_dev
    return min(max(value, min_value), max_value)


class RandomEventSource:
    """Rolls an independent uniform draw per pool per day.

    roll < capital_call_probability emits a capital call, the next
    distribution_probability band emits a distribution, anything else is a
    quiet day. Pass a seed for a reproducible sequence.
    """

    def __init__(
        self,
        capital_call_probability: float = 0.10,
        distribution_probability: float = 0.07,
        min_amount: float = 0.5,
        max_amount: float = 7.0,
        seed: Optional[int] = None,
    ) -> None:
        if not all(
            is_finite_number(value)
            for value in (capital_call_probability, distribution_probability, min_amount, max_amount)
        ):
            raise ConfigurationError("event probabilities and amounts must be finite numbers")
        if min_amount > max_amount:
            raise ConfigurationError("min_amount must not exceed max_amount")
        if capital_call_probability < 0 or distribution_probability < 0:
            raise ConfigurationError("event probabilities must be non-negative")
        if capital_call_probability + distribution_probability > 1:
            raise ConfigurationError("event probabilities must sum to at most 1")
        self.capital_call_probability = capital_call_probability
        self.distribution_probability = distribution_probability
        self.min_amount = min_amount
        self.max_amount = max_amount
        self.seed = seed
        self._rng = random.Random(seed)

    @classmethod
    def from_settings(cls, seed: Optional[int] = None) -> "RandomEventSource":
        return cls(
            capital_call_probability=settings.CAPITAL_CALL_PROBABILITY,
            distribution_probability=settings.DISTRIBUTION_PROBABILITY,
            min_amount=settings.EVENT_MIN_AMOUNT,
            max_amount=settings.EVENT_MAX_AMOUNT,
            seed=seed if seed is not None else settings.EVENT_SEED,
        )

    def generate(self, days: int) -> list[DayEvent]:
        call_cutoff = self.capital_call_probability
        distribution_cutoff = call_cutoff + self.distribution_probability
        events: list[DayEvent] = []
        for _ in range(days):
            entry = empty_day()
            for cfg in POOL_CONFIGS:
                roll = self._rng.random()
                if roll < call_cutoff:
                    entry[cfg.key] = -sample_normal_range(self._rng, self.min_amount, self.max_amount)
                elif roll < distribution_cutoff:
                    entry[cfg.key] = sample_normal_range(self._rng, self.min_amount, self.max_amount)
            events.append(entry)

        n_calls = sum(1 for day in events for amount in day.values() if amount < 0)
        n_distributions = sum(1 for day in events for amount in day.values() if amount > 0)
        logger.debug(
            "Generated %d days of events (%d calls, %d distributions, seed=%s)",
            days, n_calls, n_distributions, self.seed,
        )
        return events


class FixedEventSource:
    """Replays a caller-supplied event sequence."""

    def __init__(self, events: Sequence[Optional[Mapping[PoolKey | str, float]]]) -> None:
        self._events = [dict(day) if day is not None else None for day in events]

    def generate(self, days: int) -> list[DayEvent]:
        return normalize_events(self._events, days)


def normalize_events(
    events: Sequence[Optional[Mapping[PoolKey | str, float]]] | None,
    days: int,
) -> list[DayEvent]:
    """Coerce an event sequence into exactly `days` complete entries.

    Missing days and missing pool keys default to zero; entries beyond the
    horizon are ignored.
    """
    events = list(events or [])
    if len(events) > days:
        logger.debug("Ignoring %d event entries beyond the %d-day horizon", len(events) - days, days)

    normalized: list[DayEvent] = []
    for index in range(days):
        raw = events[index] if index < len(events) else None
        entry = empty_day()
        if raw is not None and not isinstance(raw, Mapping):
            raise ConfigurationError(f"day {index + 1}: event entry must map pool keys to amounts")
        if raw:
            for key, amount in raw.items():
                try:
                    pool_key = PoolKey(key)
                except ValueError:
                    raise ConfigurationError(f"day {index + 1}: unknown pool key {key!r}") from None
                if amount is None:
                    continue
                if not is_finite_number(amount):
                    raise ConfigurationError(
                        f"day {index + 1}: event amount for {pool_key.value} must be a finite number"
                    )
                entry[pool_key] = float(amount)
        normalized.append(entry)
    return normalized
