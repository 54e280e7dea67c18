import pytest

from cashpool.models.simulation import SimulationParams
from cashpool.simulation.events import RandomEventSource


@pytest.fixture
def make_params():
    """Factory for SimulationParams with all-zero pool balances by default."""
    def _make(**overrides) -> SimulationParams:
        defaults = dict(
            pe_cash=0.0,
            pc_cash=0.0,
            pre_cash=0.0,
            cash_pool=50.0,
            borrow_rate=4.25,
            idle_rate=4.25,
            days=1,
        )
        defaults.update(overrides)
        return SimulationParams(**defaults)
    return _make


@pytest.fixture
def seeded_events():
    """Reproducible 60-day event sequence."""
    return RandomEventSource(seed=20240601).generate(60)
