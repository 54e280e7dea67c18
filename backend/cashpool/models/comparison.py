from pydantic import BaseModel

from cashpool.models.ledger import SimulationResult
from cashpool.models.simulation import DayEvent, ScenarioKind, SimulationParams


class ScenarioInfo(BaseModel):
    """Preset metadata exposed to clients."""
    id: ScenarioKind
    name: str
    description: str
    params: SimulationParams


class ScenarioDragSummary(BaseModel):
    """Cumulative performance drag for one scenario over the horizon."""
    id: ScenarioKind
    name: str
    horizon_drag: float
    annualized_drag: float


class DailyDragRow(BaseModel):
    """Day drag and running cumulative drag per scenario."""
    day: int
    drag: dict[ScenarioKind, float]
    cumulative: dict[ScenarioKind, float]


class ScenarioComparison(BaseModel):
    """Every scenario run against the same event sequence."""
    days: int
    events: list[DayEvent]
    results: dict[ScenarioKind, SimulationResult]
    drag_summaries: list[ScenarioDragSummary]
    daily_drag: list[DailyDragRow]
