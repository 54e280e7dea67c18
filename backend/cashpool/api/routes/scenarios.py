from fastapi import APIRouter

from cashpool.models.comparison import ScenarioInfo
from cashpool.simulation.scenarios import list_scenarios

router = APIRouter(tags=["scenarios"])


@router.get("/scenarios", response_model=list[ScenarioInfo])
def get_scenarios():
    """Return the preset funding scenarios and their parameters."""
    return [
        ScenarioInfo(
            id=scenario.kind,
            name=scenario.name,
            description=scenario.description,
            params=scenario.params,
        )
        for scenario in list_scenarios()
    ]
