from fastapi import APIRouter

from cashpool.config import settings
from cashpool.simulation.scenarios import list_scenarios

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    return {
        "status": "ok",
        "version": settings.APP_VERSION,
        "scenarios": [scenario.kind.value for scenario in list_scenarios()],
    }
