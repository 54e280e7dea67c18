from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from cashpool.models.comparison import ScenarioComparison
from cashpool.models.ledger import SimulationResult
from cashpool.models.simulation import ComparisonRequest, SimulationRequest
from cashpool.services.report_service import comparison_csv
from cashpool.services.simulation_service import compare_scenarios, run_scenario

router = APIRouter(tags=["simulations"])


@router.post("/simulations/run", response_model=SimulationResult)
def run_simulation_endpoint(request: SimulationRequest):
    """Run one funding scenario.

    Uses the scenario's preset parameters unless `params` is supplied, and a
    generated event sequence unless `events` is supplied.
    """
    try:
        return run_scenario(request.scenario, request.events, request.params, request.seed)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


def _compare(request: ComparisonRequest) -> ScenarioComparison:
    try:
        return compare_scenarios(days=request.days, seed=request.seed, events=request.events)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/simulations/compare", response_model=ScenarioComparison)
def compare_scenarios_endpoint(request: ComparisonRequest):
    """Run every scenario against one shared event sequence."""
    return _compare(request)


@router.post("/simulations/compare/csv")
def compare_scenarios_csv(request: ComparisonRequest):
    """Daily and cumulative drag per scenario as CSV."""
    comparison = _compare(request)
    return Response(
        content=comparison_csv(comparison),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="drag_comparison.csv"'},
    )
