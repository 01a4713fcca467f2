"""
Status-query endpoint.

Query-execution boundary used by the dashboard's ad-hoc DB checks.
"""
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_scenario_service
from core.application.dtos import StatusQueryRequest, StatusQueryResponse
from core.application.services.scenario_service import ScenarioService


logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/query",
    status_code=status.HTTP_200_OK,
    response_model=StatusQueryResponse,
    summary="Execute a status query",
    description="Runs the query through the DB proxy, or the simulated store when no proxy is configured",
)
async def execute_query(
    request: StatusQueryRequest,
    service: ScenarioService = Depends(get_scenario_service),
):
    response = await service.execute_status_query(request)
    if not response.success:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=response.model_dump(),
        )
    return response
