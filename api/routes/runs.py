"""
Scenario run endpoints.

Runs one scenario per request and lists the scenario catalogue.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_scenario_service
from core.application.dtos import RunRequest, RunResultDTO, ScenarioInfoDTO
from core.application.services.scenario_service import ScenarioService
from core.domain.exceptions import EnvironmentNotConfiguredError, UnknownScenarioError


logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/scenarios",
    status_code=status.HTTP_200_OK,
    response_model=List[ScenarioInfoDTO],
    summary="List scenarios",
    description="Scenario ids, titles, step names and overridable template keys",
)
async def list_scenarios(service: ScenarioService = Depends(get_scenario_service)):
    return service.list_scenarios()


@router.post(
    "/runs",
    status_code=status.HTTP_200_OK,
    response_model=RunResultDTO,
    summary="Run a scenario",
    description="""
    Run one scenario against one environment.

    Executed runs always answer 200; `success` and the step trail carry the
    outcome. Unknown scenarios answer 404, incomplete connection configs 422.
    """,
)
async def run_scenario(
    request: RunRequest,
    service: ScenarioService = Depends(get_scenario_service),
):
    """
    Run a scenario.

    **Body:**
    - `scenario` (or `testId`): scenario id, e.g. `cable-submit-order`
    - `environment`: environment name
    - `config`: auth, endpoint and db connection parameters
    - `customTemplates`: optional per-step template overrides
    - `dryRun`: validate the config without connecting
    """
    try:
        result = await service.run(request)
    except UnknownScenarioError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except EnvironmentNotConfiguredError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    logger.info(
        f"Run {result.execution_id} ({result.scenario}) finished: "
        f"success={result.success}, steps={len(result.steps)}"
    )
    return RunResultDTO.from_result(result)
