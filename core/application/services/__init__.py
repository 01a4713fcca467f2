"""Application services."""
from .scenario_service import DRY_RUN_MESSAGE, ScenarioService

__all__ = ["DRY_RUN_MESSAGE", "ScenarioService"]
