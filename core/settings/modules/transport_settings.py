from __future__ import annotations

from pydantic import Field

from core.settings.base import OgwBaseSettings


class TransportSettings(OgwBaseSettings):
    """
    Outbound HTTP settings for the SOAP, CDM and legacy-search endpoints.
    Loaded from .env file with exact variable name matching.
    """

    request_timeout_seconds: float = Field(60.0, gt=0, alias="OGW_REQUEST_TIMEOUT_SECONDS")
    cdm_port: int = Field(16500, alias="OGW_CDM_PORT")
    legacy_search_port: int = Field(16500, alias="OGW_LEGACY_SEARCH_PORT")
    consumption_wait_seconds: float = Field(2.0, ge=0, alias="OGW_CONSUMPTION_WAIT_SECONDS")
    verify_ssl: bool = Field(True, alias="OGW_VERIFY_SSL")
