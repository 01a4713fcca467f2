"""
Connection configuration DTOs.

Per-environment credentials and endpoints travel with each invocation as an
explicit value object; nothing here is read from ambient settings.
"""
from __future__ import annotations

from typing import Literal, Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator


class AuthConfig(BaseModel):
    """Basic-auth credentials for the OGW SOAP endpoints."""

    username: str = Field(default="", description="Basic-auth user")
    password: str = Field(default="", description="Basic-auth password")

    model_config = {"frozen": True}


class EndpointConfig(BaseModel):
    """OGW endpoint host, e.g. ``https://ogw-sst.example.net:16501``."""

    host: str = Field(default="", description="Scheme, host and port of the SOAP endpoint")

    model_config = {"frozen": True}

    @field_validator("host")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @property
    def hostname(self) -> str:
        """Host without scheme and port (used for the port-16500 services)."""
        host = self.host
        if "://" not in host:
            host = f"http://{host}"
        return urlsplit(host).hostname or ""

    def service_url(self, service: str) -> str:
        """``<host>/VFDE<service>EG/VFDE``."""
        return f"{self.host}/VFDE{service}EG/VFDE"

    def sibling_url(self, port: int, path: str, scheme: str = "http") -> str:
        """Same hostname on another port, e.g. the CDM download service."""
        return f"{scheme}://{self.hostname}:{port}{path}"


class DbConfig(BaseModel):
    """Status-store (Oracle) connection parameters."""

    hostname: str = Field(default="", description="Database host")
    port: str = Field(default="1521", description="Listener port")
    connection_type: Literal["sid", "serviceName"] = Field(
        default="sid", alias="connectionType", description="How the database is addressed"
    )
    sid: str = Field(default="", description="SID (connection_type=sid)")
    service_name: str = Field(
        default="", alias="serviceName", description="Service name (connection_type=serviceName)"
    )
    username: str = Field(default="", description="Database user")
    password: str = Field(default="", description="Database password")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("port", mode="before")
    @classmethod
    def _port_as_text(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return value

    @property
    def connection_string(self) -> str:
        """``host:port:sid`` for SID connections, ``host:port/service`` otherwise."""
        if self.connection_type == "sid":
            return f"{self.hostname}:{self.port}:{self.sid}"
        return f"{self.hostname}:{self.port}/{self.service_name}"


class UnixConfig(BaseModel):
    """SSH access used by the log viewer; carried through but unused by the engine."""

    host_name: str = Field(default="", alias="hostName")
    port: str = Field(default="22")
    user_name: str = Field(default="", alias="userName")
    password: str = Field(default="")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("port", mode="before")
    @classmethod
    def _port_as_text(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return value


class ConnectionConfig(BaseModel):
    """Everything the engine needs to reach one environment."""

    auth: AuthConfig = Field(default_factory=AuthConfig)
    endpoint: EndpointConfig = Field(default_factory=EndpointConfig)
    db: DbConfig = Field(default_factory=DbConfig)
    unix: Optional[UnixConfig] = Field(default=None)

    model_config = {"frozen": True}

    def missing_fields(self, needs_status_store: bool = True) -> list[str]:
        """
        List required fields that are empty.

        Args:
            needs_status_store: Whether the scenario polls the status store

        Returns:
            Dotted field names, e.g. ``["auth.password", "db.sid"]``
        """
        missing: list[str] = []
        if not self.auth.username:
            missing.append("auth.username")
        if not self.auth.password:
            missing.append("auth.password")
        if not self.endpoint.host:
            missing.append("endpoint.host")
        if needs_status_store:
            if not self.db.hostname:
                missing.append("db.hostname")
            if not self.db.username:
                missing.append("db.username")
            if not self.db.password:
                missing.append("db.password")
            if not (self.db.sid or self.db.service_name):
                missing.append("db.sid|db.serviceName")
        return missing
