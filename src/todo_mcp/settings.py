"""Server settings and the YAML loader that produces them.

Example ``todo-mcp.yaml``::

    host: 0.0.0.0
    port: ${TODO_MCP_PORT}
    path: /mcp
    telemetry:
      enabled: true
      otlp_endpoint: http://localhost:4317
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from todo_mcp import __version__
from todo_mcp.protocols.mcp.models import DEFAULT_PROTOCOL_VERSION


class SettingsError(Exception):
    """Raised when a settings file fails parsing or validation."""


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class ServerSettings(BaseModel):
    """Everything ``todo-mcp serve`` needs to listen and identify itself."""

    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=0, le=65535)
    path: str = "/mcp"
    server_name: str = "todo-mcp-server"
    server_version: str = __version__
    protocol_version: str = DEFAULT_PROTOCOL_VERSION
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @field_validator("path")
    @classmethod
    def _path_is_absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            msg = "path must start with '/'"
            raise ValueError(msg)
        return value

    @property
    def url(self) -> str:
        return f"ws://{self.host}:{self.port}{self.path}"


class SettingsLoader:
    """Load and validate a YAML settings file into :class:`ServerSettings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self, **overrides: Any) -> ServerSettings:
        """Read YAML, interpolate env vars, apply *overrides*, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.  Overrides whose
        value is ``None`` are ignored.

        Raises:
            SettingsError: On read, YAML parse, or validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SettingsError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise SettingsError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SettingsError("Settings YAML must be a mapping")

        return build_settings(data, **overrides)


def build_settings(data: dict[str, Any] | None = None, **overrides: Any) -> ServerSettings:
    """Validate *data* merged with non-``None`` *overrides*."""
    merged = dict(data or {})
    merged.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return ServerSettings.model_validate(merged)
    except ValidationError as exc:
        raise SettingsError(str(exc)) from exc
