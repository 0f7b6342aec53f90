"""Registry build settings.

Environment variables (all optional):
    API_LINT_TYPES_SELF_CHECK   Validate references before freezing. Default: true
    API_LINT_TYPES_FREEZE       Freeze registries after building. Default: true
    API_LINT_TYPES_LOG_LEVEL    Logging level for the CLI. Default: WARNING
"""

import os

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "API_LINT_TYPES_"


class RegistrySettings(BaseModel):
    """Controls how dialect registries are assembled."""

    self_check: bool = Field(True, description="Run the dangling reference check on freeze")
    freeze: bool = Field(True, description="Reject define/extend once the registry is built")
    log_level: str = Field("WARNING", description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def from_env(cls) -> "RegistrySettings":
        values = {}
        for field in ("self_check", "freeze", "log_level"):
            raw = os.environ.get(ENV_PREFIX + field.upper())
            if raw is not None:
                values[field] = raw
        return cls(**values)
