"""API response models."""

from pydantic import BaseModel, Field
from typing import Literal

from formguard import __version__


class ValidationResponse(BaseModel):
    """Result of validating a submitted form."""

    valid: bool
    errors: dict[str, list[str]] = Field(default_factory=dict)
    normalized: dict[str, str] = Field(
        default_factory=dict,
        description="Fields a rule rewrote (e.g. postcodes), with the value to store",
    )


class RulesResponse(BaseModel):
    """What the server can validate."""

    rule_sets: list[str]
    rules: list[str]
    remote_methods: list[str]
    ruleset_fields: list[str] = []


class HealthResponse(BaseModel):
    """System health check response."""

    status: Literal["healthy", "degraded"]
    version: str = __version__
    uptime_seconds: float
    ruleset_loaded: bool
    ruleset_fields: int = 0
    remote_methods: int = 0
