"""Health check response schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class LivenessResponse(BaseModel):
    """Liveness probe response."""

    status: Literal["alive"] = "alive"


class HealthResponse(BaseModel):
    """Overall health including dependency checks."""

    status: Literal["healthy", "degraded"] = Field(description="Overall status")
    service: str = Field(description="Service name")
    version: str = Field(description="Service version")
    checks: dict[str, bool] = Field(default_factory=dict, description="Dependency name to health")
