"""API response schemas.

Person and task bodies use the view models in ``taskroster.models`` directly.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


class MetricsResponse(BaseModel):
    """In-process metrics snapshot."""

    counters: dict[str, int] = Field(default_factory=dict)
    gauges: dict[str, float] = Field(default_factory=dict)
    timings: dict[str, dict[str, Any]] = Field(default_factory=dict)
