"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["ok", "degraded"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Whether the catalog store answered a trivial query"
    )
    token_expiry_minutes: int | None = Field(
        default=None,
        description="Lifetime of issued tokens; null when tokens carry no expiry",
    )
