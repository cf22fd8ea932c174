"""Pydantic schemas for health and index responses."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from salon_api.schemas.common import CamelModel


class HealthStatus(CamelModel):
    """Payload of the health check endpoint."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (dev, test, prod)")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Database connectivity status when check is performed",
    )
    timestamp: datetime


class ApiIndex(CamelModel):
    """Payload of the versioned API index; reflects the caller when a token is sent."""

    version: str
    authenticated: bool = False
    role: str | None = None
