"""Pydantic schemas for health check responses."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    server: Literal["healthy"] = "healthy"
    database: Literal["connected", "disconnected"] = Field(
        description="Database connectivity status when check is performed",
    )
    timestamp: datetime
    uptime: float = Field(description="Seconds since the application started")


class UserCounts(BaseModel):
    total: int = 0
    volunteers: int = 0
    ngos: int = 0


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    success: bool = True
    message: str = "Server is running"
    status: HealthStatus
    users: UserCounts
