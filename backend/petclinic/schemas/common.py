"""
PetClinic Backend — Shared Response Schemas
=============================================
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error body for every API error.

    `error` is a machine-readable code that differs per failure kind, so
    clients can tell a missing entity from a data problem from an outage.
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    store: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
