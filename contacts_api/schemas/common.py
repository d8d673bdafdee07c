"""
Contacts API — Shared Schemas
===============================

Response models used by more than one router: creation acknowledgement,
error body and health report.
"""

from typing import Optional

from pydantic import BaseModel, Field


class CreatedResponse(BaseModel):
    """Returned with 201 by every create route."""

    id: str = Field(description="Identifier assigned by the database")


class ErrorResponse(BaseModel):
    """
    Body of every error response.

    Example:
        {
            "error": "validation_error",
            "message": "All fields are required",
            "details": {"missing": ["email"]},
            "request_id": "3f2a9c1e"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
