"""
SpotBnB Backend — Shared Response Schemas
===========================================

What:  Error, message and health payloads shared by every route.
Why:   Clients parse one error shape everywhere: `{"message": ...}`, with an
       `errors` map added for field validation failures.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Confirmation body for deletes, e.g. {"message": "Spot successfully deleted."}."""
    message: str


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "message": "Bad Request",
            "errors": {"lat": "Latitude must be a number between -90 and 90."}
        }
    """
    message: str = Field(description="Human-readable error description")
    errors: Optional[Dict[str, str]] = Field(
        default=None,
        description="One message per failed field (validation errors only)",
    )


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
