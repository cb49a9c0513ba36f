"""
Hiring Notifier Backend — Shared Response Schemas
==================================================

What:  Error and health payloads shared by every router.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description for display to users
        details: Optional extra context (offending field, available teams, cause)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "not_found",
            "message": "Application with ID 'abc123' was not found",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, degraded")
    timestamp: str = Field(description="Server time (YYYY-MM-DDTHH:MM:SS)")
    service: str = Field(default="Email Backend")
    version: str
    storage: str = Field(description="Data directory: available, unavailable")
    mail: str = Field(description="Mail transport: configured, simulated")


class ServiceInfoResponse(BaseModel):
    message: str
    version: str
    endpoints: Dict[str, str]
