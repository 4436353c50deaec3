"""
SocialNet Backend — Shared Schema Building Blocks
===================================================

What:  Base model for camelCase API payloads plus the error and health shapes.
How:   Fields are declared in snake_case; the alias generator exposes them to
       clients as camelCase (firstName, picturePath, viewedProfile, ...).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for every schema that crosses the HTTP boundary.

    from_attributes lets ORM rows be validated directly; only the fields
    declared on the schema are read, so the schema is the allow-list.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response for the users/posts/assets routes.

    Fields:
        error: Machine-readable error code (e.g., "not_found", "invalid_token")
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
