"""
API Schemas
===========

Pydantic models for API request/response validation.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GraphQLRequest(BaseModel):
    """Request body for a GraphQL operation."""

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(
        ...,
        min_length=1,
        description="GraphQL document to execute",
        examples=["{ recentPosts(count: 3, offset: 0) { id title } }"],
    )
    variables: dict[str, Any] | None = Field(
        default=None,
        description="Variable values for the operation",
    )
    operation_name: str | None = Field(
        default=None,
        alias="operationName",
        description="Operation to execute when the document has several",
    )


class GraphQLErrorResponse(BaseModel):
    """Single GraphQL error entry."""

    message: str = Field(..., description="Error message")
    path: list[str | int] | None = Field(None, description="Result path of the failing field")


class GraphQLResponse(BaseModel):
    """Response body for a GraphQL operation."""

    data: dict[str, Any] | None = Field(None, description="Execution result data")
    errors: list[GraphQLErrorResponse] | None = Field(None, description="Errors, if any")


class BookResponse(BaseModel):
    """A book returned by the remote books query."""

    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Book author")


class HealthStatus(str, Enum):
    """Health check status values."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class HealthResponse(BaseModel):
    """Health check response."""

    status: HealthStatus = Field(..., description="Overall health status")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    checks: dict[str, bool] = Field(
        default_factory=dict,
        description="Individual component health checks",
    )


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    ready: bool = Field(..., description="Whether the service is ready to handle requests")
    checks: dict[str, bool] = Field(
        default_factory=dict,
        description="Individual readiness checks",
    )


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    request_id: str | None = Field(None, description="Request ID if available")
    details: dict[str, Any] | None = Field(None, description="Additional error details")
