# ============================================================================
# API RESPONSE MODELS
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Function App - Response schemas
# PURPOSE: Pydantic V2 models for API responses
# CREATED: 14 OCT 2026
# ============================================================================
"""
API Response Models

Things are returned as core.models.thing.Thing; this module holds the
envelopes shared by every blueprint.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Health check response."""

    model_config = ConfigDict()

    status: str = Field(default="healthy", description="Overall health status")
    service: str = Field(default="thingstore-api", description="Service name")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Check timestamp",
    )
    version: str = Field(..., description="Service version")
    checks: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict,
        description="Individual health check results",
    )


class ErrorResponse(BaseModel):
    """Standard error response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "Thing not found",
                "details": "No thing with ID 'abc123' exists",
                "code": "NOT_FOUND",
            }
        }
    )

    error: str = Field(..., description="Error message")
    details: Optional[str] = Field(default=None, description="Additional details")
    code: Optional[str] = Field(default=None, description="Error code for programmatic handling")


__all__ = [
    "HealthResponse",
    "ErrorResponse",
]
