# ============================================================================
# FUNCTION APP MODELS
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Function App - Pydantic models for API
# PURPOSE: Request and response models for function app endpoints
# CREATED: 14 OCT 2026
# ============================================================================
"""
Function App Models

Pydantic V2 models for API requests and responses.
"""

from function.models.requests import (
    ThingCreateRequest,
    ThingUpdateRequest,
    ThingListQuery,
)
from function.models.responses import (
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    # Requests
    "ThingCreateRequest",
    "ThingUpdateRequest",
    "ThingListQuery",
    # Responses
    "HealthResponse",
    "ErrorResponse",
]
