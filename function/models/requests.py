# ============================================================================
# API REQUEST MODELS
# ============================================================================
# EPOCH: 1 - THING STORE
# STATUS: Function App - Request schemas
# PURPOSE: Pydantic V2 models for incoming API requests
# CREATED: 14 OCT 2026
# ============================================================================
"""
API Request Models

Pydantic V2 models for incoming API requests.
All models use V2 patterns: ConfigDict, model_validate, model_dump.

Unknown fields are ignored, so a caller cannot choose the id, etag or
timestamp of a thing.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 4096


class ThingCreateRequest(BaseModel):
    """Request to create a new thing."""

    model_config = ConfigDict(
        extra="ignore",
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "name": "Thing 1",
                "description": "The first thing",
            }
        },
    )

    name: str = Field(
        ...,
        min_length=1,
        max_length=NAME_MAX_LENGTH,
        description="Name of the thing",
    )
    description: str = Field(
        default="",
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Free-text description",
    )

    @field_validator("description", mode="before")
    @classmethod
    def none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ThingUpdateRequest(BaseModel):
    """
    Partial update of a thing.

    Only fields present in the body are changed.
    """

    model_config = ConfigDict(
        extra="ignore",
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "description": "An updated description",
            }
        },
    )

    name: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=NAME_MAX_LENGTH,
        description="New name",
    )
    description: Optional[str] = Field(
        default=None,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="New description",
    )

    @field_validator("description", mode="before")
    @classmethod
    def none_is_empty(cls, value: Any) -> Any:
        # An explicit null clears the description, as on create
        return "" if value is None else value

    @model_validator(mode="after")
    def require_a_field(self) -> "ThingUpdateRequest":
        if self.name is None and self.description is None:
            raise ValueError("At least one of 'name' or 'description' is required")
        return self

    def changes(self) -> Dict[str, str]:
        """Fields to merge into the stored thing."""
        return self.model_dump(exclude_none=True)


class ThingListQuery(BaseModel):
    """Query parameters for listing things."""

    model_config = ConfigDict(extra="ignore")

    top: Optional[int] = Field(
        default=None,
        ge=1,
        le=1000,
        description="Maximum number of things to return",
    )


__all__ = [
    "ThingCreateRequest",
    "ThingUpdateRequest",
    "ThingListQuery",
    "NAME_MAX_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
]
