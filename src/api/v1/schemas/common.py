"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel


class FieldError(BaseModel):
    """One violated input rule."""

    field: str
    message: str
    type: str


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: list[FieldError] | dict[str, Any] | None = None


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str
