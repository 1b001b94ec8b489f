"""Common output schemas for API responses.

Shared Pydantic models for error bodies, confirmation messages and the
health probe.
"""

from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body of every failed request.

    Attributes:
        detail (str): Human-readable message, shown inline by the editor.
        error_code (str, optional): UNAUTHENTICATED, UNAUTHORIZED, NOT_FOUND,
            VALIDATION_ERROR, CONFLICT or INTERNAL_ERROR.

    Example:
        >>> ErrorResponse(detail="Cannot share with yourself", error_code="VALIDATION_ERROR")
    """

    detail: str
    error_code: Optional[str] = None


class MessageResponse(BaseModel):
    """Confirmation returned by delete-style operations."""

    message: str


class HealthResponse(BaseModel):
    """Schema for health check responses.

    Attributes:
        status (str): Service health status.
        service (str): Service name identifier.
    """

    status: str
    service: str
