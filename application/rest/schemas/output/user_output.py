"""User output schemas for API responses."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel

if TYPE_CHECKING:
    from domain.entities.user import User


class UserResponse(BaseModel):
    """Schema for user identity in API responses.

    Attributes:
        id (str): UUID string identifier of the user.
        email (str): Normalized email address.
        name (str): Display name.
        created_at (datetime, optional): Registration timestamp.
    """

    id: str  # UUID as string
    email: str
    name: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User) -> UserResponse:
        """Create UserResponse from User domain entity."""
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            created_at=user.created_at,
        )
