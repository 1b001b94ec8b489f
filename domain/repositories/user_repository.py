"""User repository interface.

This module defines the abstract repository interface for user data access
operations following Domain-Driven Design principles.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from domain.entities.user import User
    from sqlalchemy.orm import Session


class UserRepository(ABC):
    """Abstract repository interface for user operations."""

    @abstractmethod
    async def get_by_email(self, db_session: Session, email: str) -> Optional[User]:
        """Retrieve a user by normalized email address.

        Args:
            db_session (Session): Database session for this operation.
            email (str): Normalized email address.

        Returns:
            Optional[User]: The user if found, None otherwise.
        """
        pass

    @abstractmethod
    async def create(self, db_session: Session, user: User) -> User:
        """Persist a new user.

        Args:
            db_session (Session): Database session for this operation.
            user (User): The user to persist.

        Returns:
            User: The persisted user.

        Raises:
            UserAlreadyExistsError: If the email is already registered.
        """
        pass
