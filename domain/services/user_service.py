"""User domain service.

This module contains the UserService that resolves authenticated principals
to persisted users and registers new users.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from domain.entities.user import User
from domain.exceptions import AuthenticationRequiredError, UserNotFoundError

if TYPE_CHECKING:
    from domain.repositories.user_repository import UserRepository
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class UserService:
    """Domain service mapping authenticated identities to user records.

    The principal is the verified email delivered with the request. It is
    passed explicitly into every call; the service keeps no session state.

    Example:
        >>> service = UserService(user_repository)
        >>> user = await service.resolve_principal(db, "ada@example.com")
    """

    def __init__(self, user_repository: "UserRepository") -> None:
        """Initialize the user service with required dependencies.

        Args:
            user_repository (UserRepository): Repository for user data access.
        """
        self._user_repository = user_repository

    async def resolve_principal(
        self, db_session: "Session", principal: Optional[str]
    ) -> User:
        """Resolve the authenticated principal to its user record.

        Args:
            db_session (Session): Database session for this operation.
            principal (Optional[str]): Verified email of the caller.

        Returns:
            User: The persisted user.

        Raises:
            AuthenticationRequiredError: If no principal is present.
            UserNotFoundError: If no user is registered for the principal.
        """
        if not principal or not principal.strip():
            raise AuthenticationRequiredError("Authentication required")

        user = await self._user_repository.get_by_email(db_session, principal)
        if not user:
            logger.warning(f"No user registered for principal {principal}")
            raise UserNotFoundError("User not found")

        return user

    async def get_user_by_email(self, db_session: "Session", email: str) -> User:
        """Look up another user by email.

        Raises:
            UserNotFoundError: If no user has that email.
        """
        user = await self._user_repository.get_by_email(db_session, email)
        if not user:
            raise UserNotFoundError("User not found")
        return user

    async def register(
        self, db_session: "Session", principal: Optional[str], name: str
    ) -> User:
        """Create the user record for an authenticated principal.

        Args:
            db_session (Session): Database session for this operation.
            principal (Optional[str]): Verified email of the caller.
            name (str): Display name.

        Returns:
            User: The new user.

        Raises:
            AuthenticationRequiredError: If no principal is present.
            UserAlreadyExistsError: If the email is already registered.
        """
        if not principal or not principal.strip():
            raise AuthenticationRequiredError("Authentication required")

        user = User.create_new(email=principal, name=name)
        created = await self._user_repository.create(db_session, user)

        logger.info(f"Registered user {created.id} for {created.email}")
        return created
