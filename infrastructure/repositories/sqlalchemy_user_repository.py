"""SQLAlchemy implementation of the user repository."""

from __future__ import annotations

import logging
from typing import Optional

from domain.entities.user import User, normalize_email
from domain.exceptions import UserAlreadyExistsError
from domain.repositories.user_repository import UserRepository
from infrastructure.models.document_orm import DocumentORM  # noqa: F401  (mapper registry)
from infrastructure.models.document_share_orm import DocumentShareORM  # noqa: F401
from infrastructure.models.user_orm import UserORM
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class SQLAlchemyUserRepository(UserRepository):
    """SQLAlchemy-based implementation of the user repository.

    This repository does not store the session internally; each method
    receives the request's session.
    """

    async def get_by_email(self, db_session: Session, email: str) -> Optional[User]:
        """Retrieve a user by email, case-insensitively."""
        user_orm = (
            db_session.query(UserORM)
            .filter(UserORM.email == normalize_email(email))
            .first()
        )
        return self.orm_to_domain_entity(user_orm) if user_orm else None

    async def create(self, db_session: Session, user: User) -> User:
        """Persist a new user.

        Raises:
            UserAlreadyExistsError: If the email is already registered.
        """
        try:
            db_user = UserORM(
                id=user.id,
                email=user.email,
                name=user.name,
                created_at=user.created_at,
            )

            db_session.add(db_user)
            db_session.commit()
            db_session.refresh(db_user)

            return self.orm_to_domain_entity(db_user)

        except IntegrityError as e:
            db_session.rollback()
            logger.warning(f"User with email {user.email} already exists")
            raise UserAlreadyExistsError(
                f"User with email {user.email} already exists"
            ) from e
        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to create user {user.email}: {str(e)}")
            raise

    @staticmethod
    def orm_to_domain_entity(user_orm: UserORM) -> User:
        """Convert SQLAlchemy ORM object to domain entity."""
        return User(
            id=user_orm.id,
            email=user_orm.email,
            name=user_orm.name or "",
            created_at=user_orm.created_at,
        )
