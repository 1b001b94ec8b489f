"""Database and identity dependencies for the Documents Service.

This module provides dependency injection functions for FastAPI,
including database session management, principal extraction and the
factories that assemble domain services with their repositories.

Functions:
    - get_db: Database session factory with automatic cleanup
    - get_current_principal: Extract the verified email from request headers
    - get_current_principal_name: Extract the forwarded display name
    - get_user_service / get_document_service / get_share_service: Service factories
    - get_current_user: Resolve the principal to a persisted user
"""

import logging
from typing import Generator, Optional

from application.utils import to_http_exception
from domain.entities.user import User
from domain.exceptions import DocumentError
from domain.services.document_service import DocumentService
from domain.services.share_service import ShareService
from domain.services.user_service import UserService
from fastapi import Depends, Request
from infrastructure.repositories.sqlalchemy_document_repository import (
    SQLAlchemyDocumentRepository,
)
from infrastructure.repositories.sqlalchemy_share_repository import (
    SQLAlchemyShareRepository,
)
from infrastructure.repositories.sqlalchemy_user_repository import (
    SQLAlchemyUserRepository,
)
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .config import DATABASE_URL, LOG_LEVEL, USER_EMAIL_HEADER, USER_NAME_HEADER

# Configure logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL))
logger = logging.getLogger(__name__)

# Database setup
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Get database session with automatic cleanup.

    Yields:
        Session: SQLAlchemy database session that automatically closes after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_principal(request: Request) -> Optional[str]:
    """Extract the authenticated email from request headers.

    The gateway sets the header after verifying the caller's token. A missing
    header is returned as None and rejected by the identity resolver.

    Args:
        request (Request): FastAPI request object containing headers.

    Returns:
        Optional[str]: Email from the X-User-Email header, if any.
    """
    return request.headers.get(USER_EMAIL_HEADER)


def get_current_principal_name(request: Request) -> Optional[str]:
    """Extract the display name the gateway forwards with the principal."""
    return request.headers.get(USER_NAME_HEADER)


def get_user_service() -> UserService:
    """Create the user service with its repository dependency."""
    return UserService(SQLAlchemyUserRepository())


def get_document_service() -> DocumentService:
    """Create and configure the document service with repository dependencies.

    The session is injected per-request in each endpoint method.

    Returns:
        DocumentService: Configured domain service ready for use.
    """
    # Infrastructure layer: SQLAlchemy repositories (no session stored)
    document_repository = SQLAlchemyDocumentRepository()
    share_repository = SQLAlchemyShareRepository()

    # Domain layer: Domain service with business logic
    return DocumentService(document_repository, share_repository)


def get_share_service() -> ShareService:
    """Create the share service on top of the document and user services."""
    return ShareService(
        get_document_service(), SQLAlchemyShareRepository(), get_user_service()
    )


async def get_current_user(
    principal: Optional[str] = Depends(get_current_principal),
    db: Session = Depends(get_db),
    user_service: UserService = Depends(get_user_service),
) -> User:
    """Resolve the request's principal to a persisted user.

    Every document and share endpoint depends on this before doing anything
    else.

    Raises:
        HTTPException: 401 if no principal is present.
        HTTPException: 404 if the principal has no user record.
    """
    try:
        return await user_service.resolve_principal(db, principal)
    except DocumentError as e:
        raise to_http_exception(e) from e
