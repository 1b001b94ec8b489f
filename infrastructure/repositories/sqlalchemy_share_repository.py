"""SQLAlchemy implementation of the share repository.

This module contains the concrete implementation of the ShareRepository
using SQLAlchemy for database operations.
"""

from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from domain.entities.share import DocumentShare
from domain.exceptions import ShareAlreadyExistsError
from domain.repositories.share_repository import ShareRepository
from infrastructure.models.document_orm import DocumentORM  # noqa: F401  (mapper registry)
from infrastructure.models.document_share_orm import DocumentShareORM
from infrastructure.models.user_orm import UserORM
from infrastructure.repositories.sqlalchemy_user_repository import (
    SQLAlchemyUserRepository,
)
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

logger = logging.getLogger(__name__)


class SQLAlchemyShareRepository(ShareRepository):
    """SQLAlchemy implementation of the share repository.

    The (document_id, user_id) unique constraint backs the one-grant-per-pair
    rule; a violation surfaces as ShareAlreadyExistsError.
    """

    async def get_share(
        self, db_session: Session, document_id: UUID, user_id: UUID
    ) -> Optional[DocumentShare]:
        """Get the grant a user holds on a document."""
        try:
            share_orm = (
                db_session.query(DocumentShareORM)
                .filter(
                    DocumentShareORM.document_id == document_id,
                    DocumentShareORM.user_id == user_id,
                )
                .first()
            )

            return self._orm_to_domain_entity(share_orm) if share_orm else None

        except Exception as e:
            logger.error(
                f"Failed to get share of document {document_id} for {user_id}: {str(e)}"
            )
            raise

    async def create_share(
        self, db_session: Session, share: DocumentShare
    ) -> DocumentShare:
        """Persist a new grant.

        Raises:
            ShareAlreadyExistsError: If the pair already has a grant.
        """
        try:
            db_share = DocumentShareORM(
                id=share.id,
                document_id=share.document_id,
                user_id=share.user_id,
                can_edit=share.can_edit,
                created_at=share.created_at,
            )

            db_session.add(db_share)
            db_session.commit()
            db_session.refresh(db_share)

            return self._orm_to_domain_entity(db_share, with_user=True)

        except IntegrityError as e:
            db_session.rollback()
            logger.warning(
                f"Share of document {share.document_id} with {share.user_id} already exists"
            )
            raise ShareAlreadyExistsError("Document is already shared with this user") from e
        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to share document {share.document_id}: {str(e)}")
            raise

    async def update_share(
        self, db_session: Session, document_id: UUID, user_id: UUID, can_edit: bool
    ) -> Optional[DocumentShare]:
        """Set the edit flag of an existing grant."""
        try:
            db_share = (
                db_session.query(DocumentShareORM)
                .filter(
                    DocumentShareORM.document_id == document_id,
                    DocumentShareORM.user_id == user_id,
                )
                .first()
            )

            if not db_share:
                return None

            db_share.can_edit = bool(can_edit)
            db_session.commit()
            db_session.refresh(db_share)

            return self._orm_to_domain_entity(db_share, with_user=True)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to update share of document {document_id}: {str(e)}")
            raise

    async def delete_share(
        self, db_session: Session, document_id: UUID, user_id: UUID
    ) -> bool:
        """Remove a grant from a document."""
        try:
            db_share = (
                db_session.query(DocumentShareORM)
                .filter(
                    DocumentShareORM.document_id == document_id,
                    DocumentShareORM.user_id == user_id,
                )
                .first()
            )

            if not db_share:
                return False

            db_session.delete(db_share)
            db_session.commit()
            return True

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to unshare document {document_id}: {str(e)}")
            raise

    async def get_document_shares(
        self, db_session: Session, document_id: UUID
    ) -> List[DocumentShare]:
        """Get all grants on a document with the grantee identity attached."""
        try:
            shares = (
                db_session.query(DocumentShareORM)
                .options(joinedload(DocumentShareORM.user))
                .join(UserORM, UserORM.id == DocumentShareORM.user_id)
                .filter(DocumentShareORM.document_id == document_id)
                .order_by(DocumentShareORM.created_at, UserORM.email)
                .all()
            )

            return [self._orm_to_domain_entity(share, with_user=True) for share in shares]

        except Exception as e:
            logger.error(f"Failed to get shares for document {document_id}: {str(e)}")
            raise

    def _orm_to_domain_entity(
        self, share_orm: DocumentShareORM, with_user: bool = False
    ) -> DocumentShare:
        """Convert SQLAlchemy ORM object to domain entity."""
        user = None
        if with_user and share_orm.user is not None:
            user = SQLAlchemyUserRepository.orm_to_domain_entity(share_orm.user)

        return DocumentShare(
            id=share_orm.id,
            document_id=share_orm.document_id,
            user_id=share_orm.user_id,
            can_edit=bool(share_orm.can_edit),
            created_at=share_orm.created_at,
            user=user,
        )
