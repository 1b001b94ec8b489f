"""SQLAlchemy implementation of the document repository.

This module contains the concrete implementation of the DocumentRepository
using SQLAlchemy for database operations.
"""

from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from domain.entities.document import Document, SharedDocument
from domain.repositories.document_repository import DocumentRepository
from infrastructure.models.document_orm import DocumentORM
from infrastructure.models.document_share_orm import DocumentShareORM
from infrastructure.models.user_orm import UserORM  # noqa: F401  (mapper registry)
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class SQLAlchemyDocumentRepository(DocumentRepository):
    """SQLAlchemy implementation of the document repository.

    NOTE: This repository does not store the session internally.
    Each method receives a fresh session to ensure proper transaction management
    and avoid session leaks.
    """

    async def create_document(self, db_session: Session, document: Document) -> Document:
        """Create a new document in the repository.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            document (Document): Domain Document entity to create

        Returns:
            Document: Created document with timestamps
        """
        try:
            db_document = DocumentORM(
                id=document.id,
                title=document.title,
                content=document.content,
                owner_id=document.owner_id,
                created_at=document.created_at,
                updated_at=document.updated_at,
            )

            db_session.add(db_document)
            db_session.commit()
            db_session.refresh(db_document)

            return self._orm_to_domain_entity(db_document)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to create document: {str(e)}")
            raise

    async def get_document_by_id(
        self, db_session: Session, document_id: UUID
    ) -> Optional[Document]:
        """Get a document by ID.

        Args:
            db_session (Session): Database session.
            document_id (UUID): The ID of the document to retrieve.

        Returns:
            Optional[Document]: The document if found, None otherwise.
        """
        try:
            document_orm = (
                db_session.query(DocumentORM)
                .filter(DocumentORM.id == document_id)
                .first()
            )

            if not document_orm:
                logger.info(f"Document {document_id} not found")
                return None

            return self._orm_to_domain_entity(document_orm)

        except Exception as e:
            logger.error(f"Failed to get document {document_id}: {str(e)}")
            raise

    async def update_document(self, db_session: Session, document: Document) -> Document:
        """Update an existing document in the repository.

        Args:
            db_session (Session): Database session.
            document (Document): The document entity with updated data.

        Returns:
            Document: The updated document entity.

        Raises:
            ValueError: If the document no longer exists.
        """
        try:
            db_document = (
                db_session.query(DocumentORM)
                .filter(DocumentORM.id == document.id)
                .first()
            )

            if not db_document:
                logger.warning(f"Document {document.id} vanished before update")
                raise ValueError(f"Document {document.id} not found")

            db_document.title = document.title
            db_document.content = document.content
            db_document.updated_at = document.updated_at

            db_session.commit()
            db_session.refresh(db_document)

            logger.info(f"Successfully updated document {document.id}")
            return self._orm_to_domain_entity(db_document)

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to update document {document.id}: {str(e)}")
            raise

    async def delete_document(self, db_session: Session, document_id: UUID) -> bool:
        """Delete a document; the ORM cascade removes its shares.

        Args:
            db_session (Session): Database session.
            document_id (UUID): The ID of the document to delete.

        Returns:
            bool: True if the document was deleted, False if not found.
        """
        try:
            db_document = (
                db_session.query(DocumentORM)
                .filter(DocumentORM.id == document_id)
                .first()
            )

            if not db_document:
                return False

            db_session.delete(db_document)
            db_session.commit()

            return True

        except Exception as e:
            db_session.rollback()
            logger.error(f"Failed to delete document {document_id}: {str(e)}")
            raise

    async def get_owned_documents(
        self, db_session: Session, owner_id: UUID
    ) -> List[Document]:
        """Get documents owned by the user, most recently updated first."""
        try:
            documents_orm = (
                db_session.query(DocumentORM)
                .filter(DocumentORM.owner_id == owner_id)
                .order_by(DocumentORM.updated_at.desc())
                .all()
            )

            return [self._orm_to_domain_entity(doc) for doc in documents_orm]

        except Exception as e:
            logger.error(f"Failed to get documents owned by {owner_id}: {str(e)}")
            raise

    async def get_shared_documents(
        self, db_session: Session, user_id: UUID
    ) -> List[SharedDocument]:
        """Get documents shared with the user together with the grant's edit flag."""
        try:
            rows = (
                db_session.query(DocumentORM, DocumentShareORM.can_edit)
                .join(DocumentShareORM, DocumentShareORM.document_id == DocumentORM.id)
                .filter(DocumentShareORM.user_id == user_id)
                .order_by(DocumentORM.updated_at.desc())
                .all()
            )

            return [
                SharedDocument(
                    document=self._orm_to_domain_entity(document_orm),
                    can_edit=bool(can_edit),
                )
                for document_orm, can_edit in rows
            ]

        except Exception as e:
            logger.error(f"Failed to get documents shared with {user_id}: {str(e)}")
            raise

    def _orm_to_domain_entity(self, document_orm: DocumentORM) -> Document:
        """Convert SQLAlchemy ORM object to domain entity."""
        return Document(
            id=document_orm.id,
            title=document_orm.title,
            content=document_orm.content or "",
            owner_id=document_orm.owner_id,
            created_at=document_orm.created_at,
            updated_at=document_orm.updated_at,
        )
