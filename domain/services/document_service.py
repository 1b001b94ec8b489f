"""Document domain service for the documents service.

This module contains the DocumentService that orchestrates document operations
following Domain-Driven Design principles: every operation receives the
resolved user, loads the document, applies the authorization policy and only
then touches the store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Tuple
from uuid import UUID

from domain.entities.document import Document, DocumentListing
from domain.exceptions import DocumentError, DocumentNotFoundError
from domain.services.authorization import Action, authorize

if TYPE_CHECKING:
    from domain.entities.share import DocumentShare
    from domain.entities.user import User
    from domain.repositories.document_repository import DocumentRepository
    from domain.repositories.share_repository import ShareRepository
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class DocumentService:
    """Domain service for handling document operations.

    This service encapsulates the business logic for document management,
    including CRUD operations and access control. Concurrent updates are
    last-write-wins; nothing is locked or retried.
    """

    def __init__(
        self,
        document_repository: "DocumentRepository",
        share_repository: "ShareRepository",
    ):
        """Initialize the document service with dependencies.

        Args:
            document_repository: Repository for performing document operations
            share_repository: Repository for reading the caller's grants
        """
        self._document_repository = document_repository
        self._share_repository = share_repository

    async def create_document(
        self,
        db_session: "Session",
        user: "User",
        title: Optional[str],
        content: Optional[str] = None,
    ) -> Document:
        """Create a new document owned by the user.

        Args:
            db_session: Database session for this operation
            user: The authenticated user, future owner
            title: Document title, mandatory
            content: Serialized content, defaults to empty

        Returns:
            Document: Created document

        Raises:
            DocumentValidationError: If the title is missing or content too large
            DocumentError: If creation fails
        """
        logger.info(f"Creating document for user {user.id}")

        document = Document.create_new(title=title, owner_id=user.id, content=content)

        try:
            created = await self._document_repository.create_document(
                db_session, document
            )

            logger.info(f"Successfully created document {created.id}")
            return created

        except DocumentError:
            raise
        except Exception as e:
            logger.error(f"Failed to create document: {str(e)}")
            raise DocumentError(f"Failed to create document: {str(e)}") from e

    async def get_document(
        self, db_session: "Session", user: "User", document_id: UUID
    ) -> Document:
        """Get a document the user may view.

        Raises:
            DocumentNotFoundError: If missing or the user has no access
        """
        document, _ = await self.load_authorized(
            db_session, user, document_id, Action.VIEW
        )
        return document

    async def list_documents(
        self, db_session: "Session", user: "User"
    ) -> DocumentListing:
        """List documents owned by and shared with the user.

        Args:
            db_session: Database session for this operation
            user: The authenticated user

        Returns:
            DocumentListing: Owned documents and shared documents with edit flags
        """
        try:
            owned = await self._document_repository.get_owned_documents(
                db_session, user.id
            )
            shared = await self._document_repository.get_shared_documents(
                db_session, user.id
            )

            logger.info(
                f"Retrieved {len(owned)} owned and {len(shared)} shared documents "
                f"for user {user.id}"
            )
            return DocumentListing(owned=owned, shared=shared)

        except Exception as e:
            logger.error(f"Failed to list documents for {user.id}: {str(e)}")
            raise DocumentError(f"Failed to retrieve documents: {str(e)}") from e

    async def update_document(
        self,
        db_session: "Session",
        user: "User",
        document_id: UUID,
        title: Optional[str],
        content: Optional[str] = None,
    ) -> Document:
        """Update title and content of a document the user may edit.

        Args:
            db_session: Database session for this operation
            user: The authenticated user
            document_id: UUID of the document to update
            title: New title, mandatory
            content: New content; None keeps the stored content

        Returns:
            Document: Updated document

        Raises:
            DocumentNotFoundError: If missing or the user has no access
            DocumentAccessDeniedError: If the user may only view
            DocumentValidationError: If the title is missing
            DocumentError: If the update fails
        """
        logger.info(f"Updating document {document_id} for user {user.id}")

        document, _ = await self.load_authorized(
            db_session, user, document_id, Action.EDIT
        )
        document.update_content(title=title, content=content)

        try:
            updated = await self._document_repository.update_document(
                db_session, document
            )

            logger.info(f"Successfully updated document {document_id}")
            return updated

        except Exception as e:
            logger.error(f"Failed to update document {document_id}: {str(e)}")
            raise DocumentError(f"Failed to update document: {str(e)}") from e

    async def delete_document(
        self, db_session: "Session", user: "User", document_id: UUID
    ) -> bool:
        """Delete a document the user owns, together with all its shares.

        Raises:
            DocumentNotFoundError: If missing or the user has no access
            DocumentAccessDeniedError: If the user is a grantee, not the owner
            DocumentError: If deletion fails
        """
        logger.info(f"Deleting document {document_id} for user {user.id}")

        await self.load_authorized(db_session, user, document_id, Action.DELETE)

        try:
            success = await self._document_repository.delete_document(
                db_session, document_id
            )
        except Exception as e:
            logger.error(f"Failed to delete document {document_id}: {str(e)}")
            raise DocumentError(f"Failed to delete document: {str(e)}") from e

        if not success:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        logger.info(f"Successfully deleted document {document_id}")
        return success

    async def load_authorized(
        self,
        db_session: "Session",
        user: "User",
        document_id: UUID,
        action: Action,
    ) -> Tuple[Document, Optional["DocumentShare"]]:
        """Load a document and enforce the policy for an action.

        Args:
            db_session: Database session for this operation
            user: The authenticated user
            document_id: UUID of the document
            action: Requested action

        Returns:
            Tuple of the document and the user's grant (None for the owner)

        Raises:
            DocumentNotFoundError: If missing or the user has no access
            DocumentAccessDeniedError: If the user lacks the action
        """
        try:
            document = await self._document_repository.get_document_by_id(
                db_session, document_id
            )
            share = None
            if document and not document.is_owned_by(user.id):
                share = await self._share_repository.get_share(
                    db_session, document_id, user.id
                )
        except Exception as e:
            logger.error(f"Failed to load document {document_id}: {str(e)}")
            raise DocumentError(f"Failed to retrieve document: {str(e)}") from e

        if not document:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        authorize(user.id, document, action, share)
        return document, share
