"""Document repository interface for the documents service.

This module defines the repository interface for document operations
following Domain-Driven Design principles.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

if TYPE_CHECKING:
    from domain.entities.document import Document, SharedDocument
    from sqlalchemy.orm import Session


class DocumentRepository(ABC):
    """Abstract repository interface for document operations.

    This interface defines the contract for document repositories,
    allowing different implementations (e.g., SQLAlchemy, in-memory, etc.)
    while keeping the domain layer independent of infrastructure concerns.

    Access control is not applied here; lookups return documents regardless
    of who asks, and the authorization policy decides afterwards.
    """

    @abstractmethod
    async def create_document(self, db_session: Session, document: Document) -> Document:
        """Create a new document in the repository.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            document (Document): Domain Document entity to create

        Returns:
            Document: Created document with timestamps
        """
        pass

    @abstractmethod
    async def get_document_by_id(
        self, db_session: Session, document_id: UUID
    ) -> Optional[Document]:
        """Get a document by ID.

        Args:
            db_session (Session): SQLAlchemy database session for this operation
            document_id (UUID): UUID of the document to retrieve

        Returns:
            Optional[Document]: Document if found, None otherwise
        """
        pass

    @abstractmethod
    async def update_document(self, db_session: Session, document: Document) -> Document:
        """Persist title, content and timestamp of an existing document.

        Args:
            db_session: SQLAlchemy database session for this operation
            document: Domain Document entity with updates

        Returns:
            Document: Updated document
        """
        pass

    @abstractmethod
    async def delete_document(self, db_session: Session, document_id: UUID) -> bool:
        """Delete a document and every share referencing it.

        Args:
            db_session: SQLAlchemy database session for this operation
            document_id: UUID of the document to delete

        Returns:
            bool: True if deletion successful, False if document not found
        """
        pass

    @abstractmethod
    async def get_owned_documents(
        self, db_session: Session, owner_id: UUID
    ) -> List[Document]:
        """Get documents owned by a user, most recently updated first.

        Args:
            db_session: SQLAlchemy database session for this operation
            owner_id: UUID of the owner

        Returns:
            List[Document]: Owned documents
        """
        pass

    @abstractmethod
    async def get_shared_documents(
        self, db_session: Session, user_id: UUID
    ) -> List[SharedDocument]:
        """Get documents shared with a user, each with the user's edit flag.

        Args:
            db_session: SQLAlchemy database session for this operation
            user_id: UUID of the grantee

        Returns:
            List[SharedDocument]: Shared documents, most recently updated first
        """
        pass
