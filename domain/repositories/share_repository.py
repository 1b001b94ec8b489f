"""Share repository interface.

This module defines the repository interface for document share grants
following Domain-Driven Design principles.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

if TYPE_CHECKING:
    from domain.entities.share import DocumentShare
    from sqlalchemy.orm import Session


class ShareRepository(ABC):
    """Abstract repository interface for share grants.

    Implementations must keep at most one grant per (document, user) pair.
    """

    @abstractmethod
    async def get_share(
        self, db_session: Session, document_id: UUID, user_id: UUID
    ) -> Optional[DocumentShare]:
        """Get the grant a user holds on a document.

        Args:
            db_session: SQLAlchemy database session for this operation
            document_id: UUID of the document
            user_id: UUID of the grantee

        Returns:
            Optional[DocumentShare]: The grant if any
        """
        pass

    @abstractmethod
    async def create_share(
        self, db_session: Session, share: DocumentShare
    ) -> DocumentShare:
        """Persist a new grant.

        Args:
            db_session: SQLAlchemy database session for this operation
            share: Grant to persist

        Returns:
            DocumentShare: The persisted grant

        Raises:
            ShareAlreadyExistsError: If the pair already has a grant
        """
        pass

    @abstractmethod
    async def update_share(
        self, db_session: Session, document_id: UUID, user_id: UUID, can_edit: bool
    ) -> Optional[DocumentShare]:
        """Set the edit flag of an existing grant.

        Args:
            db_session: SQLAlchemy database session for this operation
            document_id: UUID of the document
            user_id: UUID of the grantee
            can_edit: New edit flag

        Returns:
            Optional[DocumentShare]: Updated grant, None if it does not exist
        """
        pass

    @abstractmethod
    async def delete_share(
        self, db_session: Session, document_id: UUID, user_id: UUID
    ) -> bool:
        """Delete a grant.

        Returns:
            bool: True if a grant was removed
        """
        pass

    @abstractmethod
    async def get_document_shares(
        self, db_session: Session, document_id: UUID
    ) -> List[DocumentShare]:
        """Get all grants on a document with grantee identity attached.

        Args:
            db_session: SQLAlchemy database session for this operation
            document_id: UUID of the document

        Returns:
            List[DocumentShare]: Grants with ``user`` populated
        """
        pass
