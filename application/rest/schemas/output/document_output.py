"""Document output schemas for API responses.

This module contains Pydantic models for document-related API responses,
including single documents and the owned/shared listing.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List

from pydantic import BaseModel

if TYPE_CHECKING:
    from domain.entities.document import Document, DocumentListing, SharedDocument


class DocumentResponse(BaseModel):
    """Schema for document data in API responses.

    Attributes:
        id (str): UUID string identifier of the document.
        title (str): The title of the document.
        content (str): Serialized rich-text content.
        owner_id (str): UUID string of the document owner.
        created_at (datetime): Timestamp when the document was created.
        updated_at (datetime): Timestamp when the document was last updated.

    Example:
        >>> document_response = DocumentResponse(
        ...     id="doc-uuid-123",
        ...     title="Notes",
        ...     content="",
        ...     owner_id="user-uuid-456",
        ...     created_at=datetime.now(),
        ...     updated_at=datetime.now(),
        ... )
    """

    id: str  # UUID as string
    title: str
    content: str
    owner_id: str  # UUID as string
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, document: Document) -> DocumentResponse:
        """Create DocumentResponse from Document domain entity.

        Args:
            document: The domain Document entity to convert

        Returns:
            DocumentResponse: The converted document response schema
        """
        return cls(
            id=str(document.id),
            title=document.title,
            content=document.content,
            owner_id=str(document.owner_id),
            created_at=document.created_at,
            updated_at=document.updated_at,
        )


class SharedDocumentResponse(DocumentResponse):
    """Schema for a document visible through a share.

    Attributes:
        can_edit (bool): Whether the caller's share allows editing.
    """

    can_edit: bool

    @classmethod
    def from_shared(cls, shared: SharedDocument) -> SharedDocumentResponse:
        """Create SharedDocumentResponse from a SharedDocument entity."""
        base = DocumentResponse.from_entity(shared.document)
        return cls(**base.model_dump(), can_edit=shared.can_edit)


class DocumentListResponse(BaseModel):
    """Schema for the documents a user can open.

    Attributes:
        owned_documents (List[DocumentResponse]): Documents owned by the user.
        shared_documents (List[SharedDocumentResponse]): Documents shared with the user.
    """

    owned_documents: List[DocumentResponse]
    shared_documents: List[SharedDocumentResponse]

    @classmethod
    def from_entity(cls, listing: DocumentListing) -> DocumentListResponse:
        """Convert a domain DocumentListing to the API response."""
        return cls(
            owned_documents=[DocumentResponse.from_entity(d) for d in listing.owned],
            shared_documents=[
                SharedDocumentResponse.from_shared(s) for s in listing.shared
            ],
        )
