"""Document domain entity for the documents service.

This module contains the core Document domain entity representing
a rich-text document in the system following Domain-Driven Design principles.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from domain.exceptions import DocumentValidationError
from utils.config import MAX_CONTENT_LENGTH, MAX_TITLE_LENGTH


@dataclass
class Document:
    """Domain entity representing a document owned by exactly one user.

    The content is the editor's serialized rich text. The domain never parses
    it; it only bounds its size.

    Attributes:
        id (UUID): Unique identifier for the document.
        title (str): Title of the document, never blank.
        content (str): Serialized rich text, possibly empty.
        owner_id (UUID): UUID of the user who owns the document.
        created_at (datetime): Timestamp when the document was created.
        updated_at (datetime): Timestamp when the document was last updated.
    """

    id: UUID
    title: str
    content: str
    owner_id: UUID
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create_new(
        cls, title: str, owner_id: UUID, content: Optional[str] = None
    ) -> "Document":
        """Factory method to create a new document with default values.

        Rows loaded from storage are built with the plain constructor and are
        not validated again; the limits apply when a document is written.

        Args:
            title (str): Title of the document.
            owner_id (UUID): UUID of the document owner.
            content (Optional[str]): Serialized content, defaults to empty.

        Returns:
            Document: New document instance with generated UUID and timestamps.

        Raises:
            DocumentValidationError: If the title is blank or too long, or the
                content is too large.
        """
        now = datetime.utcnow()
        return cls(
            id=uuid4(),
            title=validate_title(title),
            content=validate_content(content),
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )

    def update_content(self, title: str, content: Optional[str] = None) -> None:
        """Replace the title and, when given, the content.

        Args:
            title (str): New title, mandatory.
            content (Optional[str]): New content; None keeps the current one.

        Raises:
            DocumentValidationError: If the title is blank or too long, or the
                content is too large. The document is left unchanged.
        """
        title = validate_title(title)
        if content is not None:
            self.content = validate_content(content)
        self.title = title
        self.updated_at = datetime.utcnow()

    def is_owned_by(self, user_id: UUID) -> bool:
        """Check if the document is owned by the specified user.

        Args:
            user_id (UUID): UUID of the user to check ownership for.

        Returns:
            bool: True if the user owns the document, False otherwise.
        """
        return self.owner_id == user_id


@dataclass
class SharedDocument:
    """A document seen through a share grant, annotated with the grant's flag."""

    document: Document
    can_edit: bool


@dataclass
class DocumentListing:
    """Documents visible to a user, split into owned and shared partitions."""

    owned: List[Document] = field(default_factory=list)
    shared: List[SharedDocument] = field(default_factory=list)


def validate_title(title: Optional[str]) -> str:
    """Return the stripped title or raise if it is missing or too long."""
    if title is None or not title.strip():
        raise DocumentValidationError("Title is required")
    title = title.strip()
    if len(title) > MAX_TITLE_LENGTH:
        raise DocumentValidationError(
            f"Title exceeds maximum length of {MAX_TITLE_LENGTH} characters"
        )
    return title


def validate_content(content: Optional[str]) -> str:
    """Return the content unchanged or raise if it exceeds the size limit."""
    if content is None:
        return ""
    if len(content) > MAX_CONTENT_LENGTH:
        raise DocumentValidationError(
            f"Content exceeds maximum length of {MAX_CONTENT_LENGTH} characters"
        )
    return content
