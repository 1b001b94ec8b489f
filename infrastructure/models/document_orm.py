"""SQLAlchemy ORM model for Document entity.

This module contains the DocumentORM class that defines the database schema
for documents and handles document data persistence.

Classes:
    DocumentORM: SQLAlchemy model for documents with content, owner and shares.

Architecture:
    This ORM model is part of the Infrastructure layer and should only be used by:
    - SQLAlchemyDocumentRepository implementation
    - Database migration scripts
    - Other infrastructure-specific code

    Domain code should use the Document entity instead of this ORM model.
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from infrastructure.models.base import Base
from utils.config import MAX_TITLE_LENGTH


class DocumentORM(Base):
    """SQLAlchemy ORM model for documents owned by one user.

    Attributes:
        id (UUID): Primary key, auto-generated UUID.
        title (str): Document title, max 255 characters.
        content (str): Serialized rich text, unlimited text.
        owner_id (UUID): Foreign key to the owning user.
        created_at (datetime): Timestamp when document was created.
        updated_at (datetime): Timestamp when document was last updated.
        owner (UserORM): Many-to-one relationship to the owner.
        shares (List[DocumentShareORM]): Grants on this document.

    Table Schema:
        - Table name: 'documents'
        - Primary key: id (UUID)
        - Foreign key: owner_id -> users.id

    Relationships:
        - shares: One-to-many with DocumentShareORM. Deleting a document
          through the ORM deletes its shares.

    Example:
        >>> document_orm = DocumentORM(title="Notes", content="", owner_id=user.id)
        >>> db.add(document_orm)
        >>> db.commit()
    """

    __tablename__ = "documents"

    id = Column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key, auto-generated UUID",
    )

    title = Column(
        String(MAX_TITLE_LENGTH), nullable=False, comment="Document title"
    )

    content = Column(
        Text, nullable=False, default="", comment="Serialized rich-text content"
    )

    owner_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="User who owns the document",
    )

    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        comment="Timestamp when document was created",
    )

    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
        comment="Timestamp when document was last updated",
    )

    owner = relationship("UserORM", back_populates="documents", lazy="select")

    shares = relationship(
        "DocumentShareORM",
        back_populates="document",
        cascade="all, delete",
        lazy="select",
    )

    def __repr__(self) -> str:
        """String representation for debugging.

        Returns:
            str: Human-readable representation of the document.
        """
        return (
            f"<DocumentORM(id={self.id}, title='{self.title}', owner_id='{self.owner_id}')>"
        )

    def __str__(self) -> str:
        return self.title
