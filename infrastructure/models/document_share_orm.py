"""SQLAlchemy ORM model for DocumentShare entity.

This module contains the DocumentShareORM class that defines the database schema
for document sharing grants and handles share data persistence.

Classes:
    DocumentShareORM: SQLAlchemy model for a user's grant on a document.

Architecture:
    This ORM model is part of the Infrastructure layer and should only be used by:
    - SQLAlchemyShareRepository implementation
    - Database migration scripts
    - Other infrastructure-specific code

    Domain code should use the DocumentShare entity instead of this ORM model.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from infrastructure.models.base import Base


class DocumentShareORM(Base):
    """SQLAlchemy ORM model for document sharing between users.

    Attributes:
        id (UUID): Primary key, auto-generated UUID.
        document_id (UUID): Foreign key to the shared document.
        user_id (UUID): Foreign key to the grantee.
        can_edit (bool): Whether the grantee may edit the document.
        created_at (datetime): Timestamp when share was created.
        document (DocumentORM): Many-to-one relationship to the shared document.
        user (UserORM): Many-to-one relationship to the grantee.

    Table Schema:
        - Table name: 'document_shares'
        - Primary key: id (UUID)
        - Foreign keys: document_id -> documents.id, user_id -> users.id
        - Unique constraint: (document_id, user_id)

    Example:
        >>> share_orm = DocumentShareORM(
        ...     document_id=document.id,
        ...     user_id=grantee.id,
        ...     can_edit=False,
        ... )
        >>> db.add(share_orm)
        >>> db.commit()
    """

    __tablename__ = "document_shares"
    __table_args__ = (
        UniqueConstraint("document_id", "user_id", name="uq_document_shares_document_user"),
    )

    id = Column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key, auto-generated UUID",
    )

    document_id = Column(
        Uuid,
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to the shared document",
    )

    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to the user who receives the share",
    )

    can_edit = Column(
        Boolean,
        default=False,
        nullable=False,
        comment="Whether the grantee may modify the document",
    )

    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        comment="Timestamp when share was created",
    )

    document = relationship("DocumentORM", back_populates="shares", lazy="select")

    user = relationship("UserORM", back_populates="shares", lazy="select")

    def __repr__(self) -> str:
        """String representation for debugging.

        Returns:
            str: Human-readable representation of the document share.
        """
        return (
            f"<DocumentShareORM(id={self.id}, document_id={self.document_id}, "
            f"user_id={self.user_id}, can_edit={self.can_edit})>"
        )

    def __str__(self) -> str:
        """User-friendly string representation.

        Returns:
            str: Share description for display purposes.
        """
        mode = "edit" if self.can_edit else "view"
        return f"Share of document {self.document_id} with {self.user_id} ({mode})"
