"""SQLAlchemy ORM model for User entity.

This module contains the UserORM class that defines the database schema
for registered users.

Architecture:
    This ORM model is part of the Infrastructure layer and should only be used by
    repository implementations. Domain code should use the User entity instead.
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String, Uuid
from sqlalchemy.orm import relationship

from infrastructure.models.base import Base
from utils.config import MAX_NAME_LENGTH


class UserORM(Base):
    """SQLAlchemy ORM model for registered users.

    Attributes:
        id (UUID): Primary key, auto-generated UUID.
        email (str): Unique lower-cased login email.
        name (str): Display name.
        created_at (datetime): Registration timestamp.
        documents (List[DocumentORM]): Documents owned by the user.
        shares (List[DocumentShareORM]): Grants held by the user.

    Table Schema:
        - Table name: 'users'
        - Primary key: id (UUID)
        - Unique constraint: email
    """

    __tablename__ = "users"

    id = Column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Primary key, auto-generated UUID",
    )

    email = Column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="Login email, lower-cased, unique across users",
    )

    name = Column(
        String(MAX_NAME_LENGTH), nullable=False, default="", comment="Display name"
    )

    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        comment="Timestamp when user registered",
    )

    documents = relationship("DocumentORM", back_populates="owner", lazy="select")

    shares = relationship(
        "DocumentShareORM",
        back_populates="user",
        cascade="all, delete",
        lazy="select",
    )

    def __repr__(self) -> str:
        return f"<UserORM(id={self.id}, email='{self.email}')>"
