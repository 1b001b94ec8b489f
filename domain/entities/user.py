"""User domain entity.

This module contains the User domain entity that represents
a registered account in the business domain.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from domain.exceptions import DocumentValidationError
from utils.config import MAX_NAME_LENGTH


@dataclass(frozen=True)
class User:
    """Domain entity representing a registered user.

    Attributes:
        id (UUID): Immutable unique identifier of the user.
        email (str): Unique, normalized email address used as login identity.
        name (str): Display name of the user.
        created_at (Optional[datetime]): Timestamp of registration.

    Example:
        >>> user = User.create_new(email="Ada@Example.com", name="Ada")
        >>> print(user.email)
        "ada@example.com"

    Business Rules:
        - Email must be non-empty and is stored lower-cased
        - Email uniqueness is enforced at repository level
    """

    id: UUID
    email: str
    name: str
    created_at: Optional[datetime] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate and normalize the user after initialization.

        Raises:
            DocumentValidationError: If the email is empty.
        """
        if not self.email or not self.email.strip():
            raise DocumentValidationError("User email cannot be empty")

        object.__setattr__(self, "email", normalize_email(self.email))
        object.__setattr__(self, "name", (self.name or "").strip())

    @classmethod
    def create_new(cls, email: str, name: str) -> "User":
        """Factory method to create a user with a fresh identifier.

        Args:
            email (str): Login email of the user.
            name (str): Display name.

        Returns:
            User: New user ready for persistence.

        Raises:
            DocumentValidationError: If the email is empty or the name too long.
        """
        if name and len(name.strip()) > MAX_NAME_LENGTH:
            raise DocumentValidationError(
                f"Name exceeds maximum length of {MAX_NAME_LENGTH} characters"
            )
        return cls(id=uuid4(), email=email, name=name, created_at=datetime.utcnow())


def normalize_email(email: str) -> str:
    """Return the canonical form of an email address used for lookups."""
    return email.strip().lower()
