"""Share domain entity.

A share grants a non-owner user access to a document. The grant is either
view-only or, with ``can_edit``, view and edit.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from domain.entities.user import User


@dataclass
class DocumentShare:
    """Domain entity representing a share grant on a document.

    Attributes:
        id (UUID): Unique identifier of the grant.
        document_id (UUID): Shared document.
        user_id (UUID): Grantee.
        can_edit (bool): Whether the grantee may modify the document.
        created_at (datetime): Timestamp of the grant.
        user (Optional[User]): Grantee identity, attached when listing.
    """

    id: UUID
    document_id: UUID
    user_id: UUID
    can_edit: bool
    created_at: datetime
    user: Optional["User"] = None

    @classmethod
    def create_new(
        cls, document_id: UUID, user_id: UUID, can_edit: bool = False
    ) -> "DocumentShare":
        """Factory method to create a new grant."""
        return cls(
            id=uuid4(),
            document_id=document_id,
            user_id=user_id,
            can_edit=bool(can_edit),
            created_at=datetime.utcnow(),
        )
