"""Share output schemas for API responses.

This module contains Pydantic models for share-related API responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from application.rest.schemas.output.user_output import UserResponse
from pydantic import BaseModel

if TYPE_CHECKING:
    from domain.entities.share import DocumentShare


class ShareResponse(BaseModel):
    """Schema for share data in API responses.

    Attributes:
        id (str): UUID string identifier of the share.
        document_id (str): UUID string of the shared document.
        user_id (str): UUID string of the user who received the share.
        can_edit (bool): Whether the user may edit the document.
        created_at (datetime): Timestamp when the share was created.
        user (UserResponse, optional): Identity of the user who received the share.

    Example:
        >>> share_response = ShareResponse(
        ...     id="share-uuid-123",
        ...     document_id="doc-uuid-456",
        ...     user_id="recipient-uuid",
        ...     can_edit=False,
        ...     created_at=datetime.now(),
        ... )
    """

    id: str  # UUID string
    document_id: str  # UUID string
    user_id: str  # UUID string
    can_edit: bool
    created_at: datetime
    user: Optional[UserResponse] = None

    @classmethod
    def from_entity(cls, share: DocumentShare) -> ShareResponse:
        """Create ShareResponse from a DocumentShare domain entity.

        Args:
            share: Domain share, with the grantee attached when loaded

        Returns:
            ShareResponse: The converted share response schema
        """
        return cls(
            id=str(share.id),
            document_id=str(share.document_id),
            user_id=str(share.user_id),
            can_edit=share.can_edit,
            created_at=share.created_at,
            user=UserResponse.from_entity(share.user) if share.user else None,
        )
