"""Share input schemas for API requests.

This module contains Pydantic models for document sharing-related API requests.
"""

from typing import Optional

from pydantic import BaseModel


class ShareCreate(BaseModel):
    """Schema for sharing a document with another user.

    Attributes:
        email (str, optional): Email address of the user to share with.
        can_edit (bool): Whether the user may edit, view-only by default.

    Example:
        >>> share_data = ShareCreate(email="bob@example.com", can_edit=True)
    """

    email: Optional[str] = None
    can_edit: bool = False


class ShareUpdate(BaseModel):
    """Schema for changing the permission of an existing share."""

    can_edit: bool
