"""Document input schemas for API requests.

This module contains Pydantic models for document-related API requests,
including document creation and update operations.
"""

from typing import Optional

from pydantic import BaseModel


class DocumentCreate(BaseModel):
    """Schema for creating a new document.

    The title is checked by the domain so that a missing title is reported
    as a business rule failure rather than a schema error.

    Attributes:
        title (str, optional): The title of the document, mandatory in practice.
        content (str, optional): Serialized rich-text content, defaults to empty.

    Example:
        >>> document_data = DocumentCreate(title="Notes", content='[{"type":"p"}]')
    """

    title: Optional[str] = None
    content: Optional[str] = None


class DocumentUpdate(BaseModel):
    """Schema for updating an existing document.

    Attributes:
        title (str, optional): New title, mandatory in practice.
        content (str, optional): New content. Omitted keeps the stored content.

    Example:
        >>> update_data = DocumentUpdate(title="Updated Title")
    """

    title: Optional[str] = None
    content: Optional[str] = None
