"""Authorization policy for documents.

This module decides whether a user may perform an action on a document. The
decision depends only on document ownership and the user's share grant, so
every function here is pure and does no I/O.

Rules:
    - The owner may perform every action.
    - A grantee with ``can_edit`` may view and edit.
    - A view-only grantee may view.
    - Anyone else may do nothing.

Existence policy:
    A user without any access gets ``DocumentNotFoundError`` so that the
    document's existence is not revealed. A user who can see the document but
    lacks the requested action gets ``DocumentAccessDeniedError``.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from domain.exceptions import DocumentAccessDeniedError, DocumentNotFoundError

if TYPE_CHECKING:
    from domain.entities.document import Document
    from domain.entities.share import DocumentShare


class Action(Enum):
    """Operations that can be requested on a document."""

    VIEW = "view"
    EDIT = "edit"
    DELETE = "delete"
    MANAGE_SHARES = "manage-shares"


class AccessLevel(Enum):
    """Access a user holds on a document, from none to full ownership."""

    DENY = "deny"
    VIEW = "view"
    EDIT = "edit"
    OWNER = "owner"


_ALLOWED_ACTIONS = {
    AccessLevel.DENY: frozenset(),
    AccessLevel.VIEW: frozenset({Action.VIEW}),
    AccessLevel.EDIT: frozenset({Action.VIEW, Action.EDIT}),
    AccessLevel.OWNER: frozenset(Action),
}


def resolve_access(
    user_id: UUID, document: "Document", share: Optional["DocumentShare"] = None
) -> AccessLevel:
    """Compute the access level of a user on a document.

    Args:
        user_id (UUID): The requesting user.
        document (Document): The target document.
        share (Optional[DocumentShare]): The user's grant on the document, if any.

    Returns:
        AccessLevel: OWNER, EDIT, VIEW or DENY.

    Example:
        >>> resolve_access(owner_id, document)
        <AccessLevel.OWNER: 'owner'>
    """
    if document.is_owned_by(user_id):
        return AccessLevel.OWNER

    # A grant that belongs to another user or document confers nothing
    if share is None or share.user_id != user_id or share.document_id != document.id:
        return AccessLevel.DENY

    return AccessLevel.EDIT if share.can_edit else AccessLevel.VIEW


def can_access(
    user_id: UUID,
    document: "Document",
    action: Action,
    share: Optional["DocumentShare"] = None,
) -> bool:
    """Check whether a user may perform an action on a document.

    Args:
        user_id (UUID): The requesting user.
        document (Document): The target document.
        action (Action): The requested operation.
        share (Optional[DocumentShare]): The user's grant on the document, if any.

    Returns:
        bool: True if the action is permitted.
    """
    level = resolve_access(user_id, document, share)
    return action in _ALLOWED_ACTIONS[level]


def authorize(
    user_id: UUID,
    document: "Document",
    action: Action,
    share: Optional["DocumentShare"] = None,
) -> AccessLevel:
    """Enforce the policy, raising when the action is not permitted.

    Args:
        user_id (UUID): The requesting user.
        document (Document): The target document.
        action (Action): The requested operation.
        share (Optional[DocumentShare]): The user's grant on the document, if any.

    Returns:
        AccessLevel: The user's access level when the action is permitted.

    Raises:
        DocumentNotFoundError: If the user has no access at all.
        DocumentAccessDeniedError: If the user can see the document but the
            action needs more rights.
    """
    level = resolve_access(user_id, document, share)

    if level is AccessLevel.DENY:
        raise DocumentNotFoundError(f"Document {document.id} not found")

    if action not in _ALLOWED_ACTIONS[level]:
        raise DocumentAccessDeniedError(
            f"Not allowed to {action.value} document {document.id}"
        )

    return level
