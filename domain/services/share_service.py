"""Share domain service.

This module contains the ShareService, the registry of grants that give
non-owners view or edit access to a document. Only the owner manages grants.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from domain.entities.share import DocumentShare
from domain.exceptions import (
    DocumentError,
    DocumentValidationError,
    SelfShareError,
    ShareNotFoundError,
)
from domain.services.authorization import Action

if TYPE_CHECKING:
    from domain.entities.user import User
    from domain.repositories.share_repository import ShareRepository
    from domain.services.document_service import DocumentService
    from domain.services.user_service import UserService
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class ShareService:
    """Domain service for granting, changing and revoking document access.

    Duplicate grants are rejected with ShareAlreadyExistsError; changing the
    edit flag of an existing grant goes through update_share_permission.

    Attributes:
        _document_service (DocumentService): Loads and authorizes documents.
        _share_repository (ShareRepository): Grant persistence.
        _user_service (UserService): Resolves grantees by email.
    """

    def __init__(
        self,
        document_service: "DocumentService",
        share_repository: "ShareRepository",
        user_service: "UserService",
    ) -> None:
        self._document_service = document_service
        self._share_repository = share_repository
        self._user_service = user_service

    async def share_document(
        self,
        db_session: "Session",
        owner: "User",
        document_id: UUID,
        email: Optional[str],
        can_edit: bool = False,
    ) -> DocumentShare:
        """Grant a user access to a document.

        Args:
            db_session: Database session for this operation
            owner: The authenticated user, must own the document
            document_id: UUID of the document to share
            email: Email of the user to share with
            can_edit: Whether the grantee may edit

        Returns:
            DocumentShare: The created grant with grantee identity

        Raises:
            DocumentNotFoundError: If the document is missing or invisible
            DocumentAccessDeniedError: If the caller is a grantee, not the owner
            DocumentValidationError: If the email is missing
            UserNotFoundError: If no user has that email
            SelfShareError: If the owner targets themselves
            ShareAlreadyExistsError: If a grant already exists for the pair
        """
        document, _ = await self._document_service.load_authorized(
            db_session, owner, document_id, Action.MANAGE_SHARES
        )
        target = await self._resolve_target(db_session, email)

        if target.id == owner.id:
            raise SelfShareError("Cannot share with yourself")

        logger.info(
            f"Sharing document {document.id} with user {target.id} (can_edit={can_edit})"
        )

        share = DocumentShare.create_new(
            document_id=document.id, user_id=target.id, can_edit=can_edit
        )

        try:
            created = await self._share_repository.create_share(db_session, share)
        except DocumentError:
            raise
        except Exception as e:
            logger.error(f"Failed to share document {document_id}: {str(e)}")
            raise DocumentError(f"Failed to share document: {str(e)}") from e

        logger.info(f"Successfully shared document {document_id}")
        return created

    async def update_share_permission(
        self,
        db_session: "Session",
        owner: "User",
        document_id: UUID,
        email: Optional[str],
        can_edit: bool,
    ) -> DocumentShare:
        """Change the edit flag of an existing grant.

        Raises:
            ShareNotFoundError: If the user holds no grant on the document
        """
        await self._document_service.load_authorized(
            db_session, owner, document_id, Action.MANAGE_SHARES
        )
        target = await self._resolve_target(db_session, email)

        try:
            updated = await self._share_repository.update_share(
                db_session, document_id, target.id, can_edit
            )
        except Exception as e:
            logger.error(f"Failed to update share of {document_id}: {str(e)}")
            raise DocumentError(f"Failed to update share: {str(e)}") from e

        if not updated:
            raise ShareNotFoundError("Share not found")

        logger.info(
            f"Set can_edit={can_edit} for user {target.id} on document {document_id}"
        )
        return updated

    async def unshare_document(
        self,
        db_session: "Session",
        owner: "User",
        document_id: UUID,
        email: Optional[str],
    ) -> bool:
        """Revoke a user's grant on a document.

        Raises:
            ShareNotFoundError: If the user holds no grant on the document
        """
        await self._document_service.load_authorized(
            db_session, owner, document_id, Action.MANAGE_SHARES
        )
        target = await self._resolve_target(db_session, email)

        try:
            removed = await self._share_repository.delete_share(
                db_session, document_id, target.id
            )
        except Exception as e:
            logger.error(f"Failed to unshare document {document_id}: {str(e)}")
            raise DocumentError(f"Failed to unshare document: {str(e)}") from e

        if not removed:
            raise ShareNotFoundError("Share not found")

        logger.info(f"Successfully unshared document {document_id} from {target.id}")
        return removed

    async def get_document_shares(
        self, db_session: "Session", owner: "User", document_id: UUID
    ) -> List[DocumentShare]:
        """List all grants on a document with grantee identity attached.

        Raises:
            DocumentNotFoundError: If the document is missing or invisible
            DocumentAccessDeniedError: If the caller is a grantee, not the owner
        """
        await self._document_service.load_authorized(
            db_session, owner, document_id, Action.MANAGE_SHARES
        )

        try:
            shares = await self._share_repository.get_document_shares(
                db_session, document_id
            )
        except Exception as e:
            logger.error(f"Failed to get document shares: {str(e)}")
            raise DocumentError(f"Failed to retrieve document shares: {str(e)}") from e

        logger.info(f"Retrieved {len(shares)} shares for document {document_id}")
        return shares

    async def _resolve_target(
        self, db_session: "Session", email: Optional[str]
    ) -> "User":
        if not email or not email.strip():
            raise DocumentValidationError("Email is required")
        return await self._user_service.get_user_by_email(db_session, email)
