import logging
from typing import List

from application.rest.schemas.input.share_input import ShareCreate, ShareUpdate
from application.rest.schemas.output.common_output import ErrorResponse, MessageResponse
from application.rest.schemas.output.share_output import ShareResponse
from application.utils import internal_error, parse_document_id, to_http_exception
from domain.entities.user import User
from domain.exceptions import DocumentError
from domain.services.share_service import ShareService
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from utils.dependencies import get_current_user, get_db, get_share_service

logger = logging.getLogger(__name__)
router = APIRouter()

_OWNER_ONLY_RESPONSE = {
    "model": ErrorResponse,
    "description": "Only the document owner can manage shares.",
    "content": {
        "application/json": {
            "example": {
                "detail": "Not allowed to manage-shares document",
                "error_code": "UNAUTHORIZED",
            }
        }
    },
}


@router.post(
    path="/documents/{document_id}/share",
    description="Share a document with another registered user by email.",
    response_model=ShareResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_201_CREATED: {
            "model": ShareResponse,
            "description": "Document shared successfully.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Missing email or attempt to share with yourself.",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Cannot share with yourself",
                        "error_code": "VALIDATION_ERROR",
                    }
                }
            },
        },
        status.HTTP_401_UNAUTHORIZED: _OWNER_ONLY_RESPONSE,
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Document or target user not found.",
        },
        status.HTTP_409_CONFLICT: {
            "model": ErrorResponse,
            "description": "The document is already shared with this user.",
        },
    },
)
async def share_document(
    document_id: str,
    share_create: ShareCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    share_service: ShareService = Depends(get_share_service),
) -> ShareResponse:
    """Grant view or edit access to another user.

    Args:
        document_id (str): UUID string of the document to share.
        share_create (ShareCreate): Target email and edit flag.
        current_user (User): Resolved principal, must be the owner.
        db (Session): Fresh database session for this request.
        share_service (ShareService): Domain service with injected dependencies.

    Returns:
        ShareResponse: The created share with the grantee identity.

    Raises:
        HTTPException: 400 if the email is missing or targets the owner.
        HTTPException: 401 if the caller is not the owner.
        HTTPException: 404 if the document or the target user does not exist.
        HTTPException: 409 if the user already has a share.

    Example:
        >>> share = await share_document(doc_id, ShareCreate(email="b@x.io"), ...)
        >>> share.can_edit
        False
    """
    try:
        share = await share_service.share_document(
            db,
            current_user,
            parse_document_id(document_id),
            share_create.email,
            share_create.can_edit,
        )
        return ShareResponse.from_entity(share)
    except DocumentError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.error(f"Failed to share document {document_id}: {str(e)}")
        raise internal_error("Failed to share document") from e


@router.get(
    path="/documents/{document_id}/shares",
    description="List the users a document is shared with.",
    response_model=List[ShareResponse],
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_401_UNAUTHORIZED: _OWNER_ONLY_RESPONSE,
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Document not found or not accessible to the user.",
        },
    },
)
async def get_document_shares(
    document_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    share_service: ShareService = Depends(get_share_service),
) -> List[ShareResponse]:
    """List every share of a document with user id, email and name."""
    try:
        shares = await share_service.get_document_shares(
            db, current_user, parse_document_id(document_id)
        )
        return [ShareResponse.from_entity(share) for share in shares]
    except DocumentError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.error(f"Failed to get shares of {document_id}: {str(e)}")
        raise internal_error("Failed to retrieve document shares") from e


@router.put(
    path="/documents/{document_id}/shares/by-email/{email}",
    description="Change whether a user with a share may edit the document.",
    response_model=ShareResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_401_UNAUTHORIZED: _OWNER_ONLY_RESPONSE,
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Document, user or share not found.",
        },
    },
)
async def update_share(
    document_id: str,
    email: str,
    share_update: ShareUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    share_service: ShareService = Depends(get_share_service),
) -> ShareResponse:
    """Upgrade or downgrade an existing share.

    Raises:
        HTTPException: 401 if the caller is not the owner.
        HTTPException: 404 if the user has no share on the document.
    """
    try:
        share = await share_service.update_share_permission(
            db,
            current_user,
            parse_document_id(document_id),
            email,
            share_update.can_edit,
        )
        return ShareResponse.from_entity(share)
    except DocumentError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.error(f"Failed to update share of {document_id}: {str(e)}")
        raise internal_error("Failed to update share") from e


@router.delete(
    path="/documents/{document_id}/shares/by-email/{email}",
    description="Revoke a user's access to a document.",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": MessageResponse,
            "description": "Share removed.",
            "content": {
                "application/json": {
                    "example": {"message": "Document sharing removed successfully"}
                }
            },
        },
        status.HTTP_401_UNAUTHORIZED: _OWNER_ONLY_RESPONSE,
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Document, user or share not found.",
        },
    },
)
async def unshare_document(
    document_id: str,
    email: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    share_service: ShareService = Depends(get_share_service),
) -> MessageResponse:
    """Remove a share; the user loses all access at once."""
    try:
        await share_service.unshare_document(
            db, current_user, parse_document_id(document_id), email
        )
        return MessageResponse(message="Document sharing removed successfully")
    except DocumentError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.error(f"Failed to unshare document {document_id}: {str(e)}")
        raise internal_error("Failed to unshare document") from e
