import logging

from application.rest.schemas.input.document_input import DocumentCreate, DocumentUpdate
from application.rest.schemas.output.common_output import ErrorResponse, MessageResponse
from application.rest.schemas.output.document_output import (
    DocumentListResponse,
    DocumentResponse,
)
from application.utils import internal_error, parse_document_id, to_http_exception
from domain.entities.user import User
from domain.exceptions import DocumentError
from domain.services.document_service import DocumentService
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from utils.dependencies import get_current_user, get_db, get_document_service

logger = logging.getLogger(__name__)
router = APIRouter()

_NOT_FOUND_RESPONSE = {
    "model": ErrorResponse,
    "description": "Document not found or not accessible to the user.",
    "content": {
        "application/json": {
            "example": {"detail": "Document not found", "error_code": "NOT_FOUND"}
        }
    },
}


@router.get(
    path="/documents",
    description="Retrieve the documents owned by and shared with the current user.",
    response_model=DocumentListResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": DocumentListResponse,
            "description": "Owned documents and shared documents with edit flags.",
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - database query failed.",
            "content": {
                "application/json": {
                    "example": {"detail": "Failed to retrieve documents"}
                }
            },
        },
    },
)
async def get_documents(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """List every document the user can open.

    Args:
        current_user (User): Resolved principal.
        db (Session): Fresh database session for this request.
        document_service (DocumentService): Domain service with injected repositories.

    Returns:
        DocumentListResponse: Owned documents, and shared documents annotated
            with ``can_edit``.

    Example:
        >>> result = await get_documents(user, db, document_service)
        >>> [d.title for d in result.shared_documents]
        ['Notes']
    """
    try:
        listing = await document_service.list_documents(db, current_user)
        return DocumentListResponse.from_entity(listing)
    except DocumentError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.error(f"Failed to list documents: {str(e)}")
        raise internal_error("Failed to retrieve documents") from e


@router.post(
    path="/documents",
    description="Create a new document owned by the current user.",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_201_CREATED: {
            "model": DocumentResponse,
            "description": "Document created successfully.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Missing title or content too large.",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Title is required",
                        "error_code": "VALIDATION_ERROR",
                    }
                }
            },
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
        },
    },
)
async def create_document(
    document_create: DocumentCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """Create a document; content defaults to empty.

    Raises:
        HTTPException: 400 if the title is missing.
        HTTPException: 500 if internal server errors occur.
    """
    try:
        document = await document_service.create_document(
            db, current_user, document_create.title, document_create.content
        )
        return DocumentResponse.from_entity(document)
    except DocumentError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.error(f"Failed to create document: {str(e)}")
        raise internal_error("Failed to create document") from e


@router.get(
    path="/documents/{document_id}",
    description="Retrieve a document. The user must own it or hold a share.",
    response_model=DocumentResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
        },
        status.HTTP_404_NOT_FOUND: _NOT_FOUND_RESPONSE,
    },
)
async def get_document(
    document_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """Get a single document the user may view.

    Args:
        document_id (str): UUID string of the document; malformed ids are 404.
        current_user (User): Resolved principal.
        db (Session): Fresh database session for this request.
        document_service (DocumentService): Domain service with injected repositories.

    Returns:
        DocumentResponse: The document.

    Raises:
        HTTPException: 404 if the document is missing or not shared with the user.
    """
    try:
        document = await document_service.get_document(
            db, current_user, parse_document_id(document_id)
        )
        return DocumentResponse.from_entity(document)
    except DocumentError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.error(f"Failed to get document {document_id}: {str(e)}")
        raise internal_error("Failed to retrieve document") from e


@router.put(
    path="/documents/{document_id}",
    description="Update a document. The user must own it or hold an edit share.",
    response_model=DocumentResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Missing title or content too large.",
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "The user may only view this document.",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "You do not have permission to edit this document",
                        "error_code": "UNAUTHORIZED",
                    }
                }
            },
        },
        status.HTTP_404_NOT_FOUND: _NOT_FOUND_RESPONSE,
    },
)
async def update_document(
    document_id: str,
    document_update: DocumentUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """Replace title and content of a document.

    Omitting ``content`` keeps the stored content. Concurrent saves are
    last-write-wins.

    Raises:
        HTTPException: 400 if the title is missing.
        HTTPException: 401 if the user holds a view-only share.
        HTTPException: 404 if the document is missing or not shared with the user.
    """
    try:
        document = await document_service.update_document(
            db,
            current_user,
            parse_document_id(document_id),
            document_update.title,
            document_update.content,
        )
        return DocumentResponse.from_entity(document)
    except DocumentError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.error(f"Failed to update document {document_id}: {str(e)}")
        raise internal_error("Failed to update document") from e


@router.delete(
    path="/documents/{document_id}",
    description="Delete a document and all of its shares. Owner only.",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": MessageResponse,
            "description": "Document deleted successfully.",
            "content": {
                "application/json": {
                    "example": {"message": "Document deleted successfully"}
                }
            },
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "Only the owner can delete the document.",
        },
        status.HTTP_404_NOT_FOUND: _NOT_FOUND_RESPONSE,
    },
)
async def delete_document(
    document_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    document_service: DocumentService = Depends(get_document_service),
) -> MessageResponse:
    """Delete a document owned by the user.

    Raises:
        HTTPException: 401 if the user is a grantee rather than the owner.
        HTTPException: 404 if the document is missing or not shared with the user.
    """
    try:
        await document_service.delete_document(
            db, current_user, parse_document_id(document_id)
        )
        return MessageResponse(message="Document deleted successfully")
    except DocumentError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.error(f"Failed to delete document {document_id}: {str(e)}")
        raise internal_error("Failed to delete document") from e
