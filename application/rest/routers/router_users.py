import logging
from typing import Optional

from application.rest.schemas.input.user_input import UserCreate
from application.rest.schemas.output.common_output import ErrorResponse
from application.rest.schemas.output.user_output import UserResponse
from application.utils import internal_error, to_http_exception
from domain.entities.user import User
from domain.exceptions import DocumentError
from domain.services.user_service import UserService
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from utils.dependencies import (
    get_current_principal,
    get_current_principal_name,
    get_current_user,
    get_db,
    get_user_service,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    path="/users",
    description="Register the authenticated principal as a user.",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_201_CREATED: {
            "model": UserResponse,
            "description": "User registered successfully.",
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Authentication required",
                        "error_code": "UNAUTHENTICATED",
                    }
                }
            },
        },
        status.HTTP_409_CONFLICT: {
            "model": ErrorResponse,
            "description": "A user already exists for this email.",
        },
    },
)
async def register_user(
    user_create: UserCreate,
    principal: Optional[str] = Depends(get_current_principal),
    principal_name: Optional[str] = Depends(get_current_principal_name),
    db: Session = Depends(get_db),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Create the user record for the authenticated email.

    Args:
        user_create (UserCreate): Display name of the new user.
        principal (Optional[str]): Verified email from the request headers.
        principal_name (Optional[str]): Name forwarded by the gateway, used
            when the body carries none.
        db (Session): Fresh database session for this request.
        user_service (UserService): Domain service with injected repository.

    Returns:
        UserResponse: The registered user.

    Raises:
        HTTPException: 401 if no principal is present.
        HTTPException: 409 if the email is already registered.
        HTTPException: 500 if internal server errors occur.
    """
    try:
        name = user_create.name.strip() or principal_name or ""
        user = await user_service.register(db, principal, name)
        return UserResponse.from_entity(user)
    except DocumentError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.error(f"Failed to register user: {str(e)}")
        raise internal_error("Failed to register user") from e


@router.get(
    path="/users/me",
    description="Return the user record of the authenticated principal.",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "No user registered for the principal.",
        },
    },
)
async def get_me(current_user: User = Depends(get_current_user)) -> UserResponse:
    """Return the caller's own identity."""
    return UserResponse.from_entity(current_user)
