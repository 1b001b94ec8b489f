import logging
from contextlib import asynccontextmanager

from application.rest.routers import (
    router_documents,
    router_health,
    router_shares,
    router_users,
)
from application.rest.schemas.output.common_output import ErrorResponse
from domain.exceptions import DocumentValidationError
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from infrastructure.models.base import Base
from infrastructure.models.document_orm import DocumentORM  # noqa: F401
from infrastructure.models.document_share_orm import DocumentShareORM  # noqa: F401
from infrastructure.models.user_orm import UserORM  # noqa: F401
from starlette.exceptions import HTTPException
from utils.dependencies import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")
    yield


app = FastAPI(
    title="Mini-Notion Documents Service",
    description="Documents, users and sharing for the Mini-Notion editor",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render every HTTP error as an ErrorResponse body."""
    body = ErrorResponse(
        detail=str(exc.detail), error_code=getattr(exc, "error_code", None)
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render malformed request bodies as a 400 ErrorResponse.

    The first reported error becomes the message, e.g.
    ``title: Input should be a valid string``.
    """
    errors = exc.errors()
    detail = "Invalid request"
    if errors:
        error = errors[0]
        location = ".".join(
            str(part) for part in error.get("loc", ()) if part != "body"
        )
        message = error.get("msg", detail)
        detail = f"{location}: {message}" if location else message

    logger.warning(f"Request rejected (400): {detail}")
    body = ErrorResponse(detail=detail, error_code=DocumentValidationError.error_code)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump()
    )


app.include_router(router_health.router, tags=["health"])
app.include_router(router_users.router, tags=["users"])
app.include_router(router_documents.router, tags=["documents"])
app.include_router(router_shares.router, tags=["shares"])
