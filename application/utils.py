import logging
from uuid import UUID

from domain.exceptions import (
    AuthenticationRequiredError,
    ConflictError,
    DocumentAccessDeniedError,
    DocumentError,
    DocumentNotFoundError,
    DocumentValidationError,
    NotFoundError,
)
from fastapi import HTTPException, status

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (AuthenticationRequiredError, status.HTTP_401_UNAUTHORIZED),
    (DocumentAccessDeniedError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DocumentValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
)


class DomainHTTPException(HTTPException):
    """HTTPException that remembers the domain error code it was raised for.

    Attributes:
        error_code (str): Category of the failure, rendered into ErrorResponse.
    """

    def __init__(self, status_code: int, detail: str, error_code: str):
        super().__init__(status_code=status_code, detail=detail)
        self.error_code = error_code


def to_http_exception(error: DocumentError) -> DomainHTTPException:
    """Translate a domain error into the matching HTTP exception.

    Args:
        error (DocumentError): The error raised by a domain service.

    Returns:
        DomainHTTPException: Exception carrying status, detail and error code.

    Example:
        >>> exc = to_http_exception(DocumentNotFoundError("Document not found"))
        >>> exc.status_code
        404
    """
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            logger.warning(f"Request rejected ({status_code}): {error}")
            return DomainHTTPException(status_code, str(error), error.error_code)

    logger.error(f"Unexpected domain failure: {error}")
    return DomainHTTPException(
        status.HTTP_500_INTERNAL_SERVER_ERROR, str(error), error.error_code
    )


def internal_error(detail: str) -> DomainHTTPException:
    """Build the 500 response for failures outside the domain hierarchy."""
    return DomainHTTPException(
        status.HTTP_500_INTERNAL_SERVER_ERROR, detail, DocumentError.error_code
    )


def parse_document_id(document_id: str) -> UUID:
    """Parse a path identifier; malformed ids are reported as missing documents.

    Raises:
        DocumentNotFoundError: If the identifier is not a UUID.
    """
    try:
        return UUID(document_id)
    except (ValueError, TypeError) as e:
        raise DocumentNotFoundError(f"Document {document_id} not found") from e
