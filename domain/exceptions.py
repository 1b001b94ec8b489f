"""Domain exceptions for the documents service.

Every failure a service can report is a subclass of ``DocumentError``. The
``error_code`` attribute categorizes the failure for API consumers; routers
map each class to an HTTP status.
"""


class DocumentError(Exception):
    """Base exception for document-related errors.

    Raised directly when an unexpected persistence failure occurs.
    """

    error_code = "INTERNAL_ERROR"


class AuthenticationRequiredError(DocumentError):
    """Exception raised when the request carries no authenticated principal."""

    error_code = "UNAUTHENTICATED"


class DocumentAccessDeniedError(DocumentError):
    """Exception raised when a user may see a document but not perform the action."""

    error_code = "UNAUTHORIZED"


class NotFoundError(DocumentError):
    """Base exception for missing resources."""

    error_code = "NOT_FOUND"


class DocumentNotFoundError(NotFoundError):
    """Exception raised when a document is not found or not visible to the user."""

    pass


class UserNotFoundError(NotFoundError):
    """Exception raised when a referenced user does not exist."""

    pass


class ShareNotFoundError(NotFoundError):
    """Exception raised when no share exists for a document and user."""

    pass


class DocumentValidationError(DocumentError, ValueError):
    """Exception raised when request data breaks a business rule."""

    error_code = "VALIDATION_ERROR"


class SelfShareError(DocumentValidationError):
    """Exception raised when an owner tries to share a document with themselves."""

    pass


class ConflictError(DocumentError):
    """Base exception for uniqueness violations."""

    error_code = "CONFLICT"


class ShareAlreadyExistsError(ConflictError):
    """Exception raised when a document is already shared with a user."""

    pass


class UserAlreadyExistsError(ConflictError):
    """Exception raised when registering an email that already has a user."""

    pass
