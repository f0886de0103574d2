"""Domain exceptions for the access-control package.

Evaluation functions never raise: a missing grant is a ``False`` or a
denied ``ActionDecision``. These exceptions exist for the two places that
do raise: enforcement helpers used by request handlers, and building a
permission table from malformed configuration.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all access-control errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code the calling layer should answer with
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class ForbiddenError(AppException):
    """Raised when a user lacks permission for an operation.

    Example:
        raise ForbiddenError(
            "You can only modify your own documents",
            details={"entity": "document_arrondissement", "action": "update"},
        )
    """

    message = "Access forbidden"
    error_code = "forbidden"
    status_code = 403


class PermissionTableError(AppException):
    """Raised when a role permission table cannot be built.

    This is a startup configuration error, never an evaluation result.

    Example:
        raise PermissionTableError(
            "Unknown entity in permission table",
            details={"role": "scrutateur", "entity": "bureau"},
        )
    """

    message = "Invalid permission table"
    error_code = "invalid_permission_table"
    status_code = 500
