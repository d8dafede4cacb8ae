"""
Error taxonomy for the FYP lifecycle engine.

Services raise these; the API layer renders them through a single
exception handler (see config/api.py).
"""

from ninja import Schema


class ErrorSchema(Schema):
    """Standard error response schema."""

    code: str
    message: str
    details: dict | None = None


class APIException(Exception):
    """Base exception for API errors."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    message: str = "An unexpected error occurred."

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
        details: dict | None = None,
    ):
        self.message = message or self.__class__.message
        self.code = code or self.__class__.code
        self.details = details
        super().__init__(self.message)

    def to_response(self) -> tuple[int, ErrorSchema]:
        """Convert exception to API response tuple."""
        return self.status_code, ErrorSchema(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# Authentication Exceptions
class NotAuthenticatedError(APIException):
    """User is not authenticated."""

    status_code = 401
    code = "NOT_AUTHENTICATED"
    message = "Authentication required."


class InvalidCredentialsError(APIException):
    """Invalid login credentials."""

    status_code = 401
    code = "INVALID_CREDENTIALS"
    message = "Invalid email or password."


class AccountDisabledError(APIException):
    """User account is disabled."""

    status_code = 401
    code = "ACCOUNT_DISABLED"
    message = "This account is disabled."


# Authorization Exceptions
class PermissionDeniedError(APIException):
    """User doesn't hold the role an operation requires."""

    status_code = 403
    code = "PERMISSION_DENIED"
    message = "You do not have permission to perform this action."


class NotOwnerError(PermissionDeniedError):
    """User is not the owner (or target) of the resource."""

    code = "NOT_OWNER"
    message = "You are not the owner of this resource."


# Resource Exceptions
class NotFoundError(APIException):
    """Resource not found."""

    status_code = 404
    code = "NOT_FOUND"
    message = "Resource not found."


class ConflictError(APIException):
    """Operation conflicts with existing state."""

    status_code = 409
    code = "CONFLICT"
    message = "This operation conflicts with the current state."


class AlreadyExistsError(ConflictError):
    """Resource already exists."""

    code = "ALREADY_EXISTS"
    message = "This resource already exists."


class InvalidTransitionError(APIException):
    """The entity's current status does not allow the requested transition."""

    status_code = 409
    code = "INVALID_TRANSITION"
    message = "This action is not allowed in the current status."


# Validation Exceptions
class ValidationError(APIException):
    """Invalid input data."""

    status_code = 400
    code = "VALIDATION_ERROR"
    message = "Invalid data."


class BadRequestError(APIException):
    """Bad request."""

    status_code = 400
    code = "BAD_REQUEST"
    message = "Bad request."
