from abc import ABC
from typing import ClassVar


class UserError(ABC, Exception):
    """Base class for errors whose message is shown to the client.

    Subclasses set the HTTP status and the machine-readable type reported
    alongside the message. Messages must not carry sensitive detail.
    """

    status_code: ClassVar[int] = 400
    error_type: ClassVar[str] = "bad_request"


class NotFoundError(UserError):
    status_code = 404
    error_type = "not_found"

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """No logged-in session (or, where allowed, no valid bearer token)."""

    status_code = 401
    error_type = "authentication_error"

    def __init__(self, message: str = "Please login to view this page.") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """The resource exists but belongs to another user."""

    status_code = 403
    error_type = "access_denied"

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class ValidationError(UserError):
    error_type = "validation_error"


class DuplicateIdentityError(UserError):
    error_type = "duplicate_identity"

    def __init__(self, message: str = "Username or email already taken") -> None:
        super().__init__(message)


class InvalidCredentialsError(UserError):
    """Failed login. Unknown identifier and wrong password are reported identically."""

    error_type = "invalid_credentials"

    def __init__(self, message: str = "Invalid username/email or password") -> None:
        super().__init__(message)
