"""Service-level errors.

Every failure reaching a caller is a single human-readable message; the
HTTP layer renders these as ``{"detail": message}``.
"""


class RecipeShareError(Exception):
    """Base exception carrying an HTTP status and a user-facing message."""
    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationFailed(RecipeShareError):
    """Input was rejected before touching the store."""
    status_code = 400


class AuthError(RecipeShareError):
    """No valid session for an operation that needs one."""
    status_code = 401


class PermissionDeniedError(RecipeShareError):
    status_code = 403


class NotFoundError(RecipeShareError):
    status_code = 404
