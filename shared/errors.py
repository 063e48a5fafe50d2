"""
Error types raised by the services and rendered by the Flask error handlers.
"""


class ApiError(Exception):
    """An operation failure with a client-facing message and HTTP status."""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"message": self.message}


class InvalidInput(ApiError):
    status_code = 422


class PayloadTooLarge(ApiError):
    status_code = 422


class Conflict(ApiError):
    status_code = 422


class InvalidCredentials(ApiError):
    status_code = 422


class Unauthorized(ApiError):
    status_code = 401


class Forbidden(ApiError):
    status_code = 403


class NotFound(ApiError):
    status_code = 404


class StorageError(ApiError):
    """File system failure while writing or removing an upload."""
    status_code = 500
