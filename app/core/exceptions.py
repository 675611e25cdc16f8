"""
Application error types.

Managers raise these; main.py turns them into JSON error responses
carrying the matching HTTP status code.
"""


class AppError(Exception):
    """Base error with an HTTP status attached."""

    status_code = 500

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    """Lookup target does not exist."""

    status_code = 404

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)


class BadRequestError(AppError):
    """Caller supplied invalid or empty input."""

    status_code = 400

    def __init__(self, message: str = "Bad Request"):
        super().__init__(message)


class DuplicateError(BadRequestError):
    """Create targeted a unique key that already exists."""


class UnauthorizedError(AppError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
