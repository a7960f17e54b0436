"""
Application error taxonomy.

Each error carries the HTTP status it maps to. The centralized handlers in
main.py turn any JoblyError into the response body:

    {"error": {"message": ..., "status": ...}}

Hierarchy:
    JoblyError (base, 500)
    ├── BadRequestError   → 400 (malformed/empty input, schema violation)
    ├── UnauthorizedError → 401 (authentication/authorization failure)
    └── NotFoundError     → 404 (missing entity)
"""

from typing import List, Optional, Union

ErrorMessage = Union[str, List[str]]


class JoblyError(Exception):
    """
    Base error for the API.

    Attributes:
        message: User-facing description, or a list of them for schema errors
        status_code: HTTP status the error maps to
    """

    status_code: int = 500

    def __init__(self, message: ErrorMessage = "Internal Server Error", status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class BadRequestError(JoblyError):
    """400 BAD REQUEST error."""

    status_code = 400

    def __init__(self, message: ErrorMessage = "Bad Request"):
        super().__init__(message)


class UnauthorizedError(JoblyError):
    """
    401 UNAUTHORIZED error.

    Authorization gates always use the default message so callers cannot tell
    which condition failed.
    """

    status_code = 401

    def __init__(self, message: ErrorMessage = "Unauthorized"):
        super().__init__(message)


class NotFoundError(JoblyError):
    """404 NOT FOUND error."""

    status_code = 404

    def __init__(self, message: ErrorMessage = "Not Found"):
        super().__init__(message)
