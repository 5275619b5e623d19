"""
Comparator Errors
-----------------
Every error the dispatcher can report carries its HTTP status code.
"""

from typing import Iterable


class ComparatorError(Exception):
    """Base class for failures reported to the caller."""
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(ComparatorError):
    """Raised for missing or malformed request parameters."""
    status_code = 400


class NotFoundError(ComparatorError):
    """Raised when an ASIN or its review text cannot be found."""
    status_code = 404

    def __init__(self, message: str, missing: Iterable[str] = ()):
        self.missing = list(missing)
        super().__init__(message)


class MethodNotAllowedError(ComparatorError):
    """Raised for HTTP methods other than GET, POST and OPTIONS."""
    status_code = 405


class ConfigurationError(ComparatorError):
    """Raised when credentials or static data are missing or unreadable."""
    status_code = 500


class UpstreamServiceError(ComparatorError):
    """Raised when the text-completion service fails or returns no text."""
    status_code = 500
