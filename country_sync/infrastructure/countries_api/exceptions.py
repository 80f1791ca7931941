"""Exceptions raised by the external countries API client."""

from typing import Any


class CountriesAPIError(Exception):
    """Base exception for external countries API calls."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CountriesAPIConnectionError(CountriesAPIError):
    """Raised when the provider cannot be reached (connect error, timeout)."""

    pass


class CountriesAPIOperationError(CountriesAPIError):
    """Raised when the provider answers with an error or an unusable body."""

    def __init__(self, status_code: int, message: str, body: Any = None):
        super().__init__(message, {"status_code": status_code, "body": body})
        self.status_code = status_code
        self.body = body
