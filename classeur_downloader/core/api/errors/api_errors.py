"""Classeur API status codes and exceptions."""
from typing import Dict, Optional

from ...exceptions import ClasseurException


class APIErrorCodes:
    """HTTP status codes returned by the Classeur API."""

    ERROR_CODES: Dict[int, str] = {
        400: 'Bad request (400): the API rejected the request parameters.',
        401: 'Unauthorized (401): user ID or API key is wrong.',
        403: 'Forbidden (403): the API key has no access to this object.',
        404: 'Not found (404): no file or folder with this ID exists on the server.',
        409: 'Conflict (409): the object was modified concurrently.',
        429: 'Too many requests (429): rate limit exceeded, please wait and try again.',
        500: 'Internal server error (500).',
        502: 'Bad gateway (502).',
        503: 'Service unavailable (503): the server is temporarily unavailable.',
        504: 'Gateway timeout (504).',
    }

    AUTH_CODES = (401, 403)

    @classmethod
    def get_message(cls, code: int) -> str:
        """Gets error message for status code."""
        return cls.ERROR_CODES.get(code, f"Unknown error: {code}")


class ClasseurAPIError(ClasseurException):
    """Exception raised for Classeur API errors."""

    def __init__(self, code: int, message: Optional[str] = None):
        self.code = code
        self.message = message or APIErrorCodes.get_message(code)
        super().__init__(self.message)


class ClasseurAuthError(ClasseurAPIError):
    """Exception raised when the API refuses the supplied credentials."""
