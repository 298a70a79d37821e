"""Classeur API errors and exceptions."""
from .api_errors import ClasseurAPIError, ClasseurAuthError, APIErrorCodes

__all__ = [
    'ClasseurAPIError',
    'ClasseurAuthError',
    'APIErrorCodes',
]
