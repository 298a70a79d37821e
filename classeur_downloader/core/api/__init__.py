"""Classeur API module."""
from .errors import ClasseurAPIError, ClasseurAuthError, APIErrorCodes
from .config import APIConfig, ProxyConfig, TimeoutConfig, RetryConfig
from .async_client import AsyncAPIClient

__all__ = [
    # Client
    'AsyncAPIClient',

    # Configuration
    'APIConfig',
    'ProxyConfig',
    'TimeoutConfig',
    'RetryConfig',

    # Errors
    'ClasseurAPIError',
    'ClasseurAuthError',
    'APIErrorCodes',
]
