"""
classeur_downloader - Download and list files and folders stored in Classeur.

Usage:
    >>> from classeur_downloader import DownloadOptions, save_tree
    >>>
    >>> options = DownloadOptions(user_id='u', api_key='k', folders=('f1',), path='out/', markdown=True)
    >>> await save_tree(options)
"""
import logging
from .downloader import ClasseurDownloader, show_tree, save_tree, save_single_file
from .core.options import DownloadOptions
from .core.logging import package_loggers

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    TimeoutConfig,
    RetryConfig,
    AsyncAPIClient,
)

# Errors
from .core.api import ClasseurAPIError, ClasseurAuthError
from .core.exceptions import (
    ClasseurException,
    InvalidOptionsError,
    NodeNotFoundError,
    MalformedNodeError,
    LocalWriteError,
    AlreadyExistsError,
    AccessDeniedError,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for classeur_downloader modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    for logger in package_loggers():
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'ClasseurDownloader',
    'DownloadOptions',
    'show_tree',
    'save_tree',
    'save_single_file',
    'APIConfig',
    'ProxyConfig',
    'TimeoutConfig',
    'RetryConfig',
    'AsyncAPIClient',
    'ClasseurException',
    'ClasseurAPIError',
    'ClasseurAuthError',
    'InvalidOptionsError',
    'NodeNotFoundError',
    'MalformedNodeError',
    'LocalWriteError',
    'AlreadyExistsError',
    'AccessDeniedError',
    'setup_logging',
]
