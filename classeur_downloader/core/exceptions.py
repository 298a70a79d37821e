"""
Custom exceptions for Classeur download operations.

Remote failures, tree lookups and local writes each get their own branch
so callers can tell which phase of a run failed.
"""
from pathlib import Path
from typing import Optional, Union


class ClasseurException(Exception):
    """Base exception for all classeur_downloader errors."""


class InvalidOptionsError(ClasseurException):
    """Raised when an option combination cannot be honoured."""


class NodeNotFoundError(ClasseurException):
    """Raised when an identifier does not resolve to any node in a tree."""

    def __init__(self, identifier: Optional[str]) -> None:
        """
        Initialize the exception.

        Args:
            identifier: Canonical identifier that was looked up
        """
        self.identifier = identifier
        super().__init__(f"No node with identifier {identifier!r} in tree")


class LocalWriteError(ClasseurException):
    """Base exception for local filesystem precondition failures."""

    def __init__(self, message: str, path: Union[str, Path]) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            path: Destination path of the failed write
        """
        self.path = Path(path)
        super().__init__(message)


class AlreadyExistsError(LocalWriteError):
    """Raised when a destination exists and overwriting is not allowed."""

    def __init__(self, path: Union[str, Path]) -> None:
        super().__init__(f"File {path} exists, and --overwrite is not set.", path)


class AccessDeniedError(LocalWriteError):
    """Raised when a destination cannot be read or written."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None) -> None:
        message = f"Could not get write access to {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message, path)


class MalformedNodeError(ClasseurException):
    """Raised when a node's identifier cannot name a path below the destination."""

    def __init__(self, node: object, reason: str = "its identifier is empty") -> None:
        self.node = node
        self.reason = reason
        super().__init__(f"Cannot save {node!r}: {reason}")
