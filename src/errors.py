"""
Errors - Exception taxonomy for plugin configuration reconciliation.

Validation errors (InvalidConfig, ConflictingConfig, MalformedIdentifier) are
raised before any call reaches the Kong Admin API. RemoteError wraps failures
reported by the admin API and is surfaced verbatim, without retry.
"""

from typing import Any, Optional


class KongPluginError(Exception):
    """Base class for all errors raised by the reconciliation engine."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidConfig(KongPluginError):
    """Raised when a config_json blob is not a well-formed JSON object."""


class ConflictingConfig(KongPluginError):
    """Raised when both config and config_json are declared where only one is allowed."""


class MalformedIdentifier(KongPluginError):
    """Raised when a composite identifier does not split into three parts."""


class RemoteError(KongPluginError):
    """
    Raised when the Kong Admin API reports a failure.

    Carries the operation name and, where available, the outbound request
    and HTTP status for diagnostics.
    """

    def __init__(
        self,
        operation: str,
        message: str,
        request: Optional[Any] = None,
        status: Optional[int] = None,
    ):
        self.operation = operation
        self.request = request
        self.status = status
        super().__init__(f"{operation}: {message}")


class ResourceNotFound(RemoteError):
    """Raised when a remote object that must exist could not be found."""
