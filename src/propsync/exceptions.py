"""
Shared exception classes for propsync.
"""

from typing import Any, Optional


class PropSyncError(Exception):
    """Base exception for all propsync errors."""
    pass


class ConfigurationError(PropSyncError):
    """Raised when there's a configuration issue."""
    pass


class APIError(PropSyncError):
    """Base class for API-related errors."""

    def __init__(self, message: str, status_code: Optional[int] = None, response: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class HubSpotAPIError(APIError):
    """Exception raised for HubSpot API errors."""
    pass


class RecordError(PropSyncError):
    """Raised when an input row cannot be turned into a property definition."""
    pass
