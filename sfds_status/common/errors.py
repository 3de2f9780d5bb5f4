"""
Custom exception classes for sfds-status.
"""

from typing import Any, Optional


class StatusProbeError(Exception):
    """Base exception class for status probe errors."""
    pass


class ConfigError(StatusProbeError):
    """Raised when the probe configuration is incomplete or invalid."""
    pass


class MissingRequiredFieldError(ConfigError):
    """Raised when a required setting (e.g. the admin password) is missing."""
    pass


class InvalidFormatValueError(ConfigError):
    """Raised when the requested output format is not supported."""
    pass


class InvalidSettingError(ConfigError):
    """Raised when a setting such as the server URL or timeout is malformed."""
    pass


class NetworkError(StatusProbeError):
    """Base class for failures talking to the management API."""
    pass


class ApiConnectionError(NetworkError):
    """Raised when the API endpoint cannot be reached."""
    pass


class ApiTimeoutError(NetworkError):
    """Raised when an API call exceeds its timeout."""
    pass


class MalformedResponseError(NetworkError):
    """Raised when the API answers with a body that is not the expected JSON."""
    pass


class ApiStatusError(NetworkError):
    """Raised when the API rejects a call (non-2xx status or error envelope)."""

    def __init__(self, message: str, status: Optional[int] = None,
                 error_code: Optional[str] = None, error_message: Optional[str] = None,
                 body: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.error_code = error_code
        self.error_message = error_message
        self.body = body


class AuthError(StatusProbeError):
    """Base class for authentication failures."""
    pass


class WrongPasswordError(AuthError):
    """Raised when the server rejects the administrator password."""
    pass


class UnexpectedAuthResponseError(AuthError):
    """Raised when the login response has neither a token nor a known error."""

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.details = details
