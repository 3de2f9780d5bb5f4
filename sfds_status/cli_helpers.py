"""Shared CLI helpers for sfds-status."""

import sys

from sfds_status.common.errors import (
    ApiConnectionError,
    ApiStatusError,
    ApiTimeoutError,
    ConfigError,
    MalformedResponseError,
    UnexpectedAuthResponseError,
    WrongPasswordError,
)


def exit_with_error(message: str, exit_code: int) -> None:
    """Print an error message and exit with the specified code."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(exit_code)


def describe_error(exc: Exception) -> str:
    """Build the user-facing message for a failed probe."""
    if isinstance(exc, WrongPasswordError):
        return "Authentication failed (wrong administrator password)."
    if isinstance(exc, UnexpectedAuthResponseError):
        return f"Authentication failed with an unexpected response: {exc}"
    if isinstance(exc, ApiTimeoutError):
        return f"API request timed out: {exc}"
    if isinstance(exc, ApiConnectionError):
        return f"Failed to connect to the server API: {exc}"
    if isinstance(exc, ApiStatusError):
        return f"The server API rejected the request: {exc}"
    if isinstance(exc, MalformedResponseError):
        return f"Malformed API response: {exc}"
    if isinstance(exc, ConfigError):
        return f"Invalid configuration: {exc}"
    return f"Status probe failed: {exc}"
