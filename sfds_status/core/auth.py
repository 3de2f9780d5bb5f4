"""Password login against the management API."""

from __future__ import annotations

import json
from typing import Any

from ..common.constants import ADMIN_PRIVILEGE_LEVEL, ApiErrorCodes, ApiFunctions
from ..common.errors import ApiStatusError, UnexpectedAuthResponseError, WrongPasswordError
from ..common.logging_config import get_logger

_log = get_logger(__name__)


def _describe(body: Any) -> str:
    try:
        return json.dumps(body, sort_keys=True)
    except (TypeError, ValueError):
        return repr(body)


def authenticate(transport, password: str) -> str:
    """Exchange the administrator password for a bearer token.

    Raises:
        WrongPasswordError: the server reported ``wrong_password``
        UnexpectedAuthResponseError: any other error code or a response
            without a token; ``details`` holds the full response body
        NetworkError: the login request itself failed
    """
    payload = {
        "minimumPrivilegeLevel": ADMIN_PRIVILEGE_LEVEL,
        "password": password,
    }
    _log.info("Authenticating against %s", getattr(transport, "server_url", "server"))
    try:
        response = transport.call(ApiFunctions.PASSWORD_LOGIN, payload)
    except ApiStatusError as exc:
        if exc.error_code == ApiErrorCodes.WRONG_PASSWORD:
            raise WrongPasswordError("The server rejected the administrator password") from exc
        if exc.error_code:
            raise UnexpectedAuthResponseError(
                f"Login failed with error '{exc.error_code}': {_describe(exc.body)}",
                details=exc.body,
            ) from exc
        raise

    data = response.get("data") if isinstance(response, dict) else None
    token = data.get("authenticationToken") if isinstance(data, dict) else None
    if not token or not isinstance(token, str):
        raise UnexpectedAuthResponseError(
            f"Login response did not contain an authentication token: {_describe(response)}",
            details=response,
        )

    _log.info("Authenticated successfully")
    return token
