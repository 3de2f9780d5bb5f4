"""HTTP(S) transport for the dedicated server management API.

Every call is a single JSON POST to ``<server_url>/api/v1`` with a body of the
form ``{"function": <name>, "data": {...}}``. There is no retry logic; callers
receive either the parsed JSON body or a :class:`NetworkError` subclass.
"""

from __future__ import annotations

import http.client
import json
import socket
import ssl
import urllib.error
import urllib.request
from typing import Any, Dict, Optional

from ..common.config import ServerConfig
from ..common.constants import API_PATH, DEFAULT_TIMEOUT_SECONDS
from ..common.errors import (
    ApiConnectionError,
    ApiStatusError,
    ApiTimeoutError,
    MalformedResponseError,
)
from ..common.logging_config import get_logger

_log = get_logger(__name__)


def create_ssl_context(insecure: bool = False) -> ssl.SSLContext:
    """Build a TLS 1.2+ client context.

    With ``insecure`` set, certificate and hostname verification are disabled
    so self-signed or expired server certificates are accepted.
    """
    context = ssl.create_default_context()
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    if insecure:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def _decode_json(raw: bytes) -> Any:
    text = raw.decode("utf-8", errors="replace").strip()
    if not text:
        return {}
    return json.loads(text)


def _is_timeout(exc: BaseException) -> bool:
    return isinstance(exc, (socket.timeout, TimeoutError))


def _status_error(status: Optional[int], body: Any) -> ApiStatusError:
    error_code = None
    error_message = None
    if isinstance(body, dict):
        error_code = body.get("errorCode")
        error_message = body.get("errorMessage")
    if error_code:
        message = f"API error '{error_code}'"
        if error_message:
            message += f": {error_message}"
        if status is not None:
            message += f" (HTTP {status})"
    else:
        message = f"Unexpected HTTP status {status}"
    return ApiStatusError(message, status=status, error_code=error_code,
                          error_message=error_message, body=body)


def post_json(uri: str, body: Dict[str, Any], token: Optional[str] = None,
              context: Optional[ssl.SSLContext] = None,
              timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Any:
    """POST ``body`` as JSON to ``uri`` and return the decoded JSON response.

    Raises:
        ApiConnectionError: the endpoint could not be reached
        ApiTimeoutError: the call exceeded ``timeout``
        ApiStatusError: non-2xx status, or a 2xx body carrying ``errorCode``
        MalformedResponseError: the reply is not valid HTTP or its body is not JSON
    """
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"

    payload = json.dumps(body).encode("utf-8")
    request = urllib.request.Request(uri, data=payload, headers=headers, method="POST")

    try:
        with urllib.request.urlopen(request, timeout=timeout, context=context) as response:  # noqa: S310
            status = response.status
            raw = response.read()
    except urllib.error.HTTPError as exc:
        try:
            error_body = _decode_json(exc.read() or b"")
        except (ValueError, OSError, http.client.HTTPException):
            error_body = None
        raise _status_error(exc.code, error_body) from exc
    except urllib.error.URLError as exc:
        if _is_timeout(exc.reason):
            raise ApiTimeoutError(f"Request to {uri} timed out after {timeout:g}s") from exc
        raise ApiConnectionError(f"Could not connect to {uri}: {exc.reason}") from exc
    except (socket.timeout, TimeoutError) as exc:
        raise ApiTimeoutError(f"Request to {uri} timed out after {timeout:g}s") from exc
    except OSError as exc:
        raise ApiConnectionError(f"Could not connect to {uri}: {exc}") from exc
    except http.client.HTTPException as exc:
        raise MalformedResponseError(f"Invalid HTTP response from {uri}: {exc!r}") from exc

    try:
        data = _decode_json(raw)
    except ValueError as exc:
        raise MalformedResponseError(f"Response from {uri} is not valid JSON: {exc}") from exc

    if isinstance(data, dict) and data.get("errorCode"):
        raise _status_error(status, data)
    return data


class ApiTransport:
    """Bound transport for one management API endpoint."""

    def __init__(self, server_url: str, insecure: bool = False,
                 timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.server_url = server_url.rstrip("/")
        self.uri = f"{self.server_url}{API_PATH}"
        self.timeout = timeout
        self.insecure = insecure
        self._context = create_ssl_context(insecure) if self.uri.startswith("https://") else None

    @classmethod
    def from_config(cls, config: ServerConfig) -> "ApiTransport":
        if config.insecure:
            _log.warning(
                "TLS certificate verification is DISABLED (--insecure); "
                "any certificate presented by %s will be accepted",
                config.server_url,
            )
        return cls(config.server_url, insecure=config.insecure, timeout=config.timeout)

    def call(self, function: str, data: Optional[Dict[str, Any]] = None,
             token: Optional[str] = None) -> Any:
        """Invoke an API function and return the parsed response body."""
        _log.debug("Calling %s at %s", function, self.uri)
        body = {"function": function, "data": data or {}}
        return post_json(self.uri, body, token=token, context=self._context, timeout=self.timeout)


__all__ = ["ApiTransport", "create_ssl_context", "post_json"]
