"""Configuration parsing utilities for sfds-status.

Settings are resolved in this order:
* command line flags
* environment variables (`SFDS_SERVER_URL`, `SFDS_ADMIN_PASSWORD`,
  `SFDS_OUTPUT_FORMAT`, `SFDS_TIMEOUT`, `SFDS_INSECURE`)
* built-in defaults
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional
from urllib.parse import urlparse

from .constants import DEFAULT_SERVER_URL, DEFAULT_TIMEOUT_SECONDS
from .errors import InvalidFormatValueError, InvalidSettingError, MissingRequiredFieldError


class OutputFormat(Enum):
    """Supported report formats."""
    CONSOLE = "console"
    JSON = "json"
    CSV = "csv"

    @classmethod
    def parse(cls, value: str) -> "OutputFormat":
        """Parse a format name case-insensitively."""
        normalized = (value or "").strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        choices = ", ".join(member.value for member in cls)
        raise InvalidFormatValueError(f"Unsupported output format '{value}' (choose one of: {choices})")


def env_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class ProbeSettings:
    """Resolve environment-backed configuration for sfds-status."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = os.environ if environ is None else environ

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._environ.get(key, default)

    def server_url(self) -> str:
        return self.get("SFDS_SERVER_URL") or DEFAULT_SERVER_URL

    def password(self) -> Optional[str]:
        return self.get("SFDS_ADMIN_PASSWORD") or None

    def output_format(self) -> str:
        return self.get("SFDS_OUTPUT_FORMAT") or OutputFormat.CONSOLE.value

    def timeout(self) -> Optional[str]:
        return self.get("SFDS_TIMEOUT") or None

    def insecure(self) -> bool:
        return env_bool(self.get("SFDS_INSECURE"))

    def no_color(self) -> bool:
        # https://no-color.org: any non-empty value disables colour
        return bool(self.get("NO_COLOR"))


def read_password_file(path: str) -> str:
    """Return the first line of a password file, without its line ending."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidSettingError(f"Cannot read password file '{path}': {exc}") from exc
    lines = content.splitlines()
    return lines[0] if lines else ""


def validate_server_url(url: str) -> str:
    """Check that the URL has an http(s) scheme and a host; strip trailing slashes."""
    parsed = urlparse(url or "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidSettingError(
            f"Invalid server URL '{url}'. Expected something like {DEFAULT_SERVER_URL}"
        )
    return url.rstrip("/")


def parse_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidSettingError(f"Invalid timeout '{value}': must be a number of seconds") from exc
    if timeout <= 0:
        raise InvalidSettingError(f"Invalid timeout '{value}': must be greater than zero")
    return timeout


@dataclass(frozen=True)
class ServerConfig:
    """Immutable configuration for one probe run."""

    server_url: str
    password: str = field(repr=False)
    output_format: OutputFormat = OutputFormat.CONSOLE
    insecure: bool = False
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    parallel: bool = False
    color: Optional[bool] = None

    @classmethod
    def from_args(cls, args: Any, settings: Optional[ProbeSettings] = None) -> "ServerConfig":
        """Build a config from parsed CLI arguments, falling back to the environment."""
        settings = settings or ProbeSettings()

        password = getattr(args, "password", None)
        password_file = getattr(args, "password_file", None)
        if password is None and password_file:
            password = read_password_file(password_file)
        if password is None:
            password = settings.password()
        if not password:
            raise MissingRequiredFieldError(
                "An administrator password is required. Use --password, --password-file "
                "or the SFDS_ADMIN_PASSWORD environment variable."
            )

        server_url = validate_server_url(getattr(args, "server_url", None) or settings.server_url())
        output_format = OutputFormat.parse(getattr(args, "output_format", None) or settings.output_format())

        raw_timeout = getattr(args, "timeout", None)
        if raw_timeout is None:
            raw_timeout = settings.timeout()
        timeout = DEFAULT_TIMEOUT_SECONDS if raw_timeout is None else parse_timeout(raw_timeout)

        color = None
        if getattr(args, "no_color", False) or settings.no_color():
            color = False

        return cls(
            server_url=server_url,
            password=password,
            output_format=output_format,
            insecure=bool(getattr(args, "insecure", False)) or settings.insecure(),
            timeout=timeout,
            parallel=bool(getattr(args, "parallel", False)),
            color=color,
        )
