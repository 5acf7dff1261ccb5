"""Validation of user-supplied URLs and time parameters."""

from __future__ import annotations

import re
from typing import Collection, Mapping, Pattern, Union
from urllib.parse import urlsplit

_LOCAL_HOSTS = ("localhost", "127.0.0.1")
_LOCAL_PREFIXES = ("192.168.", "10.", "172.16.")
_INJECTION_PATTERNS = ("$(", ")`")


class ValidationError(ValueError):
    """Raised when user input fails a safety check."""


def _scheme_allowed(scheme: str, allowed: Union[Mapping[str, bool], Collection[str]]) -> bool:
    if isinstance(allowed, Mapping):
        return bool(allowed.get(scheme))
    return scheme in allowed


def validate_url(
    input_url: str,
    allowed_schemes: Union[Mapping[str, bool], Collection[str]],
    dangerous_chars: Collection[str],
) -> str:
    """Check that a URL is safe to hand to a downloader; return its host name."""
    if not input_url:
        raise ValidationError("URL cannot be empty")

    if any(ord(ch) < 0x20 or ch == "\x7f" for ch in input_url):
        raise ValidationError("invalid URL format: invalid control character in URL")
    try:
        parts = urlsplit(input_url)
        hostname = parts.hostname or ""
    except ValueError as exc:
        raise ValidationError(f"invalid URL format: {exc}") from exc

    if not _scheme_allowed(parts.scheme, allowed_schemes):
        raise ValidationError(
            f"unsupported URL scheme: {parts.scheme} (only http/https allowed)"
        )

    if not hostname:
        raise ValidationError("URL must have a valid hostname")

    for dangerous in dangerous_chars:
        if dangerous in input_url:
            raise ValidationError(f"URL contains potentially dangerous character: {dangerous}")

    if any(pattern in input_url for pattern in _INJECTION_PATTERNS):
        raise ValidationError("URL contains command injection patterns")

    hostname = hostname.lower()
    if hostname in _LOCAL_HOSTS or hostname.startswith(_LOCAL_PREFIXES):
        raise ValidationError("access to local/internal networks is not allowed")

    return hostname


def validate_time_parameter(
    time_param: str,
    pattern: Union[str, Pattern[str]],
    dangerous_chars: Collection[str],
) -> str:
    """Check a start/end time such as ``90`` or ``1:30``; return it unchanged."""
    if not time_param:
        return time_param

    for dangerous in dangerous_chars:
        if dangerous in time_param:
            raise ValidationError(f"time parameter contains dangerous character: {dangerous}")

    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    if not regex.search(time_param):
        raise ValidationError("invalid time format. Use formats like: 90, 1:30, or 1:30:45")

    return time_param