"""Header redaction for safe logging.

Configured upload headers routinely carry credentials (``Authorization:
Client-ID ...``, ``X-API-Key: ...``).  Before any header is written to a
log record or a ``repr`` the helpers in this module must be applied:

* Values of headers whose **name** looks sensitive are replaced with a
  masked placeholder showing only the last four characters.
* Any remaining ``Bearer <token>`` pattern is masked as well.
* Header names are never altered.
"""

from __future__ import annotations

import re

# Substrings: if any of these appear in a header name (case-insensitive),
# the value is redacted.
_SENSITIVE_KEY_PATTERNS: frozenset[str] = frozenset({
    "token",
    "secret",
    "password",
    "credential",
    "cookie",
    "auth",
    "api_key",
    "api-key",
    "apikey",
})

_BEARER_RE = re.compile(r"(Bearer\s+)\S+", re.IGNORECASE)


def _is_sensitive(name: str) -> bool:
    lowered = name.lower()
    return any(pat in lowered for pat in _SENSITIVE_KEY_PATTERNS)


def _mask(value: str) -> str:
    """Replace *value* with a placeholder keeping only its last 4 chars."""
    if len(value) <= 8:
        return "<redacted>"
    return f"<redacted:...{value[-4:]}>"


def redact_header_value(name: str, value: str) -> str:
    """Return *value* masked if *name* is a sensitive header."""
    if _is_sensitive(name):
        return _mask(value)
    return _BEARER_RE.sub(lambda m: f"{m.group(1)}<redacted>", value)


def redact_headers(headers: list[tuple[str, str]]) -> dict[str, str]:
    """Return a new dict of *headers* with sensitive values masked.

    Duplicate names collapse to the last value, which is fine for log
    output.  The input list is never mutated.

    Examples
    --------
    >>> redact_headers([("Authorization", "Client-ID abcdef123456")])
    {'Authorization': '<redacted:...3456>'}
    """
    return {name: redact_header_value(name, value) for name, value in headers}


def redact_header_line(line: str) -> str:
    """Redact a raw ``"Name: Value"`` configuration string.

    Lines without a colon are returned unchanged.
    """
    name, sep, value = line.partition(":")
    if not sep:
        return line
    return f"{name}: {redact_header_value(name.strip(), value.strip())}"
