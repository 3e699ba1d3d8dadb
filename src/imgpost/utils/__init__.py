"""Utility helpers for imgpost."""

from .redact import redact_header_line, redact_headers

__all__ = [
    "redact_header_line",
    "redact_headers",
]
