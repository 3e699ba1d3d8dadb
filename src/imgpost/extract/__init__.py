"""Response extraction: turn an upload response into the image URL.

Exports
-------
extract_url
    Dispatch on the ``json:`` / ``regex:`` rule prefix.
extract_json_path
    Minimal dotted JSON-path evaluation.
extract_url_scan
    First-URL scan for the supported regex literals.
"""

from .jsonpath import extract_json_path
from .rules import extract_url
from .urlscan import SUPPORTED_PATTERNS, extract_url_scan, find_first_url

__all__ = [
    "SUPPORTED_PATTERNS",
    "extract_json_path",
    "extract_url",
    "extract_url_scan",
    "find_first_url",
]
