"""URL scanner standing in for a small set of regex patterns.

This is not a regular-expression engine.  Only the three pattern
literals in :data:`SUPPORTED_PATTERNS` are accepted, and all of them
mean "the first absolute URL in the text".  Any other pattern is
rejected rather than approximated.
"""

from __future__ import annotations

from imgpost.errors import ErrorCode, ImgpostURLScanError

SUPPORTED_PATTERNS: frozenset[str] = frozenset({
    r'https?://[^\s"]+',
    "http://.*",
    "https://.*",
})

_SCHEMES = ("http://", "https://")

# Characters that end a scanned URL.
_TERMINATORS = frozenset(" \t\n\r\"'<>")


def find_first_url(text: str) -> str | None:
    """Return the first ``http://`` / ``https://`` URL in *text*, or ``None``.

    The match runs from the scheme up to the first whitespace, quote,
    angle bracket, or the end of the text.
    """
    positions = [pos for pos in (text.find(s) for s in _SCHEMES) if pos >= 0]
    if not positions:
        return None
    start = min(positions)
    end = start
    while end < len(text) and text[end] not in _TERMINATORS:
        end += 1
    return text[start:end]


def extract_url_scan(body: bytes, pattern: str) -> str:
    """Extract a URL from *body* using one of the supported patterns.

    Raises
    ------
    ImgpostURLScanError
        ``UNSUPPORTED_REGEX_PATTERN`` for any other *pattern*, or
        ``URL_NOT_FOUND`` when the text holds no URL.
    """
    if pattern not in SUPPORTED_PATTERNS:
        raise ImgpostURLScanError(
            code=ErrorCode.UNSUPPORTED_REGEX_PATTERN,
            message=(
                f"Unsupported regex pattern {pattern!r}; expected one of "
                f"{', '.join(sorted(SUPPORTED_PATTERNS))}"
            ),
            context={"pattern": pattern},
        )
    url = find_first_url(body.decode("utf-8", errors="replace"))
    if url is None:
        raise ImgpostURLScanError(
            code=ErrorCode.URL_NOT_FOUND,
            message="No URL found in response",
            context={"pattern": pattern},
        )
    return url
