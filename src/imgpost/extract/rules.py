"""Dispatch of ``json:`` / ``regex:`` extraction rules."""

from __future__ import annotations

from imgpost.errors import ErrorCode, ImgpostExtractError, ImgpostRuleError
from imgpost.observability import get_logger

from .jsonpath import extract_json_path
from .urlscan import extract_url_scan

log = get_logger("imgpost.extract")

JSON_PREFIX = "json:"
REGEX_PREFIX = "regex:"


def extract_url(body: bytes, rule: str) -> str:
    """Pull the uploaded image URL out of a response *body*.

    Parameters
    ----------
    body:
        Raw response bytes.
    rule:
        ``json:<path>`` or ``regex:<pattern>``.

    Raises
    ------
    ImgpostRuleError
        If *rule* has neither prefix.
    ImgpostJSONPathError, ImgpostURLScanError
        If the rule does not yield a URL.
    ImgpostExtractError
        With code ``URL_NOT_FOUND`` if the rule yields an empty string.
    """
    if rule.startswith(JSON_PREFIX):
        url = extract_json_path(body, rule[len(JSON_PREFIX):])
    elif rule.startswith(REGEX_PREFIX):
        url = extract_url_scan(body, rule[len(REGEX_PREFIX):])
    else:
        raise ImgpostRuleError(
            message=(
                f"Invalid response path {rule!r}; "
                f"expected a {JSON_PREFIX!r} or {REGEX_PREFIX!r} prefix"
            ),
            context={"rule": rule},
        )
    if not url:
        raise ImgpostExtractError(
            code=ErrorCode.URL_NOT_FOUND,
            message="Extracted URL is empty",
            context={"rule": rule},
        )
    log.debug(
        "Extracted upload URL",
        extra={"extra_fields": {"op": "extract", "rule": rule, "url": url}},
    )
    return url
