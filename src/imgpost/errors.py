"""Error hierarchy for the imgpost upload pipeline.

Every error class inherits from :class:`ImgpostError`.  Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

These errors never reach the caller of :meth:`Uploader.upload`; the
pipeline boundary converts them into a :class:`~imgpost.models.Failure`
outcome.  They are public so the individual stages (encoder, transport,
extractor) can be used and tested on their own.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable codes for every failure the pipeline can report."""

    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
    INVALID_URL = "INVALID_URL"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    HTTP_STATUS = "HTTP_STATUS"
    UPLOAD_TIMEOUT = "UPLOAD_TIMEOUT"
    RESPONSE_TOO_LARGE = "RESPONSE_TOO_LARGE"
    INVALID_RESPONSE_RULE = "INVALID_RESPONSE_RULE"
    JSON_PARSE_ERROR = "JSON_PARSE_ERROR"
    JSON_PATH_NOT_FOUND = "JSON_PATH_NOT_FOUND"
    INVALID_ARRAY_INDEX = "INVALID_ARRAY_INDEX"
    ARRAY_INDEX_OUT_OF_BOUNDS = "ARRAY_INDEX_OUT_OF_BOUNDS"
    INVALID_JSON_PATH = "INVALID_JSON_PATH"
    NOT_A_STRING = "NOT_A_STRING"
    UNSUPPORTED_REGEX_PATTERN = "UNSUPPORTED_REGEX_PATTERN"
    URL_NOT_FOUND = "URL_NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class ImgpostError(Exception):
    """Base exception for all imgpost errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Encoding errors
# ---------------------------------------------------------------------------

class ImgpostEncodeError(ImgpostError):
    """The configured wire format is not one of ``multipart``, ``json``,
    ``binary``.

    Context keys: ``format``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.UNSUPPORTED_FORMAT,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------

class ImgpostTransportError(ImgpostError):
    """The HTTP exchange itself failed.

    Used for malformed endpoint URLs (``INVALID_URL``), network-level
    failures such as DNS, connect, TLS or write errors
    (``TRANSPORT_ERROR``), and oversized responses
    (``RESPONSE_TOO_LARGE``).

    Context keys: ``url``, ``limit_bytes``.
    """

    def __init__(
        self,
        message: str,
        code: str = ErrorCode.TRANSPORT_ERROR,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class ImgpostHTTPStatusError(ImgpostError):
    """The endpoint answered with a non-2xx status.

    Context keys: ``url``, ``status_code``, ``body``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.HTTP_STATUS,
            message=message,
            context=context,
            cause=cause,
        )


class ImgpostTimeoutError(ImgpostError):
    """The response arrived after the configured deadline had passed.

    Context keys: ``timeout_seconds``, ``elapsed_seconds``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.UPLOAD_TIMEOUT,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Extraction errors
# ---------------------------------------------------------------------------

class ImgpostExtractError(ImgpostError):
    """Base class for errors raised while pulling the URL out of a
    response body.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class ImgpostRuleError(ImgpostExtractError):
    """The extraction rule has neither a ``json:`` nor a ``regex:`` prefix.

    Context keys: ``rule``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.INVALID_RESPONSE_RULE,
            message=message,
            context=context,
            cause=cause,
        )


class ImgpostJSONPathError(ImgpostExtractError):
    """JSON-path evaluation failed.

    ``code`` is one of ``JSON_PARSE_ERROR``, ``JSON_PATH_NOT_FOUND``,
    ``INVALID_ARRAY_INDEX``, ``ARRAY_INDEX_OUT_OF_BOUNDS``,
    ``INVALID_JSON_PATH`` or ``NOT_A_STRING``.

    Context keys: ``path``, ``segment``, ``value_type``.
    """


class ImgpostURLScanError(ImgpostExtractError):
    """URL-scan evaluation failed.

    ``code`` is ``UNSUPPORTED_REGEX_PATTERN`` or ``URL_NOT_FOUND``.

    Context keys: ``pattern``.
    """
