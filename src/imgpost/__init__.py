"""imgpost: opportunistic image upload for terminal and desktop apps.

Public re-exports
-----------------

* **Uploaders:** :class:`Uploader`, :class:`AsyncUploader`, :func:`upload`
* **Configuration:** :class:`UploadConfig`
* **Outcomes:** :class:`Success`, :class:`Failure`, :class:`Fallback`
* **Errors:** Every :class:`ImgpostError` subclass and :class:`ErrorCode`
* **Models:** :class:`FileType`, :class:`WireFormat`, :class:`SkipReason`

Usage::

    from imgpost import Fallback, Success, UploadConfig, upload

    config = UploadConfig(enabled=True, url="https://example.com/upload")
    outcome = upload("/tmp/drop.png", config)
    match outcome:
        case Success(url=url):
            insert(url)
        case Fallback():
            insert("/tmp/drop.png")
        case _:
            toast(outcome.message)
"""

from __future__ import annotations

# ── Uploaders ──────────────────────────────────────────────────────────
from imgpost.async_uploader import AsyncUploader

# ── Configuration ───────────────────────────────────────────────────────
from imgpost.config import DEFAULT_RESPONSE_PATH, UploadConfig

# ── Errors ──────────────────────────────────────────────────────────────
from imgpost.errors import (
    ErrorCode,
    ImgpostEncodeError,
    ImgpostError,
    ImgpostExtractError,
    ImgpostHTTPStatusError,
    ImgpostJSONPathError,
    ImgpostRuleError,
    ImgpostTimeoutError,
    ImgpostTransportError,
    ImgpostURLScanError,
)

# ── Models ──────────────────────────────────────────────────────────────
from imgpost.models import (
    AdmittedFile,
    EncodedBody,
    Failure,
    Fallback,
    FileType,
    SkipReason,
    Success,
    UploadOutcome,
    WireFormat,
)
from imgpost.uploader import Uploader, upload

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Uploaders
    "Uploader",
    "AsyncUploader",
    "upload",
    # Configuration
    "UploadConfig",
    "DEFAULT_RESPONSE_PATH",
    # Error base + code enum
    "ImgpostError",
    "ErrorCode",
    # Stage errors
    "ImgpostEncodeError",
    "ImgpostTransportError",
    "ImgpostHTTPStatusError",
    "ImgpostTimeoutError",
    "ImgpostExtractError",
    "ImgpostRuleError",
    "ImgpostJSONPathError",
    "ImgpostURLScanError",
    # Outcomes
    "Success",
    "Failure",
    "Fallback",
    "UploadOutcome",
    # Models
    "FileType",
    "WireFormat",
    "SkipReason",
    "AdmittedFile",
    "EncodedBody",
]
