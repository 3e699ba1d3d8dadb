"""Synchronous upload pipeline.

:class:`Uploader` runs one file through admission, body encoding, the
HTTP exchange and URL extraction, and always returns exactly one
:data:`~imgpost.models.UploadOutcome`:

* :class:`~imgpost.models.Success` -- the extracted URL;
* :class:`~imgpost.models.Failure` -- the attempt failed, with a message
  fit for a toast;
* :class:`~imgpost.models.Fallback` -- nothing was sent, use the local
  path.

Usage::

    from imgpost import UploadConfig, Uploader, Success

    config = UploadConfig(
        enabled=True,
        url="https://api.imgur.com/3/image",
        headers=["Authorization: Client-ID abc123"],
        response_path="json:$.data.link",
    )
    outcome = Uploader(config).upload("/tmp/screenshot.png")
    if isinstance(outcome, Success):
        print(outcome.url)
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

import httpx

from imgpost.config import UploadConfig
from imgpost.errors import ErrorCode, ImgpostError, ImgpostExtractError
from imgpost.extract import extract_url
from imgpost.image import admit
from imgpost.models import (
    AdmittedFile,
    EncodedBody,
    Failure,
    Fallback,
    Success,
    UploadOutcome,
)
from imgpost.observability import NoopMetricsHook, get_logger
from imgpost.wire import UploadTransport, encode_body

log = get_logger("imgpost.uploader")


# ---------------------------------------------------------------------------
# Shared outcome helpers (used by both sync and async uploaders)
# ---------------------------------------------------------------------------

def _metrics_for(config: UploadConfig) -> Any:
    return config.metrics if config.metrics is not None else NoopMetricsHook()


def _encode(config: UploadConfig, admitted: AdmittedFile, metrics: Any) -> EncodedBody:
    body = encode_body(
        config.format,
        admitted.data,
        field=config.field,
        filename=admitted.filename,
    )
    metrics.gauge(
        "imgpost.request_bytes",
        len(body.content),
        tags={"format": getattr(config.format, "value", config.format)},
    )
    return body


def _fallback(outcome: Fallback, metrics: Any) -> Fallback:
    metrics.increment("imgpost.fallbacks_total", tags={"reason": outcome.reason.value})
    metrics.increment("imgpost.uploads_total", tags={"outcome": "fallback"})
    return outcome


def _failure(path: str, exc: ImgpostError, metrics: Any) -> Failure:
    stage = "failed to parse response" if isinstance(exc, ImgpostExtractError) else "upload failed"
    message = f"{stage}: {exc.message}"
    code = exc.code.value if isinstance(exc.code, ErrorCode) else exc.code
    log.error(
        message,
        extra={
            "extra_fields": {
                "op": "upload",
                "path": path,
                "code": code,
                "context": exc.context,
            }
        },
    )
    metrics.increment("imgpost.uploads_total", tags={"outcome": "failure"})
    return Failure(message=message, code=code)


def _unexpected(path: str, exc: Exception, metrics: Any) -> Failure:
    log.exception(
        "Unexpected error during upload",
        extra={"extra_fields": {"op": "upload", "path": path}},
    )
    metrics.increment("imgpost.uploads_total", tags={"outcome": "failure"})
    return Failure(
        message=f"upload failed: {type(exc).__name__}: {exc}",
        code=ErrorCode.INTERNAL_ERROR.value,
    )


def _success(path: str, url: str, metrics: Any) -> Success:
    log.info(
        "Image uploaded",
        extra={"extra_fields": {"op": "upload", "path": path, "url": url}},
    )
    metrics.increment("imgpost.uploads_total", tags={"outcome": "success"})
    return Success(url)


# ---------------------------------------------------------------------------
# Sync uploader
# ---------------------------------------------------------------------------

class Uploader:
    """Upload image files to the endpoint described by *config*.

    The uploader holds no per-call state; one instance may be reused
    for any number of files.  Each call opens and closes its own file
    handle and HTTP client.

    Parameters
    ----------
    config:
        Host-owned configuration, read on every call.
    http_transport:
        Optional ``httpx`` transport handed to each per-call client,
        e.g. :class:`httpx.MockTransport` in tests.
    clock:
        Monotonic clock used for the post-hoc timeout check.
    """

    def __init__(
        self,
        config: UploadConfig,
        *,
        http_transport: httpx.BaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._http_transport = http_transport
        self._clock = clock

    def upload(self, path: str) -> UploadOutcome:
        """Upload the file at *path* and report the outcome.

        Never raises.  See the module docstring for the three cases.
        """
        config = self._config
        metrics = _metrics_for(config)

        try:
            admitted = admit(path, config)
            if isinstance(admitted, Fallback):
                return _fallback(admitted, metrics)
            body = _encode(config, admitted, metrics)
            with UploadTransport(
                config,
                http_transport=self._http_transport,
                clock=self._clock,
            ) as transport:
                response = transport.post(body)
            url = extract_url(response, config.response_path)
        except ImgpostError as exc:
            return _failure(path, exc, metrics)
        except Exception as exc:
            return _unexpected(path, exc, metrics)

        return _success(path, url, metrics)


def upload(path: str, config: UploadConfig) -> UploadOutcome:
    """Upload *path* with a one-off :class:`Uploader` built from *config*."""
    return Uploader(config).upload(path)
