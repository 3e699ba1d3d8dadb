"""Sync and async HTTP transports for image uploads.

Each transport performs exactly one POST per call:

1. Validate the configured endpoint URL.
2. Attach ``Content-Type`` from the encoder, the configured static
   headers, and an explicit ``Content-Length``.
3. Record the deadline (start + ``timeout_seconds``) and send.
4. Drain the response body, refusing anything over 1 MiB.
5. Compare the clock against the deadline.  A late response is a
   timeout even though it arrived; the request is never cancelled
   mid-flight.
6. On ``2xx`` -- return the raw body bytes.
7. On anything else -- raise :class:`ImgpostHTTPStatusError`.

No retries and no redirect following.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from typing import Any

import httpx

from imgpost.config import UploadConfig
from imgpost.errors import (
    ErrorCode,
    ImgpostHTTPStatusError,
    ImgpostTimeoutError,
    ImgpostTransportError,
)
from imgpost.models import EncodedBody
from imgpost.observability import NoopMetricsHook, get_logger
from imgpost.utils.redact import redact_headers

from .headers import parse_headers

log = get_logger("imgpost.transport")

MAX_RESPONSE_BYTES = 1024 * 1024
"""Largest response body accepted from the upload endpoint."""

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def parse_endpoint(url: str | None) -> httpx.URL:
    """Parse the configured endpoint into an absolute ``http(s)`` URL.

    Raises
    ------
    ImgpostTransportError
        With code ``INVALID_URL`` if *url* is missing, unparsable, not
        ``http``/``https``, or has no host.
    """
    if not url:
        raise ImgpostTransportError(
            message="No upload URL configured",
            code=ErrorCode.INVALID_URL,
            context={"url": url},
        )
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise ImgpostTransportError(
            message=f"Invalid upload URL {url!r}: {exc}",
            code=ErrorCode.INVALID_URL,
            context={"url": url},
            cause=exc,
        ) from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ImgpostTransportError(
            message=f"Invalid upload URL {url!r}: expected an absolute http(s) URL",
            code=ErrorCode.INVALID_URL,
            context={"url": url},
        )
    return parsed


def build_request_headers(
    body: EncodedBody,
    header_lines: Iterable[str],
) -> list[tuple[str, str]]:
    """Assemble the ordered header list for an upload request.

    A configured ``Content-Length`` is dropped; the computed body length
    always wins.
    """
    headers: list[tuple[str, str]] = [("Content-Type", body.content_type)]
    for name, value in parse_headers(header_lines):
        if name.lower() == "content-length":
            continue
        headers.append((name, value))
    headers.append(("Content-Length", str(len(body.content))))
    return headers


def _too_large(url: httpx.URL) -> ImgpostTransportError:
    return ImgpostTransportError(
        message=f"Response from {url} exceeds {MAX_RESPONSE_BYTES} bytes",
        code=ErrorCode.RESPONSE_TOO_LARGE,
        context={"url": str(url), "limit_bytes": MAX_RESPONSE_BYTES},
    )


def _network_error(url: httpx.URL, exc: Exception) -> ImgpostTransportError:
    log.error(
        "Upload request failed",
        extra={
            "extra_fields": {
                "op": "post",
                "url": str(url),
                "error": str(exc) or type(exc).__name__,
            }
        },
    )
    return ImgpostTransportError(
        message=f"Request to {url} failed: {str(exc) or type(exc).__name__}",
        code=ErrorCode.TRANSPORT_ERROR,
        context={"url": str(url)},
        cause=exc,
    )


def _check_response(
    config: UploadConfig,
    metrics: Any,
    url: httpx.URL,
    response: httpx.Response,
    content: bytes,
    started: float,
    finished: float,
) -> bytes:
    """Apply the deadline and status checks to a fully received response."""
    elapsed = finished - started
    metrics.timing(
        "imgpost.request_duration_ms",
        elapsed * 1000,
        tags={"status": str(response.status_code)},
    )

    timeout = config.timeout_seconds
    if finished > started + timeout:
        log.error(
            "Upload exceeded timeout",
            extra={
                "extra_fields": {
                    "op": "post",
                    "url": str(url),
                    "timeout_seconds": timeout,
                    "elapsed_seconds": round(elapsed, 3),
                }
            },
        )
        raise ImgpostTimeoutError(
            message=f"Upload exceeded timeout of {timeout}s (took {elapsed:.1f}s)",
            context={"timeout_seconds": timeout, "elapsed_seconds": elapsed},
        )

    status = response.status_code
    if not 200 <= status < 300:
        snippet = content[:200].decode("utf-8", errors="replace")
        log.error(
            "Upload endpoint returned an error status",
            extra={
                "extra_fields": {
                    "op": "post",
                    "url": str(url),
                    "status_code": status,
                    "body": snippet,
                }
            },
        )
        raise ImgpostHTTPStatusError(
            message=f"HTTP {status} {response.reason_phrase} from {url}".rstrip(),
            context={"url": str(url), "status_code": status, "body": snippet},
        )

    log.debug(
        "Upload response received",
        extra={
            "extra_fields": {
                "op": "post",
                "url": str(url),
                "status_code": status,
                "response_bytes": len(content),
            }
        },
    )
    return content


def _log_request(url: httpx.URL, headers: list[tuple[str, str]], size: int) -> None:
    log.debug(
        "Sending upload request",
        extra={
            "extra_fields": {
                "op": "post",
                "url": str(url),
                "headers": redact_headers(headers),
                "body_bytes": size,
            }
        },
    )


# ---------------------------------------------------------------------------
# Sync transport
# ---------------------------------------------------------------------------

class UploadTransport:
    """Synchronous single-shot upload transport.

    Parameters
    ----------
    config:
        The upload configuration (endpoint, headers, timeout, metrics).
    http_transport:
        Optional ``httpx`` transport, e.g. :class:`httpx.MockTransport`
        in tests.  Defaults to a real network transport.
    clock:
        Monotonic clock used for the deadline check.
    """

    def __init__(
        self,
        config: UploadConfig,
        *,
        http_transport: httpx.BaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._clock = clock
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        # The deadline is checked after the fact, so httpx never times out.
        self._client = httpx.Client(
            timeout=httpx.Timeout(None),
            transport=http_transport,
        )

    def post(self, body: EncodedBody) -> bytes:
        """POST *body* to the configured endpoint and return the response bytes.

        Raises
        ------
        ImgpostTransportError
            Invalid URL, network failure, or an oversized response.
        ImgpostTimeoutError
            The response completed after the deadline.
        ImgpostHTTPStatusError
            Non-2xx status.
        """
        url = parse_endpoint(self._config.url)
        headers = build_request_headers(body, self._config.headers)
        _log_request(url, headers, len(body.content))

        started = self._clock()
        try:
            with self._client.stream(
                "POST", url, content=body.content, headers=headers,
            ) as response:
                buf = bytearray()
                for chunk in response.iter_bytes():
                    buf += chunk
                    if len(buf) > MAX_RESPONSE_BYTES:
                        raise _too_large(url)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
            raise _network_error(url, exc) from exc
        finished = self._clock()

        return _check_response(
            self._config, self._metrics, url, response, bytes(buf), started, finished,
        )

    def close(self) -> None:
        """Close the underlying HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> UploadTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------

class AsyncUploadTransport:
    """Asynchronous single-shot upload transport.

    Mirrors :class:`UploadTransport` but uses ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        config: UploadConfig,
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._clock = clock
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(None),
            transport=http_transport,
        )

    async def post(self, body: EncodedBody) -> bytes:
        """POST *body* to the configured endpoint (async).

        See :meth:`UploadTransport.post`; the semantics are identical.
        """
        url = parse_endpoint(self._config.url)
        headers = build_request_headers(body, self._config.headers)
        _log_request(url, headers, len(body.content))

        started = self._clock()
        try:
            async with self._client.stream(
                "POST", url, content=body.content, headers=headers,
            ) as response:
                buf = bytearray()
                async for chunk in response.aiter_bytes():
                    buf += chunk
                    if len(buf) > MAX_RESPONSE_BYTES:
                        raise _too_large(url)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
            raise _network_error(url, exc) from exc
        finished = self._clock()

        return _check_response(
            self._config, self._metrics, url, response, bytes(buf), started, finished,
        )

    async def close(self) -> None:
        """Close the underlying async HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncUploadTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
