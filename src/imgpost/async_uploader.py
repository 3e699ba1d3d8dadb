"""Asynchronous upload pipeline.

:class:`AsyncUploader` mirrors :class:`~imgpost.uploader.Uploader` but
``upload`` is a coroutine: file reads run in the default executor and
the request goes through ``httpx.AsyncClient``.

Usage::

    import asyncio
    from imgpost import AsyncUploader, UploadConfig

    async def main():
        uploader = AsyncUploader(UploadConfig(enabled=True, url="https://0x0.st",
                                              response_path="regex:https?://[^\\s\"]+"))
        print(await uploader.upload("shot.png"))

    asyncio.run(main())
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable

import httpx

from imgpost.config import UploadConfig
from imgpost.errors import ImgpostError
from imgpost.extract import extract_url
from imgpost.image import admit
from imgpost.models import Fallback, UploadOutcome
from imgpost.uploader import _encode, _failure, _fallback, _metrics_for, _success, _unexpected
from imgpost.wire import AsyncUploadTransport


class AsyncUploader:
    """Asynchronous image uploader.

    Parameters
    ----------
    config:
        Host-owned configuration, read on every call.
    http_transport:
        Optional async ``httpx`` transport for each per-call client.
    clock:
        Monotonic clock used for the post-hoc timeout check.
    """

    def __init__(
        self,
        config: UploadConfig,
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._http_transport = http_transport
        self._clock = clock

    async def upload(self, path: str) -> UploadOutcome:
        """Upload the file at *path* and report the outcome.  Never raises."""
        config = self._config
        metrics = _metrics_for(config)

        loop = asyncio.get_running_loop()
        try:
            # File I/O in an executor to avoid blocking the event loop.
            admitted = await loop.run_in_executor(None, admit, path, config)
            if isinstance(admitted, Fallback):
                return _fallback(admitted, metrics)
            body = _encode(config, admitted, metrics)
            async with AsyncUploadTransport(
                config,
                http_transport=self._http_transport,
                clock=self._clock,
            ) as transport:
                response = await transport.post(body)
            url = extract_url(response, config.response_path)
        except ImgpostError as exc:
            return _failure(path, exc, metrics)
        except Exception as exc:
            return _unexpected(path, exc, metrics)

        return _success(path, url, metrics)
