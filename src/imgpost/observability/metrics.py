"""Metrics hook protocol and no-op default implementation.

imgpost emits a handful of counters and timings around each upload.  By
default a :class:`NoopMetricsHook` is used; hosts can pass any object
satisfying :class:`MetricsHook` via ``UploadConfig.metrics`` to route
them to StatsD, Prometheus, or similar.

Emitted metric names:

* ``imgpost.uploads_total``        -- counter, tag ``outcome``
* ``imgpost.fallbacks_total``      -- counter, tag ``reason``
* ``imgpost.request_duration_ms``  -- timing, tag ``status``
* ``imgpost.request_bytes``        -- gauge, tag ``format``
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    All methods accept an optional *tags* dict of string keys and values.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge metric to an absolute value."""
        ...


class NoopMetricsHook:
    """Default metrics implementation that discards all data points."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
