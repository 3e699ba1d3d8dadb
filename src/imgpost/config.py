"""Upload configuration for imgpost.

:class:`UploadConfig` is a plain dataclass capturing every knob the host
application exposes for image uploads.  Instances are owned by the host
and passed to :class:`~imgpost.uploader.Uploader` (or
:func:`~imgpost.uploader.upload`); the pipeline only ever reads them.

The host's option names (``upload-enable``, ``upload-url``, ...) map onto
dataclass fields through :meth:`UploadConfig.from_options`.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from imgpost.utils.redact import redact_header_line

DEFAULT_RESPONSE_PATH = "json:$.data.link"
"""Extraction rule used when none is configured (imgur-style responses)."""

# Host option name -> dataclass field name.
OPTION_FIELDS: dict[str, str] = {
    "upload-enable": "enabled",
    "upload-url": "url",
    "upload-max-size": "max_size_mib",
    "upload-format": "format",
    "upload-field": "field",
    "upload-header": "headers",
    "upload-timeout": "timeout_seconds",
    "upload-response-path": "response_path",
}


@dataclass
class UploadConfig:
    """Complete configuration for the upload pipeline.

    Every parameter has a default; with the defaults uploads are
    disabled, so every call returns a fallback.

    Parameters
    ----------
    enabled:
        Master on/off switch.
    url:
        Endpoint the image is POSTed to.  ``None`` disables uploads.
    max_size_mib:
        Files larger than ``max_size_mib * 1024 * 1024`` bytes are not
        uploaded.
    format:
        Request body encoding.

        * ``"multipart"``: single-part ``multipart/form-data``.
        * ``"json"``: ``{"<field>": "<base64>"}``.
        * ``"binary"``: raw bytes.

        Any other value makes every upload fail with
        ``UNSUPPORTED_FORMAT``.
    field:
        Form / JSON field name carrying the image.
    headers:
        Ordered ``"Name: Value"`` strings attached to the request.
        Malformed entries are skipped.
    timeout_seconds:
        Wall-clock budget for the request, checked once the response has
        been fully received.
    response_path:
        Extraction rule, ``json:<path>`` or ``regex:<pattern>``.
    metrics:
        Optional :class:`~imgpost.observability.MetricsHook`.
    """

    enabled: bool = False

    url: str | None = None

    max_size_mib: int = 10

    format: str = "multipart"

    field: str = "image"

    headers: list[str] = dataclasses.field(default_factory=list)

    timeout_seconds: int = 30

    response_path: str = DEFAULT_RESPONSE_PATH

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_size_mib <= 0:
            raise ValueError(f"max_size_mib must be > 0, got {self.max_size_mib}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")

    @property
    def max_size_bytes(self) -> int:
        """The admission size cap in bytes."""
        return self.max_size_mib * 1024 * 1024

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> UploadConfig:
        """Build a config from host option names.

        Parameters
        ----------
        options:
            Mapping keyed by ``upload-*`` option names.  Absent options
            keep their defaults.  ``upload-header`` may be a single
            string or a sequence of strings.

        Raises
        ------
        ValueError
            If a key is not a known option name, or a value fails
            validation.
        """
        kwargs: dict[str, Any] = {}
        for name, value in options.items():
            try:
                attr = OPTION_FIELDS[name]
            except KeyError:
                raise ValueError(f"Unknown upload option: {name!r}") from None
            if attr == "headers":
                value = [value] if isinstance(value, str) else list(value)
            kwargs[attr] = value
        return cls(**kwargs)

    def __repr__(self) -> str:
        """Mask header values to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "headers":
                masked = [redact_header_line(h) for h in val]
                parts.append(f"headers={masked!r}")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"UploadConfig({', '.join(parts)})"
