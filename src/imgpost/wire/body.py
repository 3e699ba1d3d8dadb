"""Request-body encoders for the three wire formats.

Each encoder turns raw file bytes into an :class:`EncodedBody` holding
the exact bytes to POST and the matching ``Content-Type`` value.
"""

from __future__ import annotations

import base64
import json
from collections.abc import Callable

from imgpost.errors import ImgpostEncodeError
from imgpost.models import EncodedBody, WireFormat

MULTIPART_BOUNDARY = "----ImgpostUploadBoundary"


def encode_multipart(data: bytes, field: str, filename: str) -> EncodedBody:
    """Build a single-part ``multipart/form-data`` body.

    *field* and *filename* are embedded verbatim; a double quote in
    either one corrupts the part header.
    """
    head = (
        f"--{MULTIPART_BOUNDARY}\r\n"
        f'Content-Disposition: form-data; name="{field}"; filename="{filename}"\r\n'
        "Content-Type: application/octet-stream\r\n\r\n"
    ).encode("utf-8")
    tail = f"\r\n--{MULTIPART_BOUNDARY}--\r\n".encode("utf-8")
    return EncodedBody(
        content=head + data + tail,
        content_type=f"multipart/form-data; boundary={MULTIPART_BOUNDARY}",
    )


def encode_json(data: bytes, field: str, filename: str) -> EncodedBody:
    """Build ``{"<field>":"<base64>"}`` using the padded standard alphabet."""
    encoded = base64.b64encode(data).decode("ascii")
    body = json.dumps({field: encoded}, separators=(",", ":"))
    return EncodedBody(content=body.encode("utf-8"), content_type="application/json")


def encode_binary(data: bytes, field: str, filename: str) -> EncodedBody:
    """Send the file bytes unmodified."""
    return EncodedBody(content=data, content_type="application/octet-stream")


_ENCODERS: dict[WireFormat, Callable[[bytes, str, str], EncodedBody]] = {
    WireFormat.MULTIPART: encode_multipart,
    WireFormat.JSON: encode_json,
    WireFormat.BINARY: encode_binary,
}


def encode_body(
    wire_format: str,
    data: bytes,
    *,
    field: str,
    filename: str,
) -> EncodedBody:
    """Encode *data* for the configured *wire_format*.

    Parameters
    ----------
    wire_format:
        ``"multipart"``, ``"json"`` or ``"binary"`` (or a
        :class:`WireFormat` member).
    data:
        Raw file bytes.
    field:
        Form / JSON field name.  Ignored for ``binary``.
    filename:
        Multipart filename.  Only used by ``multipart``.

    Raises
    ------
    ImgpostEncodeError
        If *wire_format* is not a known format.
    """
    try:
        encoder = _ENCODERS[WireFormat(wire_format)]
    except ValueError:
        raise ImgpostEncodeError(
            message=f"Unsupported upload format {wire_format!r}",
            context={"format": wire_format},
        ) from None
    return encoder(data, field, filename)
