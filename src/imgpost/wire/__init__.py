"""Request encoding and the HTTP exchange with the upload endpoint."""

from .body import MULTIPART_BOUNDARY, encode_body
from .headers import parse_headers
from .transport import (
    MAX_RESPONSE_BYTES,
    AsyncUploadTransport,
    UploadTransport,
    build_request_headers,
    parse_endpoint,
)

__all__ = [
    "MAX_RESPONSE_BYTES",
    "MULTIPART_BOUNDARY",
    "AsyncUploadTransport",
    "UploadTransport",
    "build_request_headers",
    "encode_body",
    "parse_endpoint",
    "parse_headers",
]
