"""Public data models for the imgpost upload pipeline.

This module contains the outcome union returned by every upload call,
the enums used to classify files and pick wire formats, and the small
intermediate records passed between pipeline stages.  All types are
plain dataclasses with no behaviour beyond what is needed for
structural equality.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class FileType(str, Enum):
    """Image kinds recognised by the admission check."""

    PNG = "png"
    JPEG = "jpeg"
    GIF = "gif"
    WEBP = "webp"
    BMP = "bmp"
    TIFF = "tiff"
    ICO = "ico"
    AVIF = "avif"
    HEIC = "heic"
    SVG = "svg"

    UNKNOWN = "unknown"
    """Neither the content sniff nor the extension identified an image."""


class WireFormat(str, Enum):
    """How file bytes are packaged in the HTTP request body."""

    MULTIPART = "multipart"
    """Single-part ``multipart/form-data`` payload."""

    JSON = "json"
    """``{"<field>": "<base64>"}`` object."""

    BINARY = "binary"
    """Raw file bytes."""


class SkipReason(str, Enum):
    """Why an upload was skipped in favour of the local path."""

    DISABLED = "disabled"
    UNCONFIGURED = "unconfigured"
    UNREADABLE = "unreadable"
    TOO_LARGE = "too_large"
    UNRECOGNIZED_TYPE = "unrecognized_type"


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Success:
    """The file was uploaded and a URL was extracted from the response.

    Attributes
    ----------
    url:
        The public URL of the uploaded image.  Never empty.
    """

    url: str


@dataclass(frozen=True)
class Failure:
    """The upload was attempted and definitively failed.

    Attributes
    ----------
    message:
        Human-readable description including the underlying cause.
        Suitable for showing to the user.
    code:
        Machine-readable :class:`~imgpost.errors.ErrorCode` value.
    """

    message: str
    code: str = ""


@dataclass(frozen=True)
class Fallback:
    """The upload was not attempted; the caller should use the local path.

    Attributes
    ----------
    reason:
        Which benign condition caused the skip.
    """

    reason: SkipReason


UploadOutcome = Union[Success, Failure, Fallback]
"""Result of one :meth:`Uploader.upload` call.  Exactly one case."""


# ---------------------------------------------------------------------------
# Pipeline records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AdmittedFile:
    """A file that passed the admission check, with its contents loaded.

    Attributes
    ----------
    path:
        The path as given by the caller.
    filename:
        Last path component, used as the multipart filename.
    file_type:
        The detected image kind (never ``UNKNOWN``).
    data:
        The full file contents.
    """

    path: str
    filename: str
    file_type: FileType
    data: bytes


@dataclass(frozen=True)
class EncodedBody:
    """A request body ready to be sent.

    Attributes
    ----------
    content:
        The exact bytes to POST.
    content_type:
        Value for the ``Content-Type`` header.
    """

    content: bytes
    content_type: str
