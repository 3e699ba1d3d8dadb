"""Image file-type detection.

Classifies a file as one of the :class:`FileType` image kinds, first by
sniffing a short byte prefix and then, when the sniff is inconclusive,
by the filename extension.
"""

from __future__ import annotations

from pathlib import PurePath

from imgpost.models import FileType

SNIFF_LENGTH = 16
"""Number of leading bytes the admission check reads for sniffing."""

# Magic-byte prefixes, checked in order.
_MAGIC_BYTES: list[tuple[bytes, FileType]] = [
    (b"\x89PNG\r\n\x1a\n", FileType.PNG),
    (b"\xff\xd8\xff", FileType.JPEG),
    (b"GIF87a", FileType.GIF),
    (b"GIF89a", FileType.GIF),
    (b"RIFF", FileType.WEBP),  # RIFF....WEBP (check further)
    (b"II*\x00", FileType.TIFF),
    (b"MM\x00*", FileType.TIFF),
    (b"\x00\x00\x01\x00", FileType.ICO),
    (b"<svg", FileType.SVG),
    (b"BM", FileType.BMP),
]

# ISO-BMFF brands found at offset 8 after an ``ftyp`` box header.
_FTYP_BRANDS: dict[bytes, FileType] = {
    b"avif": FileType.AVIF,
    b"avis": FileType.AVIF,
    b"heic": FileType.HEIC,
    b"heix": FileType.HEIC,
    b"hevc": FileType.HEIC,
    b"mif1": FileType.HEIC,
    b"msf1": FileType.HEIC,
}

_EXTENSIONS: dict[str, FileType] = {
    ".png": FileType.PNG,
    ".jpg": FileType.JPEG,
    ".jpeg": FileType.JPEG,
    ".jpe": FileType.JPEG,
    ".gif": FileType.GIF,
    ".webp": FileType.WEBP,
    ".bmp": FileType.BMP,
    ".tif": FileType.TIFF,
    ".tiff": FileType.TIFF,
    ".ico": FileType.ICO,
    ".avif": FileType.AVIF,
    ".heic": FileType.HEIC,
    ".heif": FileType.HEIC,
    ".svg": FileType.SVG,
}


def sniff_file_type(header: bytes) -> FileType:
    """Detect the image kind from the first bytes of a file.

    Parameters
    ----------
    header:
        Leading bytes of the file; :data:`SNIFF_LENGTH` bytes are enough.

    Returns
    -------
    FileType
        The detected kind, or ``FileType.UNKNOWN``.
    """
    if len(header) >= 12 and header[4:8] == b"ftyp":
        brand = _FTYP_BRANDS.get(header[8:12])
        if brand is not None:
            return brand

    for magic, file_type in _MAGIC_BYTES:
        if header[:len(magic)] == magic:
            # Extra check for WEBP: RIFF....WEBP
            if magic == b"RIFF" and header[8:12] != b"WEBP":
                continue
            return file_type
    return FileType.UNKNOWN


def guess_file_type(path: str) -> FileType:
    """Guess the image kind from the extension of *path* (case-insensitive)."""
    suffix = PurePath(path).suffix.lower()
    return _EXTENSIONS.get(suffix, FileType.UNKNOWN)


def detect_file_type(header: bytes, path: str) -> FileType:
    """Sniff *header*, falling back to the extension of *path*."""
    file_type = sniff_file_type(header)
    if file_type is FileType.UNKNOWN:
        file_type = guess_file_type(path)
    return file_type
