"""Image admission: file-type detection and the eligibility gate.

Exports
-------
admit
    Decide whether a file is uploaded and load its contents.
detect_file_type
    Sniff a byte prefix, falling back to the extension.
sniff_file_type / guess_file_type
    The two halves of :func:`detect_file_type`.
"""

from .admission import admit
from .detect import SNIFF_LENGTH, detect_file_type, guess_file_type, sniff_file_type

__all__ = [
    "SNIFF_LENGTH",
    "admit",
    "detect_file_type",
    "guess_file_type",
    "sniff_file_type",
]
