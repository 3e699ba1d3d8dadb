"""Admission check: decide whether a file is eligible for upload.

Every rejection here is benign.  The check never raises and never
produces a :class:`~imgpost.models.Failure`; callers get either an
:class:`~imgpost.models.AdmittedFile` with the contents loaded or a
:class:`~imgpost.models.Fallback` naming the reason.
"""

from __future__ import annotations

import logging
import os
from pathlib import PurePath

from imgpost.config import UploadConfig
from imgpost.image.detect import SNIFF_LENGTH, detect_file_type
from imgpost.models import AdmittedFile, Fallback, FileType, SkipReason
from imgpost.observability import get_logger

log = get_logger("imgpost.admission")


def _skip(
    reason: SkipReason,
    message: str,
    path: str,
    level: int = logging.INFO,
    **fields: object,
) -> Fallback:
    log.log(
        level,
        message,
        extra={
            "extra_fields": {
                "op": "admit",
                "path": path,
                "reason": reason.value,
                **fields,
            }
        },
    )
    return Fallback(reason)


def admit(path: str, config: UploadConfig) -> AdmittedFile | Fallback:
    """Run the admission check for *path*.

    Steps, in order:

    1. Uploads disabled or no endpoint configured.
    2. File cannot be opened.
    3. File larger than ``config.max_size_bytes``.
    4. Neither the first :data:`SNIFF_LENGTH` bytes nor the extension
       identify an image.
    5. Read the whole file from offset 0.

    Parameters
    ----------
    path:
        Path of the file the host wants to upload.
    config:
        The host's upload configuration.

    Returns
    -------
    AdmittedFile | Fallback
        The loaded file, or the reason it was skipped.
    """
    if not config.enabled:
        return _skip(SkipReason.DISABLED, "upload disabled", path)
    if not config.url:
        return _skip(SkipReason.UNCONFIGURED, "no upload url configured", path)

    try:
        fh = open(path, "rb")  # noqa: SIM115 - closed by the with-block below
    except (OSError, ValueError) as exc:
        return _skip(
            SkipReason.UNREADABLE, "failed to open file", path,
            logging.WARNING, error=str(exc),
        )

    with fh:
        try:
            size = os.fstat(fh.fileno()).st_size
            max_bytes = config.max_size_bytes
            if size > max_bytes:
                return _skip(
                    SkipReason.TOO_LARGE, "file exceeds max size, falling back", path,
                    logging.WARNING, size_bytes=size, max_bytes=max_bytes,
                )

            header = fh.read(SNIFF_LENGTH)
            file_type = detect_file_type(header, path)
            if file_type is FileType.UNKNOWN:
                return _skip(
                    SkipReason.UNRECOGNIZED_TYPE, "file is not a recognised image", path,
                )

            fh.seek(0)
            data = fh.read()
        except (OSError, ValueError) as exc:
            return _skip(
                SkipReason.UNREADABLE, "failed to read file", path,
                logging.WARNING, error=str(exc),
            )

    return AdmittedFile(
        path=path,
        filename=PurePath(path).name,
        file_type=file_type,
        data=data,
    )
