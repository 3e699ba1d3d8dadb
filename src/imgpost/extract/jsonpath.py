"""Minimal JSON-path evaluator.

Supports only dotted paths such as ``$.data.link`` or ``$.images.0``:

* the path is split on ``.`` and empty segments are ignored;
* any segment starting with ``$`` refers to the root and is skipped;
* on an object a segment is a key, on an array a non-negative decimal
  index;
* the value at the end of the path must be a string.

Filters, wildcards, slices, bracket notation and recursive descent are
not supported.
"""

from __future__ import annotations

import json
import re
from typing import Any

from imgpost.errors import ErrorCode, ImgpostJSONPathError

_INDEX_RE = re.compile(r"[0-9]+")


def split_path(path: str) -> list[str]:
    """Split *path* into segments, dropping empties and ``$`` root markers."""
    return [seg for seg in path.split(".") if seg and not seg.startswith("$")]


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def evaluate(document: Any, path: str) -> str:
    """Walk *path* through an already-parsed JSON *document*.

    Raises
    ------
    ImgpostJSONPathError
        ``JSON_PATH_NOT_FOUND``, ``INVALID_ARRAY_INDEX``,
        ``ARRAY_INDEX_OUT_OF_BOUNDS``, ``INVALID_JSON_PATH`` or
        ``NOT_A_STRING``.
    """
    current = document
    for segment in split_path(path):
        if isinstance(current, dict):
            if segment not in current:
                raise ImgpostJSONPathError(
                    code=ErrorCode.JSON_PATH_NOT_FOUND,
                    message=f"JSON path segment not found: {segment!r}",
                    context={"path": path, "segment": segment},
                )
            current = current[segment]
        elif isinstance(current, list):
            if not _INDEX_RE.fullmatch(segment):
                raise ImgpostJSONPathError(
                    code=ErrorCode.INVALID_ARRAY_INDEX,
                    message=f"Invalid array index: {segment!r}",
                    context={"path": path, "segment": segment},
                )
            index = int(segment)
            if index >= len(current):
                raise ImgpostJSONPathError(
                    code=ErrorCode.ARRAY_INDEX_OUT_OF_BOUNDS,
                    message=f"Array index out of bounds: {index} (length {len(current)})",
                    context={"path": path, "segment": segment},
                )
            current = current[index]
        else:
            raise ImgpostJSONPathError(
                code=ErrorCode.INVALID_JSON_PATH,
                message=(
                    f"Cannot traverse into {_type_name(current)} value "
                    f"at segment {segment!r}"
                ),
                context={"path": path, "segment": segment, "value_type": _type_name(current)},
            )

    if not isinstance(current, str):
        raise ImgpostJSONPathError(
            code=ErrorCode.NOT_A_STRING,
            message=f"Final value is not a string (got {_type_name(current)})",
            context={"path": path, "value_type": _type_name(current)},
        )
    return current


def extract_json_path(body: bytes, path: str) -> str:
    """Parse *body* as JSON and return the string found at *path*.

    Raises
    ------
    ImgpostJSONPathError
        ``JSON_PARSE_ERROR`` if *body* is not valid JSON, otherwise any
        error raised by :func:`evaluate`.
    """
    try:
        document = json.loads(body)
    except ValueError as exc:
        raise ImgpostJSONPathError(
            code=ErrorCode.JSON_PARSE_ERROR,
            message=f"Response is not valid JSON: {exc}",
            context={"path": path},
            cause=exc,
        ) from exc
    return evaluate(document, path)
