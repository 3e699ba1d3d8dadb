"""Parsing of configured ``"Name: Value"`` header strings."""

from __future__ import annotations

from collections.abc import Iterable


def parse_header_line(line: str) -> tuple[str, str] | None:
    """Split *line* on its first colon and strip both sides.

    Returns ``None`` when there is no colon or either side is empty
    after stripping, so user-edited lists can contain stray entries.
    """
    name, sep, value = line.partition(":")
    if not sep:
        return None
    name = name.strip()
    value = value.strip()
    if not name or not value:
        return None
    return name, value


def parse_headers(lines: Iterable[str]) -> list[tuple[str, str]]:
    """Parse configured header strings, preserving order and duplicates.

    Malformed entries are dropped silently.

    Examples
    --------
    >>> parse_headers(["Authorization: Client-ID abc", "broken", "X-Empty:"])
    [('Authorization', 'Client-ID abc')]
    """
    parsed: list[tuple[str, str]] = []
    for line in lines:
        header = parse_header_line(line)
        if header is not None:
            parsed.append(header)
    return parsed
