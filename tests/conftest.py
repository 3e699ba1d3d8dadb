"""Shared test fixtures for the imgpost test suite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from imgpost.config import UploadConfig

PNG_HEADER = b"\x89PNG\r\n\x1a\n"
PNG_BYTES = PNG_HEADER + b"\x00\x00\x00\rIHDR" + b"\x00" * 64


@pytest.fixture
def config() -> UploadConfig:
    """Enabled configuration pointing at a dummy endpoint."""
    return UploadConfig(
        enabled=True,
        url="https://upload.example.com/api/image",
        headers=["Authorization: Client-ID test-client-1234"],
    )


@pytest.fixture
def png_bytes() -> bytes:
    """Contents of a minimal PNG-signed file."""
    return PNG_BYTES


@pytest.fixture
def png_file(tmp_path: Path) -> Path:
    """A small file with a valid PNG signature."""
    path = tmp_path / "photo.png"
    path.write_bytes(PNG_BYTES)
    return path


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Factory writing *data* to ``tmp_path / name``."""

    def _make(name: str, data: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _make
