"""Tiny helpers shared across test modules."""

from __future__ import annotations

import io
from pathlib import Path

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def write_temp_image(directory: Path, name: str = "avatar.png") -> str:
    """Write a small fake image and return its path as a string.

    Parameters
    ----------
    directory: pathlib.Path
        Target directory, usually ``tmp_path``.
    name: str
        File name; its suffix drives the guessed content type.
    """
    target = directory / name
    target.write_bytes(PNG_BYTES)
    return str(target)


def image_upload(name: str = "avatar.png") -> tuple[io.BytesIO, str]:
    """Return a ``(stream, filename)`` pair for multipart test requests."""
    return io.BytesIO(PNG_BYTES), name


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
