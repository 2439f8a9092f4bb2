"""Atomic text writes via the atomicwrites library.

A reader of the destination sees either the previous file or the complete
new one. An interrupted or failed write leaves no partial file behind.
"""

from __future__ import annotations

from pathlib import Path

from atomicwrites import atomic_write  # type: ignore[import-untyped]

__all__ = ["atomic_write_text"]


def atomic_write_text(path: Path | str, content: str, *, encoding: str = "utf-8") -> Path:
    """Write ``content`` to ``path`` through a temp file and rename.

    The parent directory must already exist.

    Raises:
        OSError: If the temp file cannot be written or renamed.
    """
    file_path = Path(path)
    with atomic_write(str(file_path), mode="w", encoding=encoding, overwrite=True) as f:
        f.write(content)
    return file_path
