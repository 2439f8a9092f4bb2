"""Shared helpers."""

from __future__ import annotations

from nitterboot.utils.atomic import atomic_write_text

__all__ = ["atomic_write_text"]
