"""
Variable-width encoders for text and opaque blobs.

The output is the raw underlying bytes with **no** length prefix. The format is
not self-describing: a consumer can only find the end of a dynamic field if it
already knows the layout of what follows.
"""

from __future__ import annotations

from typing import Any

from ..types import coerce_dynamic, coerce_text

__all__ = ["encode_dynamic", "encode_text"]


def encode_dynamic(value: Any) -> bytes:
    return coerce_dynamic(value)


def encode_text(value: Any) -> bytes:
    return coerce_text(value).encode("utf-8")
