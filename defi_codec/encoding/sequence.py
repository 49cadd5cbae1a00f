"""
Sequence concatenation for lists of one fixed-width type.

concat([v0, v1, ..., vn], enc) == enc(v0) || enc(v1) || ... || enc(vn)

Caller order is preserved; nothing is sorted here.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

from ..errors import ContractViolation

__all__ = ["concat"]


def concat(values: Iterable[Any], element_encoder: Callable[[Any], bytes]) -> bytes:
    if isinstance(values, (str, bytes, bytearray, memoryview)):
        raise ContractViolation(
            "sequence must be a list or tuple of elements", type=type(values).__name__
        )
    return b"".join(element_encoder(v) for v in values)
