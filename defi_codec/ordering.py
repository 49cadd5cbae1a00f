"""
Canonical ordering of two interchangeable identifiers.

order(a, b) == order(b, a) for all a, b: the smaller identifier (compared as an
unsigned big-endian integer) comes first. Equal inputs return (a, a).
"""

from __future__ import annotations

from typing import Any, Tuple

from .types import coerce_address

__all__ = ["order"]


def order(a: Any, b: Any) -> Tuple[bytes, bytes]:
    x = coerce_address(a)
    y = coerce_address(b)
    # Equal-width big-endian bytes compare lexicographically as unsigned ints.
    return (x, y) if x <= y else (y, x)
