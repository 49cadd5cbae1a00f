"""
Fixed-width primitive encoders.

Every output is exactly `width` bytes, most-significant byte first, with no
sign and no padding beyond the natural width of the type:

- address:  20 bytes
- uint256:  32 bytes
- bytes32:  32 bytes (raw, already digest-shaped)
"""

from __future__ import annotations

from typing import Any

from ..errors import ContractViolation
from ..types import (
    WORD_WIDTH,
    coerce_address,
    coerce_bytes32,
    coerce_uint256,
)

__all__ = [
    "encode_fixed",
    "encode_address",
    "encode_uint256",
    "encode_bytes32",
]


def encode_fixed(value: int, width: int) -> bytes:
    """Big-endian unsigned encoding of `value` into exactly `width` bytes."""
    if width <= 0:
        raise ContractViolation("width must be positive", width=width)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ContractViolation("fixed-width value must be an int", type=type(value).__name__)
    if value < 0 or value.bit_length() > 8 * width:
        raise ContractViolation(
            f"value does not fit in {width} bytes", value=value, width=width
        )
    return value.to_bytes(width, "big", signed=False)


def encode_address(value: Any) -> bytes:
    return coerce_address(value)


def encode_uint256(value: Any) -> bytes:
    return encode_fixed(coerce_uint256(value), WORD_WIDTH)


def encode_bytes32(value: Any) -> bytes:
    return coerce_bytes32(value)
