"""
defi_codec.utils.bytes
======================

Dependency-free helpers around byte handling:

- Hex helpers: to_hex/from_hex, 0x-prefix management
- Bytes-like normalization: is_byteslike()

Examples
--------
>>> to_hex(b"\\x01\\x02")
'0x0102'
>>> from_hex('0xdeadbeef')
b'\\xde\\xad\\xbe\\xef'
"""

from __future__ import annotations

from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]


def is_byteslike(x: object) -> bool:
    return isinstance(x, (bytes, bytearray, memoryview))


def strip0x(s: str) -> str:
    return s[2:] if s.startswith(("0x", "0X")) else s


def to_hex(data: BytesLike, *, prefix: bool = True) -> str:
    """Return lowercase hex string of data."""
    if not is_byteslike(data):
        raise TypeError("to_hex expects bytes-like")
    h = bytes(data).hex()
    return f"0x{h}" if prefix else h


def from_hex(h: str) -> bytes:
    """Parse hex string with or without 0x prefix; odd lengths get a leading zero."""
    if not isinstance(h, str):
        raise TypeError("from_hex expects str")
    h = strip0x(h.strip())
    if len(h) % 2 == 1:
        h = "0" + h
    try:
        return bytes.fromhex(h)
    except ValueError as e:
        raise ValueError(f"invalid hex string: {e}") from e


__all__ = [
    "BytesLike",
    "is_byteslike",
    "strip0x",
    "to_hex",
    "from_hex",
]
