"""
Packed type definitions and value coercion for defi_codec.

The surface mirrors the field kinds used by the operation catalogue:
  - address   (20-byte identifier, big-endian unsigned for ordering)
  - uint256   (32-byte unsigned scalar)
  - bytes32   (32-byte digest-shaped value)
  - bytes / string (dynamic, written verbatim, no length prefix)
  - T[] for the three fixed-width kinds above (elements concatenated)

Utilities here *only* coerce/validate Python values; the byte layout is
produced by defi_codec.encoding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .errors import ContractViolation
from .utils.bytes import from_hex, is_byteslike

__all__ = [
    "ADDRESS_WIDTH",
    "WORD_WIDTH",
    "UINT256_MAX",
    "coerce_address",
    "coerce_uint256",
    "coerce_bytes32",
    "coerce_dynamic",
    "coerce_text",
    "AddressType",
    "UIntType",
    "Bytes32Type",
    "BytesType",
    "StringType",
    "ArrayType",
    "TypeSpec",
    "parse_type",
]

ADDRESS_WIDTH = 20
WORD_WIDTH = 32
UINT256_MAX = (1 << 256) - 1


# ──────────────────────────────────────────────────────────────────────────────
# Scalar coercion helpers
# ──────────────────────────────────────────────────────────────────────────────


def _coerce_fixed(value: Any, width: int, *, kind: str, hex_exact: bool) -> bytes:
    """Normalize bytes / 0x-hex / int into exactly `width` bytes."""
    if is_byteslike(value):
        b = bytes(value)
        if len(b) != width:
            raise ContractViolation(
                f"{kind} must be exactly {width} bytes", kind=kind, length=len(b)
            )
        return b
    if isinstance(value, str):
        if not value.startswith(("0x", "0X")):
            raise ContractViolation(f"{kind} hex must be 0x-prefixed", kind=kind, value=value)
        digits = value[2:]
        if len(digits) > 2 * width or (hex_exact and len(digits) != 2 * width):
            raise ContractViolation(
                f"{kind} hex has wrong length", kind=kind, digits=len(digits)
            )
        try:
            raw = from_hex(value)
        except ValueError as e:
            raise ContractViolation(f"invalid {kind} hex", kind=kind, value=value) from e
        return raw.rjust(width, b"\x00")
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0 or value.bit_length() > 8 * width:
            raise ContractViolation(
                f"{kind} out of range for {width} bytes", kind=kind, value=value
            )
        return value.to_bytes(width, "big")
    raise ContractViolation(
        f"{kind} must be bytes, 0x-hex string or int", kind=kind, type=type(value).__name__
    )


def coerce_address(value: Any) -> bytes:
    """20-byte identifier from bytes20, 0x-hex (left-padded) or int < 2**160."""
    return _coerce_fixed(value, ADDRESS_WIDTH, kind="address", hex_exact=False)


def coerce_bytes32(value: Any) -> bytes:
    """32-byte value from bytes32, 0x-hex of exactly 64 digits or int < 2**256."""
    return _coerce_fixed(value, WORD_WIDTH, kind="bytes32", hex_exact=True)


def coerce_uint256(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ContractViolation("uint256 must be a Python int", type=type(value).__name__)
    if value < 0 or value > UINT256_MAX:
        raise ContractViolation("uint256 out of range", value=value)
    return int(value)


def coerce_dynamic(value: Any) -> bytes:
    """Accept bytes-like or 0x-hex; returns the raw bytes unchanged."""
    if is_byteslike(value):
        return bytes(value)
    if isinstance(value, str) and value.startswith(("0x", "0X")):
        try:
            return from_hex(value)
        except ValueError as e:
            raise ContractViolation("invalid bytes hex", value=value) from e
    raise ContractViolation(
        "bytes must be bytes, bytearray, memoryview or 0x-hex string",
        type=type(value).__name__,
    )


def coerce_text(value: Any) -> str:
    if not isinstance(value, str):
        raise ContractViolation("string must be a Python str", type=type(value).__name__)
    return value


# ──────────────────────────────────────────────────────────────────────────────
# Type specs
# ──────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class AddressType:
    width: int = ADDRESS_WIDTH

    @property
    def name(self) -> str:
        return "address"


@dataclass(frozen=True)
class UIntType:
    width: int = WORD_WIDTH

    @property
    def name(self) -> str:
        return "uint256"


@dataclass(frozen=True)
class Bytes32Type:
    width: int = WORD_WIDTH

    @property
    def name(self) -> str:
        return "bytes32"


@dataclass(frozen=True)
class BytesType:
    @property
    def name(self) -> str:
        return "bytes"


@dataclass(frozen=True)
class StringType:
    @property
    def name(self) -> str:
        return "string"


FixedType = Union[AddressType, UIntType, Bytes32Type]


@dataclass(frozen=True)
class ArrayType:
    element: FixedType

    @property
    def name(self) -> str:
        return f"{self.element.name}[]"


TypeSpec = Union[AddressType, UIntType, Bytes32Type, BytesType, StringType, ArrayType]


# ──────────────────────────────────────────────────────────────────────────────
# Parser for textual type specs
# ──────────────────────────────────────────────────────────────────────────────

_SCALARS = {
    "address": AddressType(),
    "uint": UIntType(),
    "uint256": UIntType(),
    "bytes32": Bytes32Type(),
    "bytes": BytesType(),
    "string": StringType(),
}


def parse_type(spec: Union[str, TypeSpec]) -> TypeSpec:
    """
    Parse a textual type spec into a frozen type object.
    Supported forms:
      - "address", "uint" / "uint256", "bytes32", "bytes", "string"
      - "address[]", "uint256[]", "bytes32[]"
    """
    if isinstance(spec, (AddressType, UIntType, Bytes32Type, BytesType, StringType, ArrayType)):
        return spec
    if not isinstance(spec, str) or not spec.strip():
        raise ContractViolation("type spec must be a non-empty string", spec=repr(spec))

    s = spec.strip().lower()
    if s.endswith("[]"):
        inner = _SCALARS.get(s[:-2])
        if not isinstance(inner, (AddressType, UIntType, Bytes32Type)):
            raise ContractViolation(
                "only fixed-width element types may form arrays", spec=spec
            )
        return ArrayType(element=inner)

    try:
        return _SCALARS[s]
    except KeyError:
        raise ContractViolation("unsupported packed type", spec=spec) from None
