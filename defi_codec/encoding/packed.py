"""
Packed (non-self-describing) encoding for defi_codec.

Design goals:
- Deterministic and easy to port; byte-identical to Solidity-style packing for
  the scalar kinds used here.
- No type tags, no length prefixes, no padding beyond each field's width.

Primitives
----------
- address:   20 bytes, big-endian
- uint256:   32 bytes, big-endian
- bytes32:   32 bytes, raw
- bytes:     raw bytes (no length prefix)
- string:    UTF-8 bytes (no length prefix)
- T[]:       enc(T, v0) || enc(T, v1) || ... (T fixed-width only; no count)

Sequences
---------
encode_packed([types...], [values...]) =>
  item1 || item2 || ... || itemN
where each item = encode_value(value, type_spec).
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Sequence, Type, Union

from ..errors import CardinalityMismatch, ContractViolation
from ..types import (
    AddressType,
    ArrayType,
    Bytes32Type,
    BytesType,
    StringType,
    TypeSpec,
    UIntType,
    parse_type,
)
from .dynamic import encode_dynamic, encode_text
from .fixed import encode_address, encode_bytes32, encode_uint256
from .sequence import concat

__all__ = [
    "TYPES_VALUES_MISMATCH",
    "encoder_for",
    "encode_value",
    "encode_packed",
]

TYPES_VALUES_MISMATCH = "types/values length mismatch"

_ENCODERS: Dict[Type[Any], Callable[[Any], bytes]] = {
    AddressType: encode_address,
    UIntType: encode_uint256,
    Bytes32Type: encode_bytes32,
    BytesType: encode_dynamic,
    StringType: encode_text,
}


def encoder_for(typ: Union[str, TypeSpec]) -> Callable[[Any], bytes]:
    """Return the single-value encoder for a non-array type."""
    t = parse_type(typ)
    if isinstance(t, ArrayType):
        raise ContractViolation("array types have no single-value encoder", spec=t.name)
    return _ENCODERS[type(t)]


def encode_value(value: Any, typ: Union[str, TypeSpec]) -> bytes:
    """
    Encode a single value according to the given packed type (string or object).
    """
    t = parse_type(typ)
    if isinstance(t, ArrayType):
        return concat(value, _ENCODERS[type(t.element)])
    return _ENCODERS[type(t)](value)


def encode_packed(types: Sequence[Union[str, TypeSpec]], values: Sequence[Any]) -> bytes:
    """
    Encode a sequence of fields by plain concatenation.

    Every value is coerced before any output is assembled, so a failure never
    leaves a partially written payload behind.

    Raises:
        CardinalityMismatch if `types` and `values` differ in length;
        ContractViolation on unsupported types or out-of-range values.
    """
    if len(types) != len(values):
        raise CardinalityMismatch(
            TYPES_VALUES_MISMATCH, types=len(types), values=len(values)
        )
    items: List[bytes] = []
    for t, v in zip(types, values):
        items.append(encode_value(v, t))
    return b"".join(items)
