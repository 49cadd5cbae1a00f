"""
defi_codec.validate - cardinality checks run before any byte is produced.

Operations that take parallel arrays call `check_equal_length` first; on a
mismatch they raise `CardinalityMismatch` with a stable call-site message and
no payload is ever assembled. Arguments without a length (generators, scalars)
raise `ContractViolation`.
"""

from __future__ import annotations

from collections.abc import Sized
from typing import Any

from .errors import CardinalityMismatch, ContractViolation

__all__ = [
    "PATH_AMOUNT_MISMATCH",
    "POOLS_WEIGHTS_MISMATCH",
    "check_equal_length",
]

PATH_AMOUNT_MISMATCH = "path/amount length mismatch"
POOLS_WEIGHTS_MISMATCH = "pools/weights length mismatch"


def _length(seq: Any) -> int:
    if not isinstance(seq, Sized) or isinstance(seq, (str, bytes, bytearray, memoryview)):
        raise ContractViolation(
            "sequence must be a list or tuple of elements", type=type(seq).__name__
        )
    return len(seq)


def check_equal_length(seq_a: Sized, seq_b: Sized, message: str) -> None:
    left, right = _length(seq_a), _length(seq_b)
    if left != right:
        raise CardinalityMismatch(message, left=left, right=right)
