"""
defi_codec.hashing - the fixed digest function of the codec.

Goals
-----
- Strictly bytes-in, bytes-out (no implicit text/encoding).
- One algorithm, Keccak-256 (original Keccak padding, as used by Ethereum),
  never configurable. Domain separation is the caller's job: the tag is
  already part of the payload by the time it reaches this module.

Provided APIs
-------------
- keccak256(data: bytes) -> bytes           # 32-byte digest
- keccak256_hex(data: bytes) -> str         # 0x-prefixed
- verify_digest(payload, digest) -> bool    # constant-time comparison
"""

from __future__ import annotations

import hmac

from Crypto.Hash import keccak as _keccak

from .errors import ContractViolation
from .utils.bytes import BytesLike, is_byteslike, to_hex

__all__ = ["DIGEST_SIZE", "keccak256", "keccak256_hex", "verify_digest"]

DIGEST_SIZE = 32


def _ensure_bytes(buf: object, name: str) -> bytes:
    if is_byteslike(buf):
        return bytes(buf)  # type: ignore[arg-type]
    raise ContractViolation(f"{name} must be bytes-like", type=type(buf).__name__)


def keccak256(data: BytesLike) -> bytes:
    h = _keccak.new(digest_bits=256)
    h.update(_ensure_bytes(data, "data"))
    return h.digest()


def keccak256_hex(data: BytesLike) -> str:
    return to_hex(keccak256(data))


def verify_digest(payload: BytesLike, digest: BytesLike) -> bool:
    """True iff `digest` is the Keccak-256 of exactly `payload`."""
    expected = keccak256(payload)
    return hmac.compare_digest(expected, _ensure_bytes(digest, "digest"))
