"""
defi_codec.errors
-----------------

A small, consistent error system for the codec.

Design goals
------------
- One root `CodecError` with a machine-friendly `code` and optional `data`.
- Exactly two failure kinds surface from the encoding operations:
    * CardinalityMismatch - parallel sequences differ in length (recoverable).
    * ContractViolation   - a value outside its declared width, an unknown
                            type name or an undefined domain category
                            (programming error).
- Safe JSON representation (`to_dict`) suitable for logs.

This module uses only stdlib so it can be imported first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, Mapping


class Severity(IntEnum):
    """Optional severity hint for operators."""

    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


class CodecErrorCode(str, Enum):
    CARDINALITY_MISMATCH = "CODEC/CARDINALITY_MISMATCH"
    CONTRACT_VIOLATION = "CODEC/CONTRACT_VIOLATION"
    CONFIG = "CODEC/CONFIG"


@dataclass(eq=False)
class CodecError(Exception):
    """
    Root error for defi_codec.

    Attributes
    ----------
    code: str
        Machine-stable error code (see CodecErrorCode).
    message: str
        Human hint suitable for logs. For CardinalityMismatch this is the
        stable call-site string callers may match on.
    data: dict
        Optional machine data (lengths, offending values). JSON-serializable.
    severity: Severity
        Optional severity hint (default ERROR).
    retryable: bool
        Always False here: nothing in the codec is flaky.
    """

    code: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    severity: Severity = Severity.ERROR
    retryable: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.code, Enum):
            self.code = self.code.value
        super().__init__(f"{self.code}: {self.message}")

    def with_context(self, **ctx: Any) -> "CodecError":
        """Return a *new* error with extra context merged (does not mutate)."""
        d = dict(self.data)
        for k, v in ctx.items():
            d[k] = _coerce_json(v)
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone.data = d
        Exception.__init__(clone, *self.args)
        return clone

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe shape suitable for logs."""
        return {
            "code": self.code,
            "message": self.message,
            "data": _coerce_json(self.data),
            "severity": int(self.severity),
            "retryable": self.retryable,
        }

    def __str__(self) -> str:  # pragma: no cover - human formatting
        parts = [f"{self.code}: {self.message}"]
        if self.data:
            preview = ", ".join(f"{k}={_preview(v)}" for k, v in self.data.items())
            parts.append(f"[{preview}]")
        return " ".join(parts)


class CardinalityMismatch(CodecError):
    """Two sequences that must share a length do not."""

    def __init__(self, message: str = "length mismatch", **data: Any) -> None:
        super().__init__(
            code=CodecErrorCode.CARDINALITY_MISMATCH,
            message=message,
            data=_jsonmap(data),
            severity=Severity.WARNING,
        )


class ContractViolation(CodecError):
    """A caller broke the typed contract of an encoder (fatal, not retryable)."""

    def __init__(self, message: str = "contract violation", **data: Any) -> None:
        super().__init__(
            code=CodecErrorCode.CONTRACT_VIOLATION,
            message=message,
            data=_jsonmap(data),
            severity=Severity.CRITICAL,
        )


class ConfigError(CodecError):
    def __init__(self, message: str = "invalid configuration", **data: Any) -> None:
        super().__init__(
            code=CodecErrorCode.CONFIG,
            message=message,
            data=_jsonmap(data),
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _jsonmap(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: _coerce_json(v) for k, v in data.items()}


def _coerce_json(v: Any) -> Any:
    # Keep JSON primitives; hex-encode bytes; stringify the rest.
    if v is None or isinstance(v, (bool, int, float, str)):
        return v
    if isinstance(v, (bytes, bytearray, memoryview)):
        return "0x" + bytes(v).hex()
    if isinstance(v, dict):
        return {str(k): _coerce_json(x) for k, x in v.items()}
    if isinstance(v, (list, tuple)):
        return [_coerce_json(x) for x in v]
    return str(v)


def _preview(v: Any, limit: int = 96) -> str:
    s = str(_coerce_json(v))
    return s if len(s) <= limit else s[:limit] + "…"


__all__ = [
    "Severity",
    "CodecErrorCode",
    "CodecError",
    "CardinalityMismatch",
    "ContractViolation",
    "ConfigError",
]
