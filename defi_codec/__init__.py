"""
defi_codec - deterministic packed encoding and Keccak-256 identifiers for
pool references, positions, orders, strategies and bridge transfers.

The operation catalogue lives in `defi_codec.api` and is re-exported here:

    >>> from defi_codec import pool_identifier
    >>> pool_identifier(0x1, 0x2, 3000) == pool_identifier(0x2, 0x1, 3000)
    True

Building blocks are importable on their own: `encoding` (packed encoders),
`ordering`, `domains`, `hashing`, `validate`, plus the ambient `errors`,
`config` and `logging` modules.
"""

from __future__ import annotations

from .api import *  # noqa: F401,F403
from .api import __all__ as _all_api
from .errors import CardinalityMismatch, CodecError, ContractViolation
from .version import __version__


def version() -> str:
    """Return the defi_codec semantic version string."""
    return __version__


__all__ = [
    "__version__",
    "version",
    "CodecError",
    "CardinalityMismatch",
    "ContractViolation",
    *_all_api,
]
