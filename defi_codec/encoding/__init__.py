"""
defi_codec.encoding
===================

Packed byte encoders: fixed-width primitives, verbatim dynamic fields,
sequence concatenation, and a type-driven dispatcher composing the three.
"""

from __future__ import annotations

from .dynamic import *  # noqa: F401,F403
from .fixed import *  # noqa: F401,F403
from .packed import *  # noqa: F401,F403
from .sequence import *  # noqa: F401,F403

from .dynamic import __all__ as _all_dynamic
from .fixed import __all__ as _all_fixed
from .packed import __all__ as _all_packed
from .sequence import __all__ as _all_sequence

__all__ = [*_all_fixed, *_all_dynamic, *_all_sequence, *_all_packed]
