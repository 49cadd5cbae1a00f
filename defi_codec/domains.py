"""
Domain-separation tags.

Each message category owns one versioned ASCII label that is appended to its
payload, so that a byte sequence meaningful in one category can never collide
with one meaningful in another. The catalogue is closed: the table is built
once at import and exposed read-only.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

from .errors import ContractViolation

__all__ = ["Domain", "DOMAIN_TAGS", "tag_for", "all_tags"]


class Domain(str, Enum):
    LIMIT_ORDER = "limit_order"
    YIELD_POSITION = "yield_position"
    FLASH_LOAN = "flash_loan"
    MULTI_POOL = "multi_pool"
    YIELD_STRATEGY = "yield_strategy"
    CROSS_CHAIN_BRIDGE = "cross_chain_bridge"
    DEFI_TRANSACTION = "defi_transaction"
    STOP_LOSS = "stop_loss"
    TAKE_PROFIT = "take_profit"
    TRAILING_STOP = "trailing_stop"


DOMAIN_TAGS: Mapping[Domain, bytes] = MappingProxyType(
    {
        Domain.LIMIT_ORDER: b"LIMIT_ORDER_V1",
        Domain.YIELD_POSITION: b"YIELD_POSITION_V1",
        Domain.FLASH_LOAN: b"FLASH_LOAN_V1",
        Domain.MULTI_POOL: b"MULTI_POOL_V1",
        Domain.YIELD_STRATEGY: b"YIELD_STRATEGY_V1",
        Domain.CROSS_CHAIN_BRIDGE: b"CROSS_CHAIN_BRIDGE_V1",
        Domain.DEFI_TRANSACTION: b"DEFI_TRANSACTION_V1",
        Domain.STOP_LOSS: b"STOP_LOSS_V1",
        Domain.TAKE_PROFIT: b"TAKE_PROFIT_V1",
        Domain.TRAILING_STOP: b"TRAILING_STOP_V1",
    }
)


def tag_for(category: Union[Domain, str]) -> bytes:
    """
    Return the ASCII label for `category` (a Domain member, its value or its
    name, case-insensitive). Unknown categories are a programming error.
    """
    if isinstance(category, Domain):
        return DOMAIN_TAGS[category]
    if isinstance(category, str):
        key = category.strip().lower()
        try:
            return DOMAIN_TAGS[Domain(key)]
        except ValueError:
            pass
    raise ContractViolation("undefined domain category", category=str(category))


def all_tags() -> Mapping[Domain, bytes]:
    return DOMAIN_TAGS
