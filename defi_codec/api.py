"""
defi_codec.api - the operation catalogue.

Every operation is a pure composition of the codec primitives:

    validate (parallel arrays only)
      → canonical ordering (pool identifier only)
      → packed payload (+ domain tag where the category has one)
      → Keccak-256 digest (identifier-producing operations only)

Notation in the layouts below: `id` = 20-byte identifier, `u` = 32-byte
scalar, `b32` = 32-byte value, `dyn` = raw dynamic bytes, `tag(X)` = the ASCII
label of category X, `++` = concatenation.

The only caller-triggerable failure is a length mismatch between parallel
arrays (`swap_payload`, `yield_strategy`), raised before any byte is written.
Values outside their declared width raise ContractViolation.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from .config import load_config
from .domains import Domain, tag_for
from .encoding.packed import encode_packed
from .errors import ConfigError
from .hashing import keccak256
from .logging import get_logger
from .ordering import order
from .utils.bytes import to_hex
from .validate import (
    PATH_AMOUNT_MISMATCH,
    POOLS_WEIGHTS_MISMATCH,
    check_equal_length,
)

__all__ = [
    "Encoded",
    "system_time",
    "pool_identifier",
    "trading_position",
    "swap_payload",
    "limit_order",
    "yield_position",
    "flash_loan_payload",
    "staking_pool_config",
    "multi_pool_hash",
    "yield_strategy",
    "cross_chain_bridge",
    "defi_transaction_id",
    "stop_loss_order",
    "take_profit_order",
    "trailing_stop_order",
]

log = get_logger(__name__)


@dataclass(frozen=True)
class Encoded:
    """A payload together with its Keccak-256 digest."""

    payload: bytes
    digest: bytes

    @property
    def payload_hex(self) -> str:
        return to_hex(self.payload)

    @property
    def digest_hex(self) -> str:
        return to_hex(self.digest)

    def to_dict(self) -> Dict[str, str]:
        return {"payload": self.payload_hex, "digest": self.digest_hex}


def system_time() -> int:
    """Current UNIX time in whole seconds, for wiring `staking_pool_config` to a real clock."""
    return int(time.time())


# ──────────────────────────────────────────────────────────────────────────────
# Internals
# ──────────────────────────────────────────────────────────────────────────────


def _tagged(types: Tuple[str, ...], values: Tuple[Any, ...], domain: Domain) -> bytes:
    return encode_packed(types, values) + tag_for(domain)


def _trace_payloads() -> bool:
    # A malformed DEFI_CODEC_* variable disables tracing; it never fails an operation.
    try:
        return load_config().trace_payloads
    except ConfigError:
        return False


def _observe(
    operation: str,
    payload: bytes,
    digest: Optional[bytes] = None,
    domain: Optional[Domain] = None,
) -> None:
    if not log.isEnabledFor(logging.DEBUG):
        return
    extra: Dict[str, Any] = {"operation": operation, "size": len(payload)}
    if domain is not None:
        extra["domain"] = domain.value
    if digest is not None:
        extra["digest"] = to_hex(digest)
    if _trace_payloads():
        extra["payload"] = to_hex(payload)
    log.debug("encoded", extra=extra)


# ──────────────────────────────────────────────────────────────────────────────
# Pools & positions
# ──────────────────────────────────────────────────────────────────────────────


def pool_identifier(token_a: Any, token_b: Any, fee: int) -> bytes:
    """
    keccak256(id(lo) ++ id(hi) ++ u(fee)) with (lo, hi) = order(token_a, token_b).

    Commutative in the two tokens.
    """
    lo, hi = order(token_a, token_b)
    payload = encode_packed(("address", "address", "uint256"), (lo, hi, fee))
    digest = keccak256(payload)
    _observe("pool_identifier", payload, digest)
    return digest


def trading_position(
    user: Any,
    token_in: Any,
    token_out: Any,
    amount_in: int,
    min_amount_out: int,
    deadline: int,
) -> Encoded:
    """id ++ id ++ id ++ u ++ u ++ u; argument order is significant."""
    payload = encode_packed(
        ("address", "address", "address", "uint256", "uint256", "uint256"),
        (user, token_in, token_out, amount_in, min_amount_out, deadline),
    )
    out = Encoded(payload=payload, digest=keccak256(payload))
    _observe("trading_position", payload, out.digest)
    return out


def swap_payload(path: Sequence[Any], amounts: Sequence[int], deadline: int) -> bytes:
    """concat(id, path) ++ concat(u, amounts) ++ u(deadline)."""
    check_equal_length(path, amounts, PATH_AMOUNT_MISMATCH)
    payload = encode_packed(
        ("address[]", "uint256[]", "uint256"), (path, amounts, deadline)
    )
    _observe("swap_payload", payload)
    return payload


def limit_order(
    maker: Any,
    taker: Any,
    token_in: Any,
    token_out: Any,
    amount_in: int,
    amount_out: int,
    nonce: int,
) -> Encoded:
    payload = _tagged(
        ("address", "address", "address", "address", "uint256", "uint256", "uint256"),
        (maker, taker, token_in, token_out, amount_in, amount_out, nonce),
        Domain.LIMIT_ORDER,
    )
    out = Encoded(payload=payload, digest=keccak256(payload))
    _observe("limit_order", payload, out.digest, Domain.LIMIT_ORDER)
    return out


def yield_position(user: Any, pool_id: Any, amount: int, start_time: int) -> bytes:
    payload = _tagged(
        ("address", "bytes32", "uint256", "uint256"),
        (user, pool_id, amount, start_time),
        Domain.YIELD_POSITION,
    )
    digest = keccak256(payload)
    _observe("yield_position", payload, digest, Domain.YIELD_POSITION)
    return digest


def flash_loan_payload(token: Any, amount: int, callback_data: Any) -> bytes:
    """id ++ u ++ dyn(callback_data) ++ tag(FLASH_LOAN)."""
    payload = _tagged(
        ("address", "uint256", "bytes"),
        (token, amount, callback_data),
        Domain.FLASH_LOAN,
    )
    _observe("flash_loan_payload", payload, domain=Domain.FLASH_LOAN)
    return payload


def staking_pool_config(
    token: Any,
    reward_rate: int,
    lock_period: int,
    max_stake: int,
    *,
    now: int,
) -> bytes:
    """
    id ++ u(reward_rate) ++ u(lock_period) ++ u(max_stake) ++ u(now).

    The only time-dependent layout in the catalogue. The caller supplies `now`
    (see `system_time()`), so the output varies with that argument alone.
    """
    payload = encode_packed(
        ("address", "uint256", "uint256", "uint256", "uint256"),
        (token, reward_rate, lock_period, max_stake, now),
    )
    _observe("staking_pool_config", payload)
    return payload


def multi_pool_hash(user: Any, pool_ids: Sequence[Any]) -> bytes:
    payload = _tagged(("address", "bytes32[]"), (user, pool_ids), Domain.MULTI_POOL)
    digest = keccak256(payload)
    _observe("multi_pool_hash", payload, digest, Domain.MULTI_POOL)
    return digest


def yield_strategy(name: str, pools: Sequence[Any], weights: Sequence[int]) -> bytes:
    """dyn(name) ++ concat(id, pools) ++ concat(u, weights) ++ tag(YIELD_STRATEGY)."""
    check_equal_length(pools, weights, POOLS_WEIGHTS_MISMATCH)
    payload = _tagged(
        ("string", "address[]", "uint256[]"),
        (name, pools, weights),
        Domain.YIELD_STRATEGY,
    )
    _observe("yield_strategy", payload, domain=Domain.YIELD_STRATEGY)
    return payload


# ──────────────────────────────────────────────────────────────────────────────
# Transfers & transactions
# ──────────────────────────────────────────────────────────────────────────────


def cross_chain_bridge(
    source_chain_id: int,
    dest_chain_id: int,
    token: Any,
    amount: int,
    recipient: Any,
) -> bytes:
    # Source and destination are never reordered.
    payload = _tagged(
        ("uint256", "uint256", "address", "uint256", "address"),
        (source_chain_id, dest_chain_id, token, amount, recipient),
        Domain.CROSS_CHAIN_BRIDGE,
    )
    _observe("cross_chain_bridge", payload, domain=Domain.CROSS_CHAIN_BRIDGE)
    return payload


def defi_transaction_id(tx_type: str, user: Any, timestamp: int, nonce: int) -> bytes:
    payload = _tagged(
        ("string", "address", "uint256", "uint256"),
        (tx_type, user, timestamp, nonce),
        Domain.DEFI_TRANSACTION,
    )
    digest = keccak256(payload)
    _observe("defi_transaction_id", payload, digest, Domain.DEFI_TRANSACTION)
    return digest


# ──────────────────────────────────────────────────────────────────────────────
# Conditional orders
# ──────────────────────────────────────────────────────────────────────────────


def stop_loss_order(
    user: Any, token: Any, amount: int, stop_price: int, trigger_price: int
) -> bytes:
    payload = _tagged(
        ("address", "address", "uint256", "uint256", "uint256"),
        (user, token, amount, stop_price, trigger_price),
        Domain.STOP_LOSS,
    )
    _observe("stop_loss_order", payload, domain=Domain.STOP_LOSS)
    return payload


def take_profit_order(user: Any, token: Any, amount: int, take_profit_price: int) -> bytes:
    payload = _tagged(
        ("address", "address", "uint256", "uint256"),
        (user, token, amount, take_profit_price),
        Domain.TAKE_PROFIT,
    )
    _observe("take_profit_order", payload, domain=Domain.TAKE_PROFIT)
    return payload


def trailing_stop_order(
    user: Any, token: Any, amount: int, trail_percentage: int, activation_price: int
) -> bytes:
    payload = _tagged(
        ("address", "address", "uint256", "uint256", "uint256"),
        (user, token, amount, trail_percentage, activation_price),
        Domain.TRAILING_STOP,
    )
    _observe("trailing_stop_order", payload, domain=Domain.TRAILING_STOP)
    return payload
