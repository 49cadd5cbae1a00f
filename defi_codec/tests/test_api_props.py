"""
Property tests for the operation catalogue.

- pool_identifier is commutative in its two tokens.
- Every operation is deterministic for identical inputs.
- Payload lengths follow the fixed-width layout exactly.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from defi_codec import api
from defi_codec.hashing import keccak256

ids = st.integers(min_value=0, max_value=(1 << 160) - 1)
u256 = st.integers(min_value=0, max_value=(1 << 256) - 1)
blobs = st.binary(max_size=256)
words = st.binary(min_size=32, max_size=32)


@given(ids, ids, u256)
def test_pool_identifier_commutative(a, b, fee):
    assert api.pool_identifier(a, b, fee) == api.pool_identifier(b, a, fee)


@given(ids, ids, u256, u256)
def test_pool_identifier_fee_sensitive(a, b, fee1, fee2):
    if fee1 != fee2:
        assert api.pool_identifier(a, b, fee1) != api.pool_identifier(a, b, fee2)


@settings(max_examples=50)
@given(st.lists(st.tuples(ids, u256), max_size=8), u256)
def test_swap_payload_length_and_determinism(route, deadline):
    path = [p for p, _ in route]
    amounts = [a for _, a in route]
    out = api.swap_payload(path, amounts, deadline)
    assert len(out) == 20 * len(path) + 32 * len(amounts) + 32
    assert out == api.swap_payload(path, amounts, deadline)


@given(ids, u256, blobs)
def test_flash_loan_tail_is_blob_then_tag(token, amount, blob):
    out = api.flash_loan_payload(token, amount, blob)
    assert out.endswith(blob + b"FLASH_LOAN_V1")
    assert len(out) == 20 + 32 + len(blob) + len(b"FLASH_LOAN_V1")


@given(ids, ids, ids, u256, u256, u256)
def test_trading_position_digest_matches_payload(user, tin, tout, a, m, d):
    out = api.trading_position(user, tin, tout, a, m, d)
    assert len(out.payload) == 3 * 20 + 3 * 32
    assert out.digest == keccak256(out.payload)
    assert out == api.trading_position(user, tin, tout, a, m, d)


@settings(max_examples=50)
@given(ids, st.lists(words, max_size=6))
def test_multi_pool_hash_deterministic(user, pools):
    assert api.multi_pool_hash(user, pools) == api.multi_pool_hash(user, list(pools))


@given(st.text(max_size=32), ids, u256, u256)
def test_defi_transaction_id_deterministic(tx_type, user, ts, nonce):
    a = api.defi_transaction_id(tx_type, user, ts, nonce)
    assert len(a) == 32
    assert a == api.defi_transaction_id(tx_type, user, ts, nonce)
