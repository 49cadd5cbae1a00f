"""Error shapes, environment configuration and structured logging."""

from __future__ import annotations

import io
import json
import logging

import pytest

from defi_codec import api
from defi_codec import logging as clog
from defi_codec.config import CodecConfig, load_config
from defi_codec.errors import (
    CardinalityMismatch,
    CodecError,
    ConfigError,
    ContractViolation,
    Severity,
)
from defi_codec.version import BASE_VERSION, compute_version


@pytest.fixture(autouse=True)
def _fresh_config_and_logger():
    load_config.cache_clear()
    yield
    load_config.cache_clear()
    logger = logging.getLogger(clog.ROOT_LOGGER)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.setLevel(logging.NOTSET)
    clog.clear_context()


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


def test_error_hierarchy_and_dict_shape():
    err = CardinalityMismatch("path/amount length mismatch", left=2, right=1)
    assert isinstance(err, CodecError)
    assert err.to_dict() == {
        "code": "CODEC/CARDINALITY_MISMATCH",
        "message": "path/amount length mismatch",
        "data": {"left": 2, "right": 1},
        "severity": int(Severity.WARNING),
        "retryable": False,
    }


def test_contract_violation_is_critical_and_hexes_bytes():
    err = ContractViolation("bad value", raw=b"\x01\x02")
    assert err.severity is Severity.CRITICAL
    assert err.data["raw"] == "0x0102"
    assert "CODEC/CONTRACT_VIOLATION" in str(err)


def test_with_context_returns_new_error_of_same_type():
    err = CardinalityMismatch("pools/weights length mismatch", left=1, right=2)
    enriched = err.with_context(operation="yield_strategy")
    assert type(enriched) is CardinalityMismatch
    assert enriched.message == err.message
    assert enriched.data["operation"] == "yield_strategy"
    assert "operation" not in err.data


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


def test_config_defaults(monkeypatch):
    for name in ("LOG_LEVEL", "LOG_FORMAT", "LOG_FILE", "TRACE_PAYLOADS"):
        monkeypatch.delenv(f"DEFI_CODEC_{name}", raising=False)
    cfg = load_config()
    assert cfg == CodecConfig()
    assert cfg.log_json is None
    assert cfg.as_dict()["log_file"] is None


def test_config_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DEFI_CODEC_LOG_LEVEL", "debug")
    monkeypatch.setenv("DEFI_CODEC_LOG_FORMAT", "JSON")
    monkeypatch.setenv("DEFI_CODEC_LOG_FILE", str(tmp_path / "codec.log"))
    monkeypatch.setenv("DEFI_CODEC_TRACE_PAYLOADS", "yes")
    cfg = load_config()
    assert cfg.log_level == "DEBUG"
    assert cfg.log_json is True
    assert cfg.log_file == tmp_path / "codec.log"
    assert cfg.trace_payloads is True


@pytest.mark.parametrize("name,value", [("LOG_LEVEL", "LOUD"), ("LOG_FORMAT", "xml")])
def test_config_rejects_malformed_env(monkeypatch, name, value):
    monkeypatch.setenv(f"DEFI_CODEC_{name}", value)
    with pytest.raises(ConfigError):
        load_config()


def test_version_env_override(monkeypatch):
    compute_version.cache_clear()
    monkeypatch.setenv("DEFI_CODEC_VERSION", "9.9.9")
    try:
        assert compute_version() == "9.9.9"
    finally:
        compute_version.cache_clear()
    assert BASE_VERSION.count(".") == 2


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def _json_lines(buf: io.StringIO):
    return [json.loads(line) for line in buf.getvalue().splitlines() if line.strip()]


def test_operation_emits_debug_record(monkeypatch):
    monkeypatch.delenv("DEFI_CODEC_TRACE_PAYLOADS", raising=False)
    buf = io.StringIO()
    clog.configure(json=True, level="DEBUG", stream=buf)
    digest = api.pool_identifier(0x1, 0x2, 3000)

    records = _json_lines(buf)
    assert len(records) == 1
    rec = records[0]
    assert rec["logger"] == "defi_codec.api"
    assert rec["operation"] == "pool_identifier"
    assert rec["digest"] == "0x" + digest.hex()
    assert rec["size"] == 72
    assert "payload" not in rec


def test_trace_payloads_adds_payload_hex(monkeypatch):
    monkeypatch.setenv("DEFI_CODEC_TRACE_PAYLOADS", "1")
    buf = io.StringIO()
    clog.configure(json=True, level="DEBUG", stream=buf)
    payload = api.take_profit_order(0x1, 0x2, 3, 4)

    rec = _json_lines(buf)[0]
    assert rec["payload"] == "0x" + payload.hex()
    assert rec["domain"] == "take_profit"


def test_info_level_suppresses_operation_records():
    buf = io.StringIO()
    clog.configure(json=True, level="INFO", stream=buf)
    api.swap_payload([0x1], [1], 1)
    assert buf.getvalue() == ""


def test_trace_scope_and_bound_fields_reach_output():
    buf = io.StringIO()
    clog.configure(json=True, level="DEBUG", stream=buf)
    with clog.trace_scope("abc123"):
        clog.bind(component="router")
        api.flash_loan_payload(0x1, 1, b"")
    rec = _json_lines(buf)[0]
    assert rec["trace_id"] == "abc123"
    assert rec["component"] == "router"
    assert clog.context() == {}


def test_text_formatter_and_adapter():
    buf = io.StringIO()
    clog.configure(json=False, level="INFO", stream=buf)
    log = clog.with_fields(clog.get_logger("defi_codec.test"), component="tests")
    log.info("hello", extra={"size": 3})
    line = buf.getvalue().strip()
    assert "| INFO  | defi_codec.test" in line
    assert "component=tests" in line
    assert "size=3" in line
    assert line.endswith("| hello")


def test_configure_from_config_writes_json_file(tmp_path):
    cfg = CodecConfig(log_level="DEBUG", log_format="text", log_file=tmp_path / "out" / "codec.log")
    clog.configure_from_config(cfg, stream=io.StringIO())
    api.stop_loss_order(0x1, 0x2, 1, 2, 3)
    for h in logging.getLogger(clog.ROOT_LOGGER).handlers:
        h.flush()
    lines = (tmp_path / "out" / "codec.log").read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[0])["operation"] == "stop_loss_order"


def test_malformed_env_does_not_fail_operations(monkeypatch):
    from Crypto.Hash import keccak

    monkeypatch.setenv("DEFI_CODEC_LOG_LEVEL", "verbose")
    monkeypatch.setenv("DEFI_CODEC_TRACE_PAYLOADS", "1")
    buf = io.StringIO()
    clog.configure(json=True, level="DEBUG", stream=buf)

    payload = (1).to_bytes(20, "big") + (2).to_bytes(20, "big") + (3000).to_bytes(32, "big")
    expected = keccak.new(digest_bits=256, data=payload).digest()
    assert api.pool_identifier(0x2, 0x1, 3000) == expected

    rec = _json_lines(buf)[0]
    assert rec["digest"] == "0x" + expected.hex()
    assert "payload" not in rec
    with pytest.raises(ConfigError):
        load_config()


def test_non_tty_stream_defaults_to_json_and_text_is_plain():
    buf = io.StringIO()
    clog.configure(level="INFO", stream=buf)
    clog.get_logger("defi_codec.test").info("auto")
    assert json.loads(buf.getvalue())["msg"] == "auto"

    buf = io.StringIO()
    clog.configure(json=False, level="INFO", stream=buf)
    clog.get_logger("defi_codec.test").warning("plain")
    assert "\x1b[" not in buf.getvalue()
    assert "| WARNING | defi_codec.test" in buf.getvalue()
