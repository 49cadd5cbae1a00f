"""
defi_codec.config - logging and tracing settings.

Nothing here can influence the bytes an operation produces: the domain table
and the hash algorithm are fixed for the process lifetime. Configuration only
decides how operations are *observed*.

Configuration precedence:
  1) Environment variables (DEFI_CODEC_*)
  2) Hardcoded defaults below

Key env vars (case-insensitive where boolean):
  - DEFI_CODEC_LOG_LEVEL        (str)    default: INFO
  - DEFI_CODEC_LOG_FORMAT       (str)    json | text; default: auto (JSON off-TTY)
  - DEFI_CODEC_LOG_FILE         (path)   default: unset
  - DEFI_CODEC_TRACE_PAYLOADS   (bool)   default: false

Usage:
    from defi_codec.config import load_config
    CFG = load_config()
    if CFG.trace_payloads: ...
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigError

ENV_PREFIX = "DEFI_CODEC_"

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")
_FORMATS = ("json", "text")


# ----------------------------- helpers ---------------------------------------


def _env(name: str) -> Optional[str]:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return None
    return raw.strip()


def _parse_bool(v: str) -> bool:
    return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name)
    return _parse_bool(raw) if raw is not None else default


def _env_level(name: str, default: str) -> str:
    raw = _env(name)
    if raw is None:
        return default
    level = raw.upper()
    if level not in _LEVELS:
        raise ConfigError(
            f"{ENV_PREFIX}{name} must be one of {', '.join(_LEVELS)}", value=raw
        )
    return level


def _env_format(name: str) -> Optional[str]:
    raw = _env(name)
    if raw is None:
        return None
    fmt = raw.lower()
    if fmt not in _FORMATS:
        raise ConfigError(f"{ENV_PREFIX}{name} must be 'json' or 'text'", value=raw)
    return fmt


def _env_path(name: str) -> Optional[Path]:
    raw = _env(name)
    return Path(raw).expanduser() if raw else None


# ------------------------------- config --------------------------------------


@dataclass(frozen=True)
class CodecConfig:
    log_level: str = "INFO"
    # None → decided by TTY detection when logging is configured.
    log_format: Optional[str] = None
    log_file: Optional[Path] = None
    # Include full payload hex in per-operation DEBUG records.
    trace_payloads: bool = False

    @property
    def log_json(self) -> Optional[bool]:
        return None if self.log_format is None else self.log_format == "json"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "log_level": self.log_level,
            "log_format": self.log_format,
            "log_file": str(self.log_file) if self.log_file else None,
            "trace_payloads": self.trace_payloads,
        }


@lru_cache(maxsize=1)
def load_config() -> CodecConfig:
    """
    Build the process-wide CodecConfig from the environment.

    Cached; call `load_config.cache_clear()` after changing the environment
    (tests do this through monkeypatch).
    """
    return CodecConfig(
        log_level=_env_level("LOG_LEVEL", "INFO"),
        log_format=_env_format("LOG_FORMAT"),
        log_file=_env_path("LOG_FILE"),
        trace_payloads=_env_bool("TRACE_PAYLOADS", False),
    )


__all__ = ["ENV_PREFIX", "CodecConfig", "load_config"]
