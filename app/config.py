"""Centralize defaults and environment lookups for the command compiler apps."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Default configuration values
# ---------------------------------------------------------------------------
_DEFAULT_COMPILE_LOG_ENABLED: bool = True
_DEFAULT_LOG_REDACTION_ENABLED: bool = True
_DEFAULT_LOG_DIR = "logs"
_COMPILE_LOG_FILENAME = "compiles.jsonl"
_DEFAULT_LOG_REDACTION_PATTERNS = "email,phone,credit_card,gov_id,url"
_DEFAULT_LOG_MAX_BYTES = 1_000_000
_DEFAULT_LOG_BACKUP_COUNT = 5
_DEFAULT_LOG_LEVEL = "INFO"
_DEFAULT_SUCCESS_THRESHOLD = 0.7
_DEFAULT_WEB_UI_HOST = "127.0.0.1"
_DEFAULT_WEB_UI_PORT = 9000
_DEFAULT_EVAL_CONFIG_PATH = "config/eval_prompts.yml"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _source(env: Dict[str, str] | None) -> Dict[str, str]:
    return env if env is not None else os.environ  # type: ignore[return-value]


def _read_bool(env: Dict[str, str] | None, key: str, default: bool) -> bool:
    raw = _source(env).get(key)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _FALSE_VALUES:
        return False
    if normalized in _TRUE_VALUES:
        return True
    return default


def _read_int(env: Dict[str, str] | None, key: str, default: int) -> int:
    raw = _source(env).get(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Compile log (learning record) settings
# ---------------------------------------------------------------------------
def is_compile_log_enabled(env: Dict[str, str] | None = None) -> bool:
    """Determine whether compiled commands are appended to the JSONL compile log."""

    return _read_bool(env, "COMPILE_LOG_ENABLED", _DEFAULT_COMPILE_LOG_ENABLED)


def get_log_dir(env: Dict[str, str] | None = None) -> Path:
    """Return the base directory for log files."""

    override = _source(env).get("LOG_DIR")
    return Path(override) if override else Path(_DEFAULT_LOG_DIR)


def get_compile_log_path(env: Dict[str, str] | None = None) -> Path:
    return get_log_dir(env) / _COMPILE_LOG_FILENAME


def is_log_redaction_enabled(env: Dict[str, str] | None = None) -> bool:
    """Determine whether sensitive values should be scrubbed before logging."""

    return _read_bool(env, "LOG_REDACTION_ENABLED", _DEFAULT_LOG_REDACTION_ENABLED)


def get_log_redaction_patterns(env: Dict[str, str] | None = None) -> List[str]:
    """Return the list of redaction pattern keys to apply."""

    raw = _source(env).get("LOG_REDACTION_PATTERNS")
    values = raw if raw is not None else _DEFAULT_LOG_REDACTION_PATTERNS
    return [segment.strip().lower() for segment in values.split(",") if segment.strip()]


def get_log_max_bytes(env: Dict[str, str] | None = None) -> int:
    """Return the maximum size in bytes before rotating the compile log."""

    return max(_read_int(env, "LOG_MAX_BYTES", _DEFAULT_LOG_MAX_BYTES), 0)


def get_log_backup_count(env: Dict[str, str] | None = None) -> int:
    """Return the number of rotated compile logs to retain."""

    return max(_read_int(env, "LOG_BACKUP_COUNT", _DEFAULT_LOG_BACKUP_COUNT), 0)


def get_log_level(env: Dict[str, str] | None = None) -> int:
    """Return the stdlib logging level named by ``LOG_LEVEL`` (INFO when unknown)."""

    raw = (_source(env).get("LOG_LEVEL") or _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    if isinstance(level, int):
        return level
    return logging.getLevelName(_DEFAULT_LOG_LEVEL)


# ---------------------------------------------------------------------------
# Compiler settings
# ---------------------------------------------------------------------------
def get_success_threshold(env: Dict[str, str] | None = None) -> float:
    """Return the confidence above which a compile is recorded as ``success``."""

    raw = _source(env).get("CONFIDENCE_SUCCESS_THRESHOLD")
    if raw is None:
        return _DEFAULT_SUCCESS_THRESHOLD
    try:
        value = float(raw)
    except ValueError:
        return _DEFAULT_SUCCESS_THRESHOLD
    return min(max(value, 0.0), 1.0)


def get_eval_config_path(env: Dict[str, str] | None = None) -> Path:
    override = _source(env).get("EVAL_CONFIG_PATH")
    return Path(override) if override else Path(_DEFAULT_EVAL_CONFIG_PATH)


# ---------------------------------------------------------------------------
# Web API settings
# ---------------------------------------------------------------------------
def get_web_ui_host(env: Dict[str, str] | None = None) -> str:
    return _source(env).get("WEB_UI_HOST", _DEFAULT_WEB_UI_HOST)


def get_web_ui_port(env: Dict[str, str] | None = None) -> int:
    value = _read_int(env, "WEB_UI_PORT", _DEFAULT_WEB_UI_PORT)
    return value if 0 < value <= 65535 else _DEFAULT_WEB_UI_PORT
