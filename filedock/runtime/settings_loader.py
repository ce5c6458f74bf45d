"""Environment parsing for client settings."""

from __future__ import annotations

import os

from filedock.net.urls import ws_base_url
from filedock.state.settings import ClientSettings, UploadSettings, ConnectionSettings
from filedock.config.upload import (
    ENV_UPLOAD_PREFIX,
    DEFAULT_UPLOAD_PREFIX,
    ENV_UPLOAD_BLOCK_BYTES,
    DEFAULT_UPLOAD_BLOCK_BYTES,
)
from filedock.config.websocket import (
    ENV_WS_BASE_URL,
    ENV_CONTROL_PATH,
    DEFAULT_WS_BASE_URL,
    DEFAULT_CONTROL_PATH,
    ENV_WS_PING_TIMEOUT_S,
    ENV_WS_PING_INTERVAL_S,
    ENV_WS_MAX_MESSAGE_BYTES,
    DEFAULT_WS_PING_TIMEOUT_S,
    DEFAULT_WS_PING_INTERVAL_S,
    DEFAULT_WS_MAX_MESSAGE_BYTES,
)

_DISABLED_VALUES = {"0", "none", "null", "disabled", "disable", "off"}


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _optional_float_env(name: str, default: float | None) -> float | None:
    """Float setting where ``0``/``none``/``off`` disables the feature."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    v = raw.strip().lower()
    if v in _DISABLED_VALUES:
        return None
    try:
        parsed = float(v)
    except Exception:
        return default
    return parsed if parsed > 0 else None


def _load_connection_settings() -> ConnectionSettings:
    base_url = ws_base_url(_str_env(ENV_WS_BASE_URL, DEFAULT_WS_BASE_URL))
    max_message_bytes = _int_env(ENV_WS_MAX_MESSAGE_BYTES, DEFAULT_WS_MAX_MESSAGE_BYTES)
    if max_message_bytes <= 0:
        max_message_bytes = DEFAULT_WS_MAX_MESSAGE_BYTES

    return ConnectionSettings(
        base_url=base_url,
        control_path=_str_env(ENV_CONTROL_PATH, DEFAULT_CONTROL_PATH),
        ping_interval_s=_optional_float_env(ENV_WS_PING_INTERVAL_S, DEFAULT_WS_PING_INTERVAL_S),
        ping_timeout_s=_optional_float_env(ENV_WS_PING_TIMEOUT_S, DEFAULT_WS_PING_TIMEOUT_S),
        max_message_bytes=max_message_bytes,
    )


def _load_upload_settings() -> UploadSettings:
    block_size = _int_env(ENV_UPLOAD_BLOCK_BYTES, DEFAULT_UPLOAD_BLOCK_BYTES)
    if block_size <= 0:
        raise ValueError(f"{ENV_UPLOAD_BLOCK_BYTES} must be > 0")

    return UploadSettings(
        upload_prefix=_str_env(ENV_UPLOAD_PREFIX, DEFAULT_UPLOAD_PREFIX),
        block_size=block_size,
    )


def load_settings() -> ClientSettings:
    return ClientSettings(
        connection=_load_connection_settings(),
        upload=_load_upload_settings(),
    )


__all__ = ["load_settings"]
