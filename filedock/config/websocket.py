"""WebSocket transport configuration and constants."""

from __future__ import annotations

# Environment variable names
ENV_WS_BASE_URL = "FILEDOCK_WS_BASE_URL"
ENV_CONTROL_PATH = "FILEDOCK_CONTROL_PATH"
ENV_WS_PING_INTERVAL_S = "FILEDOCK_WS_PING_INTERVAL_S"
ENV_WS_PING_TIMEOUT_S = "FILEDOCK_WS_PING_TIMEOUT_S"
ENV_WS_MAX_MESSAGE_BYTES = "FILEDOCK_WS_MAX_MESSAGE_BYTES"

# Defaults
DEFAULT_WS_BASE_URL = "ws://localhost:8080"
DEFAULT_CONTROL_PATH = "/control"
DEFAULT_WS_PING_INTERVAL_S: float | None = 20.0
DEFAULT_WS_PING_TIMEOUT_S: float | None = 20.0
DEFAULT_WS_MAX_MESSAGE_BYTES = 1 << 20

# Close codes
WS_CLOSE_NORMAL_CODE = 1000

__all__ = [
    "ENV_WS_BASE_URL",
    "ENV_CONTROL_PATH",
    "ENV_WS_PING_INTERVAL_S",
    "ENV_WS_PING_TIMEOUT_S",
    "ENV_WS_MAX_MESSAGE_BYTES",
    "DEFAULT_WS_BASE_URL",
    "DEFAULT_CONTROL_PATH",
    "DEFAULT_WS_PING_INTERVAL_S",
    "DEFAULT_WS_PING_TIMEOUT_S",
    "DEFAULT_WS_MAX_MESSAGE_BYTES",
    "WS_CLOSE_NORMAL_CODE",
]
