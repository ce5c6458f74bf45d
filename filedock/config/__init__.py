"""Configuration module exports (env names and defaults only)."""

from .upload import BLOCK_SIZE
from .websocket import DEFAULT_WS_BASE_URL, DEFAULT_CONTROL_PATH

__all__ = [
    "BLOCK_SIZE",
    "DEFAULT_CONTROL_PATH",
    "DEFAULT_WS_BASE_URL",
]
