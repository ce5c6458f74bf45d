"""Client settings (dataclasses only)."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ConnectionSettings:
    base_url: str
    control_path: str
    ping_interval_s: float | None
    ping_timeout_s: float | None
    max_message_bytes: int

    def ws_options(self) -> dict[str, Any]:
        return {
            "ping_interval": self.ping_interval_s,
            "ping_timeout": self.ping_timeout_s,
            "max_size": self.max_message_bytes,
        }


@dataclass(frozen=True, slots=True)
class UploadSettings:
    upload_prefix: str
    block_size: int


@dataclass(frozen=True, slots=True)
class ClientSettings:
    connection: ConnectionSettings
    upload: UploadSettings


__all__ = [
    "ClientSettings",
    "ConnectionSettings",
    "UploadSettings",
]
