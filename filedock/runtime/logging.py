"""Logging initialization."""

from __future__ import annotations

import os
import logging

from filedock.config.logging import LOG_LEVEL, LOG_FORMAT


def configure_logging(level: str | int | None = None) -> None:
    # websockets logs every frame at DEBUG. Keep it tame unless explicitly enabled.
    if (os.getenv("SHOW_WEBSOCKETS_LOGS") or "").strip().lower() not in {"1", "true", "yes"}:
        logging.getLogger("websockets").setLevel(logging.WARNING)
        logging.getLogger("websockets.client").setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL if level is None else level, format=LOG_FORMAT)


__all__ = ["configure_logging"]
