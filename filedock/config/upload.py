"""Chunked upload configuration (env names and defaults only)."""

from __future__ import annotations

ENV_UPLOAD_PREFIX = "FILEDOCK_UPLOAD_PREFIX"
ENV_UPLOAD_BLOCK_BYTES = "FILEDOCK_UPLOAD_BLOCK_BYTES"

DEFAULT_UPLOAD_PREFIX = "/api/uploads"

# One mebibyte per binary frame; the server acks each block before the next is sent.
BLOCK_SIZE = 1 << 20
DEFAULT_UPLOAD_BLOCK_BYTES = BLOCK_SIZE

__all__ = [
    "ENV_UPLOAD_PREFIX",
    "ENV_UPLOAD_BLOCK_BYTES",
    "DEFAULT_UPLOAD_PREFIX",
    "BLOCK_SIZE",
    "DEFAULT_UPLOAD_BLOCK_BYTES",
]
