"""Process-wide client runtime construction and accessors."""

from __future__ import annotations

import uuid
import logging
from typing import Any
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from filedock.net.urls import control_url
from filedock.state.runtime import ClientRuntime
from filedock.net.transport import ConnectFn
from filedock.state.settings import ClientSettings
from filedock.control.channel import RequestChannel
from filedock.upload.uploader import ChunkedUploader

from .settings_loader import load_settings

logger = logging.getLogger(__name__)


def build_client_runtime(
    settings: ClientSettings | None = None,
    *,
    connect_fn: ConnectFn | None = None,
) -> ClientRuntime:
    """Construct the shared runtime once at process start; no I/O happens here."""
    settings = settings or load_settings()
    conn = settings.connection
    channel = RequestChannel(
        control_url(conn.base_url, conn.control_path),
        connect_fn=connect_fn,
        ws_options=conn.ws_options(),
    )
    return ClientRuntime(settings=settings, channel=channel, connect_fn=connect_fn)


async def ensure_connection(runtime: ClientRuntime) -> RequestChannel:
    """Return the shared request channel, connecting it first if needed."""
    await runtime.channel.connect()
    return runtime.channel


def new_uploader(runtime: ClientRuntime, source: Any, transfer_id: str | uuid.UUID) -> ChunkedUploader:
    conn = runtime.settings.connection
    upload = runtime.settings.upload
    return ChunkedUploader(
        source,
        transfer_id,
        base_url=conn.base_url,
        upload_prefix=upload.upload_prefix,
        block_size=upload.block_size,
        connect_fn=runtime.connect_fn,
        ws_options=conn.ws_options(),
    )


@asynccontextmanager
async def client_runtime(
    settings: ClientSettings | None = None,
    *,
    connect_fn: ConnectFn | None = None,
) -> AsyncIterator[ClientRuntime]:
    runtime = build_client_runtime(settings, connect_fn=connect_fn)
    logger.debug("runtime: ready (%s)", runtime.channel.url)
    try:
        yield runtime
    finally:
        await runtime.shutdown()


__all__ = [
    "ClientRuntime",
    "build_client_runtime",
    "client_runtime",
    "ensure_connection",
    "new_uploader",
]
