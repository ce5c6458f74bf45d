"""Transport factory seam shared by both engines."""

from __future__ import annotations

from typing import Any
from collections.abc import Callable, Awaitable

import websockets

# Called as ``await connect_fn(url, **ws_options)``; must return an object with
# async ``send``/``recv``/``close`` that raises ConnectionClosed once closed.
ConnectFn = Callable[..., Awaitable[Any]]


def resolve_connect_fn(connect_fn: ConnectFn | None) -> ConnectFn:
    return connect_fn or websockets.connect


__all__ = ["ConnectFn", "resolve_connect_fn"]
