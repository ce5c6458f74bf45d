"""Request/response multiplexer over one shared control WebSocket.

The control endpoint does not tag responses with request identifiers, so
calls are correlated by order: the N-th response received on a connection
answers the N-th request sent on it. This holds only while the server
answers every request exactly once and in order; an identifier-tagged
envelope would be needed if the server ever replies out of order.
"""

from __future__ import annotations

import asyncio
import logging
import contextlib
import collections
from typing import Any

from websockets.exceptions import ConnectionClosed

from filedock.state.pending import PendingCall
from filedock.state.connection import ConnectionState
from filedock.net.codec import encode_frame, decode_object
from filedock.net.transport import ConnectFn, resolve_connect_fn
from filedock.config.websocket import WS_CLOSE_NORMAL_CODE
from filedock.config.protocol import (
    KEY_ERR,
    ERR_NOT_CONNECTED,
    ERR_CHANNEL_CLOSED,
    ERR_CONNECTION_LOST,
)
from filedock.errors import (
    ProtocolError,
    RemoteCallError,
    ChannelClosedError,
    ChannelConnectError,
    ChannelNotConnectedError,
    ChannelConnectionLostError,
)

logger = logging.getLogger(__name__)


class RequestChannel:
    """Concurrent call/response RPC over a single lazily opened connection."""

    def __init__(
        self,
        url: str,
        *,
        connect_fn: ConnectFn | None = None,
        ws_options: dict[str, Any] | None = None,
    ) -> None:
        self.url = url
        self._connect_fn: ConnectFn = resolve_connect_fn(connect_fn)
        self._ws_options = dict(ws_options or {})
        self._ws: Any = None
        self._state = ConnectionState.DISCONNECTED
        self._connect_task: asyncio.Task[None] | None = None
        self._reader_task: asyncio.Task[None] | None = None
        self._pending: collections.deque[PendingCall] = collections.deque()
        self._next_send_seq = 0
        self._next_recv_seq = 0

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is ConnectionState.READY

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def connect(self) -> None:
        """Open the control connection unless it is already ready.

        Callers racing before readiness all wait on the same attempt and see
        its outcome. A failed attempt raises ChannelConnectError; an attempt
        cut short by close() raises ChannelClosedError.
        """
        if self._state is ConnectionState.READY:
            return
        if self._connect_task is None:
            self._connect_task = asyncio.create_task(self._open())
        task = self._connect_task
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            # close() cancelled the attempt before it started running.
            if task.cancelled() and self._state is ConnectionState.CLOSED:
                raise ChannelClosedError(ERR_CHANNEL_CLOSED) from None
            raise

    async def execute(self, payload: Any) -> dict[str, Any]:
        """Send one request and wait for the response matched to it."""
        ws = self._ws
        if ws is None or self._state is not ConnectionState.READY:
            raise ChannelNotConnectedError(ERR_NOT_CONNECTED)

        text = encode_frame(payload)
        call = PendingCall(seq=self._next_send_seq, future=asyncio.get_running_loop().create_future())
        self._next_send_seq += 1
        # Registered before sending: the reader may see the response while send() is suspended.
        self._pending.append(call)
        try:
            await ws.send(text)
        except ConnectionClosed:
            # Never transmitted, so nothing will answer it.
            self._discard(call)
            call.reject(ChannelConnectionLostError(ERR_CONNECTION_LOST))
        return await call.future

    async def close(self) -> None:
        """Tear the channel down: reject every pending call and close the transport."""
        self._state = ConnectionState.CLOSED
        ws, self._ws = self._ws, None
        reader, self._reader_task = self._reader_task, None
        opening, self._connect_task = self._connect_task, None
        self._fail_pending(ChannelClosedError, ERR_CHANNEL_CLOSED)
        if opening is not None and not opening.done():
            opening.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await opening
        if reader is not None:
            reader.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await reader
        if ws is not None:
            with contextlib.suppress(Exception):
                await ws.close(code=WS_CLOSE_NORMAL_CODE)
        logger.info("control socket closed")

    async def _open(self) -> None:
        self._state = ConnectionState.CONNECTING
        logger.info("connecting to control socket %s", self.url)
        try:
            ws = await self._connect_fn(self.url, **self._ws_options)
        except asyncio.CancelledError:
            if self._state is ConnectionState.CLOSED:
                raise ChannelClosedError(ERR_CHANNEL_CLOSED) from None
            raise
        except Exception as exc:
            if self._state is ConnectionState.CONNECTING:
                self._state = ConnectionState.DISCONNECTED
            logger.error("control socket connect failed: %s", exc)
            raise ChannelConnectError(f"failed to connect to {self.url}: {exc}") from exc
        finally:
            if self._connect_task is asyncio.current_task():
                self._connect_task = None

        if self._state is ConnectionState.CLOSED:
            with contextlib.suppress(Exception):
                await ws.close(code=WS_CLOSE_NORMAL_CODE)
            raise ChannelClosedError(ERR_CHANNEL_CLOSED)

        self._on_open(ws)

    def _on_open(self, ws: Any) -> None:
        self._ws = ws
        self._state = ConnectionState.READY
        self._next_send_seq = 0
        self._next_recv_seq = 0
        self._reader_task = asyncio.create_task(self._read_loop(ws))
        logger.info("control socket ready")

    async def _read_loop(self, ws: Any) -> None:
        try:
            while True:
                message = await ws.recv()
                self._on_message(message)
        except ConnectionClosed as exc:
            self._on_close(ws, exc)
        except Exception as exc:
            self._on_error(ws, exc)
            with contextlib.suppress(Exception):
                await ws.close(code=WS_CLOSE_NORMAL_CODE)

    def _on_message(self, message: str | bytes) -> None:
        if not isinstance(message, str):
            logger.warning("control socket received data with unknown type (%d bytes); ignoring", len(message))
            return

        seq = self._next_recv_seq
        self._next_recv_seq += 1
        if not self._pending:
            logger.error("missing handler for response #%d; dropping frame", seq)
            return

        call = self._pending.popleft()
        try:
            response = decode_object(message)
        except ValueError as exc:
            logger.error("undecodable response to request #%d: %s", call.seq, exc)
            call.reject(ProtocolError(str(exc)))
            return

        err = response.get(KEY_ERR)
        if err is not None:
            logger.warning("control request #%d failed: %s", call.seq, err)
            call.reject(RemoteCallError(str(err)))
            return
        call.resolve(response)

    def _on_error(self, ws: Any, exc: Exception) -> None:
        logger.error("control socket error: %s", exc, exc_info=exc)
        self._on_lost(ws)

    def _on_close(self, ws: Any, exc: ConnectionClosed) -> None:
        logger.error("control socket closed: %s", exc)
        self._on_lost(ws)

    def _on_lost(self, ws: Any) -> None:
        if ws is not self._ws:
            return
        self._ws = None
        self._reader_task = None
        if self._state is not ConnectionState.CLOSED:
            self._state = ConnectionState.DISCONNECTED
        self._fail_pending(ChannelConnectionLostError, ERR_CONNECTION_LOST)

    def _fail_pending(self, exc_type: type[Exception], message: str) -> None:
        pending, self._pending = self._pending, collections.deque()
        if pending:
            logger.warning("rejecting %d pending control request(s): %s", len(pending), message)
        for call in pending:
            call.reject(exc_type(message))

    def _discard(self, call: PendingCall) -> None:
        with contextlib.suppress(ValueError):
            self._pending.remove(call)


__all__ = ["ConnectFn", "RequestChannel"]
