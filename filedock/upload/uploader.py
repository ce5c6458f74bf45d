"""Server-paced chunked upload over a dedicated WebSocket.

One binary frame carries one block of the source. The server answers every
block with a ``{"cur_pos": n}`` control frame and the next block is only sent
after that answer arrives. Once the whole source is out, the client sends
``{"cmd": "Finish"}`` and the following reply carries the final outcome.
"""

from __future__ import annotations

import uuid
import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable

from websockets.exceptions import ConnectionClosed

from filedock.net.urls import upload_url
from filedock.net.codec import encode_frame, decode_object
from filedock.net.transport import ConnectFn, resolve_connect_fn
from filedock.state.transfer import TransferPhase, TransferState
from filedock.config.upload import BLOCK_SIZE, DEFAULT_UPLOAD_PREFIX
from filedock.config.websocket import DEFAULT_WS_BASE_URL, WS_CLOSE_NORMAL_CODE
from filedock.config.protocol import (
    KEY_CMD,
    KEY_ERR,
    KEY_POS,
    CMD_SEEK,
    CMD_FINISH,
    KEY_CUR_POS,
    ERR_CANCELLED,
    ERR_READ_FAILED,
    ERR_CONNECT_FAILED,
    ERR_MALFORMED_REPLY,
    ERR_CLOSED_BY_SERVER,
)

from .source import block_length, as_byte_source

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[], None]


class ChunkedUploader:
    """Transfer one byte source to the upload endpoint of ``transfer_id``.

    Nothing touches the network until ``start()``. Terminal outcomes never
    raise; they are reported through ``get_error()`` and the progress
    callbacks, which fire exactly once per transfer.
    """

    def __init__(
        self,
        source: Any,
        transfer_id: str | uuid.UUID,
        *,
        base_url: str | None = None,
        upload_prefix: str | None = None,
        block_size: int = BLOCK_SIZE,
        connect_fn: ConnectFn | None = None,
        ws_options: dict[str, Any] | None = None,
    ) -> None:
        if block_size <= 0:
            raise ValueError("block_size must be > 0")
        self.transfer_id = str(transfer_id)
        self.block_size = int(block_size)
        self.url = upload_url(
            base_url or DEFAULT_WS_BASE_URL,
            upload_prefix or DEFAULT_UPLOAD_PREFIX,
            self.transfer_id,
        )
        self._source = as_byte_source(source)
        self._connect_fn: ConnectFn = resolve_connect_fn(connect_fn)
        self._ws_options = dict(ws_options or {})
        self._transfer = TransferState(source_size=self._source.size)
        self._callbacks: list[ProgressCallback] = []
        self._resume_from = 0
        self._ws: Any = None
        self._task: asyncio.Task[None] | None = None
        self._done = asyncio.Event()

    # ---- observable state ----

    def on_progress(self, callback: ProgressCallback) -> None:
        self._callbacks.append(callback)

    def is_running(self) -> bool:
        return self._transfer.running

    def get_percentage(self) -> float:
        return self._transfer.percentage()

    def get_error(self) -> str | None:
        return self._transfer.terminal_error

    @property
    def sent_offset(self) -> int:
        return self._transfer.sent_offset

    @property
    def source_size(self) -> int:
        return self._transfer.source_size

    @property
    def phase(self) -> TransferPhase:
        return self._transfer.phase

    # ---- control ----

    def start(self, resume_from: int = 0) -> asyncio.Task[None]:
        """Open the upload connection and stream the source in the background.

        ``resume_from`` asks the server to seek first, for continuing a
        partially uploaded file.
        """
        if self._task is not None or self._transfer.terminal:
            raise RuntimeError(f"upload {self.transfer_id} already started")
        if not 0 <= resume_from <= self._transfer.source_size:
            raise ValueError(f"resume_from must be within [0, {self._transfer.source_size}]")
        self._resume_from = int(resume_from)
        self._transfer.phase = TransferPhase.CONNECTING
        self._task = asyncio.create_task(self._run())
        return self._task

    async def abort(self) -> None:
        """Cancel the transfer, close its connection and report ``cancelled``."""
        if self._transfer.terminal:
            return
        logger.info("upload %s: cancelled at %d/%d", self.transfer_id, self.sent_offset, self.source_size)
        self._terminate(ERR_CANCELLED)
        if self._ws is not None:
            await self._close_transport()
        elif self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait(self) -> str | None:
        """Wait for the terminal state and return the terminal error, if any."""
        await self._done.wait()
        return self._transfer.terminal_error

    # ---- connection events ----

    async def _run(self) -> None:
        try:
            ws = await self._connect_fn(self.url, **self._ws_options)
        except Exception as exc:
            logger.error("upload %s: connect failed: %s", self.transfer_id, exc)
            self._terminate(f"{ERR_CONNECT_FAILED}: {exc}")
            return

        if self._transfer.terminal:
            with contextlib.suppress(Exception):
                await ws.close(code=WS_CLOSE_NORMAL_CODE)
            return

        self._ws = ws
        try:
            await self._on_open()
            while not self._transfer.terminal:
                message = await ws.recv()
                await self._on_message(message)
        except ConnectionClosed as exc:
            self._on_close(exc)
        except Exception as exc:
            await self._on_error(exc)

    async def _on_open(self) -> None:
        self._transfer.running = True
        logger.debug("upload %s: connected (%d bytes)", self.transfer_id, self.source_size)
        if self._resume_from > 0:
            self._transfer.phase = TransferPhase.SEEKING
            await self._send_command({KEY_CMD: CMD_SEEK, KEY_POS: self._resume_from})
            return
        self._transfer.phase = TransferPhase.STREAMING
        await self._send_next_block()

    async def _on_message(self, message: str | bytes) -> None:
        if self._transfer.terminal:
            return
        if not isinstance(message, str):
            logger.warning("upload %s: received data of unknown type (%d bytes)", self.transfer_id, len(message))
            return

        try:
            reply = decode_object(message)
        except ValueError as exc:
            logger.error("upload %s: %s: %s", self.transfer_id, ERR_MALFORMED_REPLY, exc)
            await self._fail(ERR_MALFORMED_REPLY)
            return

        err = reply.get(KEY_ERR)
        if self._transfer.phase is TransferPhase.FINISHING:
            # Finish acknowledgement.
            self._terminate(str(err) if err else None)
            await self._close_transport()
            return

        if err is not None:
            logger.error("upload %s: server error: %s", self.transfer_id, err)
            await self._fail(str(err))
            return

        if self._transfer.phase is TransferPhase.SEEKING:
            self._transfer.advance(self._resume_from - self._transfer.sent_offset)
            self._transfer.phase = TransferPhase.STREAMING
        else:
            cur_pos = reply.get(KEY_CUR_POS)
            if cur_pos != self._transfer.sent_offset:
                logger.warning(
                    "upload %s: file position mismatch: local %d remote %s",
                    self.transfer_id,
                    self._transfer.sent_offset,
                    cur_pos,
                )
        await self._send_next_block()

    async def _on_error(self, exc: Exception) -> None:
        logger.error("upload %s: socket error: %s", self.transfer_id, exc, exc_info=exc)
        await self._close_transport()
        self._on_close(None)

    def _on_close(self, exc: ConnectionClosed | None) -> None:
        if self._transfer.terminal:
            return
        logger.error("upload %s: socket closed by server: %s", self.transfer_id, exc)
        self._terminate(ERR_CLOSED_BY_SERVER)

    # ---- helpers ----

    async def _send_next_block(self) -> None:
        transfer = self._transfer
        length = block_length(transfer.sent_offset, transfer.source_size, self.block_size)
        if length == 0:
            transfer.running = False
            transfer.phase = TransferPhase.FINISHING
            await self._send_command({KEY_CMD: CMD_FINISH})
            return

        try:
            block = self._source.read(transfer.sent_offset, length)
        except OSError as exc:
            logger.error("upload %s: %s: %s", self.transfer_id, ERR_READ_FAILED, exc)
            await self._fail(f"{ERR_READ_FAILED}: {exc}")
            return
        if len(block) != length:
            await self._fail(f"{ERR_READ_FAILED}: short read at offset {transfer.sent_offset}")
            return

        await self._ws.send(block)
        transfer.advance(length)

    async def _send_command(self, command: dict[str, Any]) -> None:
        await self._ws.send(encode_frame(command))

    async def _fail(self, error: str) -> None:
        self._terminate(error)
        await self._close_transport()

    async def _close_transport(self) -> None:
        if self._ws is None:
            return
        with contextlib.suppress(Exception):
            await self._ws.close(code=WS_CLOSE_NORMAL_CODE)

    def _terminate(self, error: str | None) -> None:
        transfer = self._transfer
        if transfer.terminal:
            return
        transfer.running = False
        transfer.terminal_error = error
        transfer.phase = TransferPhase.DONE
        self._done.set()
        for callback in list(self._callbacks):
            try:
                callback()
            except Exception:
                logger.exception("upload %s: progress callback failed", self.transfer_id)


__all__ = ["ChunkedUploader", "ProgressCallback"]
