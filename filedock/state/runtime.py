"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from filedock.net.transport import ConnectFn
    from filedock.state.settings import ClientSettings
    from filedock.control.channel import RequestChannel


@dataclass(slots=True)
class ClientRuntime:
    settings: ClientSettings
    channel: RequestChannel
    connect_fn: ConnectFn | None = None

    async def shutdown(self) -> None:
        try:
            await self.channel.close()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["ClientRuntime"]
