"""Pending call records for the request channel (dataclasses only)."""

from __future__ import annotations

import asyncio
from typing import Any
from dataclasses import dataclass


@dataclass(slots=True)
class PendingCall:
    """One outstanding call, identified only by its position in send order."""

    seq: int
    future: asyncio.Future[Any]

    def resolve(self, response: Any) -> None:
        if not self.future.done():
            self.future.set_result(response)

    def reject(self, exc: BaseException) -> None:
        if not self.future.done():
            self.future.set_exception(exc)


__all__ = ["PendingCall"]
