"""Shared error types for the filedock client."""

from __future__ import annotations

from dataclasses import dataclass


class FiledockError(Exception):
    """Base class for errors raised by the client engines."""


class ChannelConnectError(FiledockError):
    """The control connection could not be established."""


class ChannelNotConnectedError(FiledockError):
    """A call was issued before the control connection became ready."""


class ChannelConnectionLostError(FiledockError):
    """The control connection dropped while a call was outstanding."""


class ChannelClosedError(ChannelConnectionLostError):
    """The channel was shut down while a call was outstanding."""


class ProtocolError(FiledockError):
    """A response frame could not be decoded as a JSON object."""


@dataclass(eq=False, slots=True)
class RemoteCallError(FiledockError):
    """Raised when the server answers a call with a non-null ``err``."""

    error: str

    def __str__(self) -> str:
        return self.error


__all__ = [
    "ChannelClosedError",
    "ChannelConnectError",
    "ChannelConnectionLostError",
    "ChannelNotConnectedError",
    "FiledockError",
    "ProtocolError",
    "RemoteCallError",
]
