"""Client engines for the filedock control and upload WebSocket endpoints."""

from .control import RequestChannel
from .state import ClientRuntime, ConnectionState
from .upload import FileSource, BytesSource, ChunkedUploader
from .runtime import (
    new_uploader,
    client_runtime,
    ensure_connection,
    build_client_runtime,
)
from .errors import (
    FiledockError,
    ProtocolError,
    RemoteCallError,
    ChannelClosedError,
    ChannelConnectError,
    ChannelNotConnectedError,
    ChannelConnectionLostError,
)

__all__ = [
    "BytesSource",
    "ChannelClosedError",
    "ChannelConnectError",
    "ChannelConnectionLostError",
    "ChannelNotConnectedError",
    "ChunkedUploader",
    "ClientRuntime",
    "ConnectionState",
    "FileSource",
    "FiledockError",
    "ProtocolError",
    "RemoteCallError",
    "RequestChannel",
    "build_client_runtime",
    "client_runtime",
    "ensure_connection",
    "new_uploader",
]
