"""Wire protocol keys, commands and terminal messages."""

from __future__ import annotations

# Response keys
KEY_ERR = "err"
KEY_CUR_POS = "cur_pos"

# Upload commands
KEY_CMD = "cmd"
KEY_POS = "pos"
CMD_FINISH = "Finish"
CMD_SEEK = "Seek"

# Terminal transfer errors
ERR_CLOSED_BY_SERVER = "socket closed by server"
ERR_CANCELLED = "cancelled"
ERR_CONNECT_FAILED = "failed to connect"
ERR_MALFORMED_REPLY = "malformed control reply"
ERR_READ_FAILED = "failed to read source"

# Request channel conditions
ERR_NOT_CONNECTED = "not connected"
ERR_CONNECTION_LOST = "connection lost"
ERR_CHANNEL_CLOSED = "channel closed"

__all__ = [
    "KEY_ERR",
    "KEY_CUR_POS",
    "KEY_CMD",
    "KEY_POS",
    "CMD_FINISH",
    "CMD_SEEK",
    "ERR_CLOSED_BY_SERVER",
    "ERR_CANCELLED",
    "ERR_CONNECT_FAILED",
    "ERR_MALFORMED_REPLY",
    "ERR_READ_FAILED",
    "ERR_NOT_CONNECTED",
    "ERR_CONNECTION_LOST",
    "ERR_CHANNEL_CLOSED",
]
