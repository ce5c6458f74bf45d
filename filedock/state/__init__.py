from .pending import PendingCall
from .runtime import ClientRuntime
from .connection import ConnectionState
from .transfer import TransferPhase, TransferState
from .settings import ClientSettings, UploadSettings, ConnectionSettings

__all__ = [
    "ClientRuntime",
    "ClientSettings",
    "ConnectionSettings",
    "ConnectionState",
    "PendingCall",
    "TransferPhase",
    "TransferState",
    "UploadSettings",
]
