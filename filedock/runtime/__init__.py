from .logging import configure_logging
from .settings_loader import load_settings
from .dependencies import (
    new_uploader,
    client_runtime,
    ensure_connection,
    build_client_runtime,
)

__all__ = [
    "build_client_runtime",
    "client_runtime",
    "configure_logging",
    "ensure_connection",
    "load_settings",
    "new_uploader",
]
