"""WebSocket URL building for the control and upload endpoints."""

from __future__ import annotations

import uuid
from urllib.parse import quote, urlparse, urlunparse


def ws_base_url(server: str, secure: bool = False) -> str:
    """Normalize ``server`` into a ``ws://`` or ``wss://`` base without a trailing slash.

    Accepts ``host:port``, ``http(s)://...`` and ``ws(s)://...`` forms.
    """
    server = (server or "").strip()
    if not server:
        raise ValueError("server must not be empty")
    if server.startswith(("ws://", "wss://")):
        parsed = urlparse(server)
        scheme = parsed.scheme
    elif server.startswith(("http://", "https://")):
        parsed = urlparse(server)
        scheme = "wss" if (parsed.scheme == "https" or secure) else "ws"
    else:
        scheme = "wss" if secure else "ws"
        return f"{scheme}://{server.rstrip('/')}"
    path = (parsed.path or "").rstrip("/")
    return urlunparse((scheme, parsed.netloc, path, "", parsed.query, ""))


def _join(base: str, path: str) -> str:
    parsed = urlparse(base)
    base_path = (parsed.path or "").rstrip("/")
    suffix = "/" + path.lstrip("/")
    return urlunparse((parsed.scheme, parsed.netloc, f"{base_path}{suffix}", "", parsed.query, ""))


def control_url(base: str, path: str) -> str:
    return _join(base, path)


def upload_url(base: str, prefix: str, transfer_id: str | uuid.UUID) -> str:
    """Per-transfer endpoint: ``<base><prefix>/<transfer id>``."""
    token = str(transfer_id).strip()
    if not token:
        raise ValueError("transfer_id must not be empty")
    return _join(base, f"{prefix.rstrip('/')}/{quote(token, safe='')}")


__all__ = ["control_url", "upload_url", "ws_base_url"]
