"""JSON frame encoding for text frames."""

from __future__ import annotations

from typing import Any

import orjson


def encode_frame(payload: Any) -> str:
    """Serialize ``payload`` into the text of one frame."""
    return orjson.dumps(payload).decode("utf-8")


def decode_object(raw: str | bytes) -> dict[str, Any]:
    """Parse one text frame that must hold a JSON object.

    Raises ValueError when the frame is not valid JSON or not an object.
    """
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("frame must be a JSON object")
    return data


__all__ = ["decode_object", "encode_frame"]
