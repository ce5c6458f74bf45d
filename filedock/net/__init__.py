from .codec import decode_object, encode_frame
from .urls import upload_url, control_url, ws_base_url
from .transport import ConnectFn, resolve_connect_fn

__all__ = [
    "ConnectFn",
    "control_url",
    "decode_object",
    "encode_frame",
    "resolve_connect_fn",
    "upload_url",
    "ws_base_url",
]
