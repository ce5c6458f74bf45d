from .channel import ConnectFn, RequestChannel

__all__ = ["ConnectFn", "RequestChannel"]
