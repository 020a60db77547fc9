from .channel import PushChannel, WebSocketChannel
from .connection_registry import ConnectionRegistry
from .dependencies import get_connection_registry

__all__ = [
    "PushChannel",
    "WebSocketChannel",
    "ConnectionRegistry",
    "get_connection_registry",
]
