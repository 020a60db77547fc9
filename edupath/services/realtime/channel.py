from abc import ABC, abstractmethod
import threading
from typing import Any, Callable, Dict, List

from starlette.websockets import WebSocket, WebSocketState

from edupath.utils.logging import get_logger

logger = get_logger()

CloseCallback = Callable[["PushChannel"], None]


class PushChannel(ABC):
    """A live connection that can receive server-initiated messages"""

    def __init__(self):
        self._close_callbacks: List[CloseCallback] = []
        self._closed = False
        self._lock = threading.Lock()

    @abstractmethod
    async def send(self, message: Dict[str, Any]) -> None:
        """Deliver a structured message to the client"""

    @abstractmethod
    def is_open(self) -> bool:
        """Whether a send has a chance of reaching the client"""

    def add_close_callback(self, callback: CloseCallback) -> None:
        with self._lock:
            if not self._closed:
                self._close_callbacks.append(callback)
                return
        # Already closed: fire immediately so late subscribers still clean up
        callback(self)

    def close(self) -> None:
        """Mark the channel closed and fire close callbacks exactly once"""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            callbacks, self._close_callbacks = self._close_callbacks, []

        for callback in callbacks:
            try:
                callback(self)
            except Exception as e:
                logger.warning(f"Close callback failed for {self!r}: {str(e)}")

    @property
    def closed(self) -> bool:
        return self._closed


class WebSocketChannel(PushChannel):
    """PushChannel backed by a Starlette WebSocket"""

    def __init__(self, websocket: WebSocket):
        super().__init__()
        self.websocket = websocket

    async def send(self, message: Dict[str, Any]) -> None:
        await self.websocket.send_json(message)

    def is_open(self) -> bool:
        return (
            not self.closed
            and self.websocket.application_state == WebSocketState.CONNECTED
            and self.websocket.client_state == WebSocketState.CONNECTED
        )

    def __repr__(self) -> str:
        client = self.websocket.client
        peer = f"{client.host}:{client.port}" if client else "unknown"
        return f"<WebSocketChannel peer={peer} closed={self.closed}>"
