import threading
from typing import Dict, List, Optional

from edupath.utils.logging import get_logger

from .channel import PushChannel

logger = get_logger()


class ConnectionRegistry:
    """
    Maps a user ID to the single push channel that currently addresses them.

    One registry is owned by the application and shared by the WebSocket
    handler (register/unregister) and the notification dispatcher (lookup).
    All access goes through one lock; callers must not await while holding it,
    so sends and database writes always happen after the lookup returns.
    """

    def __init__(self):
        self._channels: Dict[int, PushChannel] = {}
        self._lock = threading.Lock()

    def register(self, user_id: int, channel: PushChannel) -> Optional[PushChannel]:
        """
        Make `channel` the push target for `user_id`.

        A previous channel for the same user is superseded but left open; it
        simply stops receiving pushes. Returns the superseded channel, if any.
        """
        with self._lock:
            previous = self._channels.get(user_id)
            self._channels[user_id] = channel

        channel.add_close_callback(lambda closed: self.unregister(user_id, closed))

        if previous is not None and previous is not channel:
            logger.info(f"User {user_id} reconnected, superseding previous channel")
        else:
            logger.info(f"User {user_id} registered for push notifications")
        return previous

    def unregister(self, user_id: int, channel: Optional[PushChannel] = None) -> bool:
        """
        Remove the mapping for `user_id`. Idempotent.

        When `channel` is given the entry is only removed if it still points
        at that channel, so a superseded connection closing late leaves its
        successor in place. Returns whether an entry was removed.
        """
        with self._lock:
            current = self._channels.get(user_id)
            if current is None:
                return False
            if channel is not None and current is not channel:
                return False
            del self._channels[user_id]

        logger.info(f"User {user_id} unregistered from push notifications")
        return True

    def lookup(self, user_id: int) -> Optional[PushChannel]:
        with self._lock:
            return self._channels.get(user_id)

    def connected_user_ids(self) -> List[int]:
        with self._lock:
            return list(self._channels.keys())

    def clear(self) -> None:
        with self._lock:
            self._channels.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._channels)

    def __contains__(self, user_id: int) -> bool:
        with self._lock:
            return user_id in self._channels
