from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, WebSocket, status

from edupath.services.realtime import (
    ConnectionRegistry,
    WebSocketChannel,
    get_connection_registry,
)
from edupath.utils.logging import get_logger

websocket_router = APIRouter()
logger = get_logger()


@websocket_router.websocket("/ws")
async def notifications_socket(
    websocket: WebSocket,
    registry: Annotated[ConnectionRegistry, Depends(get_connection_registry)],
    user_id: Annotated[Optional[int], Query(alias="userId")] = None,
):
    """
    Push channel for live notifications.

    The client identifies itself with `?userId=`. The channel is registered
    before the handshake completes, so by the time the client sees the
    connection open it is already addressable. Frames sent by the client are
    read and discarded.
    """
    if not user_id:
        logger.warning("WebSocket connection rejected: missing userId")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    channel = WebSocketChannel(websocket)
    registry.register(user_id, channel)

    try:
        await websocket.accept()
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.info(
                    f"WebSocket for user {user_id} disconnected (code {message.get('code')})"
                )
                break
    finally:
        channel.close()
