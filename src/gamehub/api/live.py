# src/gamehub/api/live.py

"""WebSocket channel pushing score updates to connected viewers."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from gamehub.api.deps import get_notifier
from gamehub.notifications import Notifier

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Live"])


class WebSocketConnection:
    """Adapts a Starlette WebSocket to the notifier's Connection protocol."""

    def __init__(self, websocket: WebSocket) -> None:
        self.websocket = websocket

    def is_ready(self) -> bool:
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    async def send_json(self, message: dict[str, Any]) -> None:
        await self.websocket.send_json(message)


@router.websocket("/ws")
async def live_updates(
    websocket: WebSocket, notifier: Notifier = Depends(get_notifier)
) -> None:
    """
    Keep a viewer subscribed until it disconnects.

    A `{"type": "connected"}` greeting is sent once the subscription is
    registered; afterwards every stored score produces
    `{"type": "scoreUpdate", "gameId": ...}`. Client messages are ignored.
    """
    await websocket.accept()
    subscription = notifier.subscribe(WebSocketConnection(websocket))
    # Queued like any broadcast so it cannot interleave with one
    subscription.offer({"type": "connected"})
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            logger.debug(
                "Ignoring client message",
                extra={"subscription_id": subscription.id},
            )
    except WebSocketDisconnect:
        pass
    finally:
        notifier.unsubscribe(subscription)
