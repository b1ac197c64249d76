"""WebSocket adapter for the connection registry."""

import uuid
from typing import Optional

import structlog
from fastapi import WebSocket
from starlette.websockets import WebSocketState

from pulseboard.auth.jwt import SessionIdentity

logger = structlog.get_logger()

# Server-side failure; the client should reconnect for a fresh snapshot.
CLOSE_INTERNAL_ERROR = 1011


class LiveConnection:
    """One accepted WebSocket client."""

    def __init__(
        self,
        websocket: WebSocket,
        identity: Optional[SessionIdentity] = None,
    ):
        self.websocket = websocket
        self.identity = identity
        self.id = uuid.uuid4().hex[:12]

    @property
    def ready(self) -> bool:
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    async def send(self, message: str) -> None:
        await self.websocket.send_text(message)

    async def close(self, code: int = CLOSE_INTERNAL_ERROR) -> None:
        """Close the socket if it is still open. Never raises."""
        if self.websocket.client_state != WebSocketState.CONNECTED:
            return
        if self.websocket.application_state != WebSocketState.CONNECTED:
            return
        try:
            await self.websocket.close(code=code)
        except Exception as e:
            logger.info("live.close_failed", connection=repr(self), error=repr(e))

    def __repr__(self) -> str:
        user = self.identity.user_id if self.identity else None
        return f"LiveConnection(id={self.id!r}, user={user!r})"
