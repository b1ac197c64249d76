"""WebSocket endpoint — live workspace statistics.

Learn: Each client connects to /ws. The handler:
1. Optionally checks the session cookie (PULSEBOARD_LIVE_REQUIRE_AUTH)
2. Accepts and hands the connection to the broadcaster, which greets it
   with an info message and the current snapshot
3. Reads (and ignores) client frames until the client goes away
4. Detaches the connection so broadcasts stop trying to reach it

Statistics are public by default: any client that can open the socket
receives them, logged in or not.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from sqlalchemy.exc import SQLAlchemyError
from starlette.websockets import WebSocketState

from pulseboard.api.deps import get_broadcaster
from pulseboard.auth.dependencies import get_current_user_optional
from pulseboard.auth.jwt import SessionIdentity
from pulseboard.config import settings
from pulseboard.live.broadcaster import StatsBroadcaster
from pulseboard.live.connection import CLOSE_INTERNAL_ERROR, LiveConnection

logger = structlog.get_logger()
router = APIRouter()


@router.websocket("/ws")
async def live_stats(
    websocket: WebSocket,
    identity: Optional[SessionIdentity] = Depends(get_current_user_optional),
    broadcaster: StatsBroadcaster = Depends(get_broadcaster),
):
    """Live statistics feed for dashboards."""
    if settings.live_require_auth and identity is None:
        await websocket.close(code=4001, reason="Authentication required")
        return

    await websocket.accept()
    connection = LiveConnection(websocket, identity=identity)

    try:
        attached = await broadcaster.attach(connection)
    except SQLAlchemyError as e:
        logger.error(
            "live.greeting_failed", connection=repr(connection), error=repr(e)
        )
        await connection.close(code=CLOSE_INTERNAL_ERROR)
        return

    if not attached:
        logger.warning("live.greeting_failed", connection=repr(connection))
        if websocket.client_state == WebSocketState.CONNECTED:
            await websocket.close()
        return

    try:
        while True:
            # Clients send nothing meaningful; this only waits for the close.
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        broadcaster.detach(connection)
