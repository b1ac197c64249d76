"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers. The session cookie
is read from the incoming connection, so the same dependencies work for
both HTTP requests and WebSocket handshakes.
"""

from typing import Optional

from fastapi import Depends, HTTPException
from starlette.requests import HTTPConnection

from pulseboard.auth.jwt import SessionIdentity, authenticate
from pulseboard.config import settings


def get_session_token(connection: HTTPConnection) -> Optional[str]:
    return connection.cookies.get(settings.session_cookie_name)


async def get_current_user_optional(
    token: Optional[str] = Depends(get_session_token),
) -> Optional[SessionIdentity]:
    """Extract current identity (optional — returns None if no auth).

    Learn: This is the "soft" auth dependency. Invalid or expired cookies
    are treated exactly like a missing cookie.
    """
    return authenticate(token)


async def get_current_user(
    identity: Optional[SessionIdentity] = Depends(get_current_user_optional),
) -> SessionIdentity:
    """Extract current identity (required — 401 if no auth).

    Learn: This is the "hard" auth dependency. Every route that changes
    the workspace goes through it before reaching its handler.
    """
    if not identity:
        raise HTTPException(status_code=401, detail="Authentication required")
    return identity


# The gate every mutating handler sits behind.
require_identity = get_current_user
