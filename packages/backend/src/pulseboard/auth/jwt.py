"""JWT session token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. The token
carries the user's id, name and email plus an expiry (7 days by default),
signed with the server secret. Verifying the signature and expiry is all
it takes to trust the identity — there is no session table.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from pulseboard.config import settings


class TokenError(Exception):
    """Raised when token verification fails."""


@dataclass(frozen=True)
class SessionIdentity:
    """Who is making the request, as claimed by a verified token."""

    user_id: str
    name: str
    email: str


def create_session_token(
    identity: SessionIdentity,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign a session token for an identity."""
    if expires_delta is None:
        expires_delta = timedelta(days=settings.session_expire_days)
    now = datetime.now(timezone.utc)
    payload = {
        "sub": identity.user_id,
        "name": identity.name,
        "email": identity.email,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> SessionIdentity:
    """Verify and decode a session token.

    Returns the identity on success.
    Raises TokenError on failure.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}")

    return SessionIdentity(
        user_id=str(payload["sub"]),
        name=payload.get("name", ""),
        email=payload.get("email", ""),
    )


def authenticate(token: Optional[str]) -> Optional[SessionIdentity]:
    """Resolve a token to an identity, or None.

    Learn: Missing, malformed, tampered and expired tokens all mean
    "anonymous" here. Whether anonymity is acceptable is up to the caller.
    """
    if not token:
        return None
    try:
        return verify_token(token)
    except TokenError:
        return None
