"""Auth API — registration, login, logout, current identity.

Learn: Routes for the cookie session:
- POST /auth/register → create an account and sign in
- POST /auth/login → email/password → session cookie
- POST /auth/logout → drop the session cookie
- GET /auth/me → identity carried by the cookie

The cookie holds a signed JWT; see pulseboard.auth.jwt.
"""

from fastapi import APIRouter, Depends, HTTPException, Response

from pulseboard.api.deps import get_user_repository
from pulseboard.auth.dependencies import get_current_user
from pulseboard.auth.jwt import SessionIdentity, create_session_token
from pulseboard.auth.password import hash_password, verify_password
from pulseboard.config import settings
from pulseboard.db.models import User
from pulseboard.db.repository import UserRepository
from pulseboard.schemas.auth import IdentityRead, LoginRequest, RegisterRequest

router = APIRouter(prefix="/auth")


def _sign_in(response: Response, user: User) -> SessionIdentity:
    """Issue a session token for a user and set it as an HTTP-only cookie."""
    identity = SessionIdentity(user_id=str(user.id), name=user.name, email=user.email)
    response.set_cookie(
        settings.session_cookie_name,
        create_session_token(identity),
        max_age=settings.session_expire_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return identity


# ─── Register ────────────────────────────────────────────


@router.post("/register", response_model=IdentityRead, status_code=201)
async def register(
    body: RegisterRequest,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
):
    """Create a new account and sign it in."""
    if await users.find_by_email(body.email):
        raise HTTPException(status_code=409, detail="Email already registered")

    user = await users.create(
        email=body.email,
        name=body.name,
        password_hash=hash_password(body.password),
    )
    return _sign_in(response, user)


# ─── Login / logout ─────────────────────────────────────


@router.post("/login", response_model=IdentityRead)
async def login(
    body: LoginRequest,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
):
    """Login with email and password → session cookie."""
    user = await users.find_by_email(body.email)
    if not user or not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _sign_in(response, user)


@router.post("/logout", status_code=204)
async def logout(response: Response):
    response.delete_cookie(settings.session_cookie_name)


# ─── Current identity ───────────────────────────────────


@router.get("/me", response_model=IdentityRead)
async def get_me(identity: SessionIdentity = Depends(get_current_user)):
    return identity
