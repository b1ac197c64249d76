"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance with its own database engine, repositories and broadcaster on
app.state. Lifespan creates tables at startup and disposes the engine at
shutdown. Middleware, error handlers and routers are all registered here.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from pulseboard import __version__
from pulseboard.api import api_router
from pulseboard.config import settings
from pulseboard.db.engine import build_engine, build_session_factory, init_models
from pulseboard.db.repository import UserRepository, WorkspaceRepository
from pulseboard.live.broadcaster import StatsBroadcaster

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at shutdown.
    """
    logger.info(
        "pulseboard.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )
    await init_models(app.state.engine)

    yield

    logger.info("pulseboard.shutdown", live=len(app.state.broadcaster.registry))
    await app.state.engine.dispose()


async def repository_error_handler(request: Request, exc: SQLAlchemyError):
    """Database failures become a plain 500; the process keeps serving."""
    logger.error(
        "pulseboard.repository_error",
        path=request.url.path,
        error=repr(exc),
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Pulseboard",
        description="Project and task tracking with live workspace statistics",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Workspace wiring ──────────────────────────────────────
    engine = build_engine(database_url)
    session_factory = build_session_factory(engine)
    app.state.engine = engine
    app.state.repository = WorkspaceRepository(session_factory)
    app.state.users = UserRepository(session_factory)
    app.state.broadcaster = StatsBroadcaster(
        app.state.repository,
        send_timeout=settings.live_send_timeout_seconds,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Request flow: RequestId → CORS → handler
    from pulseboard.middleware.request_id import RequestIdMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(SQLAlchemyError, repository_error_handler)

    # Health probe stays outside /api/v1 and never needs a session
    from pulseboard.api.health import router as health_router
    app.include_router(health_router, tags=["health"])

    app.include_router(api_router)

    from pulseboard.live.websocket import router as ws_router
    app.include_router(ws_router)

    return app


# Default app instance (used by uvicorn: pulseboard.main:app)
app = create_app()
