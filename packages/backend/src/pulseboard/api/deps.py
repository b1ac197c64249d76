"""Shared FastAPI dependencies.

Learn: The app factory stores the repositories and the broadcaster on
app.state. These helpers pull them out for route handlers and the
WebSocket endpoint alike (HTTPConnection covers both).
"""

from fastapi import Depends
from starlette.requests import HTTPConnection

from pulseboard.db.repository import UserRepository, WorkspaceRepository
from pulseboard.live.broadcaster import StatsBroadcaster
from pulseboard.services.workspace_service import WorkspaceService


def get_repository(connection: HTTPConnection) -> WorkspaceRepository:
    return connection.app.state.repository


def get_user_repository(connection: HTTPConnection) -> UserRepository:
    return connection.app.state.users


def get_broadcaster(connection: HTTPConnection) -> StatsBroadcaster:
    return connection.app.state.broadcaster


def get_workspace_service(
    repository: WorkspaceRepository = Depends(get_repository),
    broadcaster: StatsBroadcaster = Depends(get_broadcaster),
) -> WorkspaceService:
    return WorkspaceService(repository, broadcaster)
