"""Workspace service — business logic for projects and tasks.

Learn: Service layer separates business logic from HTTP routing.
API routes call the service, the service calls the repository and then
tells the broadcaster the workspace changed. Every successful write
triggers exactly one broadcast; a write that fails (not found, database
error) triggers none, because the exception leaves before the broadcast.
"""

import uuid
from typing import Optional

import structlog

from pulseboard.db.models import Project, Task
from pulseboard.db.repository import WorkspaceRepository
from pulseboard.live.broadcaster import StatsBroadcaster
from pulseboard.live.stats import StatsSnapshot

logger = structlog.get_logger()


class ProjectNotFoundError(Exception):
    """Raised when an operation names a project that doesn't exist."""


class TaskNotFoundError(Exception):
    """Raised when an operation names a task that doesn't exist."""


class WorkspaceService:
    """Reads and writes the shared workspace."""

    def __init__(self, repository: WorkspaceRepository, broadcaster: StatsBroadcaster):
        self.repository = repository
        self.broadcaster = broadcaster

    # ─── Projects ───────────────────────────────────────

    async def list_projects(self) -> list[Project]:
        return await self.repository.list_projects()

    async def get_project(self, project_id: uuid.UUID) -> Project:
        project = await self.repository.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(f"Project {project_id} not found")
        return project

    async def create_project(
        self, title: str, description: Optional[str] = None
    ) -> Project:
        project = await self.repository.create_project(
            title=title, description=description
        )
        logger.info("workspace.project_created", project_id=str(project.id))
        await self.broadcaster.on_workspace_changed()
        return project

    # ─── Tasks ──────────────────────────────────────────

    async def list_tasks(
        self, project_id: Optional[uuid.UUID] = None
    ) -> list[Task]:
        return await self.repository.list_tasks(project_id=project_id)

    async def create_task(self, project_id: uuid.UUID, title: str) -> Task:
        """Create a task under an existing project."""
        await self.get_project(project_id)
        task = await self.repository.create_task(title=title, project_id=project_id)
        logger.info(
            "workspace.task_created",
            task_id=str(task.id),
            project_id=str(project_id),
        )
        await self.broadcaster.on_workspace_changed()
        return task

    async def toggle_task(self, task_id: uuid.UUID) -> Task:
        task = await self.repository.toggle_task_completion(task_id)
        if task is None:
            raise TaskNotFoundError(f"Task {task_id} not found")
        logger.info(
            "workspace.task_toggled", task_id=str(task.id), completed=task.completed
        )
        await self.broadcaster.on_workspace_changed()
        return task

    # ─── Statistics ─────────────────────────────────────

    async def stats(self) -> StatsSnapshot:
        return await self.broadcaster.compute_stats()
