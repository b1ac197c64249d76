"""Project API routes.

Learn: Routes translate HTTP to service calls and service errors to status
codes. Creating a project or adding a task to one changes the workspace,
so the service broadcasts fresh statistics before the response goes out.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException

from pulseboard.api.deps import get_workspace_service
from pulseboard.schemas.workspace import (
    ProjectCreate,
    ProjectDetail,
    ProjectRead,
    TaskCreate,
    TaskRead,
)
from pulseboard.services.workspace_service import (
    ProjectNotFoundError,
    WorkspaceService,
)

router = APIRouter()


@router.get("/projects", response_model=list[ProjectRead])
async def list_projects(svc: WorkspaceService = Depends(get_workspace_service)):
    return await svc.list_projects()


@router.post("/projects", response_model=ProjectRead, status_code=201)
async def create_project(
    body: ProjectCreate,
    svc: WorkspaceService = Depends(get_workspace_service),
):
    return await svc.create_project(title=body.title, description=body.description)


@router.get("/projects/{project_id}", response_model=ProjectDetail)
async def get_project(
    project_id: uuid.UUID,
    svc: WorkspaceService = Depends(get_workspace_service),
):
    """Project with all of its tasks."""
    try:
        project = await svc.get_project(project_id)
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    tasks = await svc.list_tasks(project_id=project_id)
    return ProjectDetail(
        **ProjectRead.model_validate(project).model_dump(),
        tasks=[TaskRead.model_validate(t) for t in tasks],
    )


@router.post("/projects/{project_id}/tasks", response_model=TaskRead, status_code=201)
async def create_task(
    project_id: uuid.UUID,
    body: TaskCreate,
    svc: WorkspaceService = Depends(get_workspace_service),
):
    try:
        return await svc.create_task(project_id=project_id, title=body.title)
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
