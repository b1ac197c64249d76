"""Task API routes."""

import uuid

from fastapi import APIRouter, Depends, HTTPException

from pulseboard.api.deps import get_workspace_service
from pulseboard.schemas.workspace import TaskRead
from pulseboard.services.workspace_service import TaskNotFoundError, WorkspaceService

router = APIRouter()


@router.get("/tasks", response_model=list[TaskRead])
async def list_tasks(svc: WorkspaceService = Depends(get_workspace_service)):
    return await svc.list_tasks()


@router.post("/tasks/{task_id}/toggle", response_model=TaskRead)
async def toggle_task(
    task_id: uuid.UUID,
    svc: WorkspaceService = Depends(get_workspace_service),
):
    """Flip a task between done and not done."""
    try:
        return await svc.toggle_task(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
