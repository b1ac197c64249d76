"""Dashboard statistics — the same snapshot the live channel pushes."""

from fastapi import APIRouter, Depends

from pulseboard.api.deps import get_workspace_service
from pulseboard.services.workspace_service import WorkspaceService

router = APIRouter()


@router.get("/stats")
async def get_stats(svc: WorkspaceService = Depends(get_workspace_service)):
    snapshot = await svc.stats()
    return snapshot.to_wire()
