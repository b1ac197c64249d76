"""Health check endpoint.

Learn: Deployment probes hit GET /health without credentials. The status
code is always 200 while the process is up; the body reports whether the
database is reachable.
"""

from fastapi import APIRouter, Depends

from pulseboard import __version__
from pulseboard.api.deps import get_repository
from pulseboard.db.repository import WorkspaceRepository

router = APIRouter()


@router.get("/health")
async def health_check(repository: WorkspaceRepository = Depends(get_repository)):
    """Check server health and database connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        await repository.ping()
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {e}"

    status = "healthy" if checks["database"] == "ok" else "degraded"
    return {"status": status, **checks}
