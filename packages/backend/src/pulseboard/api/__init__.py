"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Auth is applied at the include_router level using FastAPI's
dependencies parameter. This protects all routes in each router
without modifying individual handlers. The auth router is open;
the health probe lives outside /api/v1 and is mounted separately.
"""

from fastapi import APIRouter, Depends

from pulseboard.api.auth import router as auth_router
from pulseboard.api.projects import router as projects_router
from pulseboard.api.stats import router as stats_router
from pulseboard.api.tasks import router as tasks_router
from pulseboard.auth.dependencies import require_identity

# All protected routers require a signed-in user
_auth = [Depends(require_identity)]

api_router = APIRouter(prefix="/api/v1")

# Open routes, no auth required
api_router.include_router(auth_router, tags=["auth"])

# Protected routes need a valid session cookie
api_router.include_router(projects_router, tags=["projects"], dependencies=_auth)
api_router.include_router(tasks_router, tags=["tasks"], dependencies=_auth)
api_router.include_router(stats_router, tags=["stats"], dependencies=_auth)
