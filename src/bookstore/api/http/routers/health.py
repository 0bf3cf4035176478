"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from src.bookstore.api.http.app_data import ApplicationDependencies

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health(request: Request) -> dict[str, str]:
    """Liveness probe: 200 as long as the process is serving requests."""
    return {"status": "healthy", "service": request.app.state.config.app.name}


@router.get("/ready", response_model=None)
def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 503 when the database does not answer."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    database = app_deps.database_service

    if database is None:
        checks = {
            "database": {
                "status": "not_configured",
                "repository": type(app_deps.book_repository).__name__,
            }
        }
        return {"status": "ready", "checks": checks}

    db_healthy = database.health_check()
    checks = {
        "database": {
            "status": "healthy" if db_healthy else "unhealthy",
            "type": request.app.state.config.database.dialect,
            "pool": database.get_pool_status(),
        }
    }
    if not db_healthy:
        return JSONResponse(
            status_code=503, content={"status": "not_ready", "checks": checks}
        )
    return {"status": "ready", "checks": checks}
