"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from src.product_api.api.http.app_data import ApplicationDependencies
from src.product_api.entities.product import ProductTable
from src.product_api.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 as long as the process is running."""
    return {"status": "healthy", "service": "product-api"}


@router.get("/ready", response_model=None)
def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 200 when the database answers and the product table exists.

    Returns 503 otherwise.
    """
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    config = get_config()
    database_service = app_deps.database_service

    db_healthy = database_service.health_check()
    table_ready = db_healthy and database_service.has_table(ProductTable.__tablename__)

    checks = {
        "database": {
            "status": "healthy" if db_healthy else "unhealthy",
            "type": "sqlite" if config.database.is_sqlite else "postgresql",
        },
        "product_table": {"status": "ready" if table_ready else "missing"},
    }
    body = {"status": "ready" if table_ready else "not_ready", "checks": checks}

    if not table_ready:
        return JSONResponse(status_code=503, content=body)
    return body
