from fastapi import APIRouter
from sqlalchemy import text

from inventory_api.config import get_settings
from inventory_api.database import engine
from inventory_api.utils.cache import redis_client

router = APIRouter(prefix="/health", tags=["Health"])

settings = get_settings()


@router.get(
    "/",
    summary="Health check",
    description="Basic liveness check."
)
def health_check():
    return {"status": "healthy", "version": settings.APP_VERSION}


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check that the database and, when caching is on, Redis are reachable."
)
def readiness_check():
    """
    Readiness check for all dependencies.

    Returns status of:
    - Database connection
    - Redis connection (reported but not required when the cache is disabled)
    """
    checks = {
        "database": False,
        "redis": False
    }

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            checks["database"] = True
    except Exception as e:
        checks["database_error"] = str(e)

    if settings.CACHE_ENABLED:
        try:
            redis_client.ping()
            checks["redis"] = True
        except Exception as e:
            checks["redis_error"] = str(e)

    required = [checks["database"]]
    if settings.CACHE_ENABLED:
        required.append(checks["redis"])

    return {
        "status": "ready" if all(required) else "not_ready",
        "checks": checks
    }
