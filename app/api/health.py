from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import redis

from app.database import engine
from app.utils.cache import redis_client

router = APIRouter(prefix="/health", tags=["Health"])


@router.get(
    "/",
    summary="Health check",
    description="Basic liveness check."
)
def health_check():
    return {"status": "healthy"}


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check that the catalog database and the Redis cache are reachable."
)
def readiness_check():
    """
    Readiness check for all dependencies.

    The cache is optional for correctness, so the service reports
    "degraded" rather than "not_ready" when only Redis is down.
    """
    checks = {
        "database": False,
        "redis": False
    }

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            checks["database"] = True
    except SQLAlchemyError as e:
        checks["database_error"] = str(e)

    try:
        redis_client.ping()
        checks["redis"] = True
    except redis.RedisError as e:
        checks["redis_error"] = str(e)

    if not checks["database"]:
        overall = "not_ready"
    elif not checks["redis"]:
        overall = "degraded"
    else:
        overall = "ready"

    return {
        "status": overall,
        "checks": checks
    }
