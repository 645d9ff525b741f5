# foodorder/api/routers/health.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session
import redis

from foodorder.data.cache import get_cache
from foodorder.data.database import get_db
from foodorder.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health(db: Session = Depends(get_db), cache: redis.Redis = Depends(get_cache)):
    checks = {}

    try:
        db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        logger.warning(f"Health check database failed: {e}")
        checks["database"] = "error"

    try:
        cache.ping()
        checks["redis"] = "ok"
    except redis.RedisError as e:
        logger.warning(f"Health check redis failed: {e}")
        checks["redis"] = "error"

    healthy = all(v == "ok" for v in checks.values())
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={"status": "ok" if healthy else "degraded", **checks},
    )
