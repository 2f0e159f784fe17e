# backend/routers/health_router.py
import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from database.session import Database, get_database
from queries.order_queries import OrderQueries
from queries.product_queries import ProductQueries

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

_STARTED = time.monotonic()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("")
def health():
    return {
        "success": True,
        "message": "Service is running",
        "timestamp": _now(),
        "uptime": round(time.monotonic() - _STARTED, 3),
    }


@router.get("/db")
def health_db(database: Database = Depends(get_database)):
    try:
        database.ping()
        with database.session() as db:
            stats = {
                "products": ProductQueries(db).count(),
                "orders": OrderQueries(db).count(),
            }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(status_code=503, content={
            "success": False,
            "message": "Database connection failed",
            "timestamp": _now(),
            "error": e.__class__.__name__,
        })

    return {
        "success": True,
        "message": "Database connection is healthy",
        "timestamp": _now(),
        "stats": stats,
    }


@router.get("/full")
def health_full(database: Database = Depends(get_database)):
    checks = {"server": True, "database": False, "timestamp": _now()}
    try:
        checks["database"] = database.ping()
    except Exception as e:
        logger.error(f"Database health check failed: {e}")

    if checks["server"] and checks["database"]:
        return {"success": True, "message": "All services are healthy", "checks": checks}
    return JSONResponse(status_code=503, content={
        "success": False,
        "message": "Some services are unavailable",
        "checks": checks,
    })
