"""Health and diagnostics endpoints"""

import traceback
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import structlog

from app.config import settings
from app.database import get_db, ping
from app.api.reservations import get_store
from app.models.reservation import ReservationStore

router = APIRouter()
logger = structlog.get_logger()

ENDPOINTS = [
    "/api/health",
    "/api/reservations",
    "/api/reservations/:id",
    "/api/reservations/status/:status",
    "/api/reservations/branch/:branch",
    "/api/reservations/old",
    "/api/mongodb-test",
]


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("")
async def api_root():
    """API root with the list of endpoints"""
    return {
        "status": "ok",
        "message": "XnDoughs API root endpoint",
        "endpoints": ENDPOINTS,
    }


@router.get("/health")
async def health(db=Depends(get_db)):
    """Connectivity probe; always 200, with the database state in the body"""
    try:
        await ping(db)
    except Exception as e:
        logger.warning("Health check could not reach MongoDB", error=str(e))
        return {
            "status": "error",
            "message": "XnDoughs API is running but database connection failed",
            "mongodb": "disconnected",
            "error": str(e),
            "timestamp": _timestamp(),
        }

    return {
        "status": "ok",
        "message": "XnDoughs API is running",
        "mongodb": "connected",
        "timestamp": _timestamp(),
    }


@router.get("/mongodb-test")
async def mongodb_test(store: ReservationStore = Depends(get_store)):
    """Connection diagnostics: database counters and a one-document query"""
    try:
        stats = await store.db_stats()
        collections = await store.db.list_collection_names()
        sample = await store.sample(limit=1)
    except Exception as e:
        logger.error("MongoDB test failed", error=str(e))
        error = {"name": type(e).__name__, "message": str(e)}
        if settings.is_development:
            error["stack"] = "".join(traceback.format_exception(e))
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": "MongoDB connection test failed",
                "error": error,
            },
        )

    return {
        "status": "ok",
        "message": "MongoDB connection test",
        "connection": {
            "name": store.db.name,
            "collections": sorted(collections),
        },
        "stats": {
            key: stats.get(key)
            for key in (
                "collections",
                "views",
                "objects",
                "avgObjSize",
                "dataSize",
                "storageSize",
                "indexes",
                "indexSize",
            )
        },
        "testQuery": {
            "success": True,
            "count": len(sample),
        },
    }
