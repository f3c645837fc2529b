import logging
import sqlite3

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from database import check_connection, now_timestamp

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    try:
        check_connection()
    except sqlite3.Error as exc:
        logger.error("Health check failed: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "error": "Database connection failed",
                "message": str(exc),
                "database": "disconnected",
            },
        )
    return {"status": "ok", "timestamp": now_timestamp(), "database": "connected"}
