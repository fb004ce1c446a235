# gsi_orders/api/routers/health.py
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from gsi_orders.data.database import get_db
from gsi_orders.utils import settings
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])

STARTED_AT = time.monotonic()


@router.get("/health")
def health(db: Session = Depends(get_db)):
    now = datetime.now(timezone.utc).isoformat()
    try:
        db.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "timestamp": now,
            "uptime": round(time.monotonic() - STARTED_AT, 3),
            "environment": settings.APP_ENV,
            "version": settings.APP_VERSION,
            "database": "ok",
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=500,
            content={"status": "unhealthy", "error": "Health check failed", "timestamp": now},
        )
