"""Liveness and readiness probes."""

import logging
import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fitplan.api.deps import get_photo_storage
from fitplan.core.config import Settings, get_settings
from fitplan.db.session import get_db
from fitplan.services.storage import PhotoStorage

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def liveness(settings: Settings = Depends(get_settings)):
    payload = {"status": "ok", "service": settings.app_name, "environment": settings.environment}
    # Set by the deploy pipeline
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    """Database round trip plus a check that a photo bucket is configured."""
    checks = {"database": "connected", "storage": "configured" if storage.bucket else "missing bucket"}
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Readiness probe: database unreachable")
        checks["database"] = "unreachable"

    ok = checks["database"] == "connected" and bool(storage.bucket)
    return JSONResponse(status_code=200 if ok else 503, content={"status": "ok" if ok else "error", **checks})
