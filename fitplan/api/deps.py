"""Request-scoped dependencies: viewer identity, admin gate, platform settings, storage.

Endpoints receive these as parameters; tests swap them via app.dependency_overrides.
"""

from __future__ import annotations

import logging
import uuid
from functools import lru_cache

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fitplan.core.config import Settings, get_settings
from fitplan.db.session import get_db
from fitplan.models.platform_settings import PLATFORM_SETTINGS_ID, PlatformSettings
from fitplan.models.profile import Profile
from fitplan.services.storage import PhotoStorage

logger = logging.getLogger(__name__)


def get_viewer_id(request: Request, settings: Settings = Depends(get_settings)) -> uuid.UUID:
    """Viewer id forwarded by the auth gateway; 401 when absent or malformed."""
    raw = request.headers.get(settings.identity_header)
    if not raw:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid viewer id") from None


async def get_current_viewer(
    viewer_id: uuid.UUID = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db),
) -> Profile:
    profile = await db.get(Profile, viewer_id)
    if profile is None:
        raise HTTPException(status_code=401, detail="Profile not set up. Create it with PUT /profile/me.")
    return profile


async def require_admin(viewer: Profile = Depends(get_current_viewer)) -> Profile:
    if not viewer.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return viewer


async def get_platform_settings(db: AsyncSession = Depends(get_db)) -> PlatformSettings:
    """The singleton settings row, created with defaults on first read."""
    row = await db.get(PlatformSettings, PLATFORM_SETTINGS_ID)
    if row is None:
        row = PlatformSettings(id=PLATFORM_SETTINGS_ID)
        db.add(row)
        await db.flush()
        await db.refresh(row)
        logger.info("Created default platform settings")
    return row


@lru_cache
def get_photo_storage() -> PhotoStorage:
    return PhotoStorage(get_settings())
