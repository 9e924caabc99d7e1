"""Public platform settings (theme, branding, maintenance banner)."""

from fastapi import APIRouter, Depends

from fitplan.api.deps import get_platform_settings
from fitplan.models.platform_settings import PlatformSettings
from fitplan.schemas.settings import PlatformSettingsRead

router = APIRouter()


@router.get("", response_model=PlatformSettingsRead)
async def read_settings(platform: PlatformSettings = Depends(get_platform_settings)):
    return platform
