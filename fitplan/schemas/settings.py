"""Platform settings schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fitplan.core.enums import NotificationFrequency, ThemeMode
from fitplan.schemas.partial import PartialUpdate

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class PlatformSettingsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    platform_name: str
    theme_color: str
    theme_mode: ThemeMode
    logo_url: Optional[str] = None
    favicon_url: Optional[str] = None
    maintenance_mode: bool
    maintenance_message: Optional[str] = None
    maintenance_start_time: Optional[datetime] = None
    maintenance_end_time: Optional[datetime] = None


class PlatformSettingsAdminRead(PlatformSettingsRead):
    admin_2fa_required: bool
    account_lockout_attempts: int
    session_timeout_minutes: int
    email_notifications_enabled: bool
    notification_frequency: NotificationFrequency
    updated_at: datetime


class PlatformSettingsUpdate(PartialUpdate):
    not_null_fields = (
        "platform_name",
        "theme_color",
        "theme_mode",
        "admin_2fa_required",
        "account_lockout_attempts",
        "session_timeout_minutes",
        "maintenance_mode",
        "email_notifications_enabled",
        "notification_frequency",
    )

    platform_name: Optional[str] = Field(None, min_length=1, max_length=100)
    theme_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    theme_mode: Optional[ThemeMode] = None
    logo_url: Optional[str] = Field(None, max_length=500)
    favicon_url: Optional[str] = Field(None, max_length=500)
    admin_2fa_required: Optional[bool] = None
    account_lockout_attempts: Optional[int] = Field(None, ge=1, le=20)
    session_timeout_minutes: Optional[int] = Field(None, ge=5, le=1440)
    maintenance_mode: Optional[bool] = None
    maintenance_message: Optional[str] = None
    maintenance_start_time: Optional[datetime] = None
    maintenance_end_time: Optional[datetime] = None
    email_notifications_enabled: Optional[bool] = None
    notification_frequency: Optional[NotificationFrequency] = None
