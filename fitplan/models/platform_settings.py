"""PlatformSettings model: singleton row of process-wide UI configuration."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from fitplan.core.enums import NotificationFrequency, ThemeMode
from fitplan.db.base import Base

# Single row; read through the get_platform_settings dependency
PLATFORM_SETTINGS_ID = 1


class PlatformSettings(Base):
    __tablename__ = "platform_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=PLATFORM_SETTINGS_ID)
    platform_name: Mapped[str] = mapped_column(String(100), nullable=False, default="FitPlan")
    theme_color: Mapped[str] = mapped_column(String(7), nullable=False, default="#10B981")
    theme_mode: Mapped[ThemeMode] = mapped_column(Enum(ThemeMode), nullable=False, default=ThemeMode.SYSTEM)
    logo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    favicon_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    admin_2fa_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    account_lockout_attempts: Mapped[int] = mapped_column(Integer, default=5, nullable=False)
    session_timeout_minutes: Mapped[int] = mapped_column(Integer, default=60, nullable=False)

    maintenance_mode: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    maintenance_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    maintenance_start_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    maintenance_end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    email_notifications_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    notification_frequency: Mapped[NotificationFrequency] = mapped_column(
        Enum(NotificationFrequency), nullable=False, default=NotificationFrequency.WEEKLY
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
