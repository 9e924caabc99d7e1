"""Back-office schemas."""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from fitplan.schemas.challenge import ChallengeRead, ParticipantRead, RewardsRead
from fitplan.schemas.partial import PartialUpdate
from fitplan.schemas.profile import USERNAME_PATTERN, ProfileRef


class OverviewRead(BaseModel):
    total_participants: int
    active_participants: int
    completion_rate: float
    average_streak: float
    points_awarded: int
    badges_earned: int


class AdminChallengeRead(ChallengeRead):
    participants_count: int = 0
    completed_count: int = 0


class ChallengeParticipantRead(ParticipantRead):
    user: ProfileRef


class AdminUserUpdate(PartialUpdate):
    not_null_fields = ("username", "is_admin")

    username: Optional[str] = Field(None, pattern=USERNAME_PATTERN)
    full_name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    is_admin: Optional[bool] = None


class AdminRewardRead(RewardsRead):
    user: ProfileRef
    email: Optional[str] = None


class RewardUpdate(BaseModel):
    points: int = Field(..., ge=0)
    badges: Optional[list[dict[str, Any]]] = None


