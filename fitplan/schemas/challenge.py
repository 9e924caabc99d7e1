"""Challenge, participation and reward schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from fitplan.core.enums import ChallengeDifficulty, ChallengeType
from fitplan.schemas.partial import PartialUpdate


class ChallengeRequirements(BaseModel):
    target: int = Field(..., ge=1, description="Progress value that completes the challenge")
    metric: str = Field("count", max_length=50)
    timeframe: Optional[str] = Field(None, max_length=50)


class ChallengeBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    type: ChallengeType
    difficulty: ChallengeDifficulty
    points: int = Field(..., ge=0)
    requirements: ChallengeRequirements
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: bool = True


class ChallengeCreate(ChallengeBase):
    pass


class ChallengeUpdate(PartialUpdate):
    not_null_fields = ("title", "type", "difficulty", "points", "requirements", "is_active")

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    type: Optional[ChallengeType] = None
    difficulty: Optional[ChallengeDifficulty] = None
    points: Optional[int] = Field(None, ge=0)
    requirements: Optional[ChallengeRequirements] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None


class ChallengeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: Optional[str] = None
    type: ChallengeType
    difficulty: ChallengeDifficulty
    points: int
    requirements: dict[str, Any]
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: bool
    created_at: datetime


class ParticipantRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    challenge_id: UUID
    user_id: UUID
    progress: int
    streak_count: int
    completed: bool
    completion_date: Optional[datetime] = None
    created_at: datetime


class ChallengeListItem(ChallengeRead):
    participants_count: int = 0
    participation: Optional[ParticipantRead] = None


class ProgressLog(BaseModel):
    amount: int = Field(1, ge=1, le=1000)


class ProgressResultRead(BaseModel):
    participant: ParticipantRead
    just_completed: bool
    points_awarded: int


class RewardsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: UUID
    points: int
    badges: list[dict[str, Any]] = []
    updated_at: datetime
