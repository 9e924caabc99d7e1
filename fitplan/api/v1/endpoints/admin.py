"""Admin back office: overview, challenge management, users, rewards, platform settings."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from fitplan.api.deps import get_photo_storage, get_platform_settings, require_admin
from fitplan.api.serializers import profile_read, profile_ref
from fitplan.api.v1.endpoints.profile import username_taken
from fitplan.core.enums import ChallengeDifficulty, ChallengeType
from fitplan.db.session import get_db
from fitplan.models.challenge import Challenge, ChallengeParticipant, RewardCredit
from fitplan.models.platform_settings import PlatformSettings
from fitplan.models.profile import Profile
from fitplan.schemas.admin import (
    AdminChallengeRead,
    AdminRewardRead,
    AdminUserUpdate,
    ChallengeParticipantRead,
    OverviewRead,
    RewardUpdate,
)
from fitplan.schemas.challenge import ChallengeCreate, ChallengeRead, ChallengeUpdate, ParticipantRead, RewardsRead
from fitplan.schemas.profile import ProfileRead
from fitplan.schemas.settings import PlatformSettingsAdminRead, PlatformSettingsUpdate
from fitplan.services import admin as admin_service
from fitplan.services.challenges import get_or_create_rewards
from fitplan.services.storage import PhotoStorage

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_admin)])


async def _challenge_or_404(db: AsyncSession, challenge_id: uuid.UUID) -> Challenge:
    challenge = await db.get(Challenge, challenge_id)
    if not challenge:
        raise HTTPException(status_code=404, detail="Challenge not found")
    return challenge


# ── Overview ─────────────────────────────────────────────────────────────

@router.get("/overview", response_model=OverviewRead)
async def read_overview(db: AsyncSession = Depends(get_db)):
    return await admin_service.overview(db)


# ── Challenges ───────────────────────────────────────────────────────────

@router.get("/challenges", response_model=list[AdminChallengeRead])
async def list_challenges(
    search: Optional[str] = Query(None, max_length=100),
    type: Optional[ChallengeType] = Query(None),
    difficulty: Optional[ChallengeDifficulty] = Query(None),
    is_active: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    stats = await admin_service.challenge_stats(
        db, search=search, challenge_type=type, difficulty=difficulty, is_active=is_active
    )
    return [
        AdminChallengeRead(
            **ChallengeRead.model_validate(s.challenge).model_dump(),
            participants_count=s.participants_count,
            completed_count=s.completed_count,
        )
        for s in stats
    ]


@router.post("/challenges", response_model=ChallengeRead, status_code=201)
async def create_challenge(payload: ChallengeCreate, db: AsyncSession = Depends(get_db)):
    challenge = Challenge(**payload.model_dump())
    db.add(challenge)
    await db.flush()
    await db.refresh(challenge)
    logger.info("Created challenge %s", challenge.id)
    return challenge


@router.patch("/challenges/{challenge_id}", response_model=ChallengeRead)
async def update_challenge(
    challenge_id: uuid.UUID,
    payload: ChallengeUpdate,
    db: AsyncSession = Depends(get_db),
):
    challenge = await _challenge_or_404(db, challenge_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(challenge, field, value)
    await db.flush()
    await db.refresh(challenge)
    return challenge


@router.delete("/challenges/{challenge_id}", status_code=204)
async def delete_challenge(challenge_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    challenge = await _challenge_or_404(db, challenge_id)
    await db.execute(delete(ChallengeParticipant).where(ChallengeParticipant.challenge_id == challenge_id))
    await db.execute(delete(RewardCredit).where(RewardCredit.challenge_id == challenge_id))
    await db.delete(challenge)
    await db.flush()
    return Response(status_code=204)


@router.get("/challenges/{challenge_id}/participants", response_model=list[ChallengeParticipantRead])
async def list_participants(
    challenge_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    await _challenge_or_404(db, challenge_id)
    rows = await admin_service.challenge_participants(db, challenge_id)
    return [
        ChallengeParticipantRead(
            **ParticipantRead.model_validate(p).model_dump(),
            user=await profile_ref(storage, profile),
        )
        for p, profile in rows
    ]


# ── Users ────────────────────────────────────────────────────────────────

@router.get("/users", response_model=list[ProfileRead])
async def list_users(
    q: Optional[str] = Query(None, max_length=100),
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    return [await profile_read(storage, p) for p in await admin_service.list_users(db, q)]


@router.patch("/users/{user_id}", response_model=ProfileRead)
async def update_user(
    user_id: uuid.UUID,
    payload: AdminUserUpdate,
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    profile = await db.get(Profile, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="User not found")
    data = payload.model_dump(exclude_unset=True)
    if data.get("username") and await username_taken(db, data["username"], user_id):
        raise HTTPException(status_code=409, detail="Username is already taken")
    for field, value in data.items():
        setattr(profile, field, value)
    await db.flush()
    await db.refresh(profile)
    if "is_admin" in data:
        logger.info("Admin flag for %s set to %s", user_id, profile.is_admin)
    return await profile_read(storage, profile)


# ── Rewards ──────────────────────────────────────────────────────────────

@router.get("/rewards", response_model=list[AdminRewardRead])
async def list_rewards(
    q: Optional[str] = Query(None, max_length=100),
    db: AsyncSession = Depends(get_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    rows = await admin_service.list_rewards(db, q)
    return [
        AdminRewardRead(
            **RewardsRead.model_validate(r).model_dump(),
            user=await profile_ref(storage, profile),
            email=profile.email,
        )
        for r, profile in rows
    ]


@router.put("/rewards/{user_id}", response_model=RewardsRead)
async def set_rewards(
    user_id: uuid.UUID,
    payload: RewardUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Overwrite a user's point total (and badges, when given)."""
    if not await db.get(Profile, user_id):
        raise HTTPException(status_code=404, detail="User not found")
    rewards = await get_or_create_rewards(db, user_id)
    rewards.points = payload.points
    if payload.badges is not None:
        rewards.badges = payload.badges
    await db.flush()
    await db.refresh(rewards)
    return rewards


# ── Platform settings ────────────────────────────────────────────────────

@router.get("/settings", response_model=PlatformSettingsAdminRead)
async def read_settings(platform: PlatformSettings = Depends(get_platform_settings)):
    return platform


@router.put("/settings", response_model=PlatformSettingsAdminRead)
async def update_settings(
    payload: PlatformSettingsUpdate,
    platform: PlatformSettings = Depends(get_platform_settings),
    db: AsyncSession = Depends(get_db),
):
    data = payload.model_dump(exclude_unset=True)
    if data.get("maintenance_start_time") and data.get("maintenance_end_time"):
        if data["maintenance_end_time"] <= data["maintenance_start_time"]:
            raise HTTPException(status_code=400, detail="Maintenance end must be after start")
    for field, value in data.items():
        setattr(platform, field, value)
    await db.flush()
    await db.refresh(platform)
    logger.info("Platform settings updated: %s", sorted(data))
    return platform
