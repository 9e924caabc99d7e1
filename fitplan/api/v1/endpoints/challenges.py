"""Challenges: browse, join/leave, log progress, rewards."""

from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from fitplan.api.deps import get_current_viewer
from fitplan.core.enums import ChallengeType
from fitplan.db.session import get_db
from fitplan.models.profile import Profile
from fitplan.schemas.challenge import (
    ChallengeListItem,
    ChallengeRead,
    ParticipantRead,
    ProgressLog,
    ProgressResultRead,
    RewardsRead,
)
from fitplan.services import challenges as challenge_service
from fitplan.services.challenges import ChallengeStateError

router = APIRouter()


def _state_error(e: ChallengeStateError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=str(e))


@router.get("", response_model=list[ChallengeListItem])
async def list_challenges(
    type: Optional[ChallengeType] = Query(None, description="Filter by challenge type"),
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
):
    listings = await challenge_service.list_challenges(db, viewer.id, challenge_type=type)
    return [
        ChallengeListItem(
            **ChallengeRead.model_validate(item.challenge).model_dump(),
            participants_count=item.participant_count,
            participation=ParticipantRead.model_validate(item.participant) if item.participant else None,
        )
        for item in listings
    ]


@router.post("/{challenge_id}/join", response_model=ParticipantRead, status_code=201)
async def join_challenge(
    challenge_id: uuid.UUID,
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await challenge_service.join(db, challenge_id, viewer.id)
    except ChallengeStateError as e:
        raise _state_error(e) from e


@router.delete("/{challenge_id}/join", status_code=204)
async def leave_challenge(
    challenge_id: uuid.UUID,
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
):
    try:
        await challenge_service.leave(db, challenge_id, viewer.id)
    except ChallengeStateError as e:
        raise _state_error(e) from e
    return Response(status_code=204)


@router.post("/{challenge_id}/progress", response_model=ProgressResultRead)
async def log_progress(
    challenge_id: uuid.UUID,
    payload: Optional[ProgressLog] = None,
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
):
    """Add to progress; completion and the point award commit together with it."""
    amount = payload.amount if payload else 1
    try:
        result = await challenge_service.log_progress(db, challenge_id, viewer.id, amount)
    except ChallengeStateError as e:
        raise _state_error(e) from e
    return ProgressResultRead(
        participant=ParticipantRead.model_validate(result.participant),
        just_completed=result.just_completed,
        points_awarded=result.points_awarded,
    )


@router.get("/rewards/me", response_model=RewardsRead)
async def my_rewards(
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
):
    rewards = await challenge_service.get_or_create_rewards(db, viewer.id)
    await db.refresh(rewards)
    return rewards
