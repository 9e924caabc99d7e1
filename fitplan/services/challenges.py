"""Challenge progress state machine and reward credit.

not_joined -> joined(progress=0) -> joined(progress=k) -> completed

completed is terminal. The completion flag, the reward_credits row and the
points increment are written in the caller's session and committed together
by get_db. A second completion attempt for the same (user, challenge) finds
the existing credit row and awards nothing.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitplan.core.enums import ChallengeType
from fitplan.models.challenge import Challenge, ChallengeParticipant, RewardCredit, UserRewards

logger = logging.getLogger(__name__)


class ChallengeStateError(Exception):
    """Transition not allowed from the participant's current state."""

    def __init__(self, message: str, status_code: int = 409):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class ProgressResult:
    participant: ChallengeParticipant
    just_completed: bool
    points_awarded: int


@dataclass
class ChallengeListing:
    challenge: Challenge
    participant_count: int
    participant: Optional[ChallengeParticipant]


async def get_challenge(db: AsyncSession, challenge_id: uuid.UUID) -> Challenge:
    challenge = await db.get(Challenge, challenge_id)
    if challenge is None:
        raise ChallengeStateError("Challenge not found", status_code=404)
    return challenge


async def get_participant(
    db: AsyncSession, challenge_id: uuid.UUID, user_id: uuid.UUID
) -> Optional[ChallengeParticipant]:
    result = await db.execute(
        select(ChallengeParticipant).where(
            ChallengeParticipant.challenge_id == challenge_id,
            ChallengeParticipant.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def get_or_create_rewards(db: AsyncSession, user_id: uuid.UUID) -> UserRewards:
    result = await db.execute(select(UserRewards).where(UserRewards.user_id == user_id))
    rewards = result.scalar_one_or_none()
    if rewards is None:
        rewards = UserRewards(user_id=user_id, points=0, badges=[])
        db.add(rewards)
        await db.flush()
    return rewards


async def list_challenges(
    db: AsyncSession,
    viewer_id: uuid.UUID,
    challenge_type: Optional[ChallengeType] = None,
    active_only: bool = True,
) -> list[ChallengeListing]:
    """Challenges with participant counts and the viewer's own participation row."""
    stmt = select(Challenge).order_by(Challenge.created_at.desc())
    if active_only:
        stmt = stmt.where(Challenge.is_active.is_(True))
    if challenge_type is not None:
        stmt = stmt.where(Challenge.type == challenge_type)
    challenges = list((await db.execute(stmt)).scalars().all())
    if not challenges:
        return []
    ids = [c.id for c in challenges]

    counts_result = await db.execute(
        select(ChallengeParticipant.challenge_id, func.count(ChallengeParticipant.id))
        .where(ChallengeParticipant.challenge_id.in_(ids))
        .group_by(ChallengeParticipant.challenge_id)
    )
    counts = {cid: n for cid, n in counts_result.all()}

    mine_result = await db.execute(
        select(ChallengeParticipant).where(
            ChallengeParticipant.user_id == viewer_id,
            ChallengeParticipant.challenge_id.in_(ids),
        )
    )
    mine = {p.challenge_id: p for p in mine_result.scalars().all()}

    return [
        ChallengeListing(challenge=c, participant_count=counts.get(c.id, 0), participant=mine.get(c.id))
        for c in challenges
    ]


async def join(db: AsyncSession, challenge_id: uuid.UUID, user_id: uuid.UUID) -> ChallengeParticipant:
    challenge = await get_challenge(db, challenge_id)
    if not challenge.is_active:
        raise ChallengeStateError("Challenge is not active", status_code=400)
    if await get_participant(db, challenge_id, user_id) is not None:
        raise ChallengeStateError("Already joined this challenge")
    participant = ChallengeParticipant(
        challenge_id=challenge_id,
        user_id=user_id,
        progress=0,
        streak_count=0,
        completed=False,
    )
    db.add(participant)
    await db.flush()
    await db.refresh(participant)
    logger.info("User %s joined challenge %s", user_id, challenge_id)
    return participant


async def leave(db: AsyncSession, challenge_id: uuid.UUID, user_id: uuid.UUID) -> None:
    """Delete the participation row. Not allowed once completed."""
    participant = await get_participant(db, challenge_id, user_id)
    if participant is None:
        raise ChallengeStateError("Not participating in this challenge", status_code=404)
    if participant.completed:
        raise ChallengeStateError("Completed challenges cannot be left")
    await db.execute(delete(ChallengeParticipant).where(ChallengeParticipant.id == participant.id))


async def credit_completion(
    db: AsyncSession, user_id: uuid.UUID, challenge: Challenge
) -> int:
    """Award the challenge's points once per (user, challenge). Returns points awarded now."""
    existing = await db.execute(
        select(RewardCredit.id).where(
            RewardCredit.user_id == user_id, RewardCredit.challenge_id == challenge.id
        )
    )
    if existing.scalar_one_or_none() is not None:
        logger.info("Reward for challenge %s already credited to %s", challenge.id, user_id)
        return 0
    db.add(RewardCredit(user_id=user_id, challenge_id=challenge.id, points=challenge.points))
    rewards = await get_or_create_rewards(db, user_id)
    rewards.points = (rewards.points or 0) + challenge.points
    await db.flush()
    return challenge.points


async def log_progress(
    db: AsyncSession,
    challenge_id: uuid.UUID,
    user_id: uuid.UUID,
    amount: int = 1,
) -> ProgressResult:
    """Advance progress; on reaching the target mark completed and credit points."""
    if amount < 1:
        raise ChallengeStateError("Progress increment must be positive", status_code=400)
    challenge = await get_challenge(db, challenge_id)
    participant = await get_participant(db, challenge_id, user_id)
    if participant is None:
        raise ChallengeStateError("Join the challenge before logging progress", status_code=404)
    if participant.completed:
        raise ChallengeStateError("Challenge already completed")

    participant.progress = (participant.progress or 0) + amount
    if challenge.type == ChallengeType.STREAK:
        participant.streak_count = (participant.streak_count or 0) + amount

    awarded = 0
    just_completed = False
    if participant.progress >= challenge.target:
        participant.completed = True
        participant.completion_date = datetime.now(timezone.utc)
        just_completed = True
        awarded = await credit_completion(db, user_id, challenge)
        logger.info("User %s completed challenge %s (+%d points)", user_id, challenge_id, awarded)

    await db.flush()
    await db.refresh(participant)
    return ProgressResult(participant=participant, just_completed=just_completed, points_awarded=awarded)
