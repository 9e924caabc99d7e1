"""Back-office aggregates: dashboard overview and per-challenge participation."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitplan.core.constants import ACTIVE_PARTICIPANT_WINDOW_DAYS
from fitplan.core.enums import ChallengeDifficulty, ChallengeType
from fitplan.models.challenge import Challenge, ChallengeParticipant, UserRewards
from fitplan.models.profile import Profile
from fitplan.services.feed_store import escape_like


@dataclass
class OverviewStats:
    total_participants: int
    active_participants: int
    completion_rate: float
    average_streak: float
    points_awarded: int
    badges_earned: int


@dataclass
class ChallengeStats:
    challenge: Challenge
    participants_count: int
    completed_count: int


async def overview(db: AsyncSession, now: Optional[datetime] = None) -> OverviewStats:
    """Participation and reward totals across all challenges."""
    now = now or datetime.now(timezone.utc)
    since = now - timedelta(days=ACTIVE_PARTICIPANT_WINDOW_DAYS)

    row = (
        await db.execute(
            select(
                func.count(ChallengeParticipant.id),
                func.coalesce(func.sum(case((ChallengeParticipant.created_at >= since, 1), else_=0)), 0),
                func.coalesce(func.sum(case((ChallengeParticipant.completed.is_(True), 1), else_=0)), 0),
                func.coalesce(func.avg(ChallengeParticipant.streak_count), 0),
            )
        )
    ).one()
    total, active, completed, avg_streak = row

    rewards = (await db.execute(select(UserRewards.points, UserRewards.badges))).all()
    points = sum(p or 0 for p, _ in rewards)
    badges = sum(len(b) if isinstance(b, list) else 0 for _, b in rewards)

    return OverviewStats(
        total_participants=int(total),
        active_participants=int(active),
        completion_rate=round(completed / total * 100, 1) if total else 0.0,
        average_streak=round(float(avg_streak), 1),
        points_awarded=points,
        badges_earned=badges,
    )


async def challenge_stats(
    db: AsyncSession,
    search: Optional[str] = None,
    challenge_type: Optional[ChallengeType] = None,
    difficulty: Optional[ChallengeDifficulty] = None,
    is_active: Optional[bool] = None,
) -> list[ChallengeStats]:
    """All challenges (filtered) with participant and completion counts in one grouped query."""
    stmt = select(Challenge).order_by(Challenge.created_at.desc())
    if search:
        pattern = f"%{escape_like(search.lower())}%"
        stmt = stmt.where(
            or_(
                func.lower(Challenge.title).like(pattern, escape="\\"),
                func.lower(Challenge.description).like(pattern, escape="\\"),
            )
        )
    if challenge_type is not None:
        stmt = stmt.where(Challenge.type == challenge_type)
    if difficulty is not None:
        stmt = stmt.where(Challenge.difficulty == difficulty)
    if is_active is not None:
        stmt = stmt.where(Challenge.is_active.is_(is_active))
    challenges = list((await db.execute(stmt)).scalars().all())
    if not challenges:
        return []

    counts = await db.execute(
        select(
            ChallengeParticipant.challenge_id,
            func.count(ChallengeParticipant.id),
            func.coalesce(func.sum(case((ChallengeParticipant.completed.is_(True), 1), else_=0)), 0),
        )
        .where(ChallengeParticipant.challenge_id.in_([c.id for c in challenges]))
        .group_by(ChallengeParticipant.challenge_id)
    )
    by_id = {cid: (int(n), int(done)) for cid, n, done in counts.all()}
    return [
        ChallengeStats(challenge=c, participants_count=by_id.get(c.id, (0, 0))[0], completed_count=by_id.get(c.id, (0, 0))[1])
        for c in challenges
    ]


async def challenge_participants(
    db: AsyncSession, challenge_id: uuid.UUID
) -> list[tuple[ChallengeParticipant, Profile]]:
    result = await db.execute(
        select(ChallengeParticipant, Profile)
        .join(Profile, Profile.id == ChallengeParticipant.user_id)
        .where(ChallengeParticipant.challenge_id == challenge_id)
        .order_by(ChallengeParticipant.progress.desc(), ChallengeParticipant.created_at.asc())
    )
    return [(p, profile) for p, profile in result.all()]


def _profile_search(stmt, search: Optional[str]):
    if not search:
        return stmt
    pattern = f"%{escape_like(search.lower())}%"
    return stmt.where(
        or_(
            func.lower(Profile.username).like(pattern, escape="\\"),
            func.lower(Profile.full_name).like(pattern, escape="\\"),
            func.lower(Profile.email).like(pattern, escape="\\"),
        )
    )


async def list_users(db: AsyncSession, search: Optional[str] = None) -> list[Profile]:
    stmt = _profile_search(select(Profile).order_by(Profile.created_at.desc()), search)
    return list((await db.execute(stmt)).scalars().all())


async def list_rewards(db: AsyncSession, search: Optional[str] = None) -> list[tuple[UserRewards, Profile]]:
    stmt = _profile_search(
        select(UserRewards, Profile)
        .join(Profile, Profile.id == UserRewards.user_id)
        .order_by(UserRewards.points.desc()),
        search,
    )
    return [(r, p) for r, p in (await db.execute(stmt)).all()]
