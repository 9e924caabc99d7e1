"""Challenge state machine: join, progress, one-time completion credit, leave rules."""

import pytest
from conftest import headers, run
from sqlalchemy import func, inspect, select

from fitplan.core.enums import ChallengeType
from fitplan.models.challenge import ChallengeParticipant, RewardCredit, UserRewards
from fitplan.services import challenges as svc
from fitplan.services.challenges import ChallengeStateError


@pytest.fixture
def athlete(make_profile):
    return make_profile("athlete")


def progress(client, user, challenge, amount):
    return client.post(
        f"/api/v1/challenges/{challenge.id}/progress", headers=headers(user.id), json={"amount": amount}
    )


def test_progress_sequence_completes_exactly_once(client, athlete, make_challenge):
    challenge = make_challenge(target=5, points=100)
    h = headers(athlete.id)
    assert client.post(f"/api/v1/challenges/{challenge.id}/join", headers=h).status_code == 201

    steps = [(1, 1, False), (2, 3, False), (2, 5, True)]
    for amount, expected, completed in steps:
        body = progress(client, athlete, challenge, amount).json()
        assert body["participant"]["progress"] == expected
        assert body["participant"]["completed"] is completed
        assert body["just_completed"] is completed
        assert body["points_awarded"] == (100 if completed else 0)
    assert body["participant"]["completion_date"] is not None

    again = progress(client, athlete, challenge, 1)
    assert again.status_code == 409

    rewards = client.get("/api/v1/challenges/rewards/me", headers=h).json()
    assert rewards["points"] == 100


def test_overshooting_target_completes(client, athlete, make_challenge):
    challenge = make_challenge(target=3, points=40)
    client.post(f"/api/v1/challenges/{challenge.id}/join", headers=headers(athlete.id))
    body = progress(client, athlete, challenge, 10).json()
    assert body["participant"]["completed"] is True
    assert body["points_awarded"] == 40


def test_join_twice_conflicts(client, athlete, make_challenge):
    challenge = make_challenge()
    h = headers(athlete.id)
    client.post(f"/api/v1/challenges/{challenge.id}/join", headers=h)
    assert client.post(f"/api/v1/challenges/{challenge.id}/join", headers=h).status_code == 409


def test_progress_without_joining_is_404(client, athlete, make_challenge):
    challenge = make_challenge()
    assert progress(client, athlete, challenge, 1).status_code == 404


def test_quit_allowed_before_completion_only(client, athlete, make_challenge):
    h = headers(athlete.id)
    open_challenge = make_challenge(target=5)
    client.post(f"/api/v1/challenges/{open_challenge.id}/join", headers=h)
    assert client.delete(f"/api/v1/challenges/{open_challenge.id}/join", headers=h).status_code == 204
    assert client.post(f"/api/v1/challenges/{open_challenge.id}/join", headers=h).status_code == 201

    done = make_challenge(target=1, title="One and done")
    client.post(f"/api/v1/challenges/{done.id}/join", headers=h)
    progress(client, athlete, done, 1)
    assert client.delete(f"/api/v1/challenges/{done.id}/join", headers=h).status_code == 409


def test_listing_shows_counts_and_viewer_progress(client, athlete, make_profile, make_challenge):
    other = make_profile("other")
    challenge = make_challenge(target=5)
    make_challenge(title="Streak", type=ChallengeType.STREAK)
    client.post(f"/api/v1/challenges/{challenge.id}/join", headers=headers(athlete.id))
    client.post(f"/api/v1/challenges/{challenge.id}/join", headers=headers(other.id))
    progress(client, athlete, challenge, 2)

    items = {c["id"]: c for c in client.get("/api/v1/challenges", headers=headers(athlete.id)).json()}
    mine = items[str(challenge.id)]
    assert mine["participants_count"] == 2
    assert mine["participation"]["progress"] == 2
    streaks = client.get("/api/v1/challenges", params={"type": "streak"}, headers=headers(athlete.id)).json()
    assert [c["title"] for c in streaks] == ["Streak"]


def test_rewards_created_lazily(client, athlete):
    body = client.get("/api/v1/challenges/rewards/me", headers=headers(athlete.id)).json()
    assert body["points"] == 0
    assert body["badges"] == []


def test_credit_is_idempotent_per_user_and_challenge(session_maker, athlete, make_challenge):
    challenge = make_challenge(points=25)

    async def scenario():
        async with session_maker() as db:
            first = await svc.credit_completion(db, athlete.id, challenge)
            second = await svc.credit_completion(db, athlete.id, challenge)
            await db.commit()
            credits = await db.scalar(select(func.count(RewardCredit.id)))
            points = await db.scalar(select(UserRewards.points).where(UserRewards.user_id == athlete.id))
            return first, second, credits, points

    assert run(scenario()) == (25, 0, 1, 25)


def test_failed_completion_rolls_back_every_write(session_maker, athlete, make_challenge):
    challenge = make_challenge(target=1, points=10)

    async def scenario():
        async with session_maker() as db:
            await svc.join(db, challenge.id, athlete.id)
            await db.commit()
        async with session_maker() as db:
            await svc.log_progress(db, challenge.id, athlete.id, 1)
            await db.rollback()
        async with session_maker() as db:
            participant = await svc.get_participant(db, challenge.id, athlete.id)
            credits = await db.scalar(select(func.count(RewardCredit.id)))
            return participant.completed, participant.progress, credits

    assert run(scenario()) == (False, 0, 0)


def test_non_positive_increment_rejected(session_maker, athlete, make_challenge):
    challenge = make_challenge()

    async def scenario():
        async with session_maker() as db:
            await svc.log_progress(db, challenge.id, athlete.id, 0)

    with pytest.raises(ChallengeStateError):
        run(scenario())


def test_participant_rows_are_loaded_without_relationships():
    # Participants are always fetched by challenge_id; nothing navigates back to the challenge
    assert list(inspect(ChallengeParticipant).relationships) == []
