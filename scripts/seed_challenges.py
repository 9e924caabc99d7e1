"""Insert starter challenges and the platform settings row if missing."""

import asyncio
import os
import sys

# Add parent directory to path so we can import fitplan modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy import select

from fitplan.core.enums import ChallengeDifficulty, ChallengeType
from fitplan.db.session import engine, session_scope
from fitplan.models import Challenge, PlatformSettings
from fitplan.models.platform_settings import PLATFORM_SETTINGS_ID

STARTER_CHALLENGES = [
    {
        "title": "7-Day Hydration",
        "description": "Drink 8 glasses of water every day for a week.",
        "type": ChallengeType.DAILY,
        "difficulty": ChallengeDifficulty.BEGINNER,
        "points": 50,
        "requirements": {"target": 7, "metric": "days", "timeframe": "week"},
    },
    {
        "title": "Workout Streak",
        "description": "Work out five days in a row.",
        "type": ChallengeType.STREAK,
        "difficulty": ChallengeDifficulty.INTERMEDIATE,
        "points": 100,
        "requirements": {"target": 5, "metric": "workouts"},
    },
    {
        "title": "10K Steps Week",
        "description": "Hit 10,000 steps on five days this week.",
        "type": ChallengeType.WEEKLY,
        "difficulty": ChallengeDifficulty.INTERMEDIATE,
        "points": 75,
        "requirements": {"target": 5, "metric": "days", "timeframe": "week"},
    },
    {
        "title": "Lose 2 kg",
        "description": "Reach a 2 kg weight loss from your starting point.",
        "type": ChallengeType.GOAL,
        "difficulty": ChallengeDifficulty.ADVANCED,
        "points": 200,
        "requirements": {"target": 2, "metric": "kg"},
    },
]


async def main():
    async with session_scope() as session:
        existing = set((await session.execute(select(Challenge.title))).scalars().all())
        added = 0
        for data in STARTER_CHALLENGES:
            if data["title"] in existing:
                continue
            session.add(Challenge(**data))
            added += 1
        if await session.get(PlatformSettings, PLATFORM_SETTINGS_ID) is None:
            session.add(PlatformSettings(id=PLATFORM_SETTINGS_ID))
            print("Created platform settings row.")
        print(f"Added {added} challenge(s).")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
