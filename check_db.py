import asyncio

from sqlalchemy import text

from fitplan.db.session import async_session_maker, engine

TABLES = [
    "profiles",
    "quiz_results",
    "health_profiles",
    "progress_photos",
    "photo_likes",
    "photo_comments",
    "comment_likes",
    "challenges",
    "challenge_participants",
    "user_rewards",
    "reward_credits",
    "platform_settings",
]


async def check_data():
    async with async_session_maker() as session:
        print(f"Checking tables: {TABLES}")
        for table in TABLES:
            try:
                result = await session.execute(text(f"SELECT count(*) FROM {table}"))
                print(f"Table '{table}' row count: {result.scalar()}")
            except Exception as e:
                print(f"Error querying {table}: {e}")
                await session.rollback()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(check_data())
