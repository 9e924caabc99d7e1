"""Shared fixtures: temp SQLite database, app with overridden dependencies, test client."""

from __future__ import annotations

import asyncio
import uuid
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from fitplan.api.deps import get_photo_storage
from fitplan.core.config import Settings
from fitplan.core.enums import ChallengeDifficulty, ChallengeType
from fitplan.db.base import Base
from fitplan.db.session import get_db, session_scope
from fitplan.main import app
from fitplan.models import Challenge, Profile
from fitplan.services.storage import PhotoStorage


def run(coro):
    """Drive a coroutine to completion from a sync test."""
    return asyncio.run(coro)


class StubS3Client:
    """Records put/delete calls the way boto3's S3 client receives them."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []

    def put_object(self, Bucket: str, Key: str, Body: bytes, ContentType: str) -> dict:
        self.objects[Key] = Body
        return {}

    def delete_objects(self, Bucket: str, Delete: dict) -> dict:
        for obj in Delete["Objects"]:
            self.objects.pop(obj["Key"], None)
            self.deleted.append(obj["Key"])
        return {}

    def generate_presigned_url(self, ClientMethod: str, Params: dict, ExpiresIn: int) -> str:
        return f"https://storage.test/{Params['Bucket']}/{Params['Key']}?expires={ExpiresIn}"


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "fitplan-test.db"
    sync_engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()
    return path


@pytest.fixture
def session_maker(db_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    run(engine.dispose())


@pytest.fixture
def s3_client():
    return StubS3Client()


@pytest.fixture
def storage(s3_client):
    return PhotoStorage(Settings(s3_bucket_name="fitplan-test"), client=s3_client)


@pytest.fixture
def client(session_maker, storage):
    async def _get_db():
        async with session_scope(session_maker) as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_photo_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


def headers(user_id: uuid.UUID) -> dict[str, str]:
    return {"x-user-id": str(user_id)}


@pytest.fixture
def make_profile(session_maker):
    def _make(username: str, is_admin: bool = False, **fields: Any) -> Profile:
        async def _create():
            async with session_maker() as session:
                profile = Profile(id=uuid.uuid4(), username=username, is_admin=is_admin, **fields)
                session.add(profile)
                await session.commit()
                return profile

        return run(_create())

    return _make


@pytest.fixture
def make_challenge(session_maker):
    def _make(target: int = 5, points: int = 100, **fields: Any) -> Challenge:
        async def _create():
            async with session_maker() as session:
                data = {
                    "title": "Five workouts",
                    "description": "Log five workouts",
                    "type": ChallengeType.GOAL,
                    "difficulty": ChallengeDifficulty.BEGINNER,
                    "points": points,
                    "requirements": {"target": target, "metric": "workouts"},
                }
                data.update(fields)
                challenge = Challenge(**data)
                session.add(challenge)
                await session.commit()
                return challenge

        return run(_create())

    return _make


VALID_ANSWERS = {
    "1": 30,
    "2": "Male",
    "3": 80,
    "4": 180,
    "5": 72,
    "6": "Moderately active (moderate exercise/sports 3-5 days/week)",
    "7": "None",
    "8": "Lose weight",
    "9": "3 meals",
    "10": "None",
    "11": "30-45 minutes",
    "12": "Strength training",
}
