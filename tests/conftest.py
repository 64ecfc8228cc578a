"""
Pytest configuration for Taskboard API tests.

The app runs in-process over httpx's ASGI transport, against an in-memory
SQLite database and a fake Redis.
"""

import os
import uuid

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-chars")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import fakeredis
import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from taskboard.core.database import get_db
from taskboard.core.dependencies import get_redis
from taskboard.main import app
from taskboard.models import Base

PASSWORD = "password123"


def unique_email(prefix: str) -> str:
    """Generate a unique email so tests never collide."""
    return f"{prefix}_{uuid.uuid4().hex[:8]}@example.com"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def redis():
    client = fakeredis.FakeAsyncRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
async def client(session_factory, redis):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_get_redis():
        return redis

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = override_get_redis

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def register(
    client: httpx.AsyncClient,
    prefix: str = "user",
    role: str = "user",
    name: str = "Test User",
) -> dict:
    """Register a user and return ``{"id", "email", "headers", "tokens"}``."""
    email = unique_email(prefix)
    resp = await client.post("/api/auth/register", json={
        "name": name,
        "email": email,
        "password": PASSWORD,
        "role": role,
    })
    assert resp.status_code == 201, f"Register failed: {resp.text}"
    tokens = resp.json()["data"]
    headers = {"Authorization": f"Bearer {tokens['accessToken']}"}

    me = await client.get("/api/auth/me", headers=headers)
    assert me.status_code == 200, f"Me failed: {me.text}"
    return {
        "id": me.json()["data"]["id"],
        "email": email,
        "headers": headers,
        "tokens": tokens,
    }


async def create_project(client: httpx.AsyncClient, user: dict, name: str = "Apollo", **fields) -> dict:
    resp = await client.post(
        "/api/projects",
        json={"name": name, **fields},
        headers=user["headers"],
    )
    assert resp.status_code == 201, f"Create project failed: {resp.text}"
    return resp.json()["data"]


async def add_member(client: httpx.AsyncClient, manager: dict, project_id: str, member: dict) -> httpx.Response:
    return await client.post(
        f"/api/projects/{project_id}/members",
        json={"memberId": member["id"]},
        headers=manager["headers"],
    )


async def create_task(client: httpx.AsyncClient, user: dict, project_id: str, title: str = "Write docs", **fields) -> dict:
    resp = await client.post(
        "/api/tasks",
        json={"title": title, "project": project_id, **fields},
        headers=user["headers"],
    )
    assert resp.status_code == 201, f"Create task failed: {resp.text}"
    return resp.json()["data"]


async def create_comment(client: httpx.AsyncClient, user: dict, task_id: str, content: str = "Looks good") -> dict:
    resp = await client.post(
        "/api/comments",
        json={"content": content, "task": task_id},
        headers=user["headers"],
    )
    assert resp.status_code == 201, f"Create comment failed: {resp.text}"
    return resp.json()["data"]


async def activity_for(client: httpx.AsyncClient, user: dict, project_id: str) -> list[dict]:
    resp = await client.get(f"/api/activity/project/{project_id}", headers=user["headers"])
    assert resp.status_code == 200, f"Activity failed: {resp.text}"
    return resp.json()["data"]
