"""
Pytest fixtures

- 每個測試使用獨立的 SQLite 檔案資料庫 (tmp_path)
- TestClient 的 get_db 依賴被替換成測試資料庫的 session
- Service 層測試透過 run_db 在 asyncio.run 內執行，結束前等背景工作跑完
"""
import asyncio
import os
import sys

# Ensure backend package is on sys.path for imports during tests
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# 必須在匯入 app 之前設定
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./freelancer_match_test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ["RESEND_API_KEY"] = ""
os.environ["AUTO_MIGRATE"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.background import wait_for_background_tasks
from app.core.database import Base, get_db
from app.main import app

PASSWORD = "password123"


@pytest.fixture
def engine(tmp_path):
    # NullPool: 每次都開新連線，TestClient 與 asyncio.run 的 event loop 不會共用連線
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
    )

    async def _create_tables():
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_create_tables())
    yield test_engine
    asyncio.run(test_engine.dispose())


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def run_db(session_factory):
    """在新的 event loop 中以一個 session 執行 async 函式"""
    def _run(fn):
        async def _runner():
            async with session_factory() as session:
                result = await fn(session)
            await wait_for_background_tasks()
            return result
        return asyncio.run(_runner())
    return _run


@pytest.fixture
def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """註冊並登入，回傳 (user_id, Authorization headers)"""
    def _make_user(username: str, email: str | None = None, display_name: str = ""):
        email = email or f"{username}@example.com"
        resp = client.post("/auth/register", json={
            "email": email,
            "username": username,
            "display_name": display_name,
            "password": PASSWORD,
        })
        assert resp.status_code == 201, resp.text
        user_id = resp.json()["user_id"]

        resp = client.post("/auth/token", data={"username": email, "password": PASSWORD})
        assert resp.status_code == 200, resp.text
        token = resp.json()["access_token"]
        return user_id, {"Authorization": f"Bearer {token}"}
    return _make_user
