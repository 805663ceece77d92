import asyncio
import os
import sys
import uuid

import pytest

# Settings() 在 import 時就會讀取環境變數，必須先設定
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./unused.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

# Ensure project root is on sys.path for imports during tests
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from app.core.database import Base, get_db  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.main import app  # noqa: E402
from app.models.post import Post  # noqa: E402
from app.models.user import User  # noqa: E402


@pytest.fixture
def session_factory(tmp_path):
    # 每個測試一個獨立的 SQLite 檔案；NullPool 讓連線不會跨 event loop 重用
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)

    async def _create_tables():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(_create_tables())
    yield sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    asyncio.run(engine.dispose())


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
def run_db(session_factory):
    """在測試中直接對資料庫執行一段 async 函式: run_db(lambda session: ...)"""
    def _run(fn):
        async def _inner():
            async with session_factory() as session:
                return await fn(session)
        return asyncio.run(_inner())
    return _run


@pytest.fixture
def make_user(run_db):
    def _make(name="Jane Doe"):
        user_id = str(uuid.uuid4())

        async def _insert(session):
            session.add(User(
                user_id=user_id,
                name=name,
                email=f"{user_id}@example.com",
                password_hash="not-a-real-hash",
                avatar="https://www.gravatar.com/avatar/test",
            ))
            await session.commit()

        run_db(_insert)
        return user_id
    return _make


@pytest.fixture
def make_post(run_db):
    def _make(user_id, text="hello"):
        async def _insert(session):
            session.add(Post(post_id=str(uuid.uuid4()), user_id=user_id, text=text))
            await session.commit()

        run_db(_insert)
    return _make


@pytest.fixture
def count_rows(run_db):
    def _count(model, *criteria):
        async def _query(session):
            stmt = select(func.count()).select_from(model)
            if criteria:
                stmt = stmt.where(*criteria)
            return (await session.execute(stmt)).scalar_one()
        return run_db(_query)
    return _count


def auth_headers(user_id):
    token = create_access_token({"user_id": user_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_user(make_user):
    user_id = make_user()
    return user_id, auth_headers(user_id)


@pytest.fixture
def headers_for():
    return auth_headers
