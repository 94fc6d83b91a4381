"""
Shared fixtures for CV endpoint tests.

The test database comes from TEST_DATABASE_URL (a local SQLite file through
aiosqlite unless overridden, e.g. with a PostgreSQL URL).  Each test gets its
own session; tables are created before and dropped after every test so each
test starts with a clean slate.  Export files go to the test's tmp_path.
"""
from __future__ import annotations

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

# Override DATABASE_URL *before* any app module is imported, so that
# settings.DATABASE_URL and the global engine point at the test DB.
TEST_DATABASE_URL = os.environ.get(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///./cv_endpoint_test.db",
)
os.environ["DATABASE_URL"] = TEST_DATABASE_URL

from cv_endpoint.database import Base, get_db  # noqa: E402
from cv_endpoint.dependencies.repositories import get_exporter  # noqa: E402
from cv_endpoint.main import app  # noqa: E402
from cv_endpoint.models import database_models  # noqa: E402,F401
from cv_endpoint.services.document_store import DocumentStore  # noqa: E402
from cv_endpoint.services.exporter import ContentExporter  # noqa: E402
from cv_endpoint.services.page_config import PageConfigRepository  # noqa: E402
from cv_endpoint.services.profile_repository import ProfileRepository  # noqa: E402


# ---------------------------------------------------------------------------
# Per-test fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a DB session for each test. After the test, all tables are dropped
    so each test starts with a clean slate.
    """
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def exporter(tmp_path) -> ContentExporter:
    return ContentExporter(content_dir=str(tmp_path), subdir=".indiekit")


@pytest.fixture
def store(db_session: AsyncSession) -> DocumentStore:
    return DocumentStore(db_session)


@pytest.fixture
def profile_repo(store: DocumentStore, exporter: ContentExporter) -> ProfileRepository:
    return ProfileRepository(store, exporter)


@pytest.fixture
def page_repo(store: DocumentStore, exporter: ContentExporter) -> PageConfigRepository:
    return PageConfigRepository(store, exporter)


@pytest.fixture
def frozen_clock(monkeypatch):
    """
    Make DocumentStore stamp "t1", "t2", ... so timestamp changes are
    observable without sleeping.
    """
    ticks = iter(f"t{n}" for n in range(1, 10_000))
    monkeypatch.setattr(
        "cv_endpoint.services.document_store.utc_timestamp", lambda: next(ticks)
    )


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession, exporter: ContentExporter
) -> AsyncGenerator[AsyncClient, None]:
    """
    httpx AsyncClient wired to the FastAPI app with the DB and exporter
    dependencies overridden to use the per-test session and tmp_path.
    """

    async def _override_get_db():
        yield db_session

    async def _override_get_exporter():
        return exporter

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_exporter] = _override_get_exporter

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
