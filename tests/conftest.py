"""
Pytest fixtures for TaskRoster tests.
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Ensure test config is set before importing taskroster modules.
os.environ.setdefault("TASKROSTER_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TASKROSTER_AUDIT_SINK", "log")

from taskroster.audit import AuditSink, dispatcher, set_audit_sink
from taskroster.db.base import Base, attach_query_metrics
import taskroster.db.tables  # noqa: F401
from taskroster.observability.metrics import metrics


class RecordingSink(AuditSink):
    """Audit sink that keeps every payload; can be told to fail."""

    def __init__(self):
        self.payloads: list[str] = []
        self.fail = False

    async def send(self, payload: str) -> None:
        self.payloads.append(payload)
        if self.fail:
            raise RuntimeError("audit endpoint unreachable")


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield


@pytest.fixture
async def engine():
    """Fresh in-memory database wired into taskroster.db.base."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    attach_query_metrics(engine)

    from taskroster.db import base as base_module

    original = (base_module.engine, base_module.async_session_factory)
    base_module.engine = engine
    base_module.async_session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    base_module.engine, base_module.async_session_factory = original
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    """Database session for repository tests."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def audit_sink():
    """Recording sink installed as the audit destination."""
    sink = RecordingSink()
    set_audit_sink(sink)
    yield sink
    await dispatcher.shutdown(timeout=1.0)
    set_audit_sink(None)


@pytest.fixture
def drain_audit():
    """Wait for outstanding audit dispatches."""

    async def _drain():
        await dispatcher.shutdown(timeout=1.0)

    return _drain


@pytest.fixture
async def client(engine, audit_sink):
    """Async test client against the app, one session per request."""
    from taskroster.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
