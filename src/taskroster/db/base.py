"""Database connection and session management."""

import time
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from taskroster.config import settings
from taskroster.observability.metrics import metrics


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


def _engine_options() -> dict[str, Any]:
    """Pool sizing only applies to server databases."""
    if settings.is_sqlite:
        return {}
    return {"pool_pre_ping": True, "pool_size": 20, "max_overflow": 10}


def attach_query_metrics(target_engine: AsyncEngine) -> None:
    """Attach SQLAlchemy event listeners for query metrics."""
    sync_engine = target_engine.sync_engine
    if getattr(sync_engine, "_taskroster_metrics_attached", False):
        return

    @event.listens_for(sync_engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info["query_start_time"] = time.perf_counter()

    @event.listens_for(sync_engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        start_time = conn.info.pop("query_start_time", None)
        if start_time is None:
            return
        metrics.inc_counter("db.query.count")
        metrics.observe("db.query.duration_ms", (time.perf_counter() - start_time) * 1000.0)

    sync_engine._taskroster_metrics_attached = True


engine = create_async_engine(settings.database_url, echo=settings.debug, **_engine_options())

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

attach_query_metrics(engine)


async def init_db() -> None:
    """Create tables for the entity model."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections."""
    await engine.dispose()
