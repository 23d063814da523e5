"""API dependencies."""

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskroster.controller import PersonController
from taskroster.db import base
from taskroster.db.repositories import PersonRepository, TaskRepository


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session, one per request."""
    async with base.async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_person_controller(
    session: AsyncSession = Depends(get_db_session),
) -> PersonController:
    """Controller bound to the request's session."""
    return PersonController(PersonRepository(session), TaskRepository(session))
