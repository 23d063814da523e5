"""TaskRoster main application."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from taskroster import __version__
from taskroster.api import router
from taskroster.audit import dispatcher, get_audit_sink
from taskroster.config import settings
from taskroster.db.base import close_db, init_db

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("taskroster")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting TaskRoster server...")
    logger.info(f"Environment: {settings.env.value}")

    # Resolve the audit sink up front (fail fast on bad config)
    if settings.audit_enabled:
        get_audit_sink()
    else:
        logger.info("Audit channel disabled")

    await init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down TaskRoster server...")
    await dispatcher.shutdown(settings.audit_shutdown_timeout_seconds)
    await close_db()
    logger.info("Shutdown complete")


app = FastAPI(
    title="TaskRoster",
    description="People and task tracking API with an audit side-channel",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(router)


def main():
    """Entry point for the application."""
    uvicorn.run(
        "taskroster.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
