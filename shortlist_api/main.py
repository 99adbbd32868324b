"""
Main Application Entry Point

This module sets up the FastAPI application with:
- Logging configuration
- Database table creation on startup and engine disposal on shutdown
- Rate limiter and error handler registration
- Route registration under /v1

Run with:
    uvicorn shortlist_api.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from shortlist_api.config import settings
from shortlist_api.database import engine
from shortlist_api.errors import install_error_handlers
from shortlist_api.limiter import limiter
from shortlist_api.models import Base
from shortlist_api.routes import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager - runs on startup and shutdown.

    Startup: create database tables if they don't exist.
    Shutdown: close every pooled database connection.
    """
    async with engine.begin() as conn:
        # create_all() creates tables for all models that inherit from Base
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database ready (%s)", engine.url.render_as_string(hide_password=True))

    yield

    await engine.dispose()


app = FastAPI(title="Shortlist API", version="1.0.0", lifespan=lifespan)

# slowapi looks the limiter up on app.state when a decorated route runs
app.state.limiter = limiter
install_error_handlers(app)

app.include_router(api_router)
