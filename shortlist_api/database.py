"""
Async engine and per-request sessions.

One engine per process, built from DATABASE_URL. Each request gets its own
AsyncSession through ``get_db``; the bearer gate and the handler share it
because FastAPI caches the dependency for the request.
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from shortlist_api.config import settings


# SQL echo only in development
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.ENVIRONMENT == "development",
)


# expire_on_commit=False: handlers serialize rows right after commit,
# and an expired attribute would need a lazy load that async sessions can't do
AsyncSessionLocal = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)


async def get_db():
    """Yield a session for the current request and close it afterwards."""
    async with AsyncSessionLocal() as session:
        yield session
