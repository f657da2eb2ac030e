# backend/utils/database.py
from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base

from backend import config

Base = declarative_base()


def build_engine(database_url: str | None = None) -> AsyncEngine:
    """Create the async engine. Its pool is shared by every request."""
    url = make_url(database_url or config.DATABASE_URL)
    kwargs = {"echo": False, "future": True, "pool_pre_ping": True}
    if url.get_backend_name() != "sqlite":
        kwargs.update(pool_size=config.DB_POOL_SIZE, max_overflow=config.DB_MAX_OVERFLOW)
    return create_async_engine(url, **kwargs)


def build_sessionmaker(engine: AsyncEngine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine):
    """Open a connection and create missing tables. Raises if the database is unreachable."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# Dependency for route injection
async def get_db(request: Request):
    async with request.app.state.sessionmaker() as session:
        yield session
