from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.config import Config


# SQLAlchemy Base for ORM models
class Base(DeclarativeBase):
    pass


def get_async_url(url: str, db_type: str) -> str:
    """Convert database URL to async SQLAlchemy format."""
    if db_type == "postgresql":
        return url.replace("postgresql://", "postgresql+asyncpg://")
    elif db_type == "mysql":
        return url.replace("mysql://", "mysql+aiomysql://")
    elif db_type == "sqlite":
        return url.replace("sqlite://", "sqlite+aiosqlite://")
    return url


class Database:
    """Store client holding the engine and session factory.

    One instance is created per process by the application lifespan and
    handed to request handlers through ``get_db``.
    """

    def __init__(self, url: str | None = None, db_type: str | None = None):
        self.url = url or Config.DATABASE_URL
        self.db_type = (db_type or Config.DATABASE_TYPE).lower()
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None

    async def connect(self):
        """Create database engine."""
        kwargs = {"echo": False}
        # An in-memory SQLite database lives only as long as its connection
        if self.db_type == "sqlite" and ":memory:" in self.url:
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}
        self.engine = create_async_engine(get_async_url(self.url, self.db_type), **kwargs)
        self.session_factory = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)

    async def disconnect(self):
        """Close database engine."""
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None

    async def create_all(self):
        """Create missing tables. Existing tables are left untouched."""
        # Register the models on Base.metadata
        import app.models  # noqa: F401

        if not self.engine:
            await self.connect()
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if not self.session_factory:
            await self.connect()
        async with self.session_factory() as session:
            yield session

    async def ping(self) -> bool:
        """Round-trip a trivial query to check the store is reachable."""
        if not self.engine:
            await self.connect()
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True


def get_db(request: Request) -> Database:
    """FastAPI dependency returning the store client owned by the app."""
    return request.app.state.db
