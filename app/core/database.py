"""
Database engine, session factory and ORM base.

A ``Database`` is built once per application from its ``Settings`` and kept on
``app.state``; request handlers get a session through ``get_async_session``.
"""
from typing import AsyncGenerator

from fastapi import Request
from loguru import logger
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import Settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""
    pass


class Database:
    """
    Owns the async engine and the session factory.

    Server databases get a bounded pool of ``db_pool_size`` connections with
    no overflow. SQLite keeps its dialect default pool.
    """

    def __init__(self, settings: Settings):
        url = make_url(settings.database_url)
        engine_kwargs = {"echo": settings.debug, "pool_pre_ping": True}
        if url.get_backend_name() != "sqlite":
            engine_kwargs.update(pool_size=settings.db_pool_size, max_overflow=0)

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_db_and_tables(self) -> None:
        """Create all tables registered on ``Base``."""
        # Models must be imported so their tables are registered.
        import app.auth.models  # noqa: F401
        import app.food.models  # noqa: F401
        import app.volunteers.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ready on {}", self.engine.url.render_as_string(hide_password=True))

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """Dependency returning the application's database."""
    return request.app.state.database


async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for the duration of one request."""
    database = get_database(request)
    async with database.session_factory() as session:
        yield session
