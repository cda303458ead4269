"""Database Lifecycle Management - Async Version"""

import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from storefront.data.models import Base
from storefront.settings.sections.database import DatabaseSettings

logger = logging.getLogger(__name__)


def build_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Create the async engine for the configured URL.

    SQLite gets a single shared connection; PostgreSQL a pre-pinged pool.
    """
    url = make_url(settings.url)

    if url.drivername.startswith("sqlite"):
        return create_async_engine(
            url,
            echo=settings.echo_sql,
            connect_args={"check_same_thread": False},  # Required for SQLite
            poolclass=StaticPool,
        )

    if url.drivername in ("postgresql", "postgres"):
        url = url.set(drivername="postgresql+asyncpg")

    return create_async_engine(url, echo=settings.echo_sql, pool_pre_ping=True)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_database(engine: AsyncEngine) -> None:
    """Create tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Database ready ({engine.url.drivername})")


async def close_database(engine: AsyncEngine) -> None:
    """Close async database engine."""
    await engine.dispose()
