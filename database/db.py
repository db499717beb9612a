"""Database engine and session factory."""

from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config import settings
from utils.logger import logger


# Engine with a small pool; the API runs as a single process
engine = create_async_engine(
    settings.database_url,
    echo=False,  # True to log SQL
    pool_size=10,
    max_overflow=5,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Per-request session dependency; rolls back on any error."""
    async with async_session_maker() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Database session error: {e}")
            await session.rollback()
            raise


async def ping_db(session: AsyncSession) -> str:
    """Return the database server time, used by the health check."""
    result = await session.execute(text("SELECT now()"))
    return str(result.scalar_one())


async def init_db() -> None:
    """Verify the connection and create any missing tables."""
    try:
        from database.models import Base

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info("Database connection established")
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise


async def close_db() -> None:
    """Dispose of pooled connections."""
    await engine.dispose()
    logger.info("Database connections closed")
