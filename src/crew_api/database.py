"""Database connection and session management."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from crew_api.config import get_settings
from crew_api.repositories.store import RecordStore, SQLRecordStore

settings = get_settings()

engine = create_async_engine(
    settings.async_database_url,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
    # Validate connections before checkout to detect stale connections
    pool_pre_ping=True,
    # Recycle connections after 1 hour (important for cloud proxies)
    pool_recycle=3600,
    # Never echo SQL statements, they carry employee personal data
    echo=False,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


def get_record_store(db: AsyncSession = Depends(get_db)) -> RecordStore:
    """Get the record store bound to the request session."""
    return SQLRecordStore(db)
