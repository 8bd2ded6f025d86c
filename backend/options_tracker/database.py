"""
Database connection and session management
"""

from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from .config import settings


def create_engine_for_url(database_url: str) -> AsyncEngine:
    """
    Create an async engine, preparing the SQLite data directory when needed

    Args:
        database_url: SQLAlchemy async database URL

    Returns:
        AsyncEngine
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return create_async_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,  # Set to True for SQL query logging
        )
    return create_async_engine(database_url, echo=False)


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    """Create an async session factory bound to the given engine"""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


# Create async engine
engine = create_engine_for_url(settings.database_url)

# Create async session factory
AsyncSessionLocal = create_session_factory(engine)

# Base class for models
Base = declarative_base()


async def get_db() -> AsyncSession:
    """
    Dependency for getting database session

    Yields:
        AsyncSession: Database session
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db(bind: AsyncEngine = None):
    """Initialize database (create tables)"""
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
