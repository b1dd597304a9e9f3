"""
Database connection management.

Provides the async SQLAlchemy engine and session factory used by the
embedding store.

Dependencies: sqlalchemy, aiosqlite
System role: Database connection lifecycle management
"""

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool


def create_store_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create async SQLite engine for the embedding store.

    In-memory databases share a single connection (StaticPool) so that
    every session sees the same data. File databases wait up to 30s on
    a locked database instead of failing immediately.

    Args:
        database_url: sqlite+aiosqlite URL
        echo: Echo SQL statements to logs

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine
    """
    if ":memory:" in database_url:
        return create_async_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_async_engine(
        database_url,
        echo=echo,
        connect_args={"timeout": 30},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """
    Create async session factory for database operations.

    Args:
        engine: Async engine to bind sessions to

    Returns:
        async_sessionmaker: Session factory configured for manual transaction control

    Usage:
        SessionFactory = create_session_factory(engine)
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )
