"""Async SQLAlchemy engine and session creation."""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from spec_manager.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str | None = None, echo: bool = False) -> AsyncEngine:
    """Create an async SQLAlchemy engine."""
    db_url = url or settings.database_url
    engine_kwargs: dict = {"echo": echo}

    # SQLite does not support pool_size / max_overflow
    if not db_url.startswith("sqlite"):
        engine_kwargs.update(pool_size=10, max_overflow=20, pool_pre_ping=True)

    engine = create_async_engine(db_url, **engine_kwargs)
    if db_url.startswith("sqlite"):
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
