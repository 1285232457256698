"""
SQLAlchemy async engine and session management.

Database is created once by the DI container and shared by the unit of work
factory and the query repositories. PostgreSQL (asyncpg) is used in production;
SQLite (aiosqlite) is accepted for local runs and tests.

SQLite notes:
- Every transaction starts with BEGIN IMMEDIATE so the write lock is taken up
  front and two concurrent writers serialize instead of failing on upgrade.
- NullPool, so connections never outlive the event loop that opened them.
- Foreign keys are off by default in SQLite and are switched on per connection.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class Base(DeclarativeBase):
    pass


def _enable_sqlite_write_lock(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, 'connect')
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        # Let SQLAlchemy emit BEGIN itself instead of pysqlite's deferred BEGIN
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()

    @event.listens_for(engine.sync_engine, 'begin')
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql('BEGIN IMMEDIATE')


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    if make_url(url).get_backend_name() == 'sqlite':
        engine = create_async_engine(
            url,
            echo=echo,
            poolclass=NullPool,
            connect_args={'timeout': settings.SQLITE_BUSY_TIMEOUT},
        )
        _enable_sqlite_write_lock(engine)
        return engine

    return create_async_engine(
        url,
        echo=echo,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_POOL_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=settings.DB_POOL_PRE_PING,
    )


class Database:
    """
    Owns the engine and the session factory.

    Usage:
        database = Database(db_url=settings.DATABASE_URL_ASYNC)
        async with database.session() as session:
            ...
    """

    def __init__(self, *, db_url: Optional[str] = None, echo: bool = False) -> None:
        self.db_url = db_url or settings.DATABASE_URL_ASYNC
        self.engine = build_engine(self.db_url, echo=echo)
        self.session_maker: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        Logger.base.info(f'🔗 [DB] Engine created for {self.engine.url.render_as_string()}')

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session for read-only work outside a unit of work; rolled back on exit."""
        async with self.session_maker() as session:
            yield session

    async def create_tables(self) -> None:
        """Create all tables that do not exist yet (tests and local SQLite runs)."""
        # Register every model on Base.metadata
        import src.service.ticket_reservation.driven_adapter.model  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        Logger.base.info('🗄️  [DB] Tables ensured')

    async def drop_tables(self) -> None:
        import src.service.ticket_reservation.driven_adapter.model  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        Logger.base.info('🔌 [DB] Engine disposed')
