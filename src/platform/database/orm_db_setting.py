"""
SQLAlchemy async engine and session management

This module provides:
1. AsyncEngineManager: event-loop-aware engine + session maker for one database URL
2. Base: declarative base shared by every ORM model
3. Database: DI-friendly wrapper handing out sessions to repositories

Backends:
- PostgreSQL (postgresql+asyncpg): pooled connections, per-statement command_timeout
- SQLite (sqlite+aiosqlite): WAL journal, busy_timeout and foreign keys enabled on connect,
  so concurrent writers queue on the database lock instead of failing
"""

import asyncio
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

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


# =============================================================================
# Event-loop-aware Engine Manager
# =============================================================================


class AsyncEngineManager:
    """
    Manages one SQLAlchemy async engine with event loop awareness.

    Ensures the engine is always bound to the current event loop to prevent
    "Task got Future attached to a different loop" errors (TestClient and
    pytest-asyncio each run their own loop).
    """

    def __init__(
        self,
        db_url: str,
        *,
        pool_size: int = settings.DB_POOL_SIZE,
        max_overflow: int = settings.DB_POOL_MAX_OVERFLOW,
        pool_timeout: int = settings.DB_POOL_TIMEOUT,
        pool_recycle: int = settings.DB_POOL_RECYCLE,
        pool_pre_ping: bool = settings.DB_POOL_PRE_PING,
        command_timeout: float = settings.DB_COMMAND_TIMEOUT,
        busy_timeout: float = settings.SQLITE_BUSY_TIMEOUT,
    ) -> None:
        self.db_url = db_url
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._pool_timeout = pool_timeout
        self._pool_recycle = pool_recycle
        self._pool_pre_ping = pool_pre_ping
        self._command_timeout = command_timeout
        self._busy_timeout = busy_timeout
        self._engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.db_url).get_backend_name() == 'sqlite'

    def get_engine(self) -> AsyncEngine:
        """Get engine for current event loop, creating new one if needed"""
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop running, create engine without loop tracking
            if self._engine is None:
                self._engine = self._create_engine()
            return self._engine

        if self._loop is not current_loop or self._engine is None:
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, dropping old engine...')
                # dispose() cannot be awaited from this sync method, the old engine is GC'd
                self._session_maker = None

            Logger.base.info(f'🔗 [DB] Creating engine for event loop {id(current_loop)}')
            self._engine = self._create_engine()
            self._loop = current_loop

        return self._engine

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None or self._session_maker.kw.get('bind') is not engine:
            self._session_maker = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        self._loop = None

    def _create_engine(self) -> AsyncEngine:
        if self.is_sqlite:
            engine = create_async_engine(
                self.db_url,
                echo=False,
                connect_args={'timeout': self._busy_timeout},
            )
            _enable_sqlite_pragmas(engine, busy_timeout_ms=int(self._busy_timeout * 1000))
            return engine

        return create_async_engine(
            self.db_url,
            echo=False,
            pool_size=self._pool_size,
            max_overflow=self._max_overflow,
            pool_timeout=self._pool_timeout,
            pool_recycle=self._pool_recycle,
            pool_pre_ping=self._pool_pre_ping,
            connect_args={'command_timeout': self._command_timeout},
        )


def _enable_sqlite_pragmas(engine: AsyncEngine, *, busy_timeout_ms: int) -> None:
    @event.listens_for(engine.sync_engine, 'connect')
    def sqlite_pragmas(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA journal_mode=WAL;')
        cursor.execute(f'PRAGMA busy_timeout={busy_timeout_ms};')
        cursor.execute('PRAGMA foreign_keys=ON;')
        cursor.execute('PRAGMA synchronous=NORMAL;')
        cursor.close()


# =============================================================================
# Base Model
# =============================================================================


class Base(DeclarativeBase):
    pass


# =============================================================================
# Database Class (for DI)
# =============================================================================


class Database:
    """
    Database handle injected into repositories.

    Repositories receive `database.session` as their session factory and open
    one short-lived session per call.
    """

    def __init__(self, *, db_url: str, **engine_options: Any) -> None:
        self._engine_manager = AsyncEngineManager(db_url, **engine_options)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine_manager.get_engine()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database sessions

        Note: Automatically handles rollback on exception
        """
        session_maker = self._engine_manager.get_session_maker()
        async with session_maker() as session:
            yield session

    async def dispose(self) -> None:
        await self._engine_manager.dispose()


# =============================================================================
# Table Creation
# =============================================================================


def _register_models() -> None:
    # Model modules must be imported so their tables are registered on Base.metadata
    import src.service.events.driven_adapter.model  # noqa: F401


async def create_db_and_tables(database: Database) -> None:
    """Create database tables if they don't exist"""
    _register_models()
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    Logger.base.info('🗄️ [DB] Tables ready')


async def drop_db_and_tables(database: Database) -> None:
    _register_models()
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
