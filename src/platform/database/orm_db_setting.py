"""
SQLAlchemy async engine and session management

This module provides:
1. AsyncEngineManager: event-loop-aware engine + session maker
2. Base: declarative base shared by every ORM model
3. Database: session factory for dependency injection
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


# =============================================================================
# Event-loop-aware Engine Manager
# =============================================================================


class AsyncEngineManager:
    """
    Manages the SQLAlchemy async engine with event loop awareness.

    Ensures the engine is always bound to the current event loop to prevent
    "Task got Future attached to a different loop" errors.
    """

    def __init__(self, *, db_url: Optional[str] = None) -> None:
        self._db_url = db_url
        self._engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def db_url(self) -> str:
        return self._db_url or settings.DATABASE_URL_ASYNC

    def get_engine(self) -> AsyncEngine:
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop running, create engine without loop tracking
            if self._engine is None:
                self._engine = self._create_engine()
            return self._engine

        if self._loop is not current_loop:
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, dropping old engine...')
                self._session_maker = None

            Logger.base.info(f'🔗 [DB] Creating engine for event loop {id(current_loop)}')
            self._engine = self._create_engine()
            self._loop = current_loop

        return self._engine  # type: ignore[return-value]

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    def _create_engine(self) -> AsyncEngine:
        """
        Create new async engine

        Pool tuning only applies to server databases; sqlite shares one connection.
        """
        pool_kwargs: dict[str, Any] = {'poolclass': StaticPool}
        if not self.db_url.startswith('sqlite'):
            pool_kwargs = {
                'pool_size': settings.DB_POOL_SIZE,
                'max_overflow': settings.DB_POOL_MAX_OVERFLOW,
                'pool_timeout': settings.DB_POOL_TIMEOUT,
                'pool_recycle': settings.DB_POOL_RECYCLE,
                'pool_pre_ping': settings.DB_POOL_PRE_PING,
            }
        return create_async_engine(self.db_url, echo=False, **pool_kwargs)

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        self._loop = None


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
    Database class for dependency injection pattern using AsyncEngineManager
    """

    def __init__(self, *, db_url: Optional[str] = None) -> None:
        self._engine_manager = AsyncEngineManager(db_url=db_url)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine_manager.get_engine()

    def session_maker(self) -> async_sessionmaker[AsyncSession]:
        return self._engine_manager.get_session_maker()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database sessions

        Note: Automatically handles rollback on exception
        """
        async with self.session_maker()() as session:
            yield session

    async def create_db_and_tables(self) -> None:
        """Create database tables if they don't exist"""
        # Register every ORM model on Base.metadata
        import src.service.seating.driven_adapter.model  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        except Exception as e:
            error_msg = str(e).lower()
            if any(keyword in error_msg for keyword in ['already exists', 'duplicate key']):
                Logger.base.info('Tables already exist, skipping creation')
            else:
                Logger.base.error(f'Error creating tables: {e}')
                raise

    async def dispose(self) -> None:
        await self._engine_manager.dispose()
