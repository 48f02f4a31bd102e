"""
Settings for the database session
"""
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncSession,
    async_sessionmaker,
)
from sqlalchemy import event
import logging

from core.config import settings

logger = logging.getLogger(__name__)

connection_url = settings.get_async_database_url()

# Pool options only apply to server databases; SQLite uses its own pool
pool_options = {} if settings.is_sqlite() else {
    "pool_size": 20,
    "max_overflow": 10,
    "pool_pre_ping": True,
    "pool_recycle": 300,
}

async_engine = create_async_engine(
    connection_url,
    echo=settings.DB_ECHO_LOG,
    **pool_options
)

AsyncSessionFactory = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

AsyncSessionLocal = AsyncSessionFactory

# To diagnose connection issues
if settings.DB_ECHO_LOG:
    @event.listens_for(async_engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        logger.info("New database connection established")

    @event.listens_for(async_engine.sync_engine, "checkout")
    def _on_checkout(dbapi_connection, connection_record, connection_proxy):
        logger.info("Database connection checked out from pool")

    @event.listens_for(async_engine.sync_engine, "checkin")
    def _on_checkin(dbapi_connection, connection_record):
        logger.info("Database connection returned to pool")

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get an asynchronous database session.

    Returns:
        AsyncGenerator[AsyncSession, None]: Asynchronous database session.
    """
    session = AsyncSessionLocal()
    try:
        yield session
    finally:
        await session.close()

