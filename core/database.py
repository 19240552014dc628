"""
Store engine and connection management with SQLAlchemy async
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Union
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncConnection, AsyncEngine
from sqlalchemy.pool import NullPool
from core.config import settings
import logging

logger = logging.getLogger(__name__)


def build_database_url(database_path: Union[str, Path]) -> str:
    """Build the aiosqlite URL for a store file"""
    return f"sqlite+aiosqlite:///{database_path}"


def create_store_engine(database_url: str) -> AsyncEngine:
    """
    Create an async engine for a file-backed SQLite store.

    The driver's own transaction handling is switched off so SQLAlchemy
    emits BEGIN itself; per-row SAVEPOINTs depend on it.
    """
    engine = create_async_engine(
        database_url,
        echo=False,
        poolclass=NullPool,
        future=True
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


@asynccontextmanager
async def store_connection(database_url: str) -> AsyncIterator[AsyncConnection]:
    """
    Acquire a connection to the store and release it on every exit path.

    A failure while closing is logged and never replaces the outcome of the
    block.
    """
    engine = create_store_engine(database_url)
    try:
        async with engine.connect() as conn:
            logger.info("Connected to SQLite store")
            yield conn
    finally:
        try:
            await engine.dispose()
        except Exception as e:
            logger.error(f"Error closing store: {str(e)}")


def default_database_url() -> str:
    """Store URL from settings"""
    return build_database_url(settings.DATABASE_PATH)
