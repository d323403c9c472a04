import logging
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from worksheet_viewer.core.errors import StoreUnavailable
from worksheet_viewer.db.base import Base

logger = logging.getLogger(__name__)


def create_store_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Создание асинхронного движка хранилища"""
    kwargs = {"future": True, "echo": echo}

    # In-memory SQLite живет, пока жив единственный connection
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}

    return create_async_engine(database_url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def connect_store(engine: AsyncEngine) -> None:
    """Проверка соединения и создание таблиц при старте процесса"""
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Error connecting to document store: {e}")
        raise StoreUnavailable("Failed to connect to document store", details=str(e)) from e

    logger.info("Connected to document store successfully")


# Функция для dependency injection в FastAPI
async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.session_factory() as session:
        yield session
