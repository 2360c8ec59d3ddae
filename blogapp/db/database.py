"""Async engine, session factory and per-request transactions."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from blogapp.configs import file_logger, pool_kwargs, settings

logger = file_logger(getLogger(__name__))

# asyncpg takes seconds, the server settings take milliseconds
QUERY_TIMEOUT_SECONDS = 30


def _connect_args() -> dict[str, Any]:
    timeout_ms = str(QUERY_TIMEOUT_SECONDS * 1000)
    return {
        "command_timeout": QUERY_TIMEOUT_SECONDS,
        "server_settings": {
            "application_name": settings.APP_NAME,
            "statement_timeout": timeout_ms,
            "lock_timeout": timeout_ms,
        },
    }


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    pool_pre_ping=True,
    connect_args=_connect_args(),
    **pool_kwargs,
)

async_session_maker: async_sessionmaker[SQLModelAsyncSession] = async_sessionmaker(
    engine,
    class_=SQLModelAsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@asynccontextmanager
async def transaction() -> AsyncGenerator[AsyncSession]:
    """
    Open a session that commits on exit and rolls back on error.

    Used by the request dependency and by the operator scripts in ``auto/``.

    Yields:
        AsyncSession: Session bound to a single transaction.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Transaction rolled back")
            raise


async def get_session() -> AsyncGenerator[AsyncSession]:
    """
    FastAPI dependency yielding the request's session.

    Every repository resolved for one request shares this session, so a
    blog insert and the owner's blog list update commit together.
    """
    async with transaction() as session:
        yield session


async def init_db() -> None:
    """Create missing tables. Deployed databases are managed by Alembic."""
    # Registers the tables on SQLModel.metadata
    from blogapp.models import BlogDB, CommentDB, UserDB  # noqa: F401, PLC0415

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info(f"Database ready: {', '.join(sorted(SQLModel.metadata.tables))}")


async def close_db() -> None:
    await engine.dispose()
    logger.info("Database connections closed")
