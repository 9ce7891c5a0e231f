# arqap/core/database.py

"""
Database connection and session management.

- Builds the async SQLAlchemy engine from `settings.DATABASE_URL`.
- Provides the request-scoped session dependency and a standalone
  session context manager for arq jobs and scripts.
- `create_db_and_tables()` creates the schema for local development.
"""

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.orm import configure_mappers, sessionmaker

from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.core.config import settings

# Every table model has to be imported once so SQLModel.metadata knows it
# and configure_mappers() can resolve the relationships between domains.
from arqap.domains.loc import models  # noqa
from arqap.domains.req import models  # noqa
from arqap.domains.geo import models  # noqa
from arqap.domains.cat import models  # noqa
from arqap.domains.art import models  # noqa
from arqap.domains.mov import models  # noqa

logger = logging.getLogger(__name__)


def _engine_kwargs() -> dict:
    if settings.is_sqlite:
        # SQLite (development and tests) uses SQLAlchemy's default pool
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "pool_size": 10,
        "max_overflow": 20,
    }


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL.get_secret_value(),
    echo=settings.DEBUG_MODE,
    future=True,
    **_engine_kwargs(),
)

AsyncSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

metadata = SQLModel.metadata

_mappers_configured = False


async def create_db_and_tables() -> None:
    """
    Creates every table registered on SQLModel.metadata. Development only;
    existing tables are left untouched.
    """
    global _mappers_configured

    if not _mappers_configured:
        configure_mappers()
        _mappers_configured = True

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables created (or already present).")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency: one session per request, closed when the request ends.
    """
    async with AsyncSessionLocal() as session:
        yield session


@asynccontextmanager
async def get_async_session_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Standalone session for arq jobs and CLI scripts. Commits on success,
    rolls back and re-raises on error.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
