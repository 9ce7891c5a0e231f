# arqap/core/dependencies.py

"""
FastAPI dependencies shared by every router.

- Database session per request (`get_db_session`).
"""

from typing import AsyncGenerator
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.core.database import get_session as get_main_app_session


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Yields the request-scoped database session. Tests override this dependency.
    """
    async for session in get_main_app_session():
        yield session
