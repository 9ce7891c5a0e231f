# tests/conftest.py

import os
from typing import AsyncGenerator, Callable, Awaitable, Optional

# The application reads its settings at import time; point it at SQLite
# before anything from arqap is imported.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("APP_ENV", "testing")

import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from arqap.main import app as main_app  # noqa: E402
from arqap.core import dependencies as deps  # noqa: E402
from arqap.core.database import get_session  # noqa: E402

# every table has to be imported before create_all
from arqap.domains.models import *  # noqa: F401, F403, E402

from arqap.domains.loc import models as loc_models  # noqa: E402
from arqap.domains.loc import crud as loc_crud  # noqa: E402
from arqap.domains.loc import schemas as loc_schemas  # noqa: E402
from arqap.domains.art import models as art_models  # noqa: E402
from arqap.domains.req import models as req_models  # noqa: E402


TEST_DATABASE_URL = "sqlite+aiosqlite://"


# --- database fixtures ---
@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """
    A fresh in-memory database per test. StaticPool keeps the single
    connection alive so every session sees the same database.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with TestingSessionLocal() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    AsyncClient bound to the app, with the database session dependency
    replaced by the test session.
    """

    async def override_get_session():
        yield db_session

    original_overrides = main_app.dependency_overrides.copy()
    try:
        main_app.dependency_overrides[get_session] = override_get_session
        main_app.dependency_overrides[deps.get_db_session] = override_get_session

        async with AsyncClient(transport=ASGITransport(app=main_app), base_url="http://test") as async_client:
            yield async_client
    finally:
        main_app.dependency_overrides = original_overrides


# --- data fixtures ---
@pytest_asyncio.fixture(scope="function")
def shelf_factory(db_session: AsyncSession) -> Callable[..., Awaitable[loc_models.Shelf]]:
    """Creates a shelf (with its generated cells) through the CRUD layer."""
    async def _create_shelf(code: int, is_work_table: bool = False) -> loc_models.Shelf:
        return await loc_crud.shelf.create(
            db_session, obj_in=loc_schemas.ShelfCreate(code=code, is_work_table=is_work_table)
        )
    return _create_shelf


@pytest_asyncio.fixture(scope="function")
def cell(db_session: AsyncSession) -> Callable[..., Awaitable[loc_models.PhysicalLocation]]:
    """Looks up the physical location (level, column) of a shelf."""
    async def _get_cell(shelf: loc_models.Shelf, level: int = 1, column: str = "A") -> loc_models.PhysicalLocation:
        location = await loc_crud.physical_location.get_by_cell(
            db_session, shelf_id=shelf.id, level=level, column=column
        )
        assert location is not None
        return location
    return _get_cell


@pytest_asyncio.fixture(scope="function")
async def test_shelf_1(shelf_factory) -> loc_models.Shelf:
    return await shelf_factory(1)


@pytest_asyncio.fixture(scope="function")
async def test_shelf_2(shelf_factory) -> loc_models.Shelf:
    return await shelf_factory(2)


@pytest_asyncio.fixture(scope="function")
def artefact_factory(db_session: AsyncSession) -> Callable[..., Awaitable[art_models.Artefact]]:
    async def _create_artefact(
        name: str = "Ceramic bowl",
        physical_location_id: Optional[int] = None,
        available: bool = True,
        **kwargs,
    ) -> art_models.Artefact:
        artefact = art_models.Artefact(
            name=name,
            physical_location_id=physical_location_id,
            available=available,
            **kwargs,
        )
        db_session.add(artefact)
        await db_session.commit()
        await db_session.refresh(artefact)
        return artefact
    return _create_artefact


@pytest_asyncio.fixture(scope="function")
async def test_artefact(artefact_factory) -> art_models.Artefact:
    """An artefact with no location yet."""
    return await artefact_factory("Stone axe", material="Basalt")


@pytest_asyncio.fixture(scope="function")
async def test_requester(db_session: AsyncSession) -> req_models.Requester:
    requester = req_models.Requester(
        type="investigator", first_name="Ana", last_name="Perez", dni="30111222", email="ana@example.com"
    )
    db_session.add(requester)
    await db_session.commit()
    await db_session.refresh(requester)
    return requester
