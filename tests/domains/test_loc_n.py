# tests/domains/test_loc_n.py

"""
Integration tests of the 'loc' domain endpoints.

- shelves:
    - `POST /loc/shelves/` (create, generates cells)
    - `GET /loc/shelves/`, `GET /loc/shelves/{id}`
    - `PUT /loc/shelves/{id}`
    - `DELETE /loc/shelves/{id}`
    - `GET /loc/shelves/{id}/physical_locations`
- physical locations:
    - `POST /loc/physical_locations/` (create, uniqueness)
    - `GET /loc/physical_locations/` (shelf filter), `GET /loc/physical_locations/{id}`
    - `DELETE /loc/physical_locations/{id}` (refused while referenced)
"""

import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.domains.loc import models as loc_models


# --- shelves ---

async def test_create_shelf_generates_sixteen_cells(client: AsyncClient, db_session: AsyncSession):
    """
    (success) an ordinary shelf gets every level x column cell.
    """
    response = await client.post("/api/v1/loc/shelves/", json={"code": 7, "description": "North wall"})

    assert response.status_code == 201
    shelf = response.json()
    assert shelf["code"] == 7
    assert shelf["is_work_table"] is False

    cells = (await db_session.execute(
        select(loc_models.PhysicalLocation).where(loc_models.PhysicalLocation.shelf_id == shelf["id"])
    )).scalars().all()
    assert len(cells) == 16
    assert {(c.level, c.column) for c in cells} == {
        (level, column) for level in (1, 2, 3, 4) for column in ("A", "B", "C", "D")
    }


async def test_create_work_table_has_single_cell(client: AsyncClient):
    """
    (success) a work table only has the cell (1, "A").
    """
    response = await client.post("/api/v1/loc/shelves/", json={"code": 28, "is_work_table": True})
    assert response.status_code == 201
    shelf_id = response.json()["id"]

    response = await client.get(f"/api/v1/loc/shelves/{shelf_id}/physical_locations")
    assert response.status_code == 200
    cells = response.json()
    assert len(cells) == 1
    assert (cells[0]["level"], cells[0]["column"]) == (1, "A")


async def test_create_shelf_duplicate_code(client: AsyncClient, test_shelf_1: loc_models.Shelf):
    """
    (failure) shelf codes are unique.
    """
    response = await client.post("/api/v1/loc/shelves/", json={"code": test_shelf_1.code})

    assert response.status_code == 409
    assert response.json()["error_type"] == "business_rule_violation"


async def test_read_and_update_shelf(client: AsyncClient, test_shelf_1: loc_models.Shelf):
    response = await client.get(f"/api/v1/loc/shelves/{test_shelf_1.id}")
    assert response.status_code == 200
    assert response.json()["code"] == test_shelf_1.code

    response = await client.put(f"/api/v1/loc/shelves/{test_shelf_1.id}", json={"description": "Moved to room B"})
    assert response.status_code == 200
    assert response.json()["description"] == "Moved to room B"
    assert response.json()["code"] == test_shelf_1.code


async def test_update_shelf_to_existing_code(
    client: AsyncClient, test_shelf_1: loc_models.Shelf, test_shelf_2: loc_models.Shelf
):
    response = await client.put(f"/api/v1/loc/shelves/{test_shelf_2.id}", json={"code": test_shelf_1.code})
    assert response.status_code == 409


async def test_read_shelves_list(client: AsyncClient, test_shelf_1: loc_models.Shelf, test_shelf_2: loc_models.Shelf):
    response = await client.get("/api/v1/loc/shelves/")
    assert response.status_code == 200
    assert [s["code"] for s in response.json()] == [1, 2]


async def test_read_shelf_not_found(client: AsyncClient):
    response = await client.get("/api/v1/loc/shelves/9999")
    assert response.status_code == 404


async def test_delete_unused_shelf(client: AsyncClient, db_session: AsyncSession, test_shelf_1: loc_models.Shelf):
    """
    (success) deleting a shelf no one references also deletes its cells.
    """
    shelf_id = test_shelf_1.id
    response = await client.delete(f"/api/v1/loc/shelves/{shelf_id}")
    assert response.status_code == 204

    remaining = (await db_session.execute(
        select(loc_models.PhysicalLocation).where(loc_models.PhysicalLocation.shelf_id == shelf_id)
    )).scalars().all()
    assert remaining == []


async def test_delete_shelf_in_use(client: AsyncClient, test_shelf_1, cell, artefact_factory):
    """
    (failure) a shelf holding an artefact cannot be deleted.
    """
    location = await cell(test_shelf_1, 2, "B")
    await artefact_factory("Pot sherd", physical_location_id=location.id)

    response = await client.delete(f"/api/v1/loc/shelves/{test_shelf_1.id}")

    assert response.status_code == 409
    assert response.json()["error_type"] == "reference_conflict"


# --- physical locations ---

async def test_create_physical_location_duplicate(client: AsyncClient, test_shelf_1: loc_models.Shelf):
    """
    (failure) the (shelf, level, column) triple is unique.
    """
    payload = {"shelf_id": test_shelf_1.id, "level": 1, "column": "A"}
    response = await client.post("/api/v1/loc/physical_locations/", json=payload)

    assert response.status_code == 409


async def test_create_physical_location_after_delete(
    client: AsyncClient, test_shelf_1: loc_models.Shelf, cell
):
    """
    (success) a removed cell can be created again.
    """
    location = await cell(test_shelf_1, 4, "D")
    response = await client.delete(f"/api/v1/loc/physical_locations/{location.id}")
    assert response.status_code == 204

    payload = {"shelf_id": test_shelf_1.id, "level": 4, "column": "D"}
    response = await client.post("/api/v1/loc/physical_locations/", json=payload)
    assert response.status_code == 201
    assert response.json()["level"] == 4
    assert response.json()["column"] == "D"


@pytest.mark.parametrize("payload", [
    {"level": 5, "column": "A"},
    {"level": 1, "column": "E"},
])
async def test_create_physical_location_out_of_grid(client: AsyncClient, test_shelf_1, payload):
    response = await client.post(
        "/api/v1/loc/physical_locations/", json={"shelf_id": test_shelf_1.id, **payload}
    )
    assert response.status_code == 422


async def test_create_physical_location_unknown_shelf(client: AsyncClient):
    response = await client.post(
        "/api/v1/loc/physical_locations/", json={"shelf_id": 404, "level": 1, "column": "A"}
    )
    assert response.status_code == 404


async def test_work_table_rejects_extra_cells(client: AsyncClient, shelf_factory):
    work_table = await shelf_factory(29, is_work_table=True)
    response = await client.post(
        "/api/v1/loc/physical_locations/", json={"shelf_id": work_table.id, "level": 2, "column": "A"}
    )
    assert response.status_code == 409


async def test_read_physical_locations_filtered_by_shelf(
    client: AsyncClient, test_shelf_1: loc_models.Shelf, test_shelf_2: loc_models.Shelf
):
    response = await client.get("/api/v1/loc/physical_locations/", params={"shelf_id": test_shelf_2.id})
    assert response.status_code == 200
    locations = response.json()
    assert len(locations) == 16
    assert all(location["shelf_id"] == test_shelf_2.id for location in locations)


async def test_read_physical_location_with_shelf(client: AsyncClient, test_shelf_1, cell):
    location = await cell(test_shelf_1, 3, "C")
    response = await client.get(f"/api/v1/loc/physical_locations/{location.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["shelf"]["code"] == test_shelf_1.code
    assert (body["level"], body["column"]) == (3, "C")


async def test_physical_locations_have_no_update_route(client: AsyncClient, test_shelf_1, cell):
    location = await cell(test_shelf_1)
    response = await client.put(
        f"/api/v1/loc/physical_locations/{location.id}", json={"level": 2}
    )
    assert response.status_code == 405


async def test_delete_physical_location_in_use(client: AsyncClient, test_shelf_1, cell, artefact_factory):
    """
    (failure) a cell holding an artefact cannot be deleted.
    """
    location = await cell(test_shelf_1)
    await artefact_factory("Bone needle", physical_location_id=location.id)

    response = await client.delete(f"/api/v1/loc/physical_locations/{location.id}")
    assert response.status_code == 409
