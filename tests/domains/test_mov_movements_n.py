# tests/domains/test_mov_movements_n.py

"""
Tests of the internal movement lifecycle.

- at most one active movement per artefact
- the artefact's location follows its movements
- closing a movement sends the artefact back to its original location
- the origin defaults to the artefact's current location
- a failure part way through leaves nothing behind
"""

from datetime import date, time

import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.core.exceptions import NotFoundError
from arqap.domains.art import crud as art_crud
from arqap.domains.cat import crud as cat_crud
from arqap.domains.cat import schemas as cat_schemas
from arqap.domains.mov import crud as mov_crud
from arqap.domains.mov import models as mov_models
from arqap.domains.mov import schemas as mov_schemas

MOVEMENTS_URL = "/api/v1/mov/internal_movements/"


def movement_in(artefact_id: int, day: int, to_id=None, **kwargs) -> mov_schemas.InternalMovementCreate:
    return mov_schemas.InternalMovementCreate(
        movement_date=date(2024, 5, day),
        movement_time=time(10, 0),
        artefact_id=artefact_id,
        to_physical_location_id=to_id,
        **kwargs,
    )


async def active_movements(db: AsyncSession, artefact_id: int):
    return await mov_crud.internal_movement.get_active(db, artefact_id=artefact_id)


async def location_of(db: AsyncSession, artefact_id: int):
    artefact = await art_crud.artefact.get_with_location(db, id=artefact_id)
    return artefact.physical_location_id


# --- concrete walkthrough over HTTP ---

async def test_move_move_close_walkthrough(
    client: AsyncClient, db_session: AsyncSession, test_artefact, test_shelf_1, test_shelf_2, cell
):
    """
    unassigned -> shelf 1 -> shelf 2 -> close: the artefact goes back to "no location"
    and a pre-closed return movement is recorded.
    """
    s1 = (await cell(test_shelf_1)).id
    s2 = (await cell(test_shelf_2)).id
    artefact_id = test_artefact.id

    response = await client.post(MOVEMENTS_URL, json={
        "movement_date": "2024-05-01", "movement_time": "10:00:00",
        "artefact_id": artefact_id, "to_physical_location_id": s1,
    })
    assert response.status_code == 201
    m1 = response.json()
    assert m1["from_physical_location_id"] is None
    assert m1["return_date"] is None
    assert m1["to_physical_location"]["shelf"]["code"] == test_shelf_1.code
    assert m1["artefact"]["physical_location_id"] == s1
    assert await location_of(db_session, artefact_id) == s1

    response = await client.post(MOVEMENTS_URL, json={
        "movement_date": "2024-05-02", "movement_time": "11:00:00",
        "artefact_id": artefact_id, "to_physical_location_id": s2,
    })
    assert response.status_code == 201
    m2 = response.json()
    assert m2["from_physical_location_id"] == s1
    assert await location_of(db_session, artefact_id) == s2

    closed_m1 = await mov_crud.internal_movement.get_with_relations(db_session, id=m1["id"])
    assert closed_m1.return_date is not None
    assert closed_m1.return_time is not None

    response = await client.put(f"{MOVEMENTS_URL}{m2['id']}", json={
        "return_date": "2024-05-03", "return_time": "12:30:00",
    })
    assert response.status_code == 200
    assert response.json()["return_date"] == "2024-05-03"

    history = await mov_crud.internal_movement.get_by_artefact(db_session, artefact_id=artefact_id)
    assert len(history) == 3
    m3 = history[0]
    assert m3.id not in (m1["id"], m2["id"])
    assert m3.from_physical_location_id == s2
    assert m3.to_physical_location_id is None
    assert (m3.movement_date, m3.movement_time) == (date(2024, 5, 3), time(12, 30))
    assert (m3.return_date, m3.return_time) == (date(2024, 5, 3), time(12, 30))
    assert m3.reason == mov_crud.RETURN_REASON
    assert m3.observations == mov_crud.RETURN_OBSERVATIONS
    assert await location_of(db_session, artefact_id) is None

    response = await client.get(f"{MOVEMENTS_URL}artefact/{artefact_id}/active")
    assert response.status_code == 404
    assert response.json()["detail"] == "No active movement found"


# --- at most one active movement ---

async def test_at_most_one_active_movement(
    db_session: AsyncSession, test_artefact, test_shelf_1, cell
):
    artefact_id = test_artefact.id
    targets = [(await cell(test_shelf_1, level, "A")).id for level in (1, 2, 3, 4)]

    for day, target in enumerate(targets, start=1):
        await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, day, target))
        active = await active_movements(db_session, artefact_id)
        assert len(active) == 1
        assert active[0].to_physical_location_id == target

    history = await mov_crud.internal_movement.get_by_artefact(db_session, artefact_id=artefact_id)
    assert len(history) == 4
    assert await location_of(db_session, artefact_id) == targets[-1]


async def test_create_closes_every_stale_active_movement(
    db_session: AsyncSession, test_artefact, test_shelf_1, test_shelf_2, cell
):
    """
    Two active movements left behind by earlier data are both closed; the
    origin comes from the most recent one.
    """
    artefact_id = test_artefact.id
    older = (await cell(test_shelf_1, 1, "A")).id
    newer = (await cell(test_shelf_1, 2, "A")).id
    target = (await cell(test_shelf_2)).id
    db_session.add(mov_models.InternalMovement(
        movement_date=date(2024, 4, 1), movement_time=time(9, 0), artefact_id=artefact_id, to_physical_location_id=older
    ))
    db_session.add(mov_models.InternalMovement(
        movement_date=date(2024, 4, 2), movement_time=time(9, 0), artefact_id=artefact_id, to_physical_location_id=newer
    ))
    await db_session.commit()

    created = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 1, target))

    active = await active_movements(db_session, artefact_id)
    assert [m.id for m in active] == [created.id]
    assert created.from_physical_location_id == newer


# --- origin defaulting ---

async def test_origin_defaults_to_artefact_location(
    db_session: AsyncSession, artefact_factory, test_shelf_1, test_shelf_2, cell
):
    start = (await cell(test_shelf_1)).id
    target = (await cell(test_shelf_2)).id
    artefact = await artefact_factory("Textile fragment", physical_location_id=start)

    created = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact.id, 1, target))

    assert created.from_physical_location_id == start
    assert created.to_physical_location.id == target


async def test_origin_defaults_to_current_location_after_many_moves(
    db_session: AsyncSession, test_artefact, test_shelf_1, test_shelf_2, cell
):
    artefact_id = test_artefact.id
    a = (await cell(test_shelf_1, 1, "A")).id
    b = (await cell(test_shelf_1, 1, "B")).id
    c = (await cell(test_shelf_2, 3, "D")).id

    await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 1, a))
    await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 2, b))
    third = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 3, c))

    assert third.from_physical_location_id == b
    assert await location_of(db_session, artefact_id) == c


async def test_explicit_origin_is_kept(
    db_session: AsyncSession, test_artefact, test_shelf_1, test_shelf_2, cell
):
    artefact_id = test_artefact.id
    a = (await cell(test_shelf_1, 1, "A")).id
    declared = (await cell(test_shelf_1, 4, "C")).id
    target = (await cell(test_shelf_2)).id

    await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 1, a))
    created = await mov_crud.internal_movement.create(
        db_session, obj_in=movement_in(artefact_id, 2, target, from_physical_location_id=declared)
    )

    assert created.from_physical_location_id == declared


async def test_movement_without_destination_clears_location(
    db_session: AsyncSession, artefact_factory, test_shelf_1, cell
):
    start = (await cell(test_shelf_1)).id
    artefact = await artefact_factory("Basket", physical_location_id=start)

    created = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact.id, 1))

    assert created.from_physical_location_id == start
    assert await location_of(db_session, artefact.id) is None


# --- closing and return to origin ---

async def test_close_returns_to_original_location(
    db_session: AsyncSession, artefact_factory, test_shelf_1, test_shelf_2, cell
):
    original = (await cell(test_shelf_1)).id
    elsewhere = (await cell(test_shelf_2)).id
    artefact = await artefact_factory("Mask", physical_location_id=original)
    artefact_id = artefact.id

    m1 = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 1, elsewhere))
    await mov_crud.internal_movement.update(
        db_session, db_obj=m1, obj_in={"return_date": date(2024, 5, 9), "return_time": time(16, 0)}
    )

    history = await mov_crud.internal_movement.get_by_artefact(db_session, artefact_id=artefact_id)
    assert len(history) == 2
    returned = history[0]
    assert (returned.from_physical_location_id, returned.to_physical_location_id) == (elsewhere, original)
    assert returned.return_date == date(2024, 5, 9)
    assert await location_of(db_session, artefact_id) == original
    assert await active_movements(db_session, artefact_id) == []


async def test_close_at_original_location_adds_no_return_movement(
    db_session: AsyncSession, artefact_factory, test_shelf_1, test_shelf_2, cell
):
    original = (await cell(test_shelf_1)).id
    elsewhere = (await cell(test_shelf_2)).id
    artefact = await artefact_factory("Necklace", physical_location_id=original)
    artefact_id = artefact.id

    await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 1, elsewhere))
    back = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 2, original))
    await mov_crud.internal_movement.update(
        db_session, db_obj=back, obj_in={"return_date": date(2024, 5, 9), "return_time": time(16, 0)}
    )

    history = await mov_crud.internal_movement.get_by_artefact(db_session, artefact_id=artefact_id)
    assert len(history) == 2
    assert await location_of(db_session, artefact_id) == original


async def test_close_with_no_locations_adds_no_return_movement(db_session: AsyncSession, test_artefact):
    artefact_id = test_artefact.id
    m1 = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 1))

    await mov_crud.internal_movement.update(
        db_session, db_obj=m1, obj_in={"return_date": date(2024, 5, 2), "return_time": time(8, 0)}
    )

    history = await mov_crud.internal_movement.get_by_artefact(db_session, artefact_id=artefact_id)
    assert len(history) == 1


async def test_return_movement_keeps_requester(
    db_session: AsyncSession, artefact_factory, test_requester, test_shelf_1, test_shelf_2, cell
):
    original = (await cell(test_shelf_1)).id
    elsewhere = (await cell(test_shelf_2)).id
    artefact = await artefact_factory("Poncho", physical_location_id=original)

    m1 = await mov_crud.internal_movement.create(
        db_session, obj_in=movement_in(artefact.id, 1, elsewhere, requester_id=test_requester.id)
    )
    await mov_crud.internal_movement.update(
        db_session, db_obj=m1, obj_in={"return_date": date(2024, 5, 2), "return_time": time(8, 0)}
    )

    history = await mov_crud.internal_movement.get_by_artefact(db_session, artefact_id=artefact.id)
    assert history[0].requester_id == test_requester.id
    assert history[0].requester.last_name == test_requester.last_name


async def test_updating_closed_movement_does_not_return_again(
    db_session: AsyncSession, artefact_factory, test_shelf_1, test_shelf_2, cell
):
    original = (await cell(test_shelf_1)).id
    elsewhere = (await cell(test_shelf_2)).id
    artefact = await artefact_factory("Sling", physical_location_id=original)

    m1 = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact.id, 1, elsewhere))
    closed = await mov_crud.internal_movement.update(
        db_session, db_obj=m1, obj_in={"return_date": date(2024, 5, 2), "return_time": time(8, 0)}
    )
    await mov_crud.internal_movement.update(
        db_session, db_obj=closed, obj_in={"return_date": date(2024, 5, 3), "return_time": time(9, 0)}
    )

    history = await mov_crud.internal_movement.get_by_artefact(db_session, artefact_id=artefact.id)
    assert len(history) == 2


# --- plain updates ---

async def test_new_destination_is_mirrored_on_artefact(
    client: AsyncClient, db_session: AsyncSession, test_artefact, test_shelf_1, test_shelf_2, cell
):
    first = (await cell(test_shelf_1)).id
    corrected = (await cell(test_shelf_2, 2, "B")).id
    artefact_id = test_artefact.id
    m1 = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 1, first))

    response = await client.put(f"{MOVEMENTS_URL}{m1.id}", json={"to_physical_location_id": corrected})

    assert response.status_code == 200
    assert response.json()["to_physical_location_id"] == corrected
    assert response.json()["return_date"] is None
    assert await location_of(db_session, artefact_id) == corrected


async def test_update_text_fields_keeps_location(
    client: AsyncClient, db_session: AsyncSession, test_artefact, test_shelf_1, cell
):
    first = (await cell(test_shelf_1)).id
    artefact_id = test_artefact.id
    m1 = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 1, first))

    response = await client.put(f"{MOVEMENTS_URL}{m1.id}", json={"reason": "Photography"})

    assert response.status_code == 200
    assert response.json()["reason"] == "Photography"
    assert await location_of(db_session, artefact_id) == first


async def test_update_movement_not_found(client: AsyncClient):
    response = await client.put(f"{MOVEMENTS_URL}4040", json={"reason": "x"})
    assert response.status_code == 404


# --- failures leave no trace ---

async def test_create_for_missing_artefact(db_session: AsyncSession):
    with pytest.raises(NotFoundError):
        await mov_crud.internal_movement.create(db_session, obj_in=movement_in(9999, 1))


async def test_create_with_unknown_destination_writes_nothing(
    client: AsyncClient, db_session: AsyncSession, test_artefact, test_shelf_1, cell
):
    artefact_id = test_artefact.id
    first = (await cell(test_shelf_1)).id
    await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 1, first))

    response = await client.post(MOVEMENTS_URL, json={
        "movement_date": "2024-05-02", "movement_time": "10:00:00",
        "artefact_id": artefact_id, "to_physical_location_id": 987654,
    })

    assert response.status_code == 404
    active = await active_movements(db_session, artefact_id)
    assert len(active) == 1
    assert active[0].to_physical_location_id == first


async def test_failure_after_insert_rolls_back_everything(
    db_session: AsyncSession, test_artefact, test_shelf_1, test_shelf_2, cell, monkeypatch
):
    """
    If moving the artefact fails after the new movement was inserted and the
    previous one closed, none of it is committed.
    """
    artefact_id = test_artefact.id
    first = (await cell(test_shelf_1)).id
    second = (await cell(test_shelf_2)).id
    m1 = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 1, first))
    m1_id = m1.id

    async def failing_move_to(db, *, db_obj, location_id):
        raise RuntimeError("simulated failure")

    monkeypatch.setattr(art_crud.artefact, "move_to", failing_move_to)

    with pytest.raises(RuntimeError):
        await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 2, second))

    monkeypatch.undo()

    rows = (await db_session.execute(
        select(mov_models.InternalMovement).where(mov_models.InternalMovement.artefact_id == artefact_id)
    )).scalars().all()
    assert [row.id for row in rows] == [m1_id]
    assert rows[0].return_date is None
    assert await location_of(db_session, artefact_id) == first


# --- reads and delete ---

async def test_read_movement_endpoints(
    client: AsyncClient, db_session: AsyncSession, test_artefact, test_shelf_1, test_shelf_2, cell
):
    artefact_id = test_artefact.id
    a = (await cell(test_shelf_1)).id
    b = (await cell(test_shelf_2)).id
    m1 = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 1, a))
    m2 = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 2, b))

    response = await client.get(MOVEMENTS_URL)
    assert [m["id"] for m in response.json()] == [m2.id, m1.id]

    response = await client.get(f"{MOVEMENTS_URL}artefact/{artefact_id}")
    assert [m["id"] for m in response.json()] == [m2.id, m1.id]

    response = await client.get(f"{MOVEMENTS_URL}artefact/{artefact_id}/active")
    assert response.status_code == 200
    assert response.json()["id"] == m2.id

    response = await client.get(f"{MOVEMENTS_URL}{m1.id}")
    assert response.status_code == 200
    assert response.json()["return_date"] is not None


async def test_delete_movement_keeps_artefact_location(
    client: AsyncClient, db_session: AsyncSession, test_artefact, test_shelf_1, cell
):
    artefact_id = test_artefact.id
    a = (await cell(test_shelf_1)).id
    m1 = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 1, a))

    response = await client.delete(f"{MOVEMENTS_URL}{m1.id}")
    assert response.status_code == 204

    response = await client.delete(f"{MOVEMENTS_URL}{m1.id}")
    assert response.status_code == 404
    assert await location_of(db_session, artefact_id) == a


# --- null fields in a patch ---

async def test_closed_movement_cannot_be_reopened(
    client: AsyncClient, db_session: AsyncSession, test_artefact, test_shelf_1, test_shelf_2, cell
):
    """
    (failure) nulling the return fields of a closed movement leaves it closed.
    """
    artefact_id = test_artefact.id
    a = (await cell(test_shelf_1)).id
    b = (await cell(test_shelf_2)).id
    m1 = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 1, a))
    m1_id = m1.id
    m2 = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 2, b))

    response = await client.put(f"{MOVEMENTS_URL}{m1_id}", json={"return_date": None, "return_time": None})

    assert response.status_code == 200
    assert response.json()["return_date"] is not None
    active = await active_movements(db_session, artefact_id)
    assert [m.id for m in active] == [m2.id]
    assert await location_of(db_session, artefact_id) == b


async def test_null_destination_keeps_movement_and_artefact_aligned(
    client: AsyncClient, db_session: AsyncSession, test_artefact, test_shelf_1, cell
):
    artefact_id = test_artefact.id
    a = (await cell(test_shelf_1)).id
    m1 = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 1, a))

    response = await client.put(f"{MOVEMENTS_URL}{m1.id}", json={"to_physical_location_id": None})

    assert response.status_code == 200
    assert response.json()["to_physical_location_id"] == a
    movement = await mov_crud.internal_movement.get_with_relations(db_session, id=m1.id)
    assert await location_of(db_session, artefact_id) == movement.to_physical_location_id


async def test_null_movement_date_is_ignored(
    client: AsyncClient, db_session: AsyncSession, test_artefact, test_shelf_1, cell
):
    a = (await cell(test_shelf_1)).id
    m1 = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(test_artefact.id, 1, a))

    response = await client.put(
        f"{MOVEMENTS_URL}{m1.id}", json={"movement_date": None, "movement_time": None, "reason": "Inventory"}
    )

    assert response.status_code == 200
    assert response.json()["movement_date"] == "2024-05-01"
    assert response.json()["reason"] == "Inventory"


async def test_same_destination_does_not_move_artefact(
    db_session: AsyncSession, test_artefact, test_shelf_1, test_shelf_2, cell
):
    """
    Re-sending a movement's own destination is not a move, even if the artefact
    drifted elsewhere in the meantime.
    """
    artefact_id = test_artefact.id
    a = (await cell(test_shelf_1)).id
    b = (await cell(test_shelf_2)).id
    m1 = await mov_crud.internal_movement.create(db_session, obj_in=movement_in(artefact_id, 1, a))
    artefact = await art_crud.artefact.get_with_location(db_session, id=artefact_id)
    await art_crud.artefact.move_to(db_session, db_obj=artefact, location_id=b)
    await db_session.commit()

    await mov_crud.internal_movement.update(db_session, db_obj=m1, obj_in={"to_physical_location_id": a})

    assert await location_of(db_session, artefact_id) == b


async def test_movement_read_embeds_internal_classifier(
    client: AsyncClient, db_session: AsyncSession, artefact_factory, test_shelf_1, cell
):
    classifier = await cat_crud.internal_classifier.create(
        db_session, obj_in=cat_schemas.InternalClassifierCreate(name="Ceramica", number=3)
    )
    artefact = await artefact_factory("Painted bowl", internal_classifier_id=classifier.id)
    a = (await cell(test_shelf_1)).id

    response = await client.post(MOVEMENTS_URL, json={
        "movement_date": "2024-05-01", "movement_time": "10:00:00",
        "artefact_id": artefact.id, "to_physical_location_id": a,
    })
    assert response.status_code == 201
    assert response.json()["artefact"]["internal_classifier"]["name"] == "Ceramica"

    response = await client.get(f"{MOVEMENTS_URL}artefact/{artefact.id}")
    assert response.json()[0]["artefact"]["internal_classifier"]["number"] == 3
