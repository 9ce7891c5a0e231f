# arqap/domains/loc/routers.py

"""
API endpoints of the 'loc' domain: shelves and their physical locations.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.core import dependencies as deps
from arqap.domains.loc import crud as loc_crud
from arqap.domains.loc import schemas as loc_schemas

router = APIRouter(
    tags=["Location Management"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. shelves
# =============================================================================
@router.post("/shelves/", response_model=loc_schemas.ShelfRead, status_code=status.HTTP_201_CREATED, summary="Create a shelf and its cells")
async def create_shelf(
    shelf_create: loc_schemas.ShelfCreate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    Creates a shelf. Its physical locations are generated at the same time.
    - `code`: shelf number (unique)
    - `is_work_table`: a work table gets a single cell (1, "A")
    """
    return await loc_crud.shelf.create(db=db, obj_in=shelf_create)


@router.get("/shelves/", response_model=List[loc_schemas.ShelfRead], summary="List shelves")
async def read_shelves(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await loc_crud.shelf.get_multi(db, skip=skip, limit=limit)


@router.get("/shelves/{shelf_id}", response_model=loc_schemas.ShelfRead, summary="Get a shelf")
async def read_shelf(
    shelf_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_shelf = await loc_crud.shelf.get(db, id=shelf_id)
    if db_shelf is None:
        raise HTTPException(status_code=404, detail="Shelf not found")
    return db_shelf


@router.put("/shelves/{shelf_id}", response_model=loc_schemas.ShelfRead, summary="Update a shelf")
async def update_shelf(
    shelf_id: int,
    shelf_update: loc_schemas.ShelfUpdate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_shelf = await loc_crud.shelf.get(db, id=shelf_id)
    if db_shelf is None:
        raise HTTPException(status_code=404, detail="Shelf not found")
    return await loc_crud.shelf.update(db=db, db_obj=db_shelf, obj_in=shelf_update)


@router.delete("/shelves/{shelf_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a shelf")
async def delete_shelf(
    shelf_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    Deletes a shelf and its cells. Returns 409 while any cell is still referenced.
    """
    db_shelf = await loc_crud.shelf.remove(db, id=shelf_id)
    if db_shelf is None:
        raise HTTPException(status_code=404, detail="Shelf not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/shelves/{shelf_id}/physical_locations", response_model=List[loc_schemas.PhysicalLocationRead], summary="List the cells of a shelf")
async def read_shelf_physical_locations(
    shelf_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_shelf = await loc_crud.shelf.get(db, id=shelf_id)
    if db_shelf is None:
        raise HTTPException(status_code=404, detail="Shelf not found")
    return await loc_crud.physical_location.get_by_shelf(db, shelf_id=shelf_id)


# =============================================================================
# 2. physical_locations
# =============================================================================
@router.post("/physical_locations/", response_model=loc_schemas.PhysicalLocationRead, status_code=status.HTTP_201_CREATED, summary="Create a physical location")
async def create_physical_location(
    location_create: loc_schemas.PhysicalLocationCreate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    Adds one cell to a shelf. The (shelf, level, column) triple must be new.
    """
    return await loc_crud.physical_location.create(db=db, obj_in=location_create)


@router.get("/physical_locations/", response_model=List[loc_schemas.PhysicalLocationRead], summary="List physical locations")
async def read_physical_locations(
    shelf_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    - `shelf_id`: only the cells of this shelf
    """
    if shelf_id is not None:
        return await loc_crud.physical_location.get_multi(db, skip=skip, limit=limit, shelf_id=shelf_id)
    return await loc_crud.physical_location.get_multi(db, skip=skip, limit=limit)


@router.get("/physical_locations/{location_id}", response_model=loc_schemas.PhysicalLocationDetail, summary="Get a physical location")
async def read_physical_location(
    location_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_location = await loc_crud.physical_location.get_with_shelf(db, id=location_id)
    if db_location is None:
        raise HTTPException(status_code=404, detail="Physical location not found")
    return db_location


@router.delete("/physical_locations/{location_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a physical location")
async def delete_physical_location(
    location_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    Returns 409 while the cell is referenced by an artefact or a movement.
    """
    db_location = await loc_crud.physical_location.remove(db, id=location_id)
    if db_location is None:
        raise HTTPException(status_code=404, detail="Physical location not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
