# arqap/domains/art/routers.py

"""
API endpoints of the 'art' domain (artefacts and mentions).
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.core import dependencies as deps
from arqap.domains.art import crud as art_crud
from arqap.domains.art import schemas as art_schemas

router = APIRouter(
    tags=["Artefact Management"],
    responses={404: {"description": "Not found"}},
)


@router.post("/artefacts/", response_model=art_schemas.ArtefactRead, status_code=status.HTTP_201_CREATED, summary="Create an artefact")
async def create_artefact(
    artefact_create: art_schemas.ArtefactCreate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    Registers a new artefact.
    - `name`: required
    - `physical_location_id`: optional initial placement
    - registry ids (`collection_id`, `internal_classifier_id`, ...): optional, 404 when unknown
    """
    return await art_crud.artefact.create(db=db, obj_in=artefact_create)


@router.get("/artefacts/", response_model=List[art_schemas.ArtefactRead], summary="List artefacts")
async def read_artefacts(
    shelf_id: Optional[int] = None,
    available: Optional[bool] = None,
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    - `shelf_id`: only artefacts currently stored on this shelf
    - `available`: filter by availability (false = on loan)
    """
    return await art_crud.artefact.get_multi_filtered(
        db, shelf_id=shelf_id, available=available, skip=skip, limit=limit
    )


@router.get("/artefacts/{artefact_id}", response_model=art_schemas.ArtefactDetail, summary="Get an artefact")
async def read_artefact(
    artefact_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_artefact = await art_crud.artefact.get_with_location(db, id=artefact_id)
    if db_artefact is None:
        raise HTTPException(status_code=404, detail="Artefact not found")
    return db_artefact


@router.put("/artefacts/{artefact_id}", response_model=art_schemas.ArtefactRead, summary="Update an artefact")
async def update_artefact(
    artefact_id: int,
    artefact_update: art_schemas.ArtefactUpdate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    Updates descriptive fields. Location and availability are changed through
    internal movements and loans.
    """
    db_artefact = await art_crud.artefact.get(db, id=artefact_id)
    if db_artefact is None:
        raise HTTPException(status_code=404, detail="Artefact not found")
    return await art_crud.artefact.update(db=db, db_obj=db_artefact, obj_in=artefact_update)


@router.delete("/artefacts/{artefact_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an artefact")
async def delete_artefact(
    artefact_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    Returns 409 while movements, loans or mentions reference the artefact.
    """
    db_artefact = await art_crud.artefact.remove(db, id=artefact_id)
    if db_artefact is None:
        raise HTTPException(status_code=404, detail="Artefact not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# mentions
# =============================================================================
@router.post("/mentions/", response_model=art_schemas.MentionRead, status_code=status.HTTP_201_CREATED, summary="Create a mention")
async def create_mention(
    mention_create: art_schemas.MentionCreate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    Records a publication that mentions an artefact. An unknown `artefact_id` returns 404.
    """
    return await art_crud.mention.create(db=db, obj_in=mention_create)


@router.get("/mentions/", response_model=List[art_schemas.MentionRead], summary="List mentions")
async def read_mentions(
    artefact_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    - `artefact_id`: only the mentions of this artefact
    """
    return await art_crud.mention.get_by_artefact(db, artefact_id=artefact_id, skip=skip, limit=limit)


@router.get("/mentions/{mention_id}", response_model=art_schemas.MentionRead, summary="Get a mention")
async def read_mention(
    mention_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_mention = await art_crud.mention.get(db, id=mention_id)
    if db_mention is None:
        raise HTTPException(status_code=404, detail="Mention not found")
    return db_mention


@router.put("/mentions/{mention_id}", response_model=art_schemas.MentionRead, summary="Update a mention")
async def update_mention(
    mention_id: int,
    mention_update: art_schemas.MentionUpdate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_mention = await art_crud.mention.get(db, id=mention_id)
    if db_mention is None:
        raise HTTPException(status_code=404, detail="Mention not found")
    return await art_crud.mention.update(db=db, db_obj=db_mention, obj_in=mention_update)


@router.delete("/mentions/{mention_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a mention")
async def delete_mention(
    mention_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_mention = await art_crud.mention.delete(db, id=mention_id)
    if db_mention is None:
        raise HTTPException(status_code=404, detail="Mention not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
