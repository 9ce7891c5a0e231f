# arqap/domains/req/routers.py

"""
API endpoints of the 'req' domain (requesters).
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.core import dependencies as deps
from arqap.domains.req import crud as req_crud
from arqap.domains.req import schemas as req_schemas

router = APIRouter(
    tags=["Requester Management"],
    responses={404: {"description": "Not found"}},
)


@router.post("/requesters/", response_model=req_schemas.RequesterRead, status_code=status.HTTP_201_CREATED, summary="Create a requester")
async def create_requester(
    requester_create: req_schemas.RequesterCreate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await req_crud.requester.create(db=db, obj_in=requester_create)


@router.get("/requesters/", response_model=List[req_schemas.RequesterRead], summary="List requesters")
async def read_requesters(
    type: Optional[req_schemas.RequesterType] = None,
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    - `type`: investigator, department or exhibition
    """
    return await req_crud.requester.get_filtered(
        db, filters={"type": type}, order_desc=False, skip=skip, limit=limit
    )


@router.get("/requesters/{requester_id}", response_model=req_schemas.RequesterRead, summary="Get a requester")
async def read_requester(
    requester_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_requester = await req_crud.requester.get(db, id=requester_id)
    if db_requester is None:
        raise HTTPException(status_code=404, detail="Requester not found")
    return db_requester


@router.put("/requesters/{requester_id}", response_model=req_schemas.RequesterRead, summary="Update a requester")
async def update_requester(
    requester_id: int,
    requester_update: req_schemas.RequesterUpdate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_requester = await req_crud.requester.get(db, id=requester_id)
    if db_requester is None:
        raise HTTPException(status_code=404, detail="Requester not found")
    return await req_crud.requester.update(db=db, db_obj=db_requester, obj_in=requester_update)


@router.delete("/requesters/{requester_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a requester")
async def delete_requester(
    requester_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_requester = await req_crud.requester.remove(db, id=requester_id)
    if db_requester is None:
        raise HTTPException(status_code=404, detail="Requester not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
