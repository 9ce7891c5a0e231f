# arqap/domains/mov/routers.py

"""
API endpoints of the 'mov' domain: internal movements and loans.

Lifecycle rules live in `crud.py`; business-rule and not-found errors raised
there are turned into 409/404 responses by the handlers in `arqap.main`.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.core import dependencies as deps
from arqap.domains.mov import crud as mov_crud
from arqap.domains.mov import schemas as mov_schemas

router = APIRouter(
    tags=["Movements and Loans"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. internal movements
# =============================================================================
@router.post("/internal_movements/", response_model=mov_schemas.InternalMovementRead, status_code=status.HTTP_201_CREATED, summary="Move an artefact")
async def create_internal_movement(
    movement_create: mov_schemas.InternalMovementCreate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    Records an internal movement and updates the artefact's location.
    Any active movement of the artefact is closed first.
    - `from_physical_location_id`: omit to use the artefact's current location
    """
    return await mov_crud.internal_movement.create(db=db, obj_in=movement_create)


@router.get("/internal_movements/", response_model=List[mov_schemas.InternalMovementRead], summary="List internal movements")
async def read_internal_movements(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await mov_crud.internal_movement.get_multi(db, skip=skip, limit=limit)


@router.get("/internal_movements/artefact/{artefact_id}", response_model=List[mov_schemas.InternalMovementRead], summary="Movement history of an artefact")
async def read_internal_movements_by_artefact(
    artefact_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await mov_crud.internal_movement.get_by_artefact(db, artefact_id=artefact_id)


@router.get("/internal_movements/artefact/{artefact_id}/active", response_model=mov_schemas.InternalMovementRead, summary="Active movement of an artefact")
async def read_active_internal_movement(
    artefact_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_movement = await mov_crud.internal_movement.get_active_by_artefact(db, artefact_id=artefact_id)
    if db_movement is None:
        raise HTTPException(status_code=404, detail="No active movement found")
    return db_movement


@router.get("/internal_movements/{movement_id}", response_model=mov_schemas.InternalMovementRead, summary="Get an internal movement")
async def read_internal_movement(
    movement_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_movement = await mov_crud.internal_movement.get_with_relations(db, id=movement_id)
    if db_movement is None:
        raise HTTPException(status_code=404, detail="Internal movement not found")
    return db_movement


@router.put("/internal_movements/{movement_id}", response_model=mov_schemas.InternalMovementRead, summary="Update or close an internal movement")
async def update_internal_movement(
    movement_id: int,
    movement_update: mov_schemas.InternalMovementUpdate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    Sending `return_date` and `return_time` on an active movement closes it and
    returns the artefact to its original location.
    """
    db_movement = await mov_crud.internal_movement.get(db, id=movement_id)
    if db_movement is None:
        raise HTTPException(status_code=404, detail="Internal movement not found")
    return await mov_crud.internal_movement.update(db=db, db_obj=db_movement, obj_in=movement_update)


@router.delete("/internal_movements/{movement_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an internal movement")
async def delete_internal_movement(
    movement_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_movement = await mov_crud.internal_movement.remove(db, id=movement_id)
    if db_movement is None:
        raise HTTPException(status_code=404, detail="Internal movement not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# 2. loans
# =============================================================================
@router.post("/loans/", response_model=mov_schemas.LoanRead, status_code=status.HTTP_201_CREATED, summary="Lend an artefact")
async def create_loan(
    loan_create: mov_schemas.LoanCreate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    Creates a loan and marks the artefact unavailable.
    Returns 409 when the artefact is already on loan.
    """
    return await mov_crud.loan.create(db=db, obj_in=loan_create)


@router.get("/loans/", response_model=List[mov_schemas.LoanRead], summary="List loans")
async def read_loans(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await mov_crud.loan.get_multi(db, skip=skip, limit=limit)


@router.get("/loans/artefact/{artefact_id}", response_model=List[mov_schemas.LoanRead], summary="Loan history of an artefact")
async def read_loans_by_artefact(
    artefact_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await mov_crud.loan.get_by_artefact(db, artefact_id=artefact_id)


@router.get("/loans/artefact/{artefact_id}/active", response_model=mov_schemas.LoanRead, summary="Active loan of an artefact")
async def read_active_loan(
    artefact_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_loan = await mov_crud.loan.get_active_by_artefact(db, artefact_id=artefact_id)
    if db_loan is None:
        raise HTTPException(status_code=404, detail="No active loan found")
    return db_loan


@router.get("/loans/{loan_id}", response_model=mov_schemas.LoanRead, summary="Get a loan")
async def read_loan(
    loan_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_loan = await mov_crud.loan.get_with_relations(db, id=loan_id)
    if db_loan is None:
        raise HTTPException(status_code=404, detail="Loan not found")
    return db_loan


@router.put("/loans/{loan_id}", response_model=mov_schemas.LoanRead, summary="Update a loan")
async def update_loan(
    loan_id: int,
    loan_update: mov_schemas.LoanUpdate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    Updates a loan. The artefact becomes available again.
    """
    db_loan = await mov_crud.loan.get(db, id=loan_id)
    if db_loan is None:
        raise HTTPException(status_code=404, detail="Loan not found")
    return await mov_crud.loan.update(db=db, db_obj=db_loan, obj_in=loan_update)


@router.delete("/loans/{loan_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a loan")
async def delete_loan(
    loan_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    Deletes a loan and marks its artefact available.
    """
    db_loan = await mov_crud.loan.remove(db, id=loan_id)
    if db_loan is None:
        raise HTTPException(status_code=404, detail="Loan not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
