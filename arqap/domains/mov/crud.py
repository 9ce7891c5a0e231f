# arqap/domains/mov/crud.py

"""
Movement and loan lifecycle.

Every write here runs as a single unit of work: the artefact row is locked,
the movement/loan rows and the artefact's derived fields are staged, and the
whole thing is committed at once. On any error the session is rolled back and
the error re-raised, so an artefact never ends up half moved.

Invariants kept by this module:
- at most one ACTIVE internal movement per artefact;
- `artefact.physical_location_id` follows the destination of the latest movement;
- an artefact with an active loan has `available = False`.
"""

from typing import List, Union, Dict, Any, Optional, Tuple
from datetime import datetime, date, time
import logging

from sqlalchemy.orm import selectinload
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.core.crud_base import CRUDBase
from arqap.core.exceptions import NotFoundError, ArtefactNotAvailableError
from . import models as mov_models
from . import schemas as mov_schemas
from arqap.domains.art import crud as art_crud
from arqap.domains.art import models as art_models
from arqap.domains.loc import models as loc_models
from arqap.domains.req import models as req_models


logger = logging.getLogger(__name__)

RETURN_REASON = "Return to original location"
RETURN_OBSERVATIONS = "Automatic return movement"


def closing_stamp() -> Tuple[date, time]:
    """Current local date and time (to the second), used to close movements."""
    now = datetime.now().replace(microsecond=0)
    return now.date(), now.time()


def _patch_data(obj_in: Union[SQLModel, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Fields to apply on an update. Null values are skipped, so a patch can
    never reopen a closed row or blank a required field; `artefact_id` is fixed.
    """
    data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
    return {key: value for key, value in data.items() if key != "artefact_id" and value is not None}


async def _ensure_exists(db: AsyncSession, model, id: Optional[int], label: str) -> None:
    if id is not None and await db.get(model, id) is None:
        raise NotFoundError(f"{label} {id} not found.")


# =============================================================================
# 1. InternalMovement CRUD
# =============================================================================
class CRUDInternalMovement(
    CRUDBase[
        mov_models.InternalMovement,
        mov_schemas.InternalMovementCreate,
        mov_schemas.InternalMovementUpdate
    ]
):
    def __init__(self):
        super().__init__(model=mov_models.InternalMovement)

    def _with_relations(self, statement):
        return statement.options(
            selectinload(self.model.artefact).selectinload(art_models.Artefact.internal_classifier),
            selectinload(self.model.from_physical_location).selectinload(loc_models.PhysicalLocation.shelf),
            selectinload(self.model.to_physical_location).selectinload(loc_models.PhysicalLocation.shelf),
            selectinload(self.model.requester),
        ).execution_options(populate_existing=True)

    def _newest_first(self, statement):
        return statement.order_by(
            self.model.movement_date.desc(),
            self.model.movement_time.desc(),
            self.model.id.desc(),
        )

    async def get_with_relations(self, db: AsyncSession, *, id: int) -> Optional[mov_models.InternalMovement]:
        statement = self._with_relations(select(self.model).where(self.model.id == id))
        result = await db.execute(statement)
        return result.scalars().one_or_none()

    async def get_multi(
        self, db: AsyncSession, *, skip: int = 0, limit: int = 100, **kwargs: Any
    ) -> List[mov_models.InternalMovement]:
        """All movements, newest first."""
        statement = self._with_relations(self._newest_first(select(self.model)))
        result = await db.execute(statement.offset(skip).limit(limit))
        return result.scalars().all()

    async def get_by_artefact(self, db: AsyncSession, *, artefact_id: int) -> List[mov_models.InternalMovement]:
        """Movement history of one artefact, newest first."""
        statement = self._with_relations(
            self._newest_first(select(self.model).where(self.model.artefact_id == artefact_id))
        )
        result = await db.execute(statement)
        return result.scalars().all()

    async def get_active(self, db: AsyncSession, *, artefact_id: int) -> List[mov_models.InternalMovement]:
        """Every ACTIVE movement of an artefact, newest first. Normally zero or one."""
        statement = self._newest_first(
            select(self.model).where(
                self.model.artefact_id == artefact_id,
                self.model.return_date.is_(None),
                self.model.return_time.is_(None),
            )
        )
        result = await db.execute(statement)
        return result.scalars().all()

    async def get_active_by_artefact(
        self, db: AsyncSession, *, artefact_id: int
    ) -> Optional[mov_models.InternalMovement]:
        """The artefact's current active movement, or None."""
        active = await self.get_active(db, artefact_id=artefact_id)
        if not active:
            return None
        return await self.get_with_relations(db, id=active[0].id)

    async def get_latest(self, db: AsyncSession, *, artefact_id: int) -> Optional[mov_models.InternalMovement]:
        """Most recent movement of the artefact, active or not."""
        statement = self._newest_first(select(self.model).where(self.model.artefact_id == artefact_id)).limit(1)
        result = await db.execute(statement)
        return result.scalars().first()

    async def get_earliest(self, db: AsyncSession, *, artefact_id: int) -> Optional[mov_models.InternalMovement]:
        """First movement ever recorded for the artefact."""
        statement = (
            select(self.model)
            .where(self.model.artefact_id == artefact_id)
            .order_by(self.model.movement_date, self.model.movement_time, self.model.id)
            .limit(1)
        )
        result = await db.execute(statement)
        return result.scalars().first()

    async def _ensure_references(self, db: AsyncSession, data: Dict[str, Any]) -> None:
        await _ensure_exists(db, loc_models.PhysicalLocation, data.get("from_physical_location_id"), "Physical location")
        await _ensure_exists(db, loc_models.PhysicalLocation, data.get("to_physical_location_id"), "Physical location")
        await _ensure_exists(db, req_models.Requester, data.get("requester_id"), "Requester")

    async def create(
        self, db: AsyncSession, *, obj_in: mov_schemas.InternalMovementCreate
    ) -> mov_models.InternalMovement:
        """
        Moves an artefact.
        1. lock the artefact;
        2. close every active movement, taking the origin from the latest one;
        3. with no active movement, take the origin from the artefact itself;
        4. insert the new movement and point the artefact at its destination.
        An origin sent by the caller is kept; a missing or null one is defaulted.
        """
        movement_data = obj_in.model_dump()
        try:
            db_artefact = await art_crud.artefact.get_for_update(db, id=obj_in.artefact_id)
            if db_artefact is None:
                raise NotFoundError(f"Artefact {obj_in.artefact_id} not found.")
            await self._ensure_references(db, movement_data)

            active = await self.get_active(db, artefact_id=db_artefact.id)
            if active:
                if movement_data.get("from_physical_location_id") is None:
                    movement_data["from_physical_location_id"] = active[0].to_physical_location_id
                closing_date, closing_time = closing_stamp()
                for previous in active:
                    previous.return_date = closing_date
                    previous.return_time = closing_time
                    db.add(previous)
                if len(active) > 1:
                    logger.warning(
                        "Artefact %s had %d active movements; all of them were closed",
                        db_artefact.id, len(active)
                    )
                logger.info(
                    "Closed movement(s) %s of artefact %s",
                    [previous.id for previous in active], db_artefact.id
                )
            elif movement_data.get("from_physical_location_id") is None:
                movement_data["from_physical_location_id"] = db_artefact.physical_location_id

            db_obj = self.model.model_validate(movement_data)
            db.add(db_obj)
            await db.flush()

            await art_crud.artefact.move_to(db, db_obj=db_artefact, location_id=db_obj.to_physical_location_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "Internal movement %s created: artefact %s, %s -> %s",
            db_obj.id, db_obj.artefact_id, db_obj.from_physical_location_id, db_obj.to_physical_location_id
        )
        return await self.get_with_relations(db, id=db_obj.id)

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: mov_models.InternalMovement,
        obj_in: Union[mov_schemas.InternalMovementUpdate, Dict[str, Any]]
    ) -> mov_models.InternalMovement:
        """
        Edits a movement.
        - closing an active movement (both return fields sent) sends the artefact
          back to the origin of its first movement, recording a pre-closed
          return movement when that origin differs from where it is now;
        - otherwise a destination that differs from the previous one is
          mirrored onto the artefact.
        Null fields in the patch are ignored.
        """
        update_data = _patch_data(obj_in)

        closing = (
            db_obj.is_active
            and update_data.get("return_date") is not None
            and update_data.get("return_time") is not None
        )
        new_destination = update_data.get("to_physical_location_id")
        previous_destination = db_obj.to_physical_location_id

        try:
            await self._ensure_references(db, update_data)
            db_artefact = await art_crud.artefact.get_for_update(db, id=db_obj.artefact_id)
            if db_artefact is None:
                raise NotFoundError(f"Artefact {db_obj.artefact_id} not found.")

            for key, value in update_data.items():
                setattr(db_obj, key, value)
            db.add(db_obj)
            await db.flush()

            if closing:
                earliest = await self.get_earliest(db, artefact_id=db_obj.artefact_id)
                original_location_id = earliest.from_physical_location_id if earliest else None
                vacated_location_id = db_obj.to_physical_location_id

                if vacated_location_id != original_location_id:
                    return_movement = self.model(
                        movement_date=db_obj.return_date,
                        movement_time=db_obj.return_time,
                        return_date=db_obj.return_date,
                        return_time=db_obj.return_time,
                        artefact_id=db_obj.artefact_id,
                        from_physical_location_id=vacated_location_id,
                        to_physical_location_id=original_location_id,
                        reason=RETURN_REASON,
                        observations=RETURN_OBSERVATIONS,
                        requester_id=db_obj.requester_id,
                    )
                    db.add(return_movement)
                    logger.info(
                        "Artefact %s returned from %s to original location %s",
                        db_obj.artefact_id, vacated_location_id, original_location_id
                    )

                await art_crud.artefact.move_to(db, db_obj=db_artefact, location_id=original_location_id)
                logger.info("Internal movement %s closed", db_obj.id)
            elif new_destination is not None and new_destination != previous_destination:
                await art_crud.artefact.move_to(db, db_obj=db_artefact, location_id=new_destination)

            await db.commit()
        except Exception:
            await db.rollback()
            raise

        return await self.get_with_relations(db, id=db_obj.id)

    async def remove(self, db: AsyncSession, *, id: int) -> Optional[mov_models.InternalMovement]:
        """Deletes a movement row. The artefact's location is left as it is."""
        return await super().delete(db, id=id)


internal_movement = CRUDInternalMovement()


# =============================================================================
# 2. Loan CRUD
# =============================================================================
class CRUDLoan(
    CRUDBase[
        mov_models.Loan,
        mov_schemas.LoanCreate,
        mov_schemas.LoanUpdate
    ]
):
    def __init__(self):
        super().__init__(model=mov_models.Loan)

    def _with_relations(self, statement):
        return statement.options(
            selectinload(self.model.artefact).selectinload(art_models.Artefact.internal_classifier),
            selectinload(self.model.requester),
        ).execution_options(populate_existing=True)

    def _newest_first(self, statement):
        return statement.order_by(
            self.model.loan_date.desc(),
            self.model.loan_time.desc(),
            self.model.id.desc(),
        )

    async def get_with_relations(self, db: AsyncSession, *, id: int) -> Optional[mov_models.Loan]:
        statement = self._with_relations(select(self.model).where(self.model.id == id))
        result = await db.execute(statement)
        return result.scalars().one_or_none()

    async def get_multi(
        self, db: AsyncSession, *, skip: int = 0, limit: int = 100, **kwargs: Any
    ) -> List[mov_models.Loan]:
        """All loans, newest first."""
        statement = self._with_relations(self._newest_first(select(self.model)))
        result = await db.execute(statement.offset(skip).limit(limit))
        return result.scalars().all()

    async def get_by_artefact(self, db: AsyncSession, *, artefact_id: int) -> List[mov_models.Loan]:
        statement = self._with_relations(
            self._newest_first(select(self.model).where(self.model.artefact_id == artefact_id))
        )
        result = await db.execute(statement)
        return result.scalars().all()

    async def get_active_by_artefact(self, db: AsyncSession, *, artefact_id: int) -> Optional[mov_models.Loan]:
        statement = self._with_relations(
            self._newest_first(
                select(self.model).where(
                    self.model.artefact_id == artefact_id,
                    self.model.return_date.is_(None),
                    self.model.return_time.is_(None),
                )
            )
        )
        result = await db.execute(statement.limit(1))
        return result.scalars().first()

    async def create(self, db: AsyncSession, *, obj_in: mov_schemas.LoanCreate) -> mov_models.Loan:
        """
        Lends an artefact: it must exist and be available; it becomes unavailable.
        """
        try:
            db_artefact = None
            if obj_in.artefact_id is not None:
                db_artefact = await art_crud.artefact.get_for_update(db, id=obj_in.artefact_id)
                if db_artefact is None:
                    raise NotFoundError("Artefact does not exist")
                if not db_artefact.available:
                    logger.warning("Loan rejected: artefact %s is not available", db_artefact.id)
                    raise ArtefactNotAvailableError(db_artefact.id)
            await _ensure_exists(db, req_models.Requester, obj_in.requester_id, "Requester")

            db_obj = self.model.model_validate(obj_in)
            db.add(db_obj)
            await db.flush()

            if db_artefact is not None:
                await art_crud.artefact.set_available(db, db_obj=db_artefact, available=False)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("Loan %s created for artefact %s", db_obj.id, db_obj.artefact_id)
        return await self.get_with_relations(db, id=db_obj.id)

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: mov_models.Loan,
        obj_in: Union[mov_schemas.LoanUpdate, Dict[str, Any]]
    ) -> mov_models.Loan:
        """
        Edits a loan. The artefact is marked available whatever the patch contains.
        """
        update_data = _patch_data(obj_in)

        try:
            await _ensure_exists(db, req_models.Requester, update_data.get("requester_id"), "Requester")
            for key, value in update_data.items():
                setattr(db_obj, key, value)
            db.add(db_obj)
            await db.flush()

            if db_obj.artefact_id is not None:
                db_artefact = await art_crud.artefact.get_for_update(db, id=db_obj.artefact_id)
                if db_artefact is not None:
                    await art_crud.artefact.set_available(db, db_obj=db_artefact, available=True)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("Loan %s updated; artefact %s marked available", db_obj.id, db_obj.artefact_id)
        return await self.get_with_relations(db, id=db_obj.id)

    async def remove(self, db: AsyncSession, *, id: int) -> Optional[mov_models.Loan]:
        """
        Deletes a loan and marks its artefact available, even if the loan was
        already closed.
        """
        db_obj = await self.get(db, id=id)
        if db_obj is None:
            return None

        try:
            if db_obj.artefact_id is not None:
                db_artefact = await art_crud.artefact.get_for_update(db, id=db_obj.artefact_id)
                if db_artefact is not None:
                    await art_crud.artefact.set_available(db, db_obj=db_artefact, available=True)
            await db.delete(db_obj)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("Loan %s deleted; artefact %s marked available", id, db_obj.artefact_id)
        return db_obj


loan = CRUDLoan()
