# arqap/domains/loc/crud.py

"""
CRUD logic of the 'loc' domain (shelves and physical locations).
"""

from typing import List, Union, Dict, Any, Optional
import logging

from sqlalchemy import or_
from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.core.crud_base import CRUDBase
from arqap.core.exceptions import BusinessRuleError, NotFoundError, ReferenceConflictError
from . import models as loc_models
from . import schemas as loc_schemas
from arqap.domains.art.models import Artefact as ArtArtefact
from arqap.domains.mov.models import InternalMovement as MovInternalMovement


logger = logging.getLogger(__name__)


async def _location_ids_in_use(db: AsyncSession, location_ids: List[int]) -> bool:
    """True if any artefact or movement points at one of the given cells."""
    if not location_ids:
        return False

    artefact_stmt = select(ArtArtefact.id).where(ArtArtefact.physical_location_id.in_(location_ids)).limit(1)
    if (await db.execute(artefact_stmt)).first():
        return True

    movement_stmt = select(MovInternalMovement.id).where(
        or_(
            MovInternalMovement.from_physical_location_id.in_(location_ids),
            MovInternalMovement.to_physical_location_id.in_(location_ids),
        )
    ).limit(1)
    return (await db.execute(movement_stmt)).first() is not None


# =============================================================================
# 1. Shelf CRUD
# =============================================================================
class CRUDShelf(
    CRUDBase[
        loc_models.Shelf,
        loc_schemas.ShelfCreate,
        loc_schemas.ShelfUpdate
    ]
):
    def __init__(self):
        super().__init__(model=loc_models.Shelf)

    async def get_by_code(self, db: AsyncSession, *, code: int) -> Optional[loc_models.Shelf]:
        """Looks a shelf up by its number."""
        return await self.get_by_attribute(db, attribute="code", value=code)

    @staticmethod
    def layout(is_work_table: bool) -> List[tuple]:
        """(level, column) pairs a shelf of the given kind is made of."""
        if is_work_table:
            return [loc_models.WORK_TABLE_CELL]
        return [(level, column) for level in loc_models.LEVELS for column in loc_models.COLUMNS]

    async def create(self, db: AsyncSession, *, obj_in: loc_schemas.ShelfCreate) -> loc_models.Shelf:
        """
        Creates the shelf together with all of its cells in one transaction.
        """
        if await self.get_by_code(db, code=obj_in.code):
            raise BusinessRuleError(f"Shelf with code {obj_in.code} already exists.")

        db_obj = self.model.model_validate(obj_in)
        try:
            db.add(db_obj)
            await db.flush()
            for level, column in self.layout(db_obj.is_work_table):
                db.add(loc_models.PhysicalLocation(shelf_id=db_obj.id, level=level, column=column))
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await db.refresh(db_obj)
        logger.info(
            "Shelf %s created with %d physical locations",
            db_obj.code, len(self.layout(db_obj.is_work_table))
        )
        return db_obj

    async def update(
        self,
        db: AsyncSession, *, db_obj: loc_models.Shelf, obj_in: Union[loc_schemas.ShelfUpdate, Dict[str, Any]]
    ) -> loc_models.Shelf:
        """Updates a shelf, keeping its code unique."""
        update_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        new_code = update_data.get("code")
        if new_code is not None and new_code != db_obj.code:
            if await self.get_by_code(db, code=new_code):
                raise BusinessRuleError(f"Shelf with code {new_code} already exists.")
        return await super().update(db, db_obj=db_obj, obj_in=update_data)

    async def remove(self, db: AsyncSession, *, id: int) -> Optional[loc_models.Shelf]:
        """
        Deletes a shelf and its cells.
        Refused while any of its cells is referenced by an artefact or a movement.
        """
        db_obj = await self.get(db, id=id)
        if db_obj is None:
            return None

        cell_ids = (await db.execute(
            select(loc_models.PhysicalLocation.id).where(loc_models.PhysicalLocation.shelf_id == id)
        )).scalars().all()
        if await _location_ids_in_use(db, list(cell_ids)):
            raise ReferenceConflictError(
                f"Cannot delete shelf {db_obj.code}: its physical locations are referenced by artefacts or movements."
            )

        return await super().delete(db, id=id)


shelf = CRUDShelf()


# =============================================================================
# 2. PhysicalLocation CRUD
# =============================================================================
class CRUDPhysicalLocation(
    CRUDBase[
        loc_models.PhysicalLocation,
        loc_schemas.PhysicalLocationCreate,
        loc_schemas.PhysicalLocationCreate
    ]
):
    def __init__(self):
        super().__init__(model=loc_models.PhysicalLocation)

    async def get_by_cell(
        self, db: AsyncSession, *, shelf_id: int, level: int, column: str
    ) -> Optional[loc_models.PhysicalLocation]:
        statement = select(self.model).where(
            self.model.shelf_id == shelf_id,
            self.model.level == level,
            self.model.column == column,
        )
        result = await db.execute(statement)
        return result.scalars().one_or_none()

    async def get_with_shelf(self, db: AsyncSession, *, id: int) -> Optional[loc_models.PhysicalLocation]:
        statement = (
            select(self.model)
            .where(self.model.id == id)
            .options(selectinload(self.model.shelf))
        )
        result = await db.execute(statement)
        return result.scalars().one_or_none()

    async def get_by_shelf(self, db: AsyncSession, *, shelf_id: int) -> List[loc_models.PhysicalLocation]:
        """All cells of a shelf, ordered by level then column."""
        statement = (
            select(self.model)
            .where(self.model.shelf_id == shelf_id)
            .order_by(self.model.level, self.model.column)
        )
        result = await db.execute(statement)
        return result.scalars().all()

    async def create(
        self, db: AsyncSession, *, obj_in: loc_schemas.PhysicalLocationCreate
    ) -> loc_models.PhysicalLocation:
        """Adds a single cell to an existing shelf."""
        db_shelf = await db.get(loc_models.Shelf, obj_in.shelf_id)
        if db_shelf is None:
            raise NotFoundError(f"Shelf {obj_in.shelf_id} not found.")
        if db_shelf.is_work_table and (obj_in.level, obj_in.column) != loc_models.WORK_TABLE_CELL:
            raise BusinessRuleError("A work table only has the physical location (1, 'A').")
        if await self.get_by_cell(db, shelf_id=obj_in.shelf_id, level=obj_in.level, column=obj_in.column):
            raise BusinessRuleError(
                f"Physical location ({obj_in.level}, '{obj_in.column}') already exists on shelf {db_shelf.code}."
            )
        return await super().create(db, obj_in=obj_in)

    async def update(self, *args, **kwargs):
        raise BusinessRuleError("Physical locations are immutable.")

    async def remove(self, db: AsyncSession, *, id: int) -> Optional[loc_models.PhysicalLocation]:
        """
        Deletes a cell. Refused while an artefact or a movement references it.
        """
        db_obj = await self.get(db, id=id)
        if db_obj is None:
            return None
        if await _location_ids_in_use(db, [id]):
            raise ReferenceConflictError(
                f"Cannot delete physical location {id}: it is referenced by artefacts or movements."
            )
        return await super().delete(db, id=id)


physical_location = CRUDPhysicalLocation()
