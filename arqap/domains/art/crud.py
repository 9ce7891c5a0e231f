# arqap/domains/art/crud.py

"""
CRUD logic of the 'art' domain.

Two ways to change an artefact:
- the generic `update`, which ignores `available` and `physical_location_id`;
- `move_to` / `set_available`, used only by the movement and loan lifecycle.
  They stage the change in the caller's transaction and never commit.

Registry references (collection, archaeologist, site, classifiers) are
checked on create and update; an unknown id is a NotFoundError.
"""

from typing import List, Union, Dict, Any, Optional
import logging

from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.core.crud_base import CRUDBase
from arqap.core.exceptions import NotFoundError, ReferenceConflictError
from . import models as art_models
from . import schemas as art_schemas
from arqap.domains.loc import models as loc_models
from arqap.domains.geo import models as geo_models
from arqap.domains.cat import models as cat_models
from arqap.domains.mov.models import InternalMovement as MovInternalMovement, Loan as MovLoan


logger = logging.getLogger(__name__)

LIFECYCLE_FIELDS = frozenset({"available", "physical_location_id"})

# FK column -> (model, label used in error messages)
REGISTRY_REFERENCES = {
    "collection_id": (cat_models.Collection, "Collection"),
    "archaeologist_id": (cat_models.Archaeologist, "Archaeologist"),
    "archaeological_site_id": (geo_models.ArchaeologicalSite, "Archaeological site"),
    "inpl_classifier_id": (cat_models.INPLClassifier, "INPL classifier"),
    "internal_classifier_id": (cat_models.InternalClassifier, "Internal classifier"),
}


async def check_registry_references(db: AsyncSession, data: Dict[str, Any]) -> None:
    """Raises NotFoundError for the first registry id in `data` with no row behind it."""
    for field, (model, label) in REGISTRY_REFERENCES.items():
        ref_id = data.get(field)
        if ref_id is not None and await db.get(model, ref_id) is None:
            raise NotFoundError(f"{label} {ref_id} not found.")


class CRUDArtefact(
    CRUDBase[
        art_models.Artefact,
        art_schemas.ArtefactCreate,
        art_schemas.ArtefactUpdate
    ]
):
    def __init__(self):
        super().__init__(model=art_models.Artefact)

    async def get_for_update(self, db: AsyncSession, *, id: int) -> Optional[art_models.Artefact]:
        """
        Loads the artefact with a row lock (SELECT ... FOR UPDATE) so concurrent
        lifecycle operations on the same artefact are serialised.
        """
        statement = (
            select(self.model)
            .where(self.model.id == id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        return result.scalars().one_or_none()

    async def get_with_location(self, db: AsyncSession, *, id: int) -> Optional[art_models.Artefact]:
        """Loads the artefact with its location, registries and site hierarchy."""
        statement = (
            select(self.model)
            .where(self.model.id == id)
            .options(
                selectinload(self.model.physical_location).selectinload(loc_models.PhysicalLocation.shelf),
                selectinload(self.model.collection),
                selectinload(self.model.archaeologist),
                selectinload(self.model.archaeological_site)
                .selectinload(geo_models.ArchaeologicalSite.region)
                .selectinload(geo_models.Region.country),
                selectinload(self.model.inpl_classifier),
                selectinload(self.model.internal_classifier),
            )
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        return result.scalars().one_or_none()

    async def get_multi_filtered(
        self,
        db: AsyncSession,
        *,
        shelf_id: Optional[int] = None,
        available: Optional[bool] = None,
        skip: int = 0,
        limit: int = 100
    ) -> List[art_models.Artefact]:
        """
        Lists artefacts, optionally only those stored on a shelf and/or with a given availability.
        """
        statement = select(self.model)
        if shelf_id is not None:
            statement = statement.join(
                loc_models.PhysicalLocation,
                loc_models.PhysicalLocation.id == self.model.physical_location_id
            ).where(loc_models.PhysicalLocation.shelf_id == shelf_id)
        if available is not None:
            statement = statement.where(self.model.available == available)
        statement = statement.order_by(self.model.id).offset(skip).limit(limit)
        result = await db.execute(statement)
        return result.scalars().all()

    async def create(self, db: AsyncSession, *, obj_in: art_schemas.ArtefactCreate) -> art_models.Artefact:
        """Creates an artefact, checking that its initial location and registries exist."""
        if obj_in.physical_location_id is not None:
            if await db.get(loc_models.PhysicalLocation, obj_in.physical_location_id) is None:
                raise NotFoundError(f"Physical location {obj_in.physical_location_id} not found.")
        await check_registry_references(db, obj_in.model_dump())
        return await super().create(db, obj_in=obj_in)

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: art_models.Artefact,
        obj_in: Union[art_schemas.ArtefactUpdate, Dict[str, Any]]
    ) -> art_models.Artefact:
        """
        Generic update. `available` and `physical_location_id` are dropped even
        when passed in a dict; a null `name` is skipped. Registry ids may be
        cleared with null.
        """
        update_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        ignored = LIFECYCLE_FIELDS.intersection(update_data)
        if ignored:
            logger.warning(
                "Artefact %s: ignoring lifecycle-owned fields %s in generic update",
                db_obj.id, sorted(ignored)
            )
        update_data = {
            key: value for key, value in update_data.items()
            if key not in LIFECYCLE_FIELDS and not (key == "name" and value is None)
        }
        await check_registry_references(db, update_data)
        return await super().update(db, db_obj=db_obj, obj_in=update_data)

    # -------------------------------------------------------------------------
    # lifecycle-only entry points
    # -------------------------------------------------------------------------
    async def move_to(
        self, db: AsyncSession, *, db_obj: art_models.Artefact, location_id: Optional[int]
    ) -> art_models.Artefact:
        """Stages a new current location (may be None). No commit."""
        if db_obj.physical_location_id != location_id:
            logger.debug("Artefact %s: location %s -> %s", db_obj.id, db_obj.physical_location_id, location_id)
        db_obj.physical_location_id = location_id
        db.add(db_obj)
        await db.flush()
        return db_obj

    async def set_available(
        self, db: AsyncSession, *, db_obj: art_models.Artefact, available: bool
    ) -> art_models.Artefact:
        """Stages a new availability flag. No commit."""
        db_obj.available = available
        db.add(db_obj)
        await db.flush()
        return db_obj

    async def remove(self, db: AsyncSession, *, id: int) -> Optional[art_models.Artefact]:
        """
        Deletes an artefact. Refused while movements, loans or mentions reference it.
        """
        db_obj = await self.get(db, id=id)
        if db_obj is None:
            return None

        for model, label in (
            (MovInternalMovement, "internal movements"),
            (MovLoan, "loans"),
            (art_models.Mention, "mentions"),
        ):
            check_query = select(model.id).where(model.artefact_id == id).limit(1)
            if (await db.execute(check_query)).first():
                raise ReferenceConflictError(f"Cannot delete artefact {id}: it is referenced by {label}.")

        return await super().delete(db, id=id)


class CRUDMention(
    CRUDBase[
        art_models.Mention,
        art_schemas.MentionCreate,
        art_schemas.MentionUpdate
    ]
):
    def __init__(self):
        super().__init__(model=art_models.Mention)

    async def _ensure_artefact(self, db: AsyncSession, artefact_id: Optional[int]) -> None:
        if artefact_id is not None and await db.get(art_models.Artefact, artefact_id) is None:
            raise NotFoundError(f"Artefact {artefact_id} not found.")

    async def get_by_artefact(
        self, db: AsyncSession, *, artefact_id: Optional[int] = None, skip: int = 0, limit: int = 100
    ) -> List[art_models.Mention]:
        """Mentions in creation order, optionally only those of one artefact."""
        return await self.get_filtered(
            db, filters={"artefact_id": artefact_id}, order_by_field="id", order_desc=False, skip=skip, limit=limit
        )

    async def create(self, db: AsyncSession, *, obj_in: art_schemas.MentionCreate) -> art_models.Mention:
        await self._ensure_artefact(db, obj_in.artefact_id)
        return await super().create(db, obj_in=obj_in)

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: art_models.Mention,
        obj_in: Union[art_schemas.MentionUpdate, Dict[str, Any]]
    ) -> art_models.Mention:
        """`title` and `link` are required, so nulls for them are skipped; `artefact_id` may be cleared."""
        update_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        update_data = {
            key: value for key, value in update_data.items()
            if value is not None or key not in ("title", "link")
        }
        await self._ensure_artefact(db, update_data.get("artefact_id"))
        return await super().update(db, db_obj=db_obj, obj_in=update_data)


artefact = CRUDArtefact()
mention = CRUDMention()
