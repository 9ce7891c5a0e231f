# arqap/domains/cat/crud.py

"""
CRUD logic of the 'cat' domain.

Registries referenced by artefacts cannot be deleted while an artefact
still points at them.
"""

from typing import List, Union, Dict, Any, Optional, Iterable

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.core.crud_base import CRUDBase
from arqap.core.exceptions import BusinessRuleError, ReferenceConflictError
from . import models as cat_models
from . import schemas as cat_schemas
from arqap.domains.art.models import Artefact as ArtArtefact


def _patch_data(obj_in, required: Iterable[str]) -> Dict[str, Any]:
    """Patch fields to apply; nulls sent for required columns are skipped."""
    data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
    return {key: value for key, value in data.items() if value is not None or key not in required}


async def _ensure_unreferenced(db: AsyncSession, column, id: int, label: str) -> None:
    check_query = select(ArtArtefact.id).where(column == id).limit(1)
    if (await db.execute(check_query)).first():
        raise ReferenceConflictError(f"Cannot delete {label} {id}: artefacts reference it.")


# =============================================================================
# 1. Collection CRUD
# =============================================================================
class CRUDCollection(
    CRUDBase[
        cat_models.Collection,
        cat_schemas.CollectionCreate,
        cat_schemas.CollectionUpdate
    ]
):
    def __init__(self):
        super().__init__(model=cat_models.Collection)

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: cat_models.Collection,
        obj_in: Union[cat_schemas.CollectionUpdate, Dict[str, Any]]
    ) -> cat_models.Collection:
        return await super().update(db, db_obj=db_obj, obj_in=_patch_data(obj_in, required={"name"}))

    async def remove(self, db: AsyncSession, *, id: int) -> Optional[cat_models.Collection]:
        if await self.get(db, id=id) is None:
            return None
        await _ensure_unreferenced(db, ArtArtefact.collection_id, id, "collection")
        return await super().delete(db, id=id)


collection = CRUDCollection()


# =============================================================================
# 2. Archaeologist CRUD
# =============================================================================
class CRUDArchaeologist(
    CRUDBase[
        cat_models.Archaeologist,
        cat_schemas.ArchaeologistCreate,
        cat_schemas.ArchaeologistUpdate
    ]
):
    def __init__(self):
        super().__init__(model=cat_models.Archaeologist)

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: cat_models.Archaeologist,
        obj_in: Union[cat_schemas.ArchaeologistUpdate, Dict[str, Any]]
    ) -> cat_models.Archaeologist:
        update_data = _patch_data(obj_in, required={"first_name", "last_name"})
        return await super().update(db, db_obj=db_obj, obj_in=update_data)

    async def remove(self, db: AsyncSession, *, id: int) -> Optional[cat_models.Archaeologist]:
        if await self.get(db, id=id) is None:
            return None
        await _ensure_unreferenced(db, ArtArtefact.archaeologist_id, id, "archaeologist")
        return await super().delete(db, id=id)


archaeologist = CRUDArchaeologist()


# =============================================================================
# 3. INPLClassifier CRUD
# =============================================================================
class CRUDINPLClassifier(
    CRUDBase[
        cat_models.INPLClassifier,
        cat_schemas.INPLClassifierCreate,
        cat_schemas.INPLClassifierCreate
    ]
):
    def __init__(self):
        super().__init__(model=cat_models.INPLClassifier)

    async def remove(self, db: AsyncSession, *, id: int) -> Optional[cat_models.INPLClassifier]:
        if await self.get(db, id=id) is None:
            return None
        await _ensure_unreferenced(db, ArtArtefact.inpl_classifier_id, id, "INPL classifier")
        return await super().delete(db, id=id)


inpl_classifier = CRUDINPLClassifier()


# =============================================================================
# 4. InternalClassifier CRUD
# =============================================================================
class CRUDInternalClassifier(
    CRUDBase[
        cat_models.InternalClassifier,
        cat_schemas.InternalClassifierCreate,
        cat_schemas.InternalClassifierUpdate
    ]
):
    def __init__(self):
        super().__init__(model=cat_models.InternalClassifier)

    async def get_by_name(self, db: AsyncSession, *, name: str) -> List[cat_models.InternalClassifier]:
        """Every classifier with this name, lowest number first."""
        return await self.get_filtered(db, filters={"name": name}, order_by_field="number", order_desc=False)

    async def get_names(self, db: AsyncSession) -> List[str]:
        """Distinct classifier names, alphabetical."""
        statement = select(self.model.name).distinct().order_by(self.model.name)
        result = await db.execute(statement)
        return result.scalars().all()

    async def find_duplicate(
        self, db: AsyncSession, *, name: str, number: Optional[int], exclude_id: Optional[int] = None
    ) -> Optional[cat_models.InternalClassifier]:
        """
        Another classifier with the same name and number. Two null numbers
        count as equal, which the unique constraint alone does not enforce.
        """
        statement = select(self.model).where(self.model.name == name)
        if number is None:
            statement = statement.where(self.model.number.is_(None))
        else:
            statement = statement.where(self.model.number == number)
        if exclude_id is not None:
            statement = statement.where(self.model.id != exclude_id)
        result = await db.execute(statement.limit(1))
        return result.scalars().first()

    @staticmethod
    def _duplicate_error(name: str, number: Optional[int]) -> BusinessRuleError:
        number_text = "null" if number is None else str(number)
        return BusinessRuleError(f"Internal classifier with name '{name}' and number {number_text} already exists.")

    async def create(
        self, db: AsyncSession, *, obj_in: cat_schemas.InternalClassifierCreate
    ) -> cat_models.InternalClassifier:
        if await self.find_duplicate(db, name=obj_in.name, number=obj_in.number):
            raise self._duplicate_error(obj_in.name, obj_in.number)
        return await super().create(db, obj_in=obj_in)

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: cat_models.InternalClassifier,
        obj_in: Union[cat_schemas.InternalClassifierUpdate, Dict[str, Any]]
    ) -> cat_models.InternalClassifier:
        update_data = _patch_data(obj_in, required={"name"})
        name = update_data.get("name", db_obj.name)
        number = update_data.get("number", db_obj.number)
        if await self.find_duplicate(db, name=name, number=number, exclude_id=db_obj.id):
            raise self._duplicate_error(name, number)
        return await super().update(db, db_obj=db_obj, obj_in=update_data)

    async def remove(self, db: AsyncSession, *, id: int) -> Optional[cat_models.InternalClassifier]:
        if await self.get(db, id=id) is None:
            return None
        await _ensure_unreferenced(db, ArtArtefact.internal_classifier_id, id, "internal classifier")
        return await super().delete(db, id=id)


internal_classifier = CRUDInternalClassifier()
