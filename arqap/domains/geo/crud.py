# arqap/domains/geo/crud.py

"""
CRUD logic of the 'geo' domain.

Parents must exist before children point at them, and a row is not deleted
while something still references it.
"""

from typing import List, Union, Dict, Any, Optional

from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.core.crud_base import CRUDBase
from arqap.core.exceptions import NotFoundError, ReferenceConflictError
from . import models as geo_models
from . import schemas as geo_schemas
from arqap.domains.art.models import Artefact as ArtArtefact


def _non_null(obj_in) -> Dict[str, Any]:
    """Every geo column is required, so null fields in a patch are skipped."""
    data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
    return {key: value for key, value in data.items() if value is not None}


# =============================================================================
# 1. Country CRUD
# =============================================================================
class CRUDCountry(
    CRUDBase[
        geo_models.Country,
        geo_schemas.CountryCreate,
        geo_schemas.CountryUpdate
    ]
):
    def __init__(self):
        super().__init__(model=geo_models.Country)

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: geo_models.Country,
        obj_in: Union[geo_schemas.CountryUpdate, Dict[str, Any]]
    ) -> geo_models.Country:
        return await super().update(db, db_obj=db_obj, obj_in=_non_null(obj_in))

    async def remove(self, db: AsyncSession, *, id: int) -> Optional[geo_models.Country]:
        """Deletes a country. Refused while regions belong to it."""
        db_obj = await self.get(db, id=id)
        if db_obj is None:
            return None

        check_query = select(geo_models.Region.id).where(geo_models.Region.country_id == id).limit(1)
        if (await db.execute(check_query)).first():
            raise ReferenceConflictError(f"Cannot delete country {id}: regions belong to it.")
        return await super().delete(db, id=id)


country = CRUDCountry()


# =============================================================================
# 2. Region CRUD
# =============================================================================
class CRUDRegion(
    CRUDBase[
        geo_models.Region,
        geo_schemas.RegionCreate,
        geo_schemas.RegionUpdate
    ]
):
    def __init__(self):
        super().__init__(model=geo_models.Region)

    async def _ensure_country(self, db: AsyncSession, country_id: Optional[int]) -> None:
        if country_id is not None and await db.get(geo_models.Country, country_id) is None:
            raise NotFoundError(f"Country {country_id} not found.")

    async def get_with_country(self, db: AsyncSession, *, id: int) -> Optional[geo_models.Region]:
        statement = (
            select(self.model)
            .where(self.model.id == id)
            .options(selectinload(self.model.country))
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        return result.scalars().one_or_none()

    async def create(self, db: AsyncSession, *, obj_in: geo_schemas.RegionCreate) -> geo_models.Region:
        await self._ensure_country(db, obj_in.country_id)
        return await super().create(db, obj_in=obj_in)

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: geo_models.Region,
        obj_in: Union[geo_schemas.RegionUpdate, Dict[str, Any]]
    ) -> geo_models.Region:
        update_data = _non_null(obj_in)
        await self._ensure_country(db, update_data.get("country_id"))
        return await super().update(db, db_obj=db_obj, obj_in=update_data)

    async def remove(self, db: AsyncSession, *, id: int) -> Optional[geo_models.Region]:
        """Deletes a region. Refused while archaeological sites belong to it."""
        db_obj = await self.get(db, id=id)
        if db_obj is None:
            return None

        check_query = select(geo_models.ArchaeologicalSite.id).where(
            geo_models.ArchaeologicalSite.region_id == id
        ).limit(1)
        if (await db.execute(check_query)).first():
            raise ReferenceConflictError(f"Cannot delete region {id}: archaeological sites belong to it.")
        return await super().delete(db, id=id)


region = CRUDRegion()


# =============================================================================
# 3. ArchaeologicalSite CRUD
# =============================================================================
class CRUDArchaeologicalSite(
    CRUDBase[
        geo_models.ArchaeologicalSite,
        geo_schemas.ArchaeologicalSiteCreate,
        geo_schemas.ArchaeologicalSiteUpdate
    ]
):
    def __init__(self):
        super().__init__(model=geo_models.ArchaeologicalSite)

    def _with_region(self, statement):
        return statement.options(
            selectinload(self.model.region).selectinload(geo_models.Region.country)
        ).execution_options(populate_existing=True)

    async def _ensure_region(self, db: AsyncSession, region_id: Optional[int]) -> None:
        if region_id is not None and await db.get(geo_models.Region, region_id) is None:
            raise NotFoundError(f"Region {region_id} not found.")

    async def get_with_region(self, db: AsyncSession, *, id: int) -> Optional[geo_models.ArchaeologicalSite]:
        result = await db.execute(self._with_region(select(self.model).where(self.model.id == id)))
        return result.scalars().one_or_none()

    async def get_multi_with_region(
        self, db: AsyncSession, *, region_id: Optional[int] = None, skip: int = 0, limit: int = 100
    ) -> List[geo_models.ArchaeologicalSite]:
        """Sites with their region and country, optionally of one region."""
        statement = select(self.model)
        if region_id is not None:
            statement = statement.where(self.model.region_id == region_id)
        statement = self._with_region(statement.order_by(self.model.id).offset(skip).limit(limit))
        result = await db.execute(statement)
        return result.scalars().all()

    async def create(
        self, db: AsyncSession, *, obj_in: geo_schemas.ArchaeologicalSiteCreate
    ) -> geo_models.ArchaeologicalSite:
        await self._ensure_region(db, obj_in.region_id)
        return await super().create(db, obj_in=obj_in)

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: geo_models.ArchaeologicalSite,
        obj_in: Union[geo_schemas.ArchaeologicalSiteUpdate, Dict[str, Any]]
    ) -> geo_models.ArchaeologicalSite:
        update_data = _non_null(obj_in)
        await self._ensure_region(db, update_data.get("region_id"))
        return await super().update(db, db_obj=db_obj, obj_in=update_data)

    async def remove(self, db: AsyncSession, *, id: int) -> Optional[geo_models.ArchaeologicalSite]:
        """Deletes a site. Refused while artefacts come from it."""
        db_obj = await self.get(db, id=id)
        if db_obj is None:
            return None

        check_query = select(ArtArtefact.id).where(ArtArtefact.archaeological_site_id == id).limit(1)
        if (await db.execute(check_query)).first():
            raise ReferenceConflictError(f"Cannot delete archaeological site {id}: artefacts reference it.")
        return await super().delete(db, id=id)


archaeological_site = CRUDArchaeologicalSite()
