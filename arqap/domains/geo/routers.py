# arqap/domains/geo/routers.py

"""
API endpoints of the 'geo' domain.

- countries: `/countries/`
- regions: `/regions/` (filter `country_id`)
- archaeological sites: `/archaeological_sites/` (filter `region_id`)
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from arqap.core import dependencies as deps
from arqap.domains.geo import crud as geo_crud
from arqap.domains.geo import schemas as geo_schemas

router = APIRouter(
    tags=["Geography"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. countries
# =============================================================================
@router.post("/countries/", response_model=geo_schemas.CountryRead, status_code=status.HTTP_201_CREATED, summary="Create a country")
async def create_country(
    country_create: geo_schemas.CountryCreate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await geo_crud.country.create(db=db, obj_in=country_create)


@router.get("/countries/", response_model=List[geo_schemas.CountryRead], summary="List countries")
async def read_countries(
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await geo_crud.country.get_multi(db, skip=skip, limit=limit)


@router.get("/countries/{country_id}", response_model=geo_schemas.CountryRead, summary="Get a country")
async def read_country(
    country_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_country = await geo_crud.country.get(db, id=country_id)
    if db_country is None:
        raise HTTPException(status_code=404, detail="Country not found")
    return db_country


@router.put("/countries/{country_id}", response_model=geo_schemas.CountryRead, summary="Update a country")
async def update_country(
    country_id: int,
    country_update: geo_schemas.CountryUpdate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_country = await geo_crud.country.get(db, id=country_id)
    if db_country is None:
        raise HTTPException(status_code=404, detail="Country not found")
    return await geo_crud.country.update(db=db, db_obj=db_country, obj_in=country_update)


@router.delete("/countries/{country_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a country")
async def delete_country(
    country_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_country = await geo_crud.country.remove(db, id=country_id)
    if db_country is None:
        raise HTTPException(status_code=404, detail="Country not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# 2. regions
# =============================================================================
@router.post("/regions/", response_model=geo_schemas.RegionRead, status_code=status.HTTP_201_CREATED, summary="Create a region")
async def create_region(
    region_create: geo_schemas.RegionCreate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await geo_crud.region.create(db=db, obj_in=region_create)


@router.get("/regions/", response_model=List[geo_schemas.RegionRead], summary="List regions")
async def read_regions(
    country_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    - `country_id`: only regions of this country
    """
    return await geo_crud.region.get_filtered(
        db, filters={"country_id": country_id}, order_desc=False, skip=skip, limit=limit
    )


@router.get("/regions/{region_id}", response_model=geo_schemas.RegionDetail, summary="Get a region")
async def read_region(
    region_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_region = await geo_crud.region.get_with_country(db, id=region_id)
    if db_region is None:
        raise HTTPException(status_code=404, detail="Region not found")
    return db_region


@router.put("/regions/{region_id}", response_model=geo_schemas.RegionRead, summary="Update a region")
async def update_region(
    region_id: int,
    region_update: geo_schemas.RegionUpdate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_region = await geo_crud.region.get(db, id=region_id)
    if db_region is None:
        raise HTTPException(status_code=404, detail="Region not found")
    return await geo_crud.region.update(db=db, db_obj=db_region, obj_in=region_update)


@router.delete("/regions/{region_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a region")
async def delete_region(
    region_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_region = await geo_crud.region.remove(db, id=region_id)
    if db_region is None:
        raise HTTPException(status_code=404, detail="Region not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# 3. archaeological sites
# =============================================================================
@router.post("/archaeological_sites/", response_model=geo_schemas.ArchaeologicalSiteRead, status_code=status.HTTP_201_CREATED, summary="Create an archaeological site")
async def create_archaeological_site(
    site_create: geo_schemas.ArchaeologicalSiteCreate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    return await geo_crud.archaeological_site.create(db=db, obj_in=site_create)


@router.get("/archaeological_sites/", response_model=List[geo_schemas.ArchaeologicalSiteDetail], summary="List archaeological sites")
async def read_archaeological_sites(
    region_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    Sites with their region and country.
    - `region_id`: only sites of this region
    """
    return await geo_crud.archaeological_site.get_multi_with_region(
        db, region_id=region_id, skip=skip, limit=limit
    )


@router.get("/archaeological_sites/{site_id}", response_model=geo_schemas.ArchaeologicalSiteDetail, summary="Get an archaeological site")
async def read_archaeological_site(
    site_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_site = await geo_crud.archaeological_site.get_with_region(db, id=site_id)
    if db_site is None:
        raise HTTPException(status_code=404, detail="Archaeological site not found")
    return db_site


@router.put("/archaeological_sites/{site_id}", response_model=geo_schemas.ArchaeologicalSiteRead, summary="Update an archaeological site")
async def update_archaeological_site(
    site_id: int,
    site_update: geo_schemas.ArchaeologicalSiteUpdate,
    db: AsyncSession = Depends(deps.get_db_session)
):
    db_site = await geo_crud.archaeological_site.get(db, id=site_id)
    if db_site is None:
        raise HTTPException(status_code=404, detail="Archaeological site not found")
    return await geo_crud.archaeological_site.update(db=db, db_obj=db_site, obj_in=site_update)


@router.delete("/archaeological_sites/{site_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an archaeological site")
async def delete_archaeological_site(
    site_id: int,
    db: AsyncSession = Depends(deps.get_db_session)
):
    """
    Returns 409 while artefacts reference the site.
    """
    db_site = await geo_crud.archaeological_site.remove(db, id=site_id)
    if db_site is None:
        raise HTTPException(status_code=404, detail="Archaeological site not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
