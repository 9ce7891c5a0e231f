# arqap/domains/geo/schemas.py

from typing import Optional
from datetime import datetime
from pydantic import Field
from sqlmodel import SQLModel


# =============================================================================
# 1. countries
# =============================================================================
class CountryBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=255, description="Country name")


class CountryCreate(CountryBase):
    pass


class CountryUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255, description="Country name")


class CountryRead(CountryBase):
    id: int = Field(..., description="Country ID")
    created_at: datetime = Field(..., description="Row creation time")
    updated_at: datetime = Field(..., description="Row last update time")

    class Config:
        from_attributes = True


# =============================================================================
# 2. regions
# =============================================================================
class RegionBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=255, description="Region name")
    country_id: int = Field(..., description="Country ID (FK)")


class RegionCreate(RegionBase):
    pass


class RegionUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255, description="Region name")
    country_id: Optional[int] = Field(None, description="Country ID (FK)")


class RegionRead(RegionBase):
    id: int = Field(..., description="Region ID")
    created_at: datetime = Field(..., description="Row creation time")
    updated_at: datetime = Field(..., description="Row last update time")

    class Config:
        from_attributes = True


class RegionDetail(RegionRead):
    country: Optional[CountryRead] = None


# =============================================================================
# 3. archaeological sites
# =============================================================================
class ArchaeologicalSiteBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=50, description="Site name")
    location: str = Field(..., max_length=50, description="Place name or coordinates")
    description: str = Field(..., max_length=255, description="Description")
    region_id: int = Field(..., description="Region ID (FK)")


class ArchaeologicalSiteCreate(ArchaeologicalSiteBase):
    pass


class ArchaeologicalSiteUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50, description="Site name")
    location: Optional[str] = Field(None, max_length=50, description="Place name or coordinates")
    description: Optional[str] = Field(None, max_length=255, description="Description")
    region_id: Optional[int] = Field(None, description="Region ID (FK)")


class ArchaeologicalSiteRead(ArchaeologicalSiteBase):
    id: int = Field(..., description="Archaeological site ID")
    created_at: datetime = Field(..., description="Row creation time")
    updated_at: datetime = Field(..., description="Row last update time")

    class Config:
        from_attributes = True


class ArchaeologicalSiteDetail(ArchaeologicalSiteRead):
    """Site with its region and country."""
    region: Optional[RegionDetail] = None
