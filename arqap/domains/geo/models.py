# arqap/domains/geo/models.py

"""
ORM models of the 'geo' domain.
 - Country -> Region -> ArchaeologicalSite hierarchy
"""

from typing import Optional, List
from datetime import datetime, UTC
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


# =============================================================================
# 1. countries table
# =============================================================================
class CountryBase(SQLModel):
    id: Optional[int] = Field(default=None, primary_key=True, description="Country ID")
    name: str = Field(max_length=255, description="Country name")

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="Row creation time"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()),
        description="Row last update time"
    )


class Country(CountryBase, table=True):
    __tablename__ = "countries"

    regions: List["Region"] = Relationship(back_populates="country")


# =============================================================================
# 2. regions table
# =============================================================================
class RegionBase(SQLModel):
    id: Optional[int] = Field(default=None, primary_key=True, description="Region ID")
    name: str = Field(max_length=255, description="Region name")
    country_id: int = Field(
        sa_column=Column(ForeignKey("countries.id", onupdate="CASCADE", ondelete="RESTRICT"), nullable=False),
        description="Country ID (FK)"
    )

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="Row creation time"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()),
        description="Row last update time"
    )


class Region(RegionBase, table=True):
    __tablename__ = "regions"

    country: "Country" = Relationship(back_populates="regions")
    archaeological_sites: List["ArchaeologicalSite"] = Relationship(back_populates="region")


# =============================================================================
# 3. archaeological_sites table
# =============================================================================
class ArchaeologicalSiteBase(SQLModel):
    id: Optional[int] = Field(default=None, primary_key=True, description="Archaeological site ID")
    name: str = Field(max_length=50, description="Site name")
    location: str = Field(max_length=50, description="Place name or coordinates")
    description: str = Field(max_length=255, description="Description")
    region_id: int = Field(
        sa_column=Column(ForeignKey("regions.id", onupdate="CASCADE", ondelete="RESTRICT"), nullable=False),
        description="Region ID (FK)"
    )

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="Row creation time"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()),
        description="Row last update time"
    )


class ArchaeologicalSite(ArchaeologicalSiteBase, table=True):
    __tablename__ = "archaeological_sites"

    region: "Region" = Relationship(back_populates="archaeological_sites")
