# arqap/domains/loc/models.py

"""
ORM models of the 'loc' domain.
 - Shelf -> PhysicalLocation hierarchy
 - a physical location is one cell (level, column) of a shelf

Each class maps one table; relationships to other domains are declared with
string annotations and resolved once every domain's models are imported.
"""

from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, UTC
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

if TYPE_CHECKING:
    from arqap.domains.art.models import Artefact


# Every shelf is divided into LEVELS x COLUMNS cells; a work table has a single cell.
LEVELS = (1, 2, 3, 4)
COLUMNS = ("A", "B", "C", "D")
WORK_TABLE_CELL = (1, "A")


# =============================================================================
# 1. shelves table
# =============================================================================
class ShelfBase(SQLModel):
    """
    Base attributes of a shelf.
    """
    id: Optional[int] = Field(default=None, primary_key=True, description="Shelf ID")
    code: int = Field(sa_column_kwargs={"unique": True}, description="Shelf number shown on the storage room plan")
    is_work_table: bool = Field(default=False, description="Work table (single cell) instead of a shelf")
    description: Optional[str] = Field(default=None, max_length=255, description="Notes")

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


class Shelf(ShelfBase, table=True):
    __tablename__ = "shelves"

    # one shelf has many cells; cells are deleted with their shelf
    physical_locations: List["PhysicalLocation"] = Relationship(
        back_populates="shelf",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )


# =============================================================================
# 2. physical_locations table
# =============================================================================
class PhysicalLocationBase(SQLModel):
    """
    One storage cell: (shelf, level, column).
    """
    id: Optional[int] = Field(default=None, primary_key=True, description="Physical location ID")
    shelf_id: int = Field(
        sa_column=Column(ForeignKey("shelves.id", onupdate="CASCADE", ondelete="CASCADE"), nullable=False),
        description="Shelf ID (FK)"
    )
    level: int = Field(description="Shelf level, 1 to 4")
    column: str = Field(max_length=1, description="Shelf column, A to D")

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


class PhysicalLocation(PhysicalLocationBase, table=True):
    __tablename__ = "physical_locations"
    __table_args__ = (
        UniqueConstraint('shelf_id', 'level', 'column', name="uq_physical_location_cell"),
    )

    shelf: "Shelf" = Relationship(back_populates="physical_locations")
    artefacts: List["Artefact"] = Relationship(back_populates="physical_location")
