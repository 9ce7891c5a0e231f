# arqap/domains/loc/schemas.py

"""
Pydantic schemas of the 'loc' domain: request bodies (create/update) and
responses (read) for shelves and physical locations.
"""

from typing import Optional, Literal
from datetime import datetime
from pydantic import Field
from sqlmodel import SQLModel

Level = Literal[1, 2, 3, 4]
Column = Literal["A", "B", "C", "D"]


# =============================================================================
# 1. shelves
# =============================================================================
class ShelfBase(SQLModel):
    code: int = Field(..., ge=1, description="Shelf number")
    is_work_table: bool = Field(False, description="Work table (single cell) instead of a shelf")
    description: Optional[str] = Field(None, max_length=255, description="Notes")


class ShelfCreate(ShelfBase):
    """
    Creating a shelf also creates its cells: 16 for a shelf, one (1, "A") for a work table.
    """
    pass


class ShelfUpdate(SQLModel):
    """
    Partial update. `is_work_table` is fixed at creation because the cell layout depends on it.
    """
    code: Optional[int] = Field(None, ge=1, description="Shelf number")
    description: Optional[str] = Field(None, max_length=255, description="Notes")


class ShelfRead(ShelfBase):
    id: int = Field(..., description="Shelf ID")
    created_at: datetime = Field(..., description="Row creation time")
    updated_at: datetime = Field(..., description="Row last update time")

    class Config:
        from_attributes = True


# =============================================================================
# 2. physical_locations
# =============================================================================
class PhysicalLocationBase(SQLModel):
    shelf_id: int = Field(..., description="Shelf ID (FK)")
    level: Level = Field(..., description="Shelf level, 1 to 4")
    column: Column = Field(..., description="Shelf column, A to D")


class PhysicalLocationCreate(PhysicalLocationBase):
    """
    Physical locations are immutable; there is no update schema.
    """
    pass


class PhysicalLocationRead(PhysicalLocationBase):
    id: int = Field(..., description="Physical location ID")
    created_at: datetime = Field(..., description="Row creation time")
    updated_at: datetime = Field(..., description="Row last update time")

    class Config:
        from_attributes = True


class PhysicalLocationDetail(PhysicalLocationRead):
    """Physical location with its shelf, used when nested in movement responses."""
    shelf: Optional[ShelfRead] = None
