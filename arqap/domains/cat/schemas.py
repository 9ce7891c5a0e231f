# arqap/domains/cat/schemas.py

from typing import Optional
from datetime import datetime
from pydantic import Field
from sqlmodel import SQLModel


# =============================================================================
# 1. collections
# =============================================================================
class CollectionBase(SQLModel):
    name: str = Field(..., min_length=1, max_length=255, description="Collection name")
    description: Optional[str] = Field(None, description="Description")
    year: Optional[int] = Field(None, description="Year the collection was formed")


class CollectionCreate(CollectionBase):
    pass


class CollectionUpdate(SQLModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255, description="Collection name")
    description: Optional[str] = Field(None, description="Description")
    year: Optional[int] = Field(None, description="Year the collection was formed")


class CollectionRead(CollectionBase):
    id: int = Field(..., description="Collection ID")
    created_at: datetime = Field(..., description="Row creation time")
    updated_at: datetime = Field(..., description="Row last update time")

    class Config:
        from_attributes = True


# =============================================================================
# 2. archaeologists
# =============================================================================
class ArchaeologistBase(SQLModel):
    first_name: str = Field(..., min_length=1, max_length=50, description="First name")
    last_name: str = Field(..., min_length=1, max_length=50, description="Last name")


class ArchaeologistCreate(ArchaeologistBase):
    pass


class ArchaeologistUpdate(SQLModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=50, description="First name")
    last_name: Optional[str] = Field(None, min_length=1, max_length=50, description="Last name")


class ArchaeologistRead(ArchaeologistBase):
    id: int = Field(..., description="Archaeologist ID")
    created_at: datetime = Field(..., description="Row creation time")
    updated_at: datetime = Field(..., description="Row last update time")

    class Config:
        from_attributes = True


# =============================================================================
# 3. INPL classifiers
# =============================================================================
class INPLClassifierCreate(SQLModel):
    """The record carries no fields of its own; an empty body creates one."""
    pass


class INPLClassifierRead(SQLModel):
    id: int = Field(..., description="INPL classifier ID")
    created_at: datetime = Field(..., description="Row creation time")
    updated_at: datetime = Field(..., description="Row last update time")

    class Config:
        from_attributes = True


# =============================================================================
# 4. internal classifiers
# =============================================================================
class InternalClassifierBase(SQLModel):
    number: Optional[int] = Field(None, description="Number within the classifier name")
    name: str = Field(..., min_length=1, max_length=255, description="Classifier name")


class InternalClassifierCreate(InternalClassifierBase):
    pass


class InternalClassifierUpdate(SQLModel):
    """
    Partial update. `number` may be cleared with an explicit null; `name` may not.
    """
    number: Optional[int] = Field(None, description="Number within the classifier name")
    name: Optional[str] = Field(None, min_length=1, max_length=255, description="Classifier name")


class InternalClassifierRead(InternalClassifierBase):
    id: int = Field(..., description="Internal classifier ID")
    created_at: datetime = Field(..., description="Row creation time")
    updated_at: datetime = Field(..., description="Row last update time")

    class Config:
        from_attributes = True
