# arqap/domains/cat/models.py

"""
ORM models of the 'cat' domain.
"""

from typing import Optional
from datetime import datetime, UTC
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


# =============================================================================
# 1. collections table
# =============================================================================
class CollectionBase(SQLModel):
    id: Optional[int] = Field(default=None, primary_key=True, description="Collection ID")
    name: str = Field(max_length=255, description="Collection name")
    description: Optional[str] = Field(default=None, description="Description")
    year: Optional[int] = Field(default=None, description="Year the collection was formed")

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


class Collection(CollectionBase, table=True):
    __tablename__ = "collections"


# =============================================================================
# 2. archaeologists table
# =============================================================================
class ArchaeologistBase(SQLModel):
    id: Optional[int] = Field(default=None, primary_key=True, description="Archaeologist ID")
    first_name: str = Field(max_length=50, description="First name")
    last_name: str = Field(max_length=50, description="Last name")

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


class Archaeologist(ArchaeologistBase, table=True):
    __tablename__ = "archaeologists"


# =============================================================================
# 3. inpl_classifiers table
# =============================================================================
class INPLClassifierBase(SQLModel):
    """
    A national registry (INPL) record. Its scanned forms are kept outside
    this service; the row only anchors the artefact's reference.
    """
    id: Optional[int] = Field(default=None, primary_key=True, description="INPL classifier ID")

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


class INPLClassifier(INPLClassifierBase, table=True):
    __tablename__ = "inpl_classifiers"


# =============================================================================
# 4. internal_classifiers table
# =============================================================================
class InternalClassifierBase(SQLModel):
    id: Optional[int] = Field(default=None, primary_key=True, description="Internal classifier ID")
    number: Optional[int] = Field(default=None, description="Number within the classifier name")
    name: str = Field(max_length=255, description="Classifier name")

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


class InternalClassifier(InternalClassifierBase, table=True):
    __tablename__ = "internal_classifiers"
    __table_args__ = (
        UniqueConstraint('name', 'number', name="uq_internal_classifier_name_number"),
    )
