# arqap/domains/art/schemas.py

"""
Pydantic schemas of the 'art' domain.

`ArtefactUpdate` deliberately has no `available` or `physical_location_id`:
after creation those two fields change only through movements and loans.
"""

from typing import Optional
from datetime import datetime
from pydantic import Field
from sqlmodel import SQLModel

from arqap.domains.loc.schemas import PhysicalLocationDetail
from arqap.domains.geo.schemas import ArchaeologicalSiteDetail
from arqap.domains.cat.schemas import (
    CollectionRead, ArchaeologistRead, INPLClassifierRead, InternalClassifierRead
)


# =============================================================================
# 1. artefacts
# =============================================================================
class ArtefactBase(SQLModel):
    name: str = Field(..., max_length=100, description="Artefact name")
    material: Optional[str] = Field(None, max_length=100, description="Material")
    description: Optional[str] = Field(None, description="Description")
    observation: Optional[str] = Field(None, description="Observations")
    collection_id: Optional[int] = Field(None, description="Collection ID (FK)")
    archaeologist_id: Optional[int] = Field(None, description="Archaeologist ID (FK)")
    archaeological_site_id: Optional[int] = Field(None, description="Archaeological site ID (FK)")
    inpl_classifier_id: Optional[int] = Field(None, description="INPL classifier ID (FK)")
    internal_classifier_id: Optional[int] = Field(None, description="Internal classifier ID (FK)")


class ArtefactCreate(ArtefactBase):
    """
    Initial placement and availability may be given at creation time.
    """
    available: bool = Field(True, description="Available for loan")
    physical_location_id: Optional[int] = Field(None, description="Initial physical location ID (FK)")


class ArtefactUpdate(SQLModel):
    """
    Partial update of the descriptive fields and registry references.
    """
    name: Optional[str] = Field(None, max_length=100, description="Artefact name")
    material: Optional[str] = Field(None, max_length=100, description="Material")
    description: Optional[str] = Field(None, description="Description")
    observation: Optional[str] = Field(None, description="Observations")
    collection_id: Optional[int] = Field(None, description="Collection ID (FK)")
    archaeologist_id: Optional[int] = Field(None, description="Archaeologist ID (FK)")
    archaeological_site_id: Optional[int] = Field(None, description="Archaeological site ID (FK)")
    inpl_classifier_id: Optional[int] = Field(None, description="INPL classifier ID (FK)")
    internal_classifier_id: Optional[int] = Field(None, description="Internal classifier ID (FK)")


class ArtefactRead(ArtefactBase):
    id: int = Field(..., description="Artefact ID")
    available: bool = Field(..., description="False while on loan")
    physical_location_id: Optional[int] = Field(None, description="Current physical location ID")
    created_at: datetime = Field(..., description="Row creation time")
    updated_at: datetime = Field(..., description="Row last update time")

    class Config:
        from_attributes = True


class ArtefactWithClassifier(ArtefactRead):
    """Artefact as embedded in movement and loan responses."""
    internal_classifier: Optional[InternalClassifierRead] = None


class ArtefactDetail(ArtefactRead):
    """Artefact with its location, registries and site hierarchy."""
    physical_location: Optional[PhysicalLocationDetail] = None
    collection: Optional[CollectionRead] = None
    archaeologist: Optional[ArchaeologistRead] = None
    archaeological_site: Optional[ArchaeologicalSiteDetail] = None
    inpl_classifier: Optional[INPLClassifierRead] = None
    internal_classifier: Optional[InternalClassifierRead] = None


# =============================================================================
# 2. mentions
# =============================================================================
class MentionBase(SQLModel):
    title: str = Field(..., min_length=1, max_length=100, description="Title")
    link: str = Field(..., min_length=1, max_length=255, description="Link to the publication")
    description: Optional[str] = Field(None, description="Description")
    artefact_id: Optional[int] = Field(None, description="Mentioned artefact ID (FK)")


class MentionCreate(MentionBase):
    pass


class MentionUpdate(SQLModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100, description="Title")
    link: Optional[str] = Field(None, min_length=1, max_length=255, description="Link to the publication")
    description: Optional[str] = Field(None, description="Description")
    artefact_id: Optional[int] = Field(None, description="Mentioned artefact ID (FK)")


class MentionRead(MentionBase):
    id: int = Field(..., description="Mention ID")
    created_at: datetime = Field(..., description="Row creation time")
    updated_at: datetime = Field(..., description="Row last update time")

    class Config:
        from_attributes = True
