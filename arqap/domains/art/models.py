# arqap/domains/art/models.py

"""
ORM models of the 'art' domain (artefacts and their bibliographic mentions).
"""

from typing import Optional, TYPE_CHECKING
from datetime import datetime, UTC
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

if TYPE_CHECKING:
    from arqap.domains.loc.models import PhysicalLocation
    from arqap.domains.geo.models import ArchaeologicalSite
    from arqap.domains.cat.models import Collection, Archaeologist, INPLClassifier, InternalClassifier


def _registry_fk(target: str) -> Column:
    return Column(ForeignKey(target, onupdate="CASCADE", ondelete="RESTRICT"), nullable=True)


# =============================================================================
# 1. artefacts table
# =============================================================================
class ArtefactBase(SQLModel):
    """
    Base attributes of an artefact.
    """
    id: Optional[int] = Field(default=None, primary_key=True, description="Artefact ID")
    name: str = Field(max_length=100, description="Artefact name")
    material: Optional[str] = Field(default=None, max_length=100, description="Material")
    description: Optional[str] = Field(default=None, description="Description")
    observation: Optional[str] = Field(default=None, description="Observations")

    collection_id: Optional[int] = Field(
        default=None, sa_column=_registry_fk("collections.id"), description="Collection ID (FK)"
    )
    archaeologist_id: Optional[int] = Field(
        default=None, sa_column=_registry_fk("archaeologists.id"), description="Archaeologist ID (FK)"
    )
    archaeological_site_id: Optional[int] = Field(
        default=None, sa_column=_registry_fk("archaeological_sites.id"), description="Archaeological site ID (FK)"
    )
    inpl_classifier_id: Optional[int] = Field(
        default=None, sa_column=_registry_fk("inpl_classifiers.id"), description="INPL classifier ID (FK)"
    )
    internal_classifier_id: Optional[int] = Field(
        default=None, sa_column=_registry_fk("internal_classifiers.id"), description="Internal classifier ID (FK)"
    )

    # written only by the movement and loan lifecycle after creation
    available: bool = Field(default=True, description="False while the artefact is on loan")
    physical_location_id: Optional[int] = Field(
        default=None,
        sa_column=_registry_fk("physical_locations.id"),
        description="Current physical location ID (FK)"
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


class Artefact(ArtefactBase, table=True):
    __tablename__ = "artefacts"

    physical_location: Optional["PhysicalLocation"] = Relationship(back_populates="artefacts")
    collection: Optional["Collection"] = Relationship()
    archaeologist: Optional["Archaeologist"] = Relationship()
    archaeological_site: Optional["ArchaeologicalSite"] = Relationship()
    inpl_classifier: Optional["INPLClassifier"] = Relationship()
    internal_classifier: Optional["InternalClassifier"] = Relationship()


# =============================================================================
# 2. mentions table
# =============================================================================
class MentionBase(SQLModel):
    """
    A publication or web page that mentions an artefact.
    """
    id: Optional[int] = Field(default=None, primary_key=True, description="Mention ID")
    title: str = Field(max_length=100, description="Title")
    link: str = Field(max_length=255, description="Link to the publication")
    description: Optional[str] = Field(default=None, description="Description")
    artefact_id: Optional[int] = Field(
        default=None,
        sa_column=Column(ForeignKey("artefacts.id", onupdate="CASCADE", ondelete="RESTRICT"), nullable=True),
        description="Mentioned artefact ID (FK)"
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


class Mention(MentionBase, table=True):
    __tablename__ = "mentions"

    artefact: Optional["Artefact"] = Relationship()
