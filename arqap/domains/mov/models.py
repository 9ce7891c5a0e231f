# arqap/domains/mov/models.py

"""
ORM models of the 'mov' domain.

A movement or loan is ACTIVE while both `return_date` and `return_time` are
null, and CLOSED once both are set. A closed row is never reopened.
"""

from typing import Optional, TYPE_CHECKING
from datetime import datetime, date, time, UTC
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

if TYPE_CHECKING:
    from arqap.domains.art.models import Artefact
    from arqap.domains.loc.models import PhysicalLocation
    from arqap.domains.req.models import Requester


# =============================================================================
# 1. internal_movements table
# =============================================================================
class InternalMovementBase(SQLModel):
    """
    Movement of one artefact between two physical locations inside the institution.
    """
    id: Optional[int] = Field(default=None, primary_key=True, description="Internal movement ID")
    movement_date: date = Field(description="Date the artefact was moved")
    movement_time: time = Field(description="Time the artefact was moved")
    return_date: Optional[date] = Field(default=None, description="Return date (null while active)")
    return_time: Optional[time] = Field(default=None, description="Return time (null while active)")
    artefact_id: int = Field(
        sa_column=Column(ForeignKey("artefacts.id", onupdate="CASCADE", ondelete="RESTRICT"), nullable=False, index=True),
        description="Moved artefact ID (FK)"
    )
    from_physical_location_id: Optional[int] = Field(
        default=None,
        sa_column=Column(ForeignKey("physical_locations.id", onupdate="CASCADE", ondelete="RESTRICT"), nullable=True),
        description="Origin physical location ID (FK)"
    )
    to_physical_location_id: Optional[int] = Field(
        default=None,
        sa_column=Column(ForeignKey("physical_locations.id", onupdate="CASCADE", ondelete="RESTRICT"), nullable=True),
        description="Destination physical location ID (FK)"
    )
    reason: Optional[str] = Field(default=None, max_length=255, description="Reason for the movement")
    observations: Optional[str] = Field(default=None, description="Observations")
    requester_id: Optional[int] = Field(
        default=None,
        sa_column=Column(ForeignKey("requesters.id", onupdate="CASCADE", ondelete="RESTRICT"), nullable=True),
        description="Requester ID (FK)"
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

    @property
    def is_active(self) -> bool:
        return self.return_date is None and self.return_time is None


class InternalMovement(InternalMovementBase, table=True):
    __tablename__ = "internal_movements"

    artefact: "Artefact" = Relationship()
    from_physical_location: Optional["PhysicalLocation"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[InternalMovement.from_physical_location_id]"}
    )
    to_physical_location: Optional["PhysicalLocation"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[InternalMovement.to_physical_location_id]"}
    )
    requester: Optional["Requester"] = Relationship()


# =============================================================================
# 2. loans table
# =============================================================================
class LoanBase(SQLModel):
    """
    Loan of an artefact to a requester. The artefact is unavailable while the loan is active.
    """
    id: Optional[int] = Field(default=None, primary_key=True, description="Loan ID")
    loan_date: date = Field(description="Loan date")
    loan_time: time = Field(description="Loan time")
    return_date: Optional[date] = Field(default=None, description="Return date (null while active)")
    return_time: Optional[time] = Field(default=None, description="Return time (null while active)")
    artefact_id: Optional[int] = Field(
        default=None,
        sa_column=Column(ForeignKey("artefacts.id", onupdate="CASCADE", ondelete="RESTRICT"), nullable=True, index=True),
        description="Loaned artefact ID (FK)"
    )
    requester_id: Optional[int] = Field(
        default=None,
        sa_column=Column(ForeignKey("requesters.id", onupdate="CASCADE", ondelete="RESTRICT"), nullable=True),
        description="Requester ID (FK)"
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

    @property
    def is_active(self) -> bool:
        return self.return_date is None and self.return_time is None


class Loan(LoanBase, table=True):
    __tablename__ = "loans"

    artefact: Optional["Artefact"] = Relationship()
    requester: Optional["Requester"] = Relationship()
