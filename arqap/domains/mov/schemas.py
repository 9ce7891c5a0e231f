# arqap/domains/mov/schemas.py

"""
Pydantic schemas of the 'mov' domain (internal movements and loans).
"""

from typing import Optional
from datetime import datetime, date, time
from pydantic import Field
from sqlmodel import SQLModel

from arqap.domains.art.schemas import ArtefactWithClassifier
from arqap.domains.loc.schemas import PhysicalLocationDetail
from arqap.domains.req.schemas import RequesterRead


# =============================================================================
# 1. internal movements
# =============================================================================
class InternalMovementBase(SQLModel):
    movement_date: date = Field(..., description="Date the artefact was moved")
    movement_time: time = Field(..., description="Time the artefact was moved")
    return_date: Optional[date] = Field(None, description="Return date (null while active)")
    return_time: Optional[time] = Field(None, description="Return time (null while active)")
    artefact_id: int = Field(..., description="Moved artefact ID (FK)")
    from_physical_location_id: Optional[int] = Field(
        None, description="Origin; defaults to the artefact's current location when omitted"
    )
    to_physical_location_id: Optional[int] = Field(None, description="Destination physical location ID (FK)")
    reason: Optional[str] = Field(None, max_length=255, description="Reason for the movement")
    observations: Optional[str] = Field(None, description="Observations")
    requester_id: Optional[int] = Field(None, description="Requester ID (FK)")


class InternalMovementCreate(InternalMovementBase):
    pass


class InternalMovementUpdate(SQLModel):
    """
    Partial update. Sending both `return_date` and `return_time` on an active
    movement closes it and returns the artefact to its original location.
    The artefact of a movement cannot be changed.
    """
    movement_date: Optional[date] = Field(None, description="Date the artefact was moved")
    movement_time: Optional[time] = Field(None, description="Time the artefact was moved")
    return_date: Optional[date] = Field(None, description="Return date")
    return_time: Optional[time] = Field(None, description="Return time")
    from_physical_location_id: Optional[int] = Field(None, description="Origin physical location ID (FK)")
    to_physical_location_id: Optional[int] = Field(None, description="Destination physical location ID (FK)")
    reason: Optional[str] = Field(None, max_length=255, description="Reason for the movement")
    observations: Optional[str] = Field(None, description="Observations")
    requester_id: Optional[int] = Field(None, description="Requester ID (FK)")


class InternalMovementRead(InternalMovementBase):
    id: int = Field(..., description="Internal movement ID")
    created_at: datetime = Field(..., description="Row creation time")
    updated_at: datetime = Field(..., description="Row last update time")

    artefact: Optional[ArtefactWithClassifier] = None
    from_physical_location: Optional[PhysicalLocationDetail] = None
    to_physical_location: Optional[PhysicalLocationDetail] = None
    requester: Optional[RequesterRead] = None

    class Config:
        from_attributes = True


# =============================================================================
# 2. loans
# =============================================================================
class LoanBase(SQLModel):
    loan_date: date = Field(..., description="Loan date")
    loan_time: time = Field(..., description="Loan time")
    return_date: Optional[date] = Field(None, description="Return date (null while active)")
    return_time: Optional[time] = Field(None, description="Return time (null while active)")
    artefact_id: Optional[int] = Field(None, description="Loaned artefact ID (FK)")
    requester_id: Optional[int] = Field(None, description="Requester ID (FK)")


class LoanCreate(LoanBase):
    pass


class LoanUpdate(SQLModel):
    """
    Partial update. Any update of a loan marks its artefact available again.
    """
    loan_date: Optional[date] = Field(None, description="Loan date")
    loan_time: Optional[time] = Field(None, description="Loan time")
    return_date: Optional[date] = Field(None, description="Return date")
    return_time: Optional[time] = Field(None, description="Return time")
    requester_id: Optional[int] = Field(None, description="Requester ID (FK)")


class LoanRead(LoanBase):
    id: int = Field(..., description="Loan ID")
    created_at: datetime = Field(..., description="Row creation time")
    updated_at: datetime = Field(..., description="Row last update time")

    artefact: Optional[ArtefactWithClassifier] = None
    requester: Optional[RequesterRead] = None

    class Config:
        from_attributes = True
