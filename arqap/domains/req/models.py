# arqap/domains/req/models.py

"""
ORM model of the 'req' domain (requesters).
"""

from typing import Optional
from datetime import datetime, UTC
from sqlmodel import Field, SQLModel, Column
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


REQUESTER_TYPES = ("investigator", "department", "exhibition")


# =============================================================================
# 1. requesters table
# =============================================================================
class RequesterBase(SQLModel):
    id: Optional[int] = Field(default=None, primary_key=True, description="Requester ID")
    type: str = Field(max_length=20, description="investigator, department or exhibition")
    first_name: Optional[str] = Field(default=None, max_length=100, description="First name")
    last_name: Optional[str] = Field(default=None, max_length=100, description="Last name")
    dni: Optional[str] = Field(default=None, max_length=20, sa_column_kwargs={"unique": True}, description="National ID number")
    email: Optional[str] = Field(default=None, max_length=255, description="Email")
    phone_number: Optional[str] = Field(default=None, max_length=50, description="Phone number")

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


class Requester(RequesterBase, table=True):
    __tablename__ = "requesters"
