# arqap/domains/req/schemas.py

from typing import Optional, Literal
from datetime import datetime
from pydantic import Field
from sqlmodel import SQLModel

RequesterType = Literal["investigator", "department", "exhibition"]


class RequesterBase(SQLModel):
    type: RequesterType = Field(..., description="investigator, department or exhibition")
    first_name: Optional[str] = Field(None, max_length=100, description="First name")
    last_name: Optional[str] = Field(None, max_length=100, description="Last name")
    dni: Optional[str] = Field(None, max_length=20, description="National ID number (unique)")
    email: Optional[str] = Field(None, max_length=255, description="Email")
    phone_number: Optional[str] = Field(None, max_length=50, description="Phone number")


class RequesterCreate(RequesterBase):
    pass


class RequesterUpdate(RequesterBase):
    """Partial update; every field is optional."""
    type: Optional[RequesterType] = Field(None, description="investigator, department or exhibition")


class RequesterRead(RequesterBase):
    id: int = Field(..., description="Requester ID")
    created_at: datetime = Field(..., description="Row creation time")
    updated_at: datetime = Field(..., description="Row last update time")

    class Config:
        from_attributes = True
