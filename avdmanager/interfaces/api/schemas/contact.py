"""Schemas for contact endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ContactBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    title: str | None = Field(default=None, max_length=100)
    department: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=30)
    is_primary: bool = False


class ContactCreate(ContactBase):
    business_unit_id: int


class ContactUpdate(BaseModel):
    """Partial update; a contact cannot move to another business unit."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    title: str | None = Field(default=None, max_length=100)
    department: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=30)
    is_primary: bool | None = None

    model_config = ConfigDict(extra="forbid")


class ContactRead(ContactBase):
    id: int
    business_unit_id: int
    created_at: datetime | None
    updated_at: datetime | None
    template_count: int = 0

    model_config = ConfigDict(from_attributes=True)


__all__ = ["ContactCreate", "ContactRead", "ContactUpdate"]
