"""Schemas for business unit endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

BUSINESS_UNIT_CODE_PATTERN = r"^[A-Z0-9-]+$"


class BusinessUnitBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    code: str = Field(..., min_length=2, max_length=20, pattern=BUSINESS_UNIT_CODE_PATTERN)
    description: str | None = Field(default=None, max_length=500)
    is_vendor: bool = False
    vendor_company: str | None = Field(default=None, max_length=200)
    cost_center: str | None = Field(default=None, max_length=50)


class BusinessUnitCreate(BusinessUnitBase):
    is_active: bool = True


class BusinessUnitUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    code: str | None = Field(
        default=None, min_length=2, max_length=20, pattern=BUSINESS_UNIT_CODE_PATTERN
    )
    description: str | None = Field(default=None, max_length=500)
    is_vendor: bool | None = None
    vendor_company: str | None = Field(default=None, max_length=200)
    cost_center: str | None = Field(default=None, max_length=50)
    is_active: bool | None = None

    model_config = ConfigDict(extra="forbid")


class BusinessUnitRead(BusinessUnitBase):
    id: int
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None
    template_count: int = 0
    contact_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class BusinessUnitSummary(BaseModel):
    id: int
    name: str
    code: str

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "BusinessUnitCreate",
    "BusinessUnitRead",
    "BusinessUnitSummary",
    "BusinessUnitUpdate",
]
