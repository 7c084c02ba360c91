"""Schemas for dashboard endpoints."""

from pydantic import BaseModel, ConfigDict

from avdmanager.domain.entities import TemplateStatus

from .business_unit import BusinessUnitSummary
from .template import TemplateHistoryRead, TemplateRead


class DashboardStatsRead(BaseModel):
    total: int
    draft: int
    in_review: int
    approved: int
    deployed: int
    deprecated: int
    total_applications: int
    total_business_units: int

    model_config = ConfigDict(from_attributes=True)


class StatusCountRead(BaseModel):
    status: TemplateStatus
    count: int

    model_config = ConfigDict(from_attributes=True)


class RegionCountRead(BaseModel):
    region: str
    count: int


class BusinessUnitCountRead(BaseModel):
    business_unit: BusinessUnitSummary | None
    count: int

    model_config = ConfigDict(from_attributes=True)


class RecentActivityRead(BaseModel):
    recent_templates: list[TemplateRead]
    recent_history: list[TemplateHistoryRead]

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "BusinessUnitCountRead",
    "DashboardStatsRead",
    "RecentActivityRead",
    "RegionCountRead",
    "StatusCountRead",
]
