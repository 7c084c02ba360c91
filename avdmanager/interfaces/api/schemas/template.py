"""Schemas for template endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from avdmanager.domain.entities import (
    AppApprovalStatus,
    Environment,
    HostPoolType,
    LoadBalancerType,
    TemplateHistoryAction,
    TemplateStatus,
)

from .application import ApplicationSummary

NAMING_PREFIX_PATTERN = r"^[a-z0-9-]+$"


class TemplateFields(BaseModel):
    description: str | None = Field(default=None, max_length=5000)
    contact_id: int | None = None
    contact_name: str | None = Field(default=None, max_length=100)
    contact_email: EmailStr | None = None
    contact_title: str | None = Field(default=None, max_length=100)
    naming_pattern: str | None = Field(default=None, max_length=100)
    max_session_limit: int | None = Field(default=None, ge=1, le=999999)
    base_image_id: int | None = None
    tags: dict[str, str] | None = None
    notes: str | None = Field(default=None, max_length=10000)


class TemplateCreate(TemplateFields):
    name: str = Field(..., min_length=1, max_length=200)
    business_unit_id: int
    naming_prefix: str = Field(
        ..., min_length=1, max_length=50, pattern=NAMING_PREFIX_PATTERN
    )
    environment: Environment = Environment.PILOT
    host_pool_type: HostPoolType = HostPoolType.POOLED
    load_balancer_type: LoadBalancerType = LoadBalancerType.BREADTH_FIRST
    validation_env_enabled: bool = False
    regions: list[str] = Field(..., min_length=1)
    primary_region: str = Field(..., min_length=1)


class TemplateUpdate(TemplateFields):
    """Partial update. Status changes go through ``PATCH /templates/{id}/status``."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    business_unit_id: int | None = None
    naming_prefix: str | None = Field(
        default=None, min_length=1, max_length=50, pattern=NAMING_PREFIX_PATTERN
    )
    environment: Environment | None = None
    host_pool_type: HostPoolType | None = None
    load_balancer_type: LoadBalancerType | None = None
    validation_env_enabled: bool | None = None
    regions: list[str] | None = Field(default=None, min_length=1)
    primary_region: str | None = Field(default=None, min_length=1)

    model_config = ConfigDict(extra="forbid")


class TemplateStatusUpdate(BaseModel):
    status: TemplateStatus
    comment: str | None = Field(default=None, max_length=1000)


class TemplateApplicationRead(BaseModel):
    id: int
    template_id: int
    application_id: int
    version_override: str | None
    install_notes: str | None
    is_required: bool
    install_order: int
    approval_status: AppApprovalStatus
    approval_notes: str | None
    approved_at: datetime | None
    approved_by_id: int | None
    created_at: datetime | None
    application: ApplicationSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class TemplateApplicationCreate(BaseModel):
    application_id: int
    version_override: str | None = Field(default=None, max_length=50)
    install_notes: str | None = Field(default=None, max_length=2000)
    is_required: bool = True
    install_order: int | None = Field(default=None, ge=0)


class TemplateApplicationUpdate(BaseModel):
    version_override: str | None = Field(default=None, max_length=50)
    install_notes: str | None = Field(default=None, max_length=2000)
    is_required: bool | None = None
    install_order: int | None = Field(default=None, ge=0)
    approval_status: AppApprovalStatus | None = None
    approval_notes: str | None = Field(default=None, max_length=2000)

    model_config = ConfigDict(extra="forbid")


class InstallOrderItem(BaseModel):
    application_id: int
    install_order: int = Field(..., ge=0)


class TemplateApplicationsReorder(BaseModel):
    applications: list[InstallOrderItem] = Field(..., min_length=1)


class TemplateRead(TemplateFields):
    id: int
    name: str
    status: TemplateStatus
    environment: Environment
    request_date: datetime | None
    last_modified_date: datetime | None
    approved_date: datetime | None
    deployed_date: datetime | None
    deprecated_date: datetime | None
    business_unit_id: int
    naming_prefix: str
    host_pool_type: HostPoolType
    load_balancer_type: LoadBalancerType
    validation_env_enabled: bool
    regions: list[str]
    primary_region: str
    created_by_id: int | None
    updated_by_id: int | None
    created_at: datetime | None
    updated_at: datetime | None
    application_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class TemplateDetailRead(TemplateRead):
    applications: list[TemplateApplicationRead] = Field(default_factory=list)


class TemplateHistoryRead(BaseModel):
    id: int
    template_id: int
    action: TemplateHistoryAction
    old_status: TemplateStatus | None
    new_status: TemplateStatus | None
    changes: dict | None
    comment: str | None
    user_id: int
    user_name: str | None
    created_at: datetime | None
    template_name: str | None = None

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "InstallOrderItem",
    "TemplateApplicationCreate",
    "TemplateApplicationRead",
    "TemplateApplicationUpdate",
    "TemplateApplicationsReorder",
    "TemplateCreate",
    "TemplateDetailRead",
    "TemplateHistoryRead",
    "TemplateRead",
    "TemplateStatusUpdate",
    "TemplateUpdate",
]
