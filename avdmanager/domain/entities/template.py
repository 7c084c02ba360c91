"""Domain entity representing an AVD host pool template."""

from dataclasses import dataclass, field
from datetime import datetime

from .enums import Environment, HostPoolType, LoadBalancerType, TemplateStatus
from .template_application import TemplateApplication


@dataclass
class Template:
    """Desired configuration of an Azure Virtual Desktop host pool."""

    id: int | None
    name: str
    description: str | None
    status: TemplateStatus
    environment: Environment
    request_date: datetime | None
    last_modified_date: datetime | None
    approved_date: datetime | None
    deployed_date: datetime | None
    deprecated_date: datetime | None
    business_unit_id: int
    contact_id: int | None
    contact_name: str | None
    contact_email: str | None
    contact_title: str | None
    naming_prefix: str
    naming_pattern: str | None
    host_pool_type: HostPoolType
    max_session_limit: int | None
    load_balancer_type: LoadBalancerType
    validation_env_enabled: bool
    regions: list[str]
    primary_region: str
    base_image_id: int | None
    tags: dict[str, str] | None
    notes: str | None
    created_by_id: int | None
    updated_by_id: int | None
    created_at: datetime | None
    updated_at: datetime | None
    applications: list[TemplateApplication] = field(default_factory=list)
    application_count: int = 0


__all__ = ["Template"]
