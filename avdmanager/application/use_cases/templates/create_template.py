"""Use case for creating templates."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields

from sqlalchemy.orm import Session

from avdmanager.application.use_cases.audit_logs import record_audit_event
from avdmanager.application.use_cases.template_history import append_template_history
from avdmanager.domain.entities import (
    Actor,
    Environment,
    HostPoolType,
    LoadBalancerType,
    RequestMetadata,
    Template,
    TemplateHistoryAction,
)
from avdmanager.domain.template_status import INITIAL_STATUS
from avdmanager.infrastructure.repositories import TemplateRepository
from avdmanager.utils import now_in_app_timezone

from .validators import ensure_references, ensure_regions

ENTITY_TYPE = "Template"


@dataclass
class NewTemplateData:
    """Values accepted when creating a template."""

    name: str
    business_unit_id: int
    naming_prefix: str
    regions: list[str]
    primary_region: str
    description: str | None = None
    environment: Environment = Environment.PILOT
    contact_id: int | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    contact_title: str | None = None
    naming_pattern: str | None = None
    host_pool_type: HostPoolType = HostPoolType.POOLED
    max_session_limit: int | None = None
    load_balancer_type: LoadBalancerType = LoadBalancerType.BREADTH_FIRST
    validation_env_enabled: bool = False
    base_image_id: int | None = None
    tags: dict[str, str] | None = None
    notes: str | None = None


TEMPLATE_FIELDS = tuple(f.name for f in fields(NewTemplateData))
REQUIRED_TEMPLATE_FIELDS = (
    "name",
    "business_unit_id",
    "naming_prefix",
    "regions",
    "primary_region",
    "environment",
    "host_pool_type",
    "load_balancer_type",
    "validation_env_enabled",
)


def create_template(
    session: Session,
    *,
    data: NewTemplateData,
    actor: Actor,
    request: RequestMetadata | None = None,
) -> Template:
    """Create a template in the initial status and record it in both ledgers."""

    ensure_regions(data.regions, data.primary_region)
    ensure_references(
        session,
        business_unit_id=data.business_unit_id,
        contact_id=data.contact_id,
        base_image_id=data.base_image_id,
    )

    now = now_in_app_timezone()
    template = TemplateRepository(session).create(
        Template(
            id=None,
            status=INITIAL_STATUS,
            request_date=now,
            last_modified_date=now,
            approved_date=None,
            deployed_date=None,
            deprecated_date=None,
            created_by_id=actor.id,
            updated_by_id=None,
            created_at=now,
            updated_at=None,
            **asdict(data),
        )
    )

    append_template_history(
        session,
        template_id=template.id,
        action=TemplateHistoryAction.CREATED,
        actor=actor,
        changes={"status": template.status, "name": template.name},
    )
    record_audit_event(
        session,
        actor=actor,
        action="TEMPLATE_CREATED",
        entity_type=ENTITY_TYPE,
        entity_id=template.id,
        entity_name=template.name,
        new_value=asdict(data),
        request=request,
    )
    return template


__all__ = [
    "ENTITY_TYPE",
    "NewTemplateData",
    "REQUIRED_TEMPLATE_FIELDS",
    "TEMPLATE_FIELDS",
    "create_template",
]
