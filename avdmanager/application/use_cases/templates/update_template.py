"""Use case for updating template attributes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from avdmanager.application.use_cases._changes import apply_changes, split_diff
from avdmanager.application.use_cases.audit_logs import record_audit_event
from avdmanager.application.use_cases.template_history import append_template_history
from avdmanager.domain.entities import (
    Actor,
    RequestMetadata,
    Template,
    TemplateHistoryAction,
)
from avdmanager.infrastructure.repositories import TemplateRepository
from avdmanager.utils import now_in_app_timezone

from .create_template import ENTITY_TYPE, REQUIRED_TEMPLATE_FIELDS, TEMPLATE_FIELDS
from .validators import ensure_references, ensure_regions, get_existing_template


def update_template(
    session: Session,
    *,
    template_id: int,
    changes: Mapping[str, Any],
    actor: Actor,
    request: RequestMetadata | None = None,
) -> Template:
    """Apply a partial update to a template.

    Status is not updatable here; it only moves through
    :func:`update_template_status`. Nothing is written when no value
    actually changes.

    Raises:
        NotFoundError: If the template or a newly referenced entity is missing.
        ValueError: If the primary region is not one of the regions.
    """

    if "status" in changes:
        raise ValueError("Status can only be changed through the status endpoint")

    current = get_existing_template(session, template_id)
    updated, diff = apply_changes(
        current, changes, allowed=TEMPLATE_FIELDS, required=REQUIRED_TEMPLATE_FIELDS
    )
    ensure_regions(updated.regions, updated.primary_region)
    ensure_references(
        session,
        business_unit_id=updated.business_unit_id if "business_unit_id" in diff else None,
        contact_id=updated.contact_id if "contact_id" in diff else None,
        base_image_id=updated.base_image_id if "base_image_id" in diff else None,
    )
    if not diff:
        return current

    now = now_in_app_timezone()
    saved = TemplateRepository(session).update(
        replace(updated, last_modified_date=now, updated_by_id=actor.id, updated_at=now)
    )

    append_template_history(
        session,
        template_id=saved.id,
        action=TemplateHistoryAction.UPDATED,
        actor=actor,
        changes=diff,
    )
    old_value, new_value = split_diff(diff)
    record_audit_event(
        session,
        actor=actor,
        action="TEMPLATE_UPDATED",
        entity_type=ENTITY_TYPE,
        entity_id=saved.id,
        entity_name=saved.name,
        old_value=old_value,
        new_value=new_value,
        request=request,
    )
    return saved


__all__ = ["update_template"]
