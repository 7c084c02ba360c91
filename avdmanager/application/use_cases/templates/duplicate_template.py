"""Use case to duplicate an existing template."""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.orm import Session

from avdmanager.application.use_cases.audit_logs import record_audit_event
from avdmanager.application.use_cases.template_history import append_template_history
from avdmanager.domain.entities import (
    Actor,
    AppApprovalStatus,
    RequestMetadata,
    Template,
    TemplateApplication,
    TemplateHistoryAction,
)
from avdmanager.domain.template_status import INITIAL_STATUS
from avdmanager.infrastructure.repositories import (
    TemplateApplicationRepository,
    TemplateRepository,
)
from avdmanager.utils import now_in_app_timezone

from .create_template import ENTITY_TYPE
from .validators import get_existing_template


def duplicate_template(
    session: Session,
    *,
    template_id: int,
    actor: Actor,
    request: RequestMetadata | None = None,
) -> Template:
    """Copy ``template_id`` into a new draft named ``"<name> (Copy)"``.

    Attached applications are copied with their install order; their
    approval starts over as pending.
    """

    template_repository = TemplateRepository(session)
    source = get_existing_template(session, template_id)

    now = now_in_app_timezone()
    duplicated = template_repository.create(
        replace(
            source,
            id=None,
            name=f"{source.name} (Copy)",
            status=INITIAL_STATUS,
            request_date=now,
            last_modified_date=now,
            approved_date=None,
            deployed_date=None,
            deprecated_date=None,
            regions=list(source.regions),
            tags=dict(source.tags) if source.tags is not None else None,
            created_by_id=actor.id,
            updated_by_id=None,
            created_at=now,
            updated_at=None,
            applications=[],
            application_count=0,
        )
    )

    if source.applications:
        TemplateApplicationRepository(session).create_many(
            [
                TemplateApplication(
                    id=None,
                    template_id=duplicated.id,
                    application_id=entry.application_id,
                    version_override=entry.version_override,
                    install_notes=entry.install_notes,
                    is_required=entry.is_required,
                    install_order=entry.install_order,
                    approval_status=AppApprovalStatus.PENDING,
                    approval_notes=None,
                    approved_at=None,
                    approved_by_id=None,
                    created_at=now,
                )
                for entry in source.applications
            ]
        )
        session.expire_all()
        duplicated = template_repository.get(duplicated.id)

    append_template_history(
        session,
        template_id=duplicated.id,
        action=TemplateHistoryAction.CREATED,
        actor=actor,
        changes={"status": duplicated.status, "source_template_id": source.id},
        comment=f"Duplicated from template: {source.name}",
    )
    record_audit_event(
        session,
        actor=actor,
        action="TEMPLATE_DUPLICATED",
        entity_type=ENTITY_TYPE,
        entity_id=duplicated.id,
        entity_name=duplicated.name,
        details={"source_template_id": source.id, "source_template_name": source.name},
        request=request,
    )
    return duplicated


__all__ = ["duplicate_template"]
