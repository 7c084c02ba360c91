"""Use cases for the applications attached to a template."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from avdmanager.application.errors import ConflictError, NotFoundError
from avdmanager.application.use_cases._changes import apply_changes, split_diff
from avdmanager.application.use_cases.audit_logs import record_audit_event
from avdmanager.application.use_cases.template_history import append_template_history
from avdmanager.domain.entities import (
    Actor,
    AppApprovalStatus,
    RequestMetadata,
    TemplateApplication,
    TemplateHistoryAction,
)
from avdmanager.infrastructure.repositories import (
    ApplicationRepository,
    TemplateApplicationRepository,
)
from avdmanager.utils import now_in_app_timezone

from .create_template import ENTITY_TYPE
from .validators import get_existing_template

UPDATABLE_FIELDS = (
    "version_override",
    "install_notes",
    "is_required",
    "install_order",
    "approval_status",
    "approval_notes",
)

REQUIRED_FIELDS = ("is_required", "install_order", "approval_status")


@dataclass(frozen=True)
class InstallOrderChange:
    application_id: int
    install_order: int


def list_template_applications(
    session: Session, template_id: int
) -> list[TemplateApplication]:
    get_existing_template(session, template_id)
    return TemplateApplicationRepository(session).list_for_template(template_id)


def add_template_application(
    session: Session,
    *,
    template_id: int,
    application_id: int,
    actor: Actor,
    install_order: int | None = None,
    version_override: str | None = None,
    install_notes: str | None = None,
    is_required: bool = True,
    request: RequestMetadata | None = None,
) -> TemplateApplication:
    """Attach an application to a template.

    Without an explicit ``install_order`` the application goes last.

    Raises:
        NotFoundError: If the template or application does not exist.
        ConflictError: If the application is already attached or the install
            order is taken.
    """

    template = get_existing_template(session, template_id)
    application = ApplicationRepository(session).get(application_id)
    if application is None:
        raise NotFoundError("Application not found")

    repository = TemplateApplicationRepository(session)
    if repository.get(template_id, application_id) is not None:
        raise ConflictError("Application already exists in template")
    if install_order is None:
        install_order = repository.next_install_order(template_id)
    elif repository.get_by_install_order(template_id, install_order) is not None:
        raise ConflictError(f"Install order {install_order} is already taken")

    try:
        entry = repository.create(
            TemplateApplication(
                id=None,
                template_id=template_id,
                application_id=application_id,
                version_override=version_override,
                install_notes=install_notes,
                is_required=is_required,
                install_order=install_order,
                approval_status=AppApprovalStatus.PENDING,
                approval_notes=None,
                approved_at=None,
                approved_by_id=None,
                created_at=now_in_app_timezone(),
            )
        )
    except IntegrityError as exc:
        raise ConflictError("Application already exists in template") from exc

    append_template_history(
        session,
        template_id=template_id,
        action=TemplateHistoryAction.APP_ADDED,
        actor=actor,
        changes={
            "application_id": application_id,
            "application_name": application.display_name,
            "install_order": install_order,
        },
    )
    record_audit_event(
        session,
        actor=actor,
        action="TEMPLATE_APPLICATION_ADDED",
        entity_type=ENTITY_TYPE,
        entity_id=template_id,
        entity_name=template.name,
        details={
            "application_id": application_id,
            "application_name": application.display_name,
            "install_order": install_order,
        },
        request=request,
    )
    return entry


def update_template_application(
    session: Session,
    *,
    template_id: int,
    application_id: int,
    changes: Mapping[str, Any],
    actor: Actor,
    request: RequestMetadata | None = None,
) -> TemplateApplication:
    """Update an attachment; approving it records who approved it and when."""

    template = get_existing_template(session, template_id)
    repository = TemplateApplicationRepository(session)
    current = repository.get(template_id, application_id)
    if current is None:
        raise NotFoundError("Application is not attached to this template")

    updated, diff = apply_changes(
        current, changes, allowed=UPDATABLE_FIELDS, required=REQUIRED_FIELDS
    )
    if "install_order" in diff:
        holder = repository.get_by_install_order(template_id, updated.install_order)
        if holder is not None and holder.application_id != application_id:
            raise ConflictError(f"Install order {updated.install_order} is already taken")
    if not diff:
        return current

    if "approval_status" in diff:
        if updated.approval_status == AppApprovalStatus.APPROVED:
            updated.approved_at = now_in_app_timezone()
            updated.approved_by_id = actor.id
        else:
            updated.approved_at = None
            updated.approved_by_id = None

    saved = repository.update(updated)
    old_value, new_value = split_diff(diff)
    record_audit_event(
        session,
        actor=actor,
        action="TEMPLATE_APPLICATION_UPDATED",
        entity_type=ENTITY_TYPE,
        entity_id=template_id,
        entity_name=template.name,
        details={"application_id": application_id},
        old_value=old_value,
        new_value=new_value,
        request=request,
    )
    return saved


def remove_template_application(
    session: Session,
    *,
    template_id: int,
    application_id: int,
    actor: Actor,
    request: RequestMetadata | None = None,
) -> None:
    template = get_existing_template(session, template_id)
    repository = TemplateApplicationRepository(session)
    current = repository.get(template_id, application_id)
    if current is None:
        raise NotFoundError("Application is not attached to this template")

    repository.delete(template_id, application_id)
    application_name = current.application.display_name if current.application else None
    append_template_history(
        session,
        template_id=template_id,
        action=TemplateHistoryAction.APP_REMOVED,
        actor=actor,
        changes={"application_id": application_id, "application_name": application_name},
    )
    record_audit_event(
        session,
        actor=actor,
        action="TEMPLATE_APPLICATION_REMOVED",
        entity_type=ENTITY_TYPE,
        entity_id=template_id,
        entity_name=template.name,
        details={"application_id": application_id, "application_name": application_name},
        request=request,
    )


def reorder_template_applications(
    session: Session,
    *,
    template_id: int,
    changes: Sequence[InstallOrderChange],
    actor: Actor,
    request: RequestMetadata | None = None,
) -> list[TemplateApplication]:
    """Apply a batch of install orders, all or nothing.

    Every application must be attached to the template, appear once in the
    batch, and the resulting install orders across the template must stay
    unique.
    """

    template = get_existing_template(session, template_id)
    repository = TemplateApplicationRepository(session)
    if not changes:
        raise ValueError("At least one application must be reordered")

    orders = {change.application_id: change.install_order for change in changes}
    if len(orders) != len(changes):
        raise ValueError("Each application may appear only once")

    attached = {entry.application_id: entry for entry in repository.list_for_template(template_id)}
    missing = sorted(set(orders) - set(attached))
    if missing:
        raise NotFoundError(
            f"Applications not attached to this template: {', '.join(map(str, missing))}"
        )

    resulting = {app_id: entry.install_order for app_id, entry in attached.items()}
    resulting.update(orders)
    if len(set(resulting.values())) != len(resulting):
        raise ConflictError("Install orders must be unique within a template")

    repository.reorder(template_id, orders)
    record_audit_event(
        session,
        actor=actor,
        action="TEMPLATE_APPLICATIONS_REORDERED",
        entity_type=ENTITY_TYPE,
        entity_id=template_id,
        entity_name=template.name,
        old_value={str(app_id): attached[app_id].install_order for app_id in orders},
        new_value={str(app_id): order for app_id, order in orders.items()},
        request=request,
    )
    return repository.list_for_template(template_id)


__all__ = [
    "InstallOrderChange",
    "add_template_application",
    "list_template_applications",
    "remove_template_application",
    "reorder_template_applications",
    "update_template_application",
]
