"""Use cases for managing the application catalogue."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from avdmanager.application.errors import ConflictError, NotFoundError
from avdmanager.application.use_cases._changes import apply_changes, split_diff
from avdmanager.application.use_cases.audit_logs import record_audit_event
from avdmanager.domain.entities import (
    Actor,
    Application,
    Page,
    RequestMetadata,
    Template,
    ValueCount,
)
from avdmanager.domain.payload import snapshot
from avdmanager.infrastructure.repositories import (
    ApplicationRepository,
    TemplateApplicationRepository,
    TemplateRepository,
)
from avdmanager.utils import now_in_app_timezone

ENTITY_TYPE = "Application"

UPDATABLE_FIELDS = (
    "name",
    "display_name",
    "version",
    "publisher",
    "description",
    "is_msix_app_attach",
    "msix_package_path",
    "msix_image_path",
    "msix_certificate",
    "license_required",
    "license_type",
    "license_vendor",
    "license_sku",
    "license_cost",
    "license_notes",
    "category",
    "install_command",
    "uninstall_command",
    "install_size",
    "is_active",
)

REQUIRED_FIELDS = (
    "name",
    "display_name",
    "is_msix_app_attach",
    "license_required",
    "is_active",
)

_SNAPSHOT_EXCLUDE = ("template_count", "created_at", "updated_at")


def list_applications(
    session: Session,
    *,
    search: str | None = None,
    category: str | None = None,
    is_msix_app_attach: bool | None = None,
    license_required: bool | None = None,
    is_active: bool | None = None,
    page: int = 1,
    page_size: int = 20,
) -> Page:
    items, total = ApplicationRepository(session).list(
        search=search,
        category=category,
        is_msix_app_attach=is_msix_app_attach,
        license_required=license_required,
        is_active=is_active,
        skip=(page - 1) * page_size,
        limit=page_size,
    )
    return Page(items=items, total=total, page=page, page_size=page_size)


def get_application(session: Session, application_id: int) -> Application:
    application = ApplicationRepository(session).get(application_id)
    if application is None:
        raise NotFoundError("Application not found")
    return application


def list_application_categories(session: Session) -> list[ValueCount]:
    return ApplicationRepository(session).list_categories()


def list_application_templates(session: Session, application_id: int) -> list[Template]:
    """Return the templates that include ``application_id``."""

    get_application(session, application_id)
    template_ids = TemplateApplicationRepository(
        session
    ).list_template_ids_for_application(application_id)
    return TemplateRepository(session).list_by_ids(template_ids)


def create_application(
    session: Session,
    *,
    data: Mapping[str, Any],
    actor: Actor,
    request: RequestMetadata | None = None,
) -> Application:
    """Create a catalogue entry from ``data``; the package name must be unique."""

    unknown = sorted(set(data) - set(UPDATABLE_FIELDS))
    if unknown:
        raise ValueError(f"Unknown application fields: {', '.join(unknown)}")

    repository = ApplicationRepository(session)
    _ensure_unique_name(repository, data["name"])

    values: dict[str, Any] = {
        "version": None,
        "publisher": None,
        "description": None,
        "is_msix_app_attach": False,
        "msix_package_path": None,
        "msix_image_path": None,
        "msix_certificate": None,
        "license_required": False,
        "license_type": None,
        "license_vendor": None,
        "license_sku": None,
        "license_cost": None,
        "license_notes": None,
        "category": None,
        "install_command": None,
        "uninstall_command": None,
        "install_size": None,
        "is_active": True,
    }
    values.update(data)
    now = now_in_app_timezone()
    application = repository.create(
        Application(id=None, created_at=now, updated_at=now, **values)
    )
    record_audit_event(
        session,
        actor=actor,
        action="APPLICATION_CREATED",
        entity_type=ENTITY_TYPE,
        entity_id=application.id,
        entity_name=application.display_name,
        new_value=snapshot(application, exclude=_SNAPSHOT_EXCLUDE),
        request=request,
    )
    return application


def update_application(
    session: Session,
    *,
    application_id: int,
    changes: Mapping[str, Any],
    actor: Actor,
    request: RequestMetadata | None = None,
) -> Application:
    repository = ApplicationRepository(session)
    current = get_application(session, application_id)
    updated, diff = apply_changes(
        current, changes, allowed=UPDATABLE_FIELDS, required=REQUIRED_FIELDS
    )
    if "name" in diff:
        _ensure_unique_name(repository, updated.name, exclude_id=application_id)

    if not diff:
        return current

    saved = repository.update(updated)
    old_value, new_value = split_diff(diff)
    record_audit_event(
        session,
        actor=actor,
        action="APPLICATION_UPDATED",
        entity_type=ENTITY_TYPE,
        entity_id=saved.id,
        entity_name=saved.display_name,
        old_value=old_value,
        new_value=new_value,
        request=request,
    )
    return saved


def delete_application(
    session: Session,
    *,
    application_id: int,
    actor: Actor,
    request: RequestMetadata | None = None,
) -> None:
    """Delete an application unless templates still include it."""

    repository = ApplicationRepository(session)
    current = get_application(session, application_id)
    if current.template_count:
        raise ConflictError(
            f"Application is attached to {current.template_count} template(s)"
        )

    repository.delete(application_id)
    record_audit_event(
        session,
        actor=actor,
        action="APPLICATION_DELETED",
        entity_type=ENTITY_TYPE,
        entity_id=application_id,
        entity_name=current.display_name,
        old_value=snapshot(current, exclude=_SNAPSHOT_EXCLUDE),
        request=request,
    )


def _ensure_unique_name(
    repository: ApplicationRepository, name: str, *, exclude_id: int | None = None
) -> None:
    existing = repository.get_by_name(name)
    if existing is not None and existing.id != exclude_id:
        raise ConflictError(f"Application '{name}' already exists")


__all__ = [
    "create_application",
    "delete_application",
    "get_application",
    "list_application_categories",
    "list_application_templates",
    "list_applications",
    "update_application",
]
