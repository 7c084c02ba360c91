"""Use cases for managing business unit contacts."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from avdmanager.application.errors import ConflictError, NotFoundError
from avdmanager.application.use_cases._changes import apply_changes, split_diff
from avdmanager.application.use_cases.audit_logs import record_audit_event
from avdmanager.domain.entities import Actor, Contact, Page, RequestMetadata
from avdmanager.domain.payload import snapshot
from avdmanager.infrastructure.repositories import (
    BusinessUnitRepository,
    ContactRepository,
)
from avdmanager.utils import now_in_app_timezone

ENTITY_TYPE = "Contact"

UPDATABLE_FIELDS = (
    "name",
    "email",
    "title",
    "department",
    "phone",
    "is_primary",
)

REQUIRED_FIELDS = ("name", "email", "is_primary")

_SNAPSHOT_EXCLUDE = ("template_count", "created_at", "updated_at")


def list_contacts(
    session: Session,
    *,
    business_unit_id: int | None = None,
    search: str | None = None,
    page: int = 1,
    page_size: int = 50,
) -> Page:
    items, total = ContactRepository(session).list(
        business_unit_id=business_unit_id,
        search=search,
        skip=(page - 1) * page_size,
        limit=page_size,
    )
    return Page(items=items, total=total, page=page, page_size=page_size)


def get_contact(session: Session, contact_id: int) -> Contact:
    contact = ContactRepository(session).get(contact_id)
    if contact is None:
        raise NotFoundError("Contact not found")
    return contact


def create_contact(
    session: Session,
    *,
    name: str,
    email: str,
    business_unit_id: int,
    title: str | None = None,
    department: str | None = None,
    phone: str | None = None,
    is_primary: bool = False,
    actor: Actor,
    request: RequestMetadata | None = None,
) -> Contact:
    """Create a contact; marking it primary demotes the unit's other contacts."""

    repository = ContactRepository(session)
    _ensure_business_unit(session, business_unit_id)
    _ensure_unique_email(repository, email=email, business_unit_id=business_unit_id)

    now = now_in_app_timezone()
    contact = repository.create(
        Contact(
            id=None,
            name=name,
            email=email,
            title=title,
            department=department,
            phone=phone,
            is_primary=is_primary,
            business_unit_id=business_unit_id,
            created_at=now,
            updated_at=now,
        )
    )
    record_audit_event(
        session,
        actor=actor,
        action="CONTACT_CREATED",
        entity_type=ENTITY_TYPE,
        entity_id=contact.id,
        entity_name=contact.name,
        new_value=snapshot(contact, exclude=_SNAPSHOT_EXCLUDE),
        request=request,
    )
    return contact


def update_contact(
    session: Session,
    *,
    contact_id: int,
    changes: Mapping[str, Any],
    actor: Actor,
    request: RequestMetadata | None = None,
) -> Contact:
    repository = ContactRepository(session)
    current = get_contact(session, contact_id)
    updated, diff = apply_changes(
        current, changes, allowed=UPDATABLE_FIELDS, required=REQUIRED_FIELDS
    )

    if "email" in diff:
        _ensure_unique_email(
            repository,
            email=updated.email,
            business_unit_id=updated.business_unit_id,
            exclude_id=contact_id,
        )

    if not diff:
        return current

    saved = repository.update(updated)
    old_value, new_value = split_diff(diff)
    record_audit_event(
        session,
        actor=actor,
        action="CONTACT_UPDATED",
        entity_type=ENTITY_TYPE,
        entity_id=saved.id,
        entity_name=saved.name,
        old_value=old_value,
        new_value=new_value,
        request=request,
    )
    return saved


def delete_contact(
    session: Session,
    *,
    contact_id: int,
    actor: Actor,
    request: RequestMetadata | None = None,
) -> None:
    """Delete a contact unless templates are still assigned to it."""

    repository = ContactRepository(session)
    current = get_contact(session, contact_id)
    if current.template_count:
        raise ConflictError(
            f"Contact is assigned to {current.template_count} template(s)"
        )

    repository.delete(contact_id)
    record_audit_event(
        session,
        actor=actor,
        action="CONTACT_DELETED",
        entity_type=ENTITY_TYPE,
        entity_id=contact_id,
        entity_name=current.name,
        old_value=snapshot(current, exclude=_SNAPSHOT_EXCLUDE),
        request=request,
    )


def _ensure_business_unit(session: Session, business_unit_id: int) -> None:
    if BusinessUnitRepository(session).get(business_unit_id) is None:
        raise NotFoundError("Business unit not found")


def _ensure_unique_email(
    repository: ContactRepository,
    *,
    email: str,
    business_unit_id: int,
    exclude_id: int | None = None,
) -> None:
    existing = repository.get_by_email(email, business_unit_id=business_unit_id)
    if existing is not None and existing.id != exclude_id:
        raise ConflictError(
            "A contact with this email already exists in the business unit"
        )


__all__ = [
    "create_contact",
    "delete_contact",
    "get_contact",
    "list_contacts",
    "update_contact",
]
