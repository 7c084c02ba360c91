"""Use cases for managing business units."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy.orm import Session

from avdmanager.application.errors import ConflictError, NotFoundError
from avdmanager.application.use_cases._changes import apply_changes, split_diff
from avdmanager.application.use_cases.audit_logs import record_audit_event
from avdmanager.domain.entities import Actor, BusinessUnit, Contact, RequestMetadata
from avdmanager.domain.payload import snapshot
from avdmanager.infrastructure.repositories import (
    BusinessUnitRepository,
    ContactRepository,
)
from avdmanager.utils import now_in_app_timezone

ENTITY_TYPE = "BusinessUnit"

UPDATABLE_FIELDS = (
    "name",
    "code",
    "description",
    "is_vendor",
    "vendor_company",
    "cost_center",
    "is_active",
)

REQUIRED_FIELDS = ("name", "code", "is_vendor", "is_active")

_SNAPSHOT_EXCLUDE = ("template_count", "contact_count", "created_at", "updated_at")


def list_business_units(
    session: Session,
    *,
    include_inactive: bool = False,
    is_vendor: bool | None = None,
) -> Sequence[BusinessUnit]:
    return BusinessUnitRepository(session).list(
        include_inactive=include_inactive, is_vendor=is_vendor
    )


def get_business_unit(session: Session, business_unit_id: int) -> BusinessUnit:
    business_unit = BusinessUnitRepository(session).get(business_unit_id)
    if business_unit is None:
        raise NotFoundError("Business unit not found")
    return business_unit


def list_business_unit_contacts(
    session: Session, business_unit_id: int
) -> list[Contact]:
    get_business_unit(session, business_unit_id)
    contacts, _ = ContactRepository(session).list(
        business_unit_id=business_unit_id, limit=1000
    )
    return contacts


def create_business_unit(
    session: Session,
    *,
    name: str,
    code: str,
    description: str | None = None,
    is_vendor: bool = False,
    vendor_company: str | None = None,
    cost_center: str | None = None,
    is_active: bool = True,
    actor: Actor,
    request: RequestMetadata | None = None,
) -> BusinessUnit:
    """Create a business unit with a unique name and code."""

    repository = BusinessUnitRepository(session)
    _ensure_unique(repository, name=name, code=code)

    now = now_in_app_timezone()
    business_unit = repository.create(
        BusinessUnit(
            id=None,
            name=name,
            code=code,
            description=description,
            is_vendor=is_vendor,
            vendor_company=vendor_company,
            cost_center=cost_center,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
    )
    record_audit_event(
        session,
        actor=actor,
        action="BUSINESS_UNIT_CREATED",
        entity_type=ENTITY_TYPE,
        entity_id=business_unit.id,
        entity_name=business_unit.name,
        new_value=snapshot(business_unit, exclude=_SNAPSHOT_EXCLUDE),
        request=request,
    )
    return business_unit


def update_business_unit(
    session: Session,
    *,
    business_unit_id: int,
    changes: Mapping[str, Any],
    actor: Actor,
    request: RequestMetadata | None = None,
) -> BusinessUnit:
    repository = BusinessUnitRepository(session)
    current = get_business_unit(session, business_unit_id)
    updated, diff = apply_changes(
        current, changes, allowed=UPDATABLE_FIELDS, required=REQUIRED_FIELDS
    )
    _ensure_unique(
        repository,
        name=updated.name if "name" in diff else None,
        code=updated.code if "code" in diff else None,
        exclude_id=business_unit_id,
    )

    if not diff:
        return current

    saved = repository.update(updated)
    old_value, new_value = split_diff(diff)
    record_audit_event(
        session,
        actor=actor,
        action="BUSINESS_UNIT_UPDATED",
        entity_type=ENTITY_TYPE,
        entity_id=saved.id,
        entity_name=saved.name,
        old_value=old_value,
        new_value=new_value,
        request=request,
    )
    return saved


def delete_business_unit(
    session: Session,
    *,
    business_unit_id: int,
    actor: Actor,
    request: RequestMetadata | None = None,
) -> None:
    """Delete a business unit and its contacts unless templates still use it."""

    repository = BusinessUnitRepository(session)
    current = get_business_unit(session, business_unit_id)
    if current.template_count:
        raise ConflictError(
            f"Business unit is used by {current.template_count} template(s)"
        )

    repository.delete(business_unit_id)
    record_audit_event(
        session,
        actor=actor,
        action="BUSINESS_UNIT_DELETED",
        entity_type=ENTITY_TYPE,
        entity_id=business_unit_id,
        entity_name=current.name,
        old_value=snapshot(current, exclude=_SNAPSHOT_EXCLUDE),
        request=request,
    )


def _ensure_unique(
    repository: BusinessUnitRepository,
    *,
    name: str | None = None,
    code: str | None = None,
    exclude_id: int | None = None,
) -> None:
    if code is not None:
        existing = repository.get_by_code(code)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(f"Business unit code '{code}' already exists")
    if name is not None:
        existing = repository.get_by_name(name)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(f"Business unit name '{name}' already exists")


__all__ = [
    "create_business_unit",
    "delete_business_unit",
    "get_business_unit",
    "list_business_unit_contacts",
    "list_business_units",
    "update_business_unit",
]
