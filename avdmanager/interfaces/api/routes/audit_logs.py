"""Routes for inspecting the audit log.

Entries are read-only: there is no route to change or delete them.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from avdmanager.application.use_cases.audit_logs import (
    get_audit_log as get_audit_log_uc,
    list_audit_actions as list_audit_actions_uc,
    list_audit_entity_types as list_audit_entity_types_uc,
    list_audit_logs as list_audit_logs_uc,
    list_entity_audit_logs as list_entity_audit_logs_uc,
)
from avdmanager.domain.entities import AdminUser, AuditLogFilters
from avdmanager.infrastructure.database import get_db
from avdmanager.interfaces.api.dependencies import get_current_admin
from avdmanager.interfaces.api.schemas import AuditLogRead, PageRead, ValueCountRead

from ._errors import to_http_exception

router = APIRouter(prefix="/audit-logs", tags=["audit_logs"])


@router.get("/", response_model=PageRead[AuditLogRead])
def list_audit_logs(
    action: str | None = None,
    entity_type: str | None = None,
    entity_id: str | None = None,
    admin_id: int | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> PageRead[AuditLogRead]:
    """Return audit entries newest first, filtered and paginated."""

    filters = AuditLogFilters(
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        admin_id=admin_id,
        start_date=start_date,
        end_date=end_date,
    )
    try:
        result = list_audit_logs_uc(db, filters=filters, page=page, page_size=page_size)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return PageRead[AuditLogRead].model_validate(result)


@router.get("/actions", response_model=list[ValueCountRead])
def list_audit_actions(
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> list[ValueCountRead]:
    return [ValueCountRead.model_validate(item) for item in list_audit_actions_uc(db)]


@router.get("/entity-types", response_model=list[ValueCountRead])
def list_audit_entity_types(
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> list[ValueCountRead]:
    return [
        ValueCountRead.model_validate(item) for item in list_audit_entity_types_uc(db)
    ]


@router.get("/entry/{entry_id}", response_model=AuditLogRead)
def read_audit_log(
    entry_id: int,
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> AuditLogRead:
    try:
        entry = get_audit_log_uc(db, entry_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return AuditLogRead.model_validate(entry)


@router.get("/{entity_type}/{entity_id}", response_model=list[AuditLogRead])
def list_entity_audit_logs(
    entity_type: str,
    entity_id: str,
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> list[AuditLogRead]:
    """Return the audit trail of one entity, including deleted ones."""

    entries = list_entity_audit_logs_uc(db, entity_type, entity_id)
    return [AuditLogRead.model_validate(entry) for entry in entries]


__all__ = ["router"]
