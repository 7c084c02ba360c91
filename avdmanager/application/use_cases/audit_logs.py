"""Use cases for recording and inspecting the global audit log."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from avdmanager.application.errors import NotFoundError
from avdmanager.domain.entities import (
    Actor,
    AuditLog,
    AuditLogFilters,
    LedgerWriteResult,
    Page,
    RequestMetadata,
    ValueCount,
)
from avdmanager.domain.payload import normalize_payload
from avdmanager.infrastructure.repositories import AuditLogRepository
from avdmanager.utils import ensure_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def record_audit_event(
    session: Session,
    *,
    actor: Actor,
    action: str,
    entity_type: str | None = None,
    entity_id: int | str | None = None,
    entity_name: str | None = None,
    details: Mapping[str, Any] | None = None,
    old_value: Mapping[str, Any] | None = None,
    new_value: Mapping[str, Any] | None = None,
    request: RequestMetadata | None = None,
) -> LedgerWriteResult:
    """Append an entry to the audit log without ever raising.

    Failures roll back the session, are logged, and come back as a failed
    :class:`LedgerWriteResult`; the operation being audited is unaffected.
    """

    request = request or RequestMetadata()
    try:
        entry = AuditLog(
            id=None,
            admin_id=actor.id,
            action=action,
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else None,
            entity_name=entity_name,
            details=normalize_payload(details),
            old_value=normalize_payload(old_value),
            new_value=normalize_payload(new_value),
            ip_address=request.ip_address,
            user_agent=request.user_agent,
            created_at=now_in_app_timezone(),
        )
        AuditLogRepository(session).create(entry)
    except Exception as exc:  # noqa: BLE001
        session.rollback()
        logger.exception("Failed to record audit event %s", action)
        return LedgerWriteResult.failure(str(exc))
    return LedgerWriteResult.success()


def list_audit_logs(
    session: Session,
    *,
    filters: AuditLogFilters | None = None,
    page: int = 1,
    page_size: int = 20,
) -> Page:
    """Return one page of audit entries, newest first."""

    if page < 1:
        raise ValueError("page must be greater than or equal to 1")
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")

    filters = filters or AuditLogFilters()
    filters = replace(
        filters,
        start_date=ensure_app_timezone(filters.start_date),
        end_date=ensure_app_timezone(filters.end_date),
    )
    items, total = AuditLogRepository(session).list(
        filters, skip=(page - 1) * page_size, limit=page_size
    )
    return Page(items=items, total=total, page=page, page_size=page_size)


def get_audit_log(session: Session, entry_id: int) -> AuditLog:
    entry = AuditLogRepository(session).get(entry_id)
    if entry is None:
        raise NotFoundError("Audit log entry not found")
    return entry


def list_entity_audit_logs(
    session: Session, entity_type: str, entity_id: str, *, limit: int = 50
) -> list[AuditLog]:
    """Return the audit trail of one entity, even if it was deleted since."""

    return AuditLogRepository(session).list_for_entity(
        entity_type, str(entity_id), limit=limit
    )


def list_audit_actions(session: Session) -> list[ValueCount]:
    return AuditLogRepository(session).count_by_action()


def list_audit_entity_types(session: Session) -> list[ValueCount]:
    return AuditLogRepository(session).count_by_entity_type()


__all__ = [
    "MAX_PAGE_SIZE",
    "get_audit_log",
    "list_audit_actions",
    "list_audit_entity_types",
    "list_audit_logs",
    "list_entity_audit_logs",
    "record_audit_event",
]
