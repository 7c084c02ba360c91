"""Use cases for the per-template change ledger."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from avdmanager.application.errors import NotFoundError
from avdmanager.domain.entities import (
    Actor,
    LedgerWriteResult,
    TemplateHistoryAction,
    TemplateHistoryEntry,
    TemplateStatus,
)
from avdmanager.domain.payload import normalize_payload
from avdmanager.infrastructure.repositories import (
    TemplateHistoryRepository,
    TemplateRepository,
)
from avdmanager.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def append_template_history(
    session: Session,
    *,
    template_id: int,
    action: TemplateHistoryAction,
    actor: Actor,
    old_status: TemplateStatus | None = None,
    new_status: TemplateStatus | None = None,
    changes: Mapping[str, Any] | None = None,
    comment: str | None = None,
) -> LedgerWriteResult:
    """Append one entry to the ledger of ``template_id``.

    The write is best-effort: it runs after the triggering mutation has been
    committed and any failure is logged and reported through the returned
    :class:`LedgerWriteResult` instead of being raised.
    """

    try:
        history_action = TemplateHistoryAction(action)
        if history_action is not TemplateHistoryAction.STATUS_CHANGED:
            old_status = new_status = None
        entry = TemplateHistoryEntry(
            id=None,
            template_id=template_id,
            action=history_action,
            old_status=old_status,
            new_status=new_status,
            changes=normalize_payload(changes),
            comment=comment,
            user_id=actor.id,
            user_name=actor.name,
            created_at=now_in_app_timezone(),
        )
        TemplateHistoryRepository(session).create(entry)
    except Exception as exc:  # noqa: BLE001
        session.rollback()
        logger.exception(
            "Failed to record %s history for template %s",
            getattr(action, "value", action),
            template_id,
        )
        return LedgerWriteResult.failure(str(exc))
    return LedgerWriteResult.success()


def list_template_history(
    session: Session, template_id: int
) -> list[TemplateHistoryEntry]:
    """Return the ledger of ``template_id`` from newest to oldest."""

    if not TemplateRepository(session).exists(template_id):
        raise NotFoundError("Template not found")
    return TemplateHistoryRepository(session).list_for_template(template_id)


__all__ = [
    "append_template_history",
    "list_template_history",
]
