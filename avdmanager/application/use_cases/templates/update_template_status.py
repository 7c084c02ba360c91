"""Use case for moving a template through its status workflow."""

from __future__ import annotations

import logging
from dataclasses import replace

from sqlalchemy.orm import Session

from avdmanager.application.errors import InvalidStatusTransitionError
from avdmanager.application.use_cases.audit_logs import record_audit_event
from avdmanager.application.use_cases.template_history import append_template_history
from avdmanager.domain.entities import (
    Actor,
    RequestMetadata,
    Template,
    TemplateHistoryAction,
    TemplateStatus,
)
from avdmanager.domain.template_status import evaluate_status_transition
from avdmanager.infrastructure.repositories import TemplateRepository
from avdmanager.utils import now_in_app_timezone

from .create_template import ENTITY_TYPE
from .validators import get_existing_template

logger = logging.getLogger(__name__)


def update_template_status(
    session: Session,
    *,
    template_id: int,
    status: TemplateStatus,
    actor: Actor,
    comment: str | None = None,
    request: RequestMetadata | None = None,
) -> Template:
    """Apply a guarded status transition.

    The lifecycle date tied to the new status is stamped only if it has never
    been set, so moving back and forth keeps the first approval date.
    """

    current = get_existing_template(session, template_id)
    decision = evaluate_status_transition(current.status, status)
    if not decision.allowed:
        logger.info(
            "Rejected status change of template %s: %s", template_id, decision.reason
        )
        raise InvalidStatusTransitionError(decision.reason)

    now = now_in_app_timezone()
    updates = {
        "status": decision.requested,
        "last_modified_date": now,
        "updated_by_id": actor.id,
        "updated_at": now,
    }
    if decision.date_field and getattr(current, decision.date_field) is None:
        updates[decision.date_field] = now

    saved = TemplateRepository(session).update(replace(current, **updates))

    append_template_history(
        session,
        template_id=saved.id,
        action=TemplateHistoryAction.STATUS_CHANGED,
        actor=actor,
        old_status=decision.current,
        new_status=decision.requested,
        comment=comment,
    )
    record_audit_event(
        session,
        actor=actor,
        action="TEMPLATE_STATUS_CHANGED",
        entity_type=ENTITY_TYPE,
        entity_id=saved.id,
        entity_name=saved.name,
        details={
            "old_status": decision.current,
            "new_status": decision.requested,
            "comment": comment,
        },
        request=request,
    )
    return saved


__all__ = ["update_template_status"]
