"""Use case for deleting templates."""

from sqlalchemy.orm import Session

from avdmanager.application.use_cases.audit_logs import record_audit_event
from avdmanager.domain.entities import Actor, RequestMetadata
from avdmanager.domain.payload import snapshot
from avdmanager.infrastructure.repositories import TemplateRepository

from .create_template import ENTITY_TYPE
from .validators import get_existing_template


def delete_template(
    session: Session,
    *,
    template_id: int,
    actor: Actor,
    request: RequestMetadata | None = None,
) -> None:
    """Delete a template together with its history and attachments.

    The audit log keeps its entries, including the deletion itself.
    """

    current = get_existing_template(session, template_id)
    TemplateRepository(session).delete(template_id)
    record_audit_event(
        session,
        actor=actor,
        action="TEMPLATE_DELETED",
        entity_type=ENTITY_TYPE,
        entity_id=template_id,
        entity_name=current.name,
        old_value=snapshot(current, exclude=("applications",)),
        request=request,
    )


__all__ = ["delete_template"]
