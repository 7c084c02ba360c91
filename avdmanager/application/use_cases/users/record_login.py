"""Use cases for recording sign-in and sign-out events."""

from sqlalchemy.orm import Session

from avdmanager.application.use_cases.audit_logs import record_audit_event
from avdmanager.domain.entities import Actor, AdminUser, RequestMetadata
from avdmanager.infrastructure.repositories import AdminUserRepository
from avdmanager.utils import now_in_app_timezone


def record_login(
    session: Session, user: AdminUser, *, request: RequestMetadata | None = None
) -> None:
    """Persist the last login timestamp and audit the sign-in."""

    repository = AdminUserRepository(session)
    user.last_login = now_in_app_timezone()
    repository.update(user)
    record_audit_event(
        session,
        actor=Actor(id=user.id, name=user.name),
        action="LOGIN",
        entity_type="AdminUser",
        entity_id=user.id,
        entity_name=user.email,
        request=request,
    )


def record_logout(
    session: Session, user: AdminUser, *, request: RequestMetadata | None = None
) -> None:
    record_audit_event(
        session,
        actor=Actor(id=user.id, name=user.name),
        action="LOGOUT",
        entity_type="AdminUser",
        entity_id=user.id,
        entity_name=user.email,
        request=request,
    )


__all__ = ["record_login", "record_logout"]
