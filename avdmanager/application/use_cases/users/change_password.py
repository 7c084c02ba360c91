"""Use case for changing the password of the signed-in administrator."""

from dataclasses import replace

from sqlalchemy.orm import Session

from avdmanager.application.use_cases.audit_logs import record_audit_event
from avdmanager.domain.entities import Actor, AdminUser, RequestMetadata
from avdmanager.infrastructure.repositories import AdminUserRepository
from avdmanager.infrastructure.security import get_password_hash, verify_password
from avdmanager.utils import now_in_app_timezone

from .validators import ensure_valid_password


def change_password(
    session: Session,
    *,
    user: AdminUser,
    current_password: str,
    new_password: str,
    confirm_password: str,
    request: RequestMetadata | None = None,
) -> AdminUser:
    """Replace the password of ``user``.

    Tokens issued before the change stop validating because they carry a
    signature of the previous password hash.
    """

    if not verify_password(current_password, user.password):
        raise ValueError("Current password is incorrect")
    if new_password != confirm_password:
        raise ValueError("Passwords do not match")
    ensure_valid_password(new_password)
    if verify_password(new_password, user.password):
        raise ValueError("New password must be different from the current one")

    saved = AdminUserRepository(session).update(
        replace(
            user,
            password=get_password_hash(new_password),
            updated_at=now_in_app_timezone(),
        )
    )
    record_audit_event(
        session,
        actor=Actor(id=saved.id, name=saved.name),
        action="PASSWORD_CHANGED",
        entity_type="AdminUser",
        entity_id=saved.id,
        entity_name=saved.email,
        request=request,
    )
    return saved


__all__ = ["change_password"]
