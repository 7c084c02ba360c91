"""Use case for creating administrator accounts."""

from sqlalchemy.orm import Session

from avdmanager.application.errors import ConflictError
from avdmanager.domain.entities import AdminUser
from avdmanager.infrastructure.repositories import AdminUserRepository
from avdmanager.infrastructure.security import get_password_hash
from avdmanager.utils import now_in_app_timezone

from .validators import ensure_valid_password, normalize_email


def create_admin_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    is_active: bool = True,
) -> AdminUser:
    """Create a new administrator ensuring unique email addresses."""

    repository = AdminUserRepository(session)
    email = normalize_email(email)
    if repository.get_by_email(email):
        raise ConflictError("Email address is already registered")
    ensure_valid_password(password)

    now = now_in_app_timezone()
    user = AdminUser(
        id=None,
        email=email,
        name=name.strip(),
        password=get_password_hash(password),
        is_active=is_active,
        last_login=None,
        created_at=now,
        updated_at=None,
    )
    return repository.create(user)


__all__ = ["create_admin_user"]
