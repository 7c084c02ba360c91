"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from avdmanager.domain.entities import Actor, AdminUser, RequestMetadata
from avdmanager.infrastructure.database import get_db
from avdmanager.infrastructure.repositories import AdminUserRepository
from avdmanager.infrastructure.security import decode_access_token, password_signature

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def _credentials_exception(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_admin(token: str, db: Session) -> AdminUser:
    """Resolve the administrator for ``token``.

    The token must carry the signature of the account's current password
    hash and active flag, so a password change or deactivation revokes every
    token issued earlier.
    """

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    email = payload.get("sub")
    signature_claim = payload.get("pwd_sig")
    if not isinstance(email, str) or not isinstance(signature_claim, str):
        raise _credentials_exception()

    user = AdminUserRepository(db).get_by_email(email)
    if user is None:
        raise _credentials_exception("User not found")

    if signature_claim != password_signature(user.password, user.is_active):
        raise _credentials_exception()

    if not user.is_active:
        raise _credentials_exception("Inactive user")

    return user


def get_current_admin(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> AdminUser:
    """Return the authenticated administrator from the bearer token."""

    return resolve_current_admin(token, db)


def get_actor(current_admin: AdminUser = Depends(get_current_admin)) -> Actor:
    return Actor(id=current_admin.id, name=current_admin.name)


def get_request_metadata(request: Request) -> RequestMetadata:
    """Capture the caller's address and user agent for the audit log."""

    return RequestMetadata(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


__all__ = [
    "get_actor",
    "get_current_admin",
    "get_request_metadata",
    "oauth2_scheme",
    "resolve_current_admin",
]
