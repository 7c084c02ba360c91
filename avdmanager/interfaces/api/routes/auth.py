"""Endpoints for authentication and password management."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from avdmanager.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    change_password,
    record_login,
    record_logout,
)
from avdmanager.config import get_settings
from avdmanager.domain.entities import AdminUser, RequestMetadata
from avdmanager.infrastructure.database import get_db
from avdmanager.infrastructure.security import create_access_token, password_signature
from avdmanager.interfaces.api.dependencies import (
    get_current_admin,
    get_request_metadata,
)
from avdmanager.interfaces.api.schemas import (
    AdminUserRead,
    MessageResponse,
    PasswordChangeRequest,
    Token,
)

from ._errors import to_http_exception

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


# The form signature is imposed by OAuth2PasswordRequestForm: ``username``
# carries the email address.
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> Token:
    """Authenticate an administrator by email and return a JWT."""

    user, auth_status = authenticate_user(db, form_data.username, form_data.password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if auth_status is AuthenticationStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is disabled",
            headers={"WWW-Authenticate": "Bearer"},
        )

    settings = get_settings()
    access_token = create_access_token(
        data={
            "sub": user.email,
            "uid": user.id,
            "name": user.name,
            "pwd_sig": password_signature(user.password, user.is_active),
        },
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
    )
    record_login(db, user, request=request_metadata)
    logger.info("Administrator %s signed in", user.email)
    return Token(
        access_token=access_token,
        token_type="bearer",
        user=AdminUserRead.model_validate(user),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    current_admin: AdminUser = Depends(get_current_admin),
    db: Session = Depends(get_db),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> MessageResponse:
    """Record the sign-out. Tokens are stateless; the client discards its copy."""

    record_logout(db, current_admin, request=request_metadata)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=AdminUserRead)
def read_current_admin(
    current_admin: AdminUser = Depends(get_current_admin),
) -> AdminUserRead:
    return AdminUserRead.model_validate(current_admin)


@router.put("/password", response_model=MessageResponse)
def update_password(
    payload: PasswordChangeRequest,
    current_admin: AdminUser = Depends(get_current_admin),
    db: Session = Depends(get_db),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> MessageResponse:
    """Change the password of the signed-in administrator.

    Every token issued before the change stops working.
    """

    try:
        change_password(
            db,
            user=current_admin,
            current_password=payload.current_password,
            new_password=payload.new_password,
            confirm_password=payload.confirm_password,
            request=request_metadata,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(message="Password changed successfully")


__all__ = ["router"]
