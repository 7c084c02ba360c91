"""Authentication related schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AdminUserRead(BaseModel):
    id: int
    email: EmailStr
    name: str
    is_active: bool
    last_login: datetime | None
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    access_token: str
    token_type: str
    user: AdminUserRead


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8)
    confirm_password: str


class MessageResponse(BaseModel):
    message: str


__all__ = ["AdminUserRead", "MessageResponse", "PasswordChangeRequest", "Token"]
