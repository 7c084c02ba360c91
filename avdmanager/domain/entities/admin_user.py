"""Domain entity representing an administrator account."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class AdminUser:
    """Core attributes describing a portal administrator."""

    id: int | None
    email: str
    name: str
    password: str
    is_active: bool
    last_login: datetime | None
    created_at: datetime | None
    updated_at: datetime | None


__all__ = ["AdminUser"]
