"""Domain entity representing a business unit contact."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Contact:
    id: int | None
    name: str
    email: str
    title: str | None
    department: str | None
    phone: str | None
    is_primary: bool
    business_unit_id: int
    created_at: datetime | None
    updated_at: datetime | None
    template_count: int = 0


__all__ = ["Contact"]
