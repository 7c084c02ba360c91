"""Domain entity representing a business unit."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class BusinessUnit:
    """Organisational unit that owns templates and contacts."""

    id: int | None
    name: str
    code: str
    description: str | None
    is_vendor: bool
    vendor_company: str | None
    cost_center: str | None
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None
    template_count: int = 0
    contact_count: int = 0


__all__ = ["BusinessUnit"]
