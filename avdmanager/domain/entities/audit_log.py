"""Domain entity representing an entry of the global audit log."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AuditLog:
    """Administrative action captured for compliance review.

    ``entity_id`` deliberately carries no foreign key: an entry must outlive
    the entity it describes.
    """

    id: int | None
    admin_id: int
    action: str
    entity_type: str | None
    entity_id: str | None
    entity_name: str | None
    details: dict[str, Any] | None
    old_value: dict[str, Any] | None
    new_value: dict[str, Any] | None
    ip_address: str | None
    user_agent: str | None
    created_at: datetime | None
    admin_name: str | None = None
    admin_email: str | None = None


@dataclass(frozen=True)
class AuditLogFilters:
    action: str | None = None
    entity_type: str | None = None
    entity_id: str | None = None
    admin_id: int | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


@dataclass(frozen=True)
class ValueCount:
    """A distinct column value and the number of rows carrying it."""

    value: str
    count: int


@dataclass(frozen=True)
class Page:
    """One page of a paginated listing."""

    items: list = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 20

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return -(-self.total // self.page_size)


__all__ = ["AuditLog", "AuditLogFilters", "Page", "ValueCount"]
