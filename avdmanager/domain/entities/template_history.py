"""Domain entity representing a change ledger entry for a template."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .enums import TemplateHistoryAction, TemplateStatus


@dataclass(frozen=True)
class TemplateHistoryEntry:
    """Immutable record of one lifecycle event of a template."""

    id: int | None
    template_id: int
    action: TemplateHistoryAction
    old_status: TemplateStatus | None
    new_status: TemplateStatus | None
    changes: dict[str, Any] | None
    comment: str | None
    user_id: int
    user_name: str | None
    created_at: datetime | None
    template_name: str | None = None


__all__ = ["TemplateHistoryEntry"]
