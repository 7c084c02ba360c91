"""Domain entity joining templates and applications."""

from dataclasses import dataclass
from datetime import datetime

from .application import Application
from .enums import AppApprovalStatus


@dataclass
class TemplateApplication:
    """An application attached to a template at a given install position."""

    id: int | None
    template_id: int
    application_id: int
    version_override: str | None
    install_notes: str | None
    is_required: bool
    install_order: int
    approval_status: AppApprovalStatus
    approval_notes: str | None
    approved_at: datetime | None
    approved_by_id: int | None
    created_at: datetime | None
    application: Application | None = None


__all__ = ["TemplateApplication"]
