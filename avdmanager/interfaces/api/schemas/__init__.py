from .application import (
    ApplicationCreate,
    ApplicationRead,
    ApplicationSummary,
    ApplicationUpdate,
)
from .audit_log import AuditLogRead
from .auth import AdminUserRead, MessageResponse, PasswordChangeRequest, Token
from .base_image import BaseImageCreate, BaseImageRead
from .business_unit import (
    BusinessUnitCreate,
    BusinessUnitRead,
    BusinessUnitSummary,
    BusinessUnitUpdate,
)
from .common import PageRead, ValueCountRead
from .contact import ContactCreate, ContactRead, ContactUpdate
from .dashboard import (
    BusinessUnitCountRead,
    DashboardStatsRead,
    RecentActivityRead,
    RegionCountRead,
    StatusCountRead,
)
from .template import (
    InstallOrderItem,
    TemplateApplicationCreate,
    TemplateApplicationRead,
    TemplateApplicationUpdate,
    TemplateApplicationsReorder,
    TemplateCreate,
    TemplateDetailRead,
    TemplateHistoryRead,
    TemplateRead,
    TemplateStatusUpdate,
    TemplateUpdate,
)

__all__ = [
    "AdminUserRead",
    "ApplicationCreate",
    "ApplicationRead",
    "ApplicationSummary",
    "ApplicationUpdate",
    "AuditLogRead",
    "BaseImageCreate",
    "BaseImageRead",
    "BusinessUnitCountRead",
    "BusinessUnitCreate",
    "BusinessUnitRead",
    "BusinessUnitSummary",
    "BusinessUnitUpdate",
    "ContactCreate",
    "ContactRead",
    "ContactUpdate",
    "DashboardStatsRead",
    "InstallOrderItem",
    "MessageResponse",
    "PageRead",
    "PasswordChangeRequest",
    "RecentActivityRead",
    "RegionCountRead",
    "StatusCountRead",
    "TemplateApplicationCreate",
    "TemplateApplicationRead",
    "TemplateApplicationUpdate",
    "TemplateApplicationsReorder",
    "TemplateCreate",
    "TemplateDetailRead",
    "TemplateHistoryRead",
    "TemplateRead",
    "TemplateStatusUpdate",
    "TemplateUpdate",
    "Token",
    "ValueCountRead",
]
