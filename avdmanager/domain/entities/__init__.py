"""Domain entities exposed by the application."""

from .admin_user import AdminUser
from .application import Application
from .audit_log import AuditLog, AuditLogFilters, Page, ValueCount
from .base_image import BaseImage
from .business_unit import BusinessUnit
from .contact import Contact
from .enums import (
    AppApprovalStatus,
    Environment,
    HostPoolType,
    LoadBalancerType,
    TemplateHistoryAction,
    TemplateStatus,
)
from .events import Actor, LedgerWriteResult, RequestMetadata
from .template import Template
from .template_application import TemplateApplication
from .template_history import TemplateHistoryEntry

__all__ = [
    "Actor",
    "AdminUser",
    "AppApprovalStatus",
    "Application",
    "AuditLog",
    "AuditLogFilters",
    "BaseImage",
    "BusinessUnit",
    "Contact",
    "Environment",
    "HostPoolType",
    "LedgerWriteResult",
    "LoadBalancerType",
    "Page",
    "RequestMetadata",
    "Template",
    "TemplateApplication",
    "TemplateHistoryAction",
    "TemplateHistoryEntry",
    "TemplateStatus",
    "ValueCount",
]
