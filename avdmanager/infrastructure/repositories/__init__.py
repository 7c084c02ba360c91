"""Repository implementations for persistence."""

from .admin_user_repository import AdminUserRepository
from .application_repository import ApplicationRepository
from .audit_log_repository import AuditLogRepository
from .base_image_repository import BaseImageRepository
from .business_unit_repository import BusinessUnitRepository
from .contact_repository import ContactRepository
from .template_application_repository import TemplateApplicationRepository
from .template_history_repository import TemplateHistoryRepository
from .template_repository import TemplateRepository

__all__ = [
    "AdminUserRepository",
    "ApplicationRepository",
    "AuditLogRepository",
    "BaseImageRepository",
    "BusinessUnitRepository",
    "ContactRepository",
    "TemplateApplicationRepository",
    "TemplateHistoryRepository",
    "TemplateRepository",
]
