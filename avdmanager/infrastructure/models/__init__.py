"""ORM models used by the application infrastructure."""

from .admin_user import AdminUserModel
from .application import ApplicationModel
from .audit_log import AuditLogModel
from .base_image import BaseImageModel
from .business_unit import BusinessUnitModel
from .contact import ContactModel
from .template import TemplateModel
from .template_application import TemplateApplicationModel
from .template_history import TemplateHistoryModel

__all__ = [
    "AdminUserModel",
    "ApplicationModel",
    "AuditLogModel",
    "BaseImageModel",
    "BusinessUnitModel",
    "ContactModel",
    "TemplateApplicationModel",
    "TemplateHistoryModel",
    "TemplateModel",
]
