"""Use cases for managing templates."""

from .create_template import NewTemplateData, create_template
from .delete_template import delete_template
from .duplicate_template import duplicate_template
from .get_template import get_template, list_templates
from .template_applications import (
    InstallOrderChange,
    add_template_application,
    list_template_applications,
    remove_template_application,
    reorder_template_applications,
    update_template_application,
)
from .update_template import update_template
from .update_template_status import update_template_status

__all__ = [
    "InstallOrderChange",
    "NewTemplateData",
    "add_template_application",
    "create_template",
    "delete_template",
    "duplicate_template",
    "get_template",
    "list_template_applications",
    "list_templates",
    "remove_template_application",
    "reorder_template_applications",
    "update_template",
    "update_template_application",
    "update_template_status",
]
