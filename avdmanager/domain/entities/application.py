"""Domain entity representing an installable application."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Application:
    """Catalogue entry for software that templates can include."""

    id: int | None
    name: str
    display_name: str
    version: str | None
    publisher: str | None
    description: str | None
    is_msix_app_attach: bool
    msix_package_path: str | None
    msix_image_path: str | None
    msix_certificate: str | None
    license_required: bool
    license_type: str | None
    license_vendor: str | None
    license_sku: str | None
    license_cost: float | None
    license_notes: str | None
    category: str | None
    install_command: str | None
    uninstall_command: str | None
    install_size: str | None
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None
    template_count: int = 0


__all__ = ["Application"]
