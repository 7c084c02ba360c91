"""Schemas for application catalogue endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

APPLICATION_NAME_PATTERN = r"^[a-z0-9-]+$"


class ApplicationFields(BaseModel):
    version: str | None = Field(default=None, max_length=50)
    publisher: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    msix_package_path: str | None = Field(default=None, max_length=500)
    msix_image_path: str | None = Field(default=None, max_length=500)
    msix_certificate: str | None = Field(default=None, max_length=100)
    license_type: str | None = Field(default=None, max_length=50)
    license_vendor: str | None = Field(default=None, max_length=200)
    license_sku: str | None = Field(default=None, max_length=100)
    license_cost: float | None = Field(default=None, ge=0)
    license_notes: str | None = Field(default=None, max_length=2000)
    category: str | None = Field(default=None, max_length=50)
    install_command: str | None = Field(default=None, max_length=1000)
    uninstall_command: str | None = Field(default=None, max_length=1000)
    install_size: str | None = Field(default=None, max_length=50)


class ApplicationCreate(ApplicationFields):
    name: str = Field(..., min_length=1, max_length=100, pattern=APPLICATION_NAME_PATTERN)
    display_name: str = Field(..., min_length=1, max_length=200)
    is_msix_app_attach: bool = False
    license_required: bool = False
    is_active: bool = True


class ApplicationUpdate(ApplicationFields):
    name: str | None = Field(
        default=None, min_length=1, max_length=100, pattern=APPLICATION_NAME_PATTERN
    )
    display_name: str | None = Field(default=None, min_length=1, max_length=200)
    is_msix_app_attach: bool | None = None
    license_required: bool | None = None
    is_active: bool | None = None

    model_config = ConfigDict(extra="forbid")


class ApplicationRead(ApplicationFields):
    id: int
    name: str
    display_name: str
    is_msix_app_attach: bool
    license_required: bool
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None
    template_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class ApplicationSummary(BaseModel):
    id: int
    name: str
    display_name: str
    version: str | None
    publisher: str | None
    category: str | None
    is_msix_app_attach: bool

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "ApplicationCreate",
    "ApplicationRead",
    "ApplicationSummary",
    "ApplicationUpdate",
]
