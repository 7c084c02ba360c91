"""Domain entity representing a golden base image."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class BaseImage:
    id: int | None
    name: str
    display_name: str
    description: str | None
    os_type: str
    version: str
    patch_level: str | None
    compute_gallery_id: str | None
    image_definition: str | None
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None


__all__ = ["BaseImage"]
