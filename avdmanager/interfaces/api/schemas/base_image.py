"""Schemas for base image endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BaseImageCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    display_name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    os_type: str = Field(..., min_length=1, max_length=50)
    version: str = Field(..., min_length=1, max_length=50)
    patch_level: str | None = Field(default=None, max_length=50)
    compute_gallery_id: str | None = Field(default=None, max_length=500)
    image_definition: str | None = Field(default=None, max_length=200)


class BaseImageRead(BaseImageCreate):
    id: int
    is_active: bool
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["BaseImageCreate", "BaseImageRead"]
