"""SQLAlchemy model for base images."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from avdmanager.infrastructure.database import Base
from avdmanager.utils import now_in_app_timezone


class BaseImageModel(Base):
    __tablename__ = "base_image"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    display_name = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=True)
    os_type = Column(String(50), nullable=False)
    version = Column(String(50), nullable=False)
    patch_level = Column(String(50), nullable=True)
    compute_gallery_id = Column(String(500), nullable=True)
    image_definition = Column(String(200), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )


__all__ = ["BaseImageModel"]
