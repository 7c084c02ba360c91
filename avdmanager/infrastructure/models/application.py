"""SQLAlchemy model for the application catalogue."""

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text

from avdmanager.infrastructure.database import Base
from avdmanager.utils import now_in_app_timezone


class ApplicationModel(Base):
    """Database representation of an installable application."""

    __tablename__ = "application"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True, index=True)
    display_name = Column(String(200), nullable=False)
    version = Column(String(50), nullable=True)
    publisher = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)
    is_msix_app_attach = Column(Boolean, nullable=False, default=False, index=True)
    msix_package_path = Column(String(500), nullable=True)
    msix_image_path = Column(String(500), nullable=True)
    msix_certificate = Column(String(100), nullable=True)
    license_required = Column(Boolean, nullable=False, default=False)
    license_type = Column(String(50), nullable=True)
    license_vendor = Column(String(200), nullable=True)
    license_sku = Column(String(100), nullable=True)
    license_cost = Column(Float, nullable=True)
    license_notes = Column(Text, nullable=True)
    category = Column(String(50), nullable=True, index=True)
    install_command = Column(String(1000), nullable=True)
    uninstall_command = Column(String(1000), nullable=True)
    install_size = Column(String(50), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )


__all__ = ["ApplicationModel"]
