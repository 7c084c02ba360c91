"""SQLAlchemy model for business units."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from avdmanager.infrastructure.database import Base
from avdmanager.utils import now_in_app_timezone


class BusinessUnitModel(Base):
    """Database representation of a business unit."""

    __tablename__ = "business_unit"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    code = Column(String(20), nullable=False, unique=True, index=True)
    description = Column(String(500), nullable=True)
    is_vendor = Column(Boolean, nullable=False, default=False, index=True)
    vendor_company = Column(String(200), nullable=True)
    cost_center = Column(String(50), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )

    contacts = relationship(
        "ContactModel",
        back_populates="business_unit",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["BusinessUnitModel"]
