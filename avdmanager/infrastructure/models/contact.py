"""SQLAlchemy model for business unit contacts."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from avdmanager.infrastructure.database import Base
from avdmanager.utils import now_in_app_timezone


class ContactModel(Base):
    """Database representation of a contact person."""

    __tablename__ = "contact"
    __table_args__ = (
        UniqueConstraint("email", "business_unit_id", name="uq_contact_email_business_unit"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(200), nullable=False, index=True)
    title = Column(String(100), nullable=True)
    department = Column(String(100), nullable=True)
    phone = Column(String(30), nullable=True)
    is_primary = Column(Boolean, nullable=False, default=False)
    business_unit_id = Column(
        Integer,
        ForeignKey("business_unit.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )

    business_unit = relationship("BusinessUnitModel", back_populates="contacts")


__all__ = ["ContactModel"]
