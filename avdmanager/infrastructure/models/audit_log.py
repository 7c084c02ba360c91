"""SQLAlchemy model for the global audit log."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from avdmanager.infrastructure.database import Base
from avdmanager.utils import now_in_app_timezone

from ._types import json_type


class AuditLogModel(Base):
    """Database representation of audit events.

    ``entity_id`` has no foreign key so entries survive deletion of the
    entity they describe.
    """

    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True, index=True)
    admin_id = Column(Integer, ForeignKey("admin_user.id"), nullable=False, index=True)
    action = Column(String(50), nullable=False, index=True)
    entity_type = Column(String(50), nullable=True, index=True)
    entity_id = Column(String(64), nullable=True, index=True)
    entity_name = Column(String(200), nullable=True)
    details = Column(json_type, nullable=True)
    old_value = Column(json_type, nullable=True)
    new_value = Column(json_type, nullable=True)
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(String(500), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=now_in_app_timezone,
        index=True,
    )

    admin = relationship("AdminUserModel", lazy="joined")


__all__ = ["AuditLogModel"]
