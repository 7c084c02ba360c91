"""SQLAlchemy model for the admin user table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from avdmanager.infrastructure.database import Base
from avdmanager.utils import now_in_app_timezone


class AdminUserModel(Base):
    """Database representation of a portal administrator."""

    __tablename__ = "admin_user"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(200), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)
    password = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )


__all__ = ["AdminUserModel"]
