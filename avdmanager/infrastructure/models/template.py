"""SQLAlchemy model for templates."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from avdmanager.infrastructure.database import Base
from avdmanager.utils import now_in_app_timezone

from ._types import json_type


class TemplateModel(Base):
    """Database representation of an AVD host pool template."""

    __tablename__ = "template"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="DRAFT", index=True)
    environment = Column(String(20), nullable=False, default="PILOT", index=True)
    request_date = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    last_modified_date = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    approved_date = Column(DateTime(timezone=True), nullable=True)
    deployed_date = Column(DateTime(timezone=True), nullable=True)
    deprecated_date = Column(DateTime(timezone=True), nullable=True)
    business_unit_id = Column(
        Integer,
        ForeignKey("business_unit.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    contact_id = Column(
        Integer,
        ForeignKey("contact.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    contact_name = Column(String(100), nullable=True)
    contact_email = Column(String(200), nullable=True)
    contact_title = Column(String(100), nullable=True)
    naming_prefix = Column(String(50), nullable=False)
    naming_pattern = Column(String(100), nullable=True)
    host_pool_type = Column(String(20), nullable=False, default="POOLED")
    max_session_limit = Column(Integer, nullable=True)
    load_balancer_type = Column(String(20), nullable=False, default="BREADTH_FIRST")
    validation_env_enabled = Column(Boolean, nullable=False, default=False)
    regions = Column(json_type, nullable=False)
    primary_region = Column(String(50), nullable=False, index=True)
    base_image_id = Column(
        Integer,
        ForeignKey("base_image.id", ondelete="SET NULL"),
        nullable=True,
    )
    tags = Column(json_type, nullable=True)
    notes = Column(Text, nullable=True)
    created_by_id = Column(Integer, ForeignKey("admin_user.id"), nullable=True)
    updated_by_id = Column(Integer, ForeignKey("admin_user.id"), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=now_in_app_timezone,
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )

    business_unit = relationship("BusinessUnitModel", lazy="joined")
    applications = relationship(
        "TemplateApplicationModel",
        back_populates="template",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TemplateApplicationModel.install_order",
    )
    history = relationship(
        "TemplateHistoryModel",
        back_populates="template",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["TemplateModel"]
