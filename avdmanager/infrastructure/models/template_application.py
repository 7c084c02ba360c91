"""SQLAlchemy model for applications attached to templates."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from avdmanager.infrastructure.database import Base
from avdmanager.utils import now_in_app_timezone


class TemplateApplicationModel(Base):
    """Join row between a template and an application."""

    __tablename__ = "template_application"
    __table_args__ = (
        UniqueConstraint(
            "template_id",
            "application_id",
            name="uq_template_application_pair",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(
        Integer,
        ForeignKey("template.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    application_id = Column(
        Integer,
        ForeignKey("application.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    version_override = Column(String(50), nullable=True)
    install_notes = Column(Text, nullable=True)
    is_required = Column(Boolean, nullable=False, default=True)
    install_order = Column(Integer, nullable=False, default=0)
    approval_status = Column(String(20), nullable=False, default="PENDING")
    approval_notes = Column(Text, nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)
    approved_by_id = Column(Integer, ForeignKey("admin_user.id"), nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )

    template = relationship("TemplateModel", back_populates="applications")
    application = relationship("ApplicationModel", lazy="joined")


__all__ = ["TemplateApplicationModel"]
