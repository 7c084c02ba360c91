"""SQLAlchemy model for the per-template change ledger."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from avdmanager.infrastructure.database import Base
from avdmanager.utils import now_in_app_timezone

from ._types import json_type


class TemplateHistoryModel(Base):
    """Append-only ledger row describing a template lifecycle event."""

    __tablename__ = "template_history"

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(
        Integer,
        ForeignKey("template.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    action = Column(String(20), nullable=False, index=True)
    old_status = Column(String(20), nullable=True)
    new_status = Column(String(20), nullable=True)
    changes = Column(json_type, nullable=True)
    comment = Column(Text, nullable=True)
    user_id = Column(Integer, nullable=False)
    user_name = Column(String(100), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=now_in_app_timezone,
        index=True,
    )

    template = relationship("TemplateModel", back_populates="history")


__all__ = ["TemplateHistoryModel"]
