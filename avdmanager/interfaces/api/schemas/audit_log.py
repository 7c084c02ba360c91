"""Schemas for audit log endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AuditLogRead(BaseModel):
    """Representation of an audit log entry returned by the API."""

    id: int
    admin_id: int
    admin_name: str | None = None
    admin_email: str | None = None
    action: str
    entity_type: str | None
    entity_id: str | None
    entity_name: str | None
    details: dict | None
    old_value: dict | None
    new_value: dict | None
    ip_address: str | None
    user_agent: str | None
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["AuditLogRead"]
