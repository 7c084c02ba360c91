"""Persistence layer for the global audit log."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from avdmanager.domain.entities import AuditLog, AuditLogFilters, ValueCount
from avdmanager.infrastructure.models import AuditLogModel
from avdmanager.utils import ensure_app_timezone


class AuditLogRepository:
    """Append and query audit log entries. Entries are never updated or deleted."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: AuditLog) -> AuditLog:
        model = AuditLogModel(
            admin_id=entry.admin_id,
            action=entry.action,
            entity_type=entry.entity_type,
            entity_id=entry.entity_id,
            entity_name=entry.entity_name,
            details=entry.details,
            old_value=entry.old_value,
            new_value=entry.new_value,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
        )
        if entry.created_at is not None:
            model.created_at = entry.created_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, log_id: int) -> AuditLog | None:
        model = self.session.get(AuditLogModel, log_id)
        return self._to_entity(model) if model else None

    def list(
        self,
        filters: AuditLogFilters | None = None,
        *,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[AuditLog], int]:
        query = self._apply_filters(
            self.session.query(AuditLogModel), filters or AuditLogFilters()
        )
        total = query.count()
        models = (
            query.order_by(AuditLogModel.created_at.desc(), AuditLogModel.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models], total

    def list_for_entity(
        self, entity_type: str, entity_id: str, *, limit: int = 50
    ) -> list[AuditLog]:
        models = (
            self.session.query(AuditLogModel)
            .filter(AuditLogModel.entity_type == entity_type)
            .filter(AuditLogModel.entity_id == entity_id)
            .order_by(AuditLogModel.created_at.desc(), AuditLogModel.id.desc())
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models]

    def list_recent(self, limit: int = 10) -> list[AuditLog]:
        models = (
            self.session.query(AuditLogModel)
            .order_by(AuditLogModel.created_at.desc(), AuditLogModel.id.desc())
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models]

    def count_by_action(self) -> list[ValueCount]:
        return self._count_by(AuditLogModel.action)

    def count_by_entity_type(self) -> list[ValueCount]:
        return self._count_by(AuditLogModel.entity_type)

    def _count_by(self, column) -> list[ValueCount]:
        rows = (
            self.session.query(column, func.count(AuditLogModel.id))
            .filter(column.isnot(None))
            .group_by(column)
            .order_by(column.asc())
            .all()
        )
        return [ValueCount(value=value, count=count) for value, count in rows]

    @staticmethod
    def _apply_filters(query: Query, filters: AuditLogFilters) -> Query:
        if filters.action:
            query = query.filter(AuditLogModel.action == filters.action)
        if filters.entity_type:
            query = query.filter(AuditLogModel.entity_type == filters.entity_type)
        if filters.entity_id:
            query = query.filter(AuditLogModel.entity_id == filters.entity_id)
        if filters.admin_id is not None:
            query = query.filter(AuditLogModel.admin_id == filters.admin_id)
        if filters.start_date is not None:
            query = query.filter(AuditLogModel.created_at >= filters.start_date)
        if filters.end_date is not None:
            query = query.filter(AuditLogModel.created_at <= filters.end_date)
        return query

    @staticmethod
    def _to_entity(model: AuditLogModel) -> AuditLog:
        admin = model.admin
        return AuditLog(
            id=model.id,
            admin_id=model.admin_id,
            action=model.action,
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            entity_name=model.entity_name,
            details=model.details,
            old_value=model.old_value,
            new_value=model.new_value,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            created_at=ensure_app_timezone(model.created_at),
            admin_name=admin.name if admin is not None else None,
            admin_email=admin.email if admin is not None else None,
        )


__all__ = ["AuditLogRepository"]
