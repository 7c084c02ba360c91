"""Persistence layer for the per-template change ledger."""

from __future__ import annotations

from sqlalchemy.orm import Session

from avdmanager.domain.entities import (
    TemplateHistoryAction,
    TemplateHistoryEntry,
    TemplateStatus,
)
from avdmanager.infrastructure.models import TemplateHistoryModel, TemplateModel
from avdmanager.utils import ensure_app_timezone


class TemplateHistoryRepository:
    """Append and read template history entries.

    There is deliberately no update or delete: entries only disappear when
    their template is deleted.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: TemplateHistoryEntry) -> TemplateHistoryEntry:
        model = TemplateHistoryModel(
            template_id=entry.template_id,
            action=TemplateHistoryAction(entry.action).value,
            old_status=_status_value(entry.old_status),
            new_status=_status_value(entry.new_status),
            changes=entry.changes,
            comment=entry.comment,
            user_id=entry.user_id,
            user_name=entry.user_name,
        )
        if entry.created_at is not None:
            model.created_at = entry.created_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_template(self, template_id: int) -> list[TemplateHistoryEntry]:
        models = (
            self.session.query(TemplateHistoryModel)
            .filter(TemplateHistoryModel.template_id == template_id)
            .order_by(
                TemplateHistoryModel.created_at.desc(),
                TemplateHistoryModel.id.desc(),
            )
            .all()
        )
        return [self._to_entity(model) for model in models]

    def list_recent(self, limit: int = 10) -> list[TemplateHistoryEntry]:
        rows = (
            self.session.query(TemplateHistoryModel, TemplateModel.name)
            .join(TemplateModel, TemplateModel.id == TemplateHistoryModel.template_id)
            .order_by(
                TemplateHistoryModel.created_at.desc(),
                TemplateHistoryModel.id.desc(),
            )
            .limit(limit)
            .all()
        )
        return [self._to_entity(model, template_name=name) for model, name in rows]

    @staticmethod
    def _to_entity(
        model: TemplateHistoryModel, *, template_name: str | None = None
    ) -> TemplateHistoryEntry:
        return TemplateHistoryEntry(
            id=model.id,
            template_id=model.template_id,
            action=TemplateHistoryAction(model.action),
            old_status=TemplateStatus(model.old_status) if model.old_status else None,
            new_status=TemplateStatus(model.new_status) if model.new_status else None,
            changes=model.changes,
            comment=model.comment,
            user_id=model.user_id,
            user_name=model.user_name,
            created_at=ensure_app_timezone(model.created_at),
            template_name=template_name,
        )


def _status_value(status: TemplateStatus | str | None) -> str | None:
    return TemplateStatus(status).value if status is not None else None


__all__ = ["TemplateHistoryRepository"]
