"""Persistence layer for applications attached to templates."""

from __future__ import annotations

from collections.abc import Mapping

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from avdmanager.domain.entities import AppApprovalStatus, TemplateApplication
from avdmanager.infrastructure.models import TemplateApplicationModel
from avdmanager.infrastructure.repositories.application_repository import (
    ApplicationRepository,
)
from avdmanager.utils import ensure_app_timezone


class TemplateApplicationRepository:
    """Provide CRUD helpers for template/application join rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_template(self, template_id: int) -> list[TemplateApplication]:
        models = (
            self.session.query(TemplateApplicationModel)
            .filter(TemplateApplicationModel.template_id == template_id)
            .order_by(
                TemplateApplicationModel.install_order.asc(),
                TemplateApplicationModel.id.asc(),
            )
            .all()
        )
        return [self._to_entity(model) for model in models]

    def list_template_ids_for_application(self, application_id: int) -> list[int]:
        rows = (
            self.session.query(TemplateApplicationModel.template_id)
            .filter(TemplateApplicationModel.application_id == application_id)
            .all()
        )
        return [template_id for (template_id,) in rows]

    def get(self, template_id: int, application_id: int) -> TemplateApplication | None:
        model = self._get_model(template_id, application_id)
        return self._to_entity(model) if model else None

    def get_by_install_order(
        self, template_id: int, install_order: int
    ) -> TemplateApplication | None:
        model = (
            self.session.query(TemplateApplicationModel)
            .filter(TemplateApplicationModel.template_id == template_id)
            .filter(TemplateApplicationModel.install_order == install_order)
            .first()
        )
        return self._to_entity(model) if model else None

    def next_install_order(self, template_id: int) -> int:
        current = (
            self.session.query(func.max(TemplateApplicationModel.install_order))
            .filter(TemplateApplicationModel.template_id == template_id)
            .scalar()
        )
        return 0 if current is None else current + 1

    def create(self, entry: TemplateApplication) -> TemplateApplication:
        model = TemplateApplicationModel(
            template_id=entry.template_id,
            application_id=entry.application_id,
        )
        self._apply_entity_to_model(model, entry)
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise
        self.session.refresh(model)
        return self._to_entity(model)

    def create_many(self, entries: list[TemplateApplication]) -> None:
        for entry in entries:
            model = TemplateApplicationModel(
                template_id=entry.template_id,
                application_id=entry.application_id,
            )
            self._apply_entity_to_model(model, entry)
            self.session.add(model)
        self.session.commit()

    def update(self, entry: TemplateApplication) -> TemplateApplication:
        model = self._get_model(entry.template_id, entry.application_id)
        if not model:
            msg = (
                f"Application {entry.application_id} is not attached to "
                f"template {entry.template_id}"
            )
            raise ValueError(msg)
        self._apply_entity_to_model(model, entry)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, template_id: int, application_id: int) -> None:
        model = self._get_model(template_id, application_id)
        if not model:
            msg = f"Application {application_id} is not attached to template {template_id}"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    def reorder(self, template_id: int, orders: Mapping[int, int]) -> None:
        """Apply ``{application_id: install_order}`` as a single batch.

        Either every row is updated or, on any failure, none is.
        """

        try:
            models = {
                model.application_id: model
                for model in self.session.query(TemplateApplicationModel)
                .filter(TemplateApplicationModel.template_id == template_id)
                .filter(TemplateApplicationModel.application_id.in_(list(orders)))
                .all()
            }
            missing = [app_id for app_id in orders if app_id not in models]
            if missing:
                msg = f"Applications {missing} are not attached to template {template_id}"
                raise ValueError(msg)
            for application_id, install_order in orders.items():
                models[application_id].install_order = install_order
            self.session.commit()
        except (SQLAlchemyError, ValueError):
            self.session.rollback()
            raise

    def _get_model(
        self, template_id: int, application_id: int
    ) -> TemplateApplicationModel | None:
        return (
            self.session.query(TemplateApplicationModel)
            .filter(TemplateApplicationModel.template_id == template_id)
            .filter(TemplateApplicationModel.application_id == application_id)
            .first()
        )

    @staticmethod
    def _to_entity(model: TemplateApplicationModel) -> TemplateApplication:
        application = (
            ApplicationRepository._to_entity(model.application)
            if model.application is not None
            else None
        )
        return TemplateApplication(
            id=model.id,
            template_id=model.template_id,
            application_id=model.application_id,
            version_override=model.version_override,
            install_notes=model.install_notes,
            is_required=model.is_required,
            install_order=model.install_order,
            approval_status=AppApprovalStatus(model.approval_status),
            approval_notes=model.approval_notes,
            approved_at=ensure_app_timezone(model.approved_at),
            approved_by_id=model.approved_by_id,
            created_at=ensure_app_timezone(model.created_at),
            application=application,
        )

    @staticmethod
    def _apply_entity_to_model(
        model: TemplateApplicationModel, entry: TemplateApplication
    ) -> None:
        model.version_override = entry.version_override
        model.install_notes = entry.install_notes
        model.is_required = entry.is_required
        model.install_order = entry.install_order
        model.approval_status = AppApprovalStatus(entry.approval_status).value
        model.approval_notes = entry.approval_notes
        model.approved_at = entry.approved_at
        model.approved_by_id = entry.approved_by_id


__all__ = ["TemplateApplicationRepository"]
