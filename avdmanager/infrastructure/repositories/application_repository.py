"""Persistence layer for the application catalogue."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from avdmanager.domain.entities import Application, ValueCount
from avdmanager.infrastructure.models import ApplicationModel, TemplateApplicationModel
from avdmanager.utils import ensure_app_timezone

_COPIED_FIELDS = (
    "name",
    "display_name",
    "version",
    "publisher",
    "description",
    "is_msix_app_attach",
    "msix_package_path",
    "msix_image_path",
    "msix_certificate",
    "license_required",
    "license_type",
    "license_vendor",
    "license_sku",
    "license_cost",
    "license_notes",
    "category",
    "install_command",
    "uninstall_command",
    "install_size",
    "is_active",
)


class ApplicationRepository:
    """Provide CRUD operations for applications."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        search: str | None = None,
        category: str | None = None,
        is_msix_app_attach: bool | None = None,
        license_required: bool | None = None,
        is_active: bool | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[Application], int]:
        query = self.session.query(ApplicationModel)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    ApplicationModel.name.ilike(pattern),
                    ApplicationModel.display_name.ilike(pattern),
                    ApplicationModel.publisher.ilike(pattern),
                )
            )
        if category:
            query = query.filter(ApplicationModel.category == category)
        if is_msix_app_attach is not None:
            query = query.filter(ApplicationModel.is_msix_app_attach.is_(is_msix_app_attach))
        if license_required is not None:
            query = query.filter(ApplicationModel.license_required.is_(license_required))
        if is_active is not None:
            query = query.filter(ApplicationModel.is_active.is_(is_active))

        total = query.count()
        models = (
            query.order_by(ApplicationModel.display_name.asc(), ApplicationModel.id.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        counts = self._template_counts([model.id for model in models])
        return [self._to_entity(model, counts.get(model.id, 0)) for model in models], total

    def get(self, application_id: int) -> Application | None:
        model = self.session.get(ApplicationModel, application_id)
        if model is None:
            return None
        return self._to_entity(model, self.count_templates(application_id))

    def get_by_name(self, name: str) -> Application | None:
        model = self.session.query(ApplicationModel).filter_by(name=name).first()
        return self._to_entity(model) if model else None

    def count_templates(self, application_id: int) -> int:
        return (
            self.session.query(func.count(TemplateApplicationModel.id))
            .filter(TemplateApplicationModel.application_id == application_id)
            .scalar()
            or 0
        )

    def count_active(self) -> int:
        return (
            self.session.query(func.count(ApplicationModel.id))
            .filter(ApplicationModel.is_active.is_(True))
            .scalar()
            or 0
        )

    def list_categories(self) -> list[ValueCount]:
        rows = (
            self.session.query(ApplicationModel.category, func.count(ApplicationModel.id))
            .filter(ApplicationModel.category.isnot(None))
            .group_by(ApplicationModel.category)
            .order_by(ApplicationModel.category.asc())
            .all()
        )
        return [ValueCount(value=category, count=count) for category, count in rows if category]

    def create(self, application: Application) -> Application:
        model = ApplicationModel()
        self._apply_entity_to_model(model, application)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, application: Application) -> Application:
        model = self.session.get(ApplicationModel, application.id)
        if not model:
            msg = f"Application with id {application.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, application)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model, self.count_templates(model.id))

    def delete(self, application_id: int) -> None:
        model = self.session.get(ApplicationModel, application_id)
        if not model:
            msg = f"Application with id {application_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    def _template_counts(self, ids: Sequence[int]) -> dict[int, int]:
        if not ids:
            return {}
        rows = (
            self.session.query(
                TemplateApplicationModel.application_id,
                func.count(TemplateApplicationModel.id),
            )
            .filter(TemplateApplicationModel.application_id.in_(ids))
            .group_by(TemplateApplicationModel.application_id)
            .all()
        )
        return {application_id: count for application_id, count in rows}

    @staticmethod
    def _to_entity(model: ApplicationModel, template_count: int = 0) -> Application:
        values = {field: getattr(model, field) for field in _COPIED_FIELDS}
        return Application(
            id=model.id,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            template_count=template_count,
            **values,
        )

    @staticmethod
    def _apply_entity_to_model(model: ApplicationModel, application: Application) -> None:
        for field in _COPIED_FIELDS:
            setattr(model, field, getattr(application, field))


__all__ = ["ApplicationRepository"]
