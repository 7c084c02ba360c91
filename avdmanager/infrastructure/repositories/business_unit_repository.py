"""Persistence layer for business units."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from avdmanager.domain.entities import BusinessUnit
from avdmanager.infrastructure.models import (
    BusinessUnitModel,
    ContactModel,
    TemplateModel,
)
from avdmanager.utils import ensure_app_timezone


class BusinessUnitRepository:
    """Provide CRUD operations for business units."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        include_inactive: bool = False,
        is_vendor: bool | None = None,
    ) -> Sequence[BusinessUnit]:
        query = self.session.query(BusinessUnitModel)
        if not include_inactive:
            query = query.filter(BusinessUnitModel.is_active.is_(True))
        if is_vendor is not None:
            query = query.filter(BusinessUnitModel.is_vendor.is_(is_vendor))
        models = query.order_by(BusinessUnitModel.name.asc()).all()

        ids = [model.id for model in models]
        template_counts = self._count_by(TemplateModel.business_unit_id, ids)
        contact_counts = self._count_by(ContactModel.business_unit_id, ids)
        return [
            self._to_entity(
                model,
                template_count=template_counts.get(model.id, 0),
                contact_count=contact_counts.get(model.id, 0),
            )
            for model in models
        ]

    def get(self, business_unit_id: int) -> BusinessUnit | None:
        model = self.session.get(BusinessUnitModel, business_unit_id)
        if model is None:
            return None
        return self._to_entity(
            model,
            template_count=self.count_templates(business_unit_id),
            contact_count=self._count_by(
                ContactModel.business_unit_id, [business_unit_id]
            ).get(business_unit_id, 0),
        )

    def get_by_code(self, code: str) -> BusinessUnit | None:
        model = self.session.query(BusinessUnitModel).filter_by(code=code).first()
        return self._to_entity(model) if model else None

    def get_by_name(self, name: str) -> BusinessUnit | None:
        model = (
            self.session.query(BusinessUnitModel)
            .filter(func.lower(BusinessUnitModel.name) == name.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, ids: Sequence[int]) -> dict[int, BusinessUnit]:
        if not ids:
            return {}
        models = (
            self.session.query(BusinessUnitModel)
            .filter(BusinessUnitModel.id.in_(set(ids)))
            .all()
        )
        return {model.id: self._to_entity(model) for model in models}

    def count_templates(self, business_unit_id: int) -> int:
        return (
            self.session.query(func.count(TemplateModel.id))
            .filter(TemplateModel.business_unit_id == business_unit_id)
            .scalar()
            or 0
        )

    def count_active(self) -> int:
        return (
            self.session.query(func.count(BusinessUnitModel.id))
            .filter(BusinessUnitModel.is_active.is_(True))
            .scalar()
            or 0
        )

    def create(self, business_unit: BusinessUnit) -> BusinessUnit:
        model = BusinessUnitModel()
        self._apply_entity_to_model(model, business_unit)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, business_unit: BusinessUnit) -> BusinessUnit:
        model = self.session.get(BusinessUnitModel, business_unit.id)
        if not model:
            msg = f"Business unit with id {business_unit.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, business_unit)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self.get(model.id)

    def delete(self, business_unit_id: int) -> None:
        model = self.session.get(BusinessUnitModel, business_unit_id)
        if not model:
            msg = f"Business unit with id {business_unit_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    def _count_by(self, column, ids: Sequence[int]) -> dict[int, int]:
        if not ids:
            return {}
        rows = (
            self.session.query(column, func.count())
            .filter(column.in_(ids))
            .group_by(column)
            .all()
        )
        return {key: count for key, count in rows}

    @staticmethod
    def _to_entity(
        model: BusinessUnitModel,
        *,
        template_count: int = 0,
        contact_count: int = 0,
    ) -> BusinessUnit:
        return BusinessUnit(
            id=model.id,
            name=model.name,
            code=model.code,
            description=model.description,
            is_vendor=model.is_vendor,
            vendor_company=model.vendor_company,
            cost_center=model.cost_center,
            is_active=model.is_active,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            template_count=template_count,
            contact_count=contact_count,
        )

    @staticmethod
    def _apply_entity_to_model(
        model: BusinessUnitModel, business_unit: BusinessUnit
    ) -> None:
        model.name = business_unit.name
        model.code = business_unit.code
        model.description = business_unit.description
        model.is_vendor = business_unit.is_vendor
        model.vendor_company = business_unit.vendor_company
        model.cost_center = business_unit.cost_center
        model.is_active = business_unit.is_active


__all__ = ["BusinessUnitRepository"]
