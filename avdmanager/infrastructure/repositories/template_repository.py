"""Persistence layer for templates."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from avdmanager.domain.entities import (
    Environment,
    HostPoolType,
    LoadBalancerType,
    Template,
    TemplateStatus,
    ValueCount,
)
from avdmanager.infrastructure.models import TemplateApplicationModel, TemplateModel
from avdmanager.infrastructure.repositories.template_application_repository import (
    TemplateApplicationRepository,
)
from avdmanager.utils import ensure_app_timezone, now_in_app_timezone

SORTABLE_COLUMNS = {
    "name": TemplateModel.name,
    "request_date": TemplateModel.request_date,
    "last_modified_date": TemplateModel.last_modified_date,
    "status": TemplateModel.status,
}


class TemplateRepository:
    """Provide CRUD operations for templates."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        search: str | None = None,
        status: TemplateStatus | None = None,
        environment: Environment | None = None,
        business_unit_id: int | None = None,
        region: str | None = None,
        sort_by: str = "last_modified_date",
        sort_order: str = "desc",
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[Template], int]:
        query = self.session.query(TemplateModel)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    TemplateModel.name.ilike(pattern),
                    TemplateModel.description.ilike(pattern),
                    TemplateModel.naming_prefix.ilike(pattern),
                )
            )
        if status is not None:
            query = query.filter(TemplateModel.status == TemplateStatus(status).value)
        if environment is not None:
            query = query.filter(
                TemplateModel.environment == Environment(environment).value
            )
        if business_unit_id is not None:
            query = query.filter(TemplateModel.business_unit_id == business_unit_id)
        if region:
            query = query.filter(TemplateModel.primary_region == region)

        total = query.count()
        column = SORTABLE_COLUMNS.get(sort_by, TemplateModel.last_modified_date)
        ordering = column.asc() if sort_order == "asc" else column.desc()
        tiebreak = TemplateModel.id.asc() if sort_order == "asc" else TemplateModel.id.desc()
        models = (
            query.options(selectinload(TemplateModel.applications))
            .order_by(ordering, tiebreak)
            .offset(skip)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models], total

    def list_recent(self, limit: int = 10) -> list[Template]:
        models = (
            self.session.query(TemplateModel)
            .options(selectinload(TemplateModel.applications))
            .order_by(TemplateModel.last_modified_date.desc(), TemplateModel.id.desc())
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models]

    def list_by_ids(self, template_ids: Sequence[int]) -> list[Template]:
        if not template_ids:
            return []
        models = (
            self.session.query(TemplateModel)
            .options(selectinload(TemplateModel.applications))
            .filter(TemplateModel.id.in_(set(template_ids)))
            .order_by(TemplateModel.name.asc())
            .all()
        )
        return [self._to_entity(model) for model in models]

    def get(self, template_id: int) -> Template | None:
        model = (
            self.session.query(TemplateModel)
            .options(selectinload(TemplateModel.applications))
            .filter(TemplateModel.id == template_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def exists(self, template_id: int) -> bool:
        return (
            self.session.query(TemplateModel.id)
            .filter(TemplateModel.id == template_id)
            .first()
            is not None
        )

    def count(self) -> int:
        return self.session.query(func.count(TemplateModel.id)).scalar() or 0

    def count_by_status(self) -> dict[TemplateStatus, int]:
        rows = (
            self.session.query(TemplateModel.status, func.count(TemplateModel.id))
            .group_by(TemplateModel.status)
            .all()
        )
        counts = {status: 0 for status in TemplateStatus}
        for status, count in rows:
            counts[TemplateStatus(status)] = count
        return counts

    def count_by_primary_region(self) -> list[ValueCount]:
        rows = (
            self.session.query(TemplateModel.primary_region, func.count(TemplateModel.id))
            .group_by(TemplateModel.primary_region)
            .order_by(TemplateModel.primary_region.asc())
            .all()
        )
        return [ValueCount(value=region, count=count) for region, count in rows]

    def count_by_business_unit(self) -> dict[int, int]:
        rows = (
            self.session.query(TemplateModel.business_unit_id, func.count(TemplateModel.id))
            .group_by(TemplateModel.business_unit_id)
            .all()
        )
        return {business_unit_id: count for business_unit_id, count in rows}

    def create(self, template: Template) -> Template:
        model = TemplateModel()
        self._apply_entity_to_model(model, template, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        return self.get(model.id)

    def update(self, template: Template) -> Template:
        model = self.session.get(TemplateModel, template.id)
        if not model:
            msg = f"Template with id {template.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, template, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.expire_all()
        return self.get(template.id)

    def delete(self, template_id: int) -> None:
        model = self.session.get(TemplateModel, template_id)
        if not model:
            msg = f"Template with id {template_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: TemplateModel) -> Template:
        applications = sorted(
            (
                TemplateApplicationRepository._to_entity(entry)
                for entry in model.applications
            ),
            key=lambda entry: (entry.install_order, entry.id or 0),
        )
        return Template(
            id=model.id,
            name=model.name,
            description=model.description,
            status=TemplateStatus(model.status),
            environment=Environment(model.environment),
            request_date=ensure_app_timezone(model.request_date),
            last_modified_date=ensure_app_timezone(model.last_modified_date),
            approved_date=ensure_app_timezone(model.approved_date),
            deployed_date=ensure_app_timezone(model.deployed_date),
            deprecated_date=ensure_app_timezone(model.deprecated_date),
            business_unit_id=model.business_unit_id,
            contact_id=model.contact_id,
            contact_name=model.contact_name,
            contact_email=model.contact_email,
            contact_title=model.contact_title,
            naming_prefix=model.naming_prefix,
            naming_pattern=model.naming_pattern,
            host_pool_type=HostPoolType(model.host_pool_type),
            max_session_limit=model.max_session_limit,
            load_balancer_type=LoadBalancerType(model.load_balancer_type),
            validation_env_enabled=model.validation_env_enabled,
            regions=list(model.regions or []),
            primary_region=model.primary_region,
            base_image_id=model.base_image_id,
            tags=dict(model.tags) if model.tags is not None else None,
            notes=model.notes,
            created_by_id=model.created_by_id,
            updated_by_id=model.updated_by_id,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            applications=applications,
            application_count=len(applications),
        )

    @staticmethod
    def _apply_entity_to_model(
        model: TemplateModel,
        template: Template,
        *,
        include_creation_fields: bool,
    ) -> None:
        now = now_in_app_timezone()
        if include_creation_fields:
            model.created_by_id = template.created_by_id
            model.created_at = template.created_at or now
            model.request_date = template.request_date or now
            model.updated_by_id = None
        else:
            model.updated_by_id = template.updated_by_id
        model.name = template.name
        model.description = template.description
        model.status = TemplateStatus(template.status).value
        model.environment = Environment(template.environment).value
        model.last_modified_date = template.last_modified_date or now
        model.approved_date = template.approved_date
        model.deployed_date = template.deployed_date
        model.deprecated_date = template.deprecated_date
        model.business_unit_id = template.business_unit_id
        model.contact_id = template.contact_id
        model.contact_name = template.contact_name
        model.contact_email = template.contact_email
        model.contact_title = template.contact_title
        model.naming_prefix = template.naming_prefix
        model.naming_pattern = template.naming_pattern
        model.host_pool_type = HostPoolType(template.host_pool_type).value
        model.max_session_limit = template.max_session_limit
        model.load_balancer_type = LoadBalancerType(template.load_balancer_type).value
        model.validation_env_enabled = template.validation_env_enabled
        model.regions = list(template.regions)
        model.primary_region = template.primary_region
        model.base_image_id = template.base_image_id
        model.tags = dict(template.tags) if template.tags is not None else None
        model.notes = template.notes


__all__ = ["SORTABLE_COLUMNS", "TemplateRepository"]
