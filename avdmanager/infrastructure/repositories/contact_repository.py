"""Persistence layer for contacts."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from avdmanager.domain.entities import Contact
from avdmanager.infrastructure.models import ContactModel, TemplateModel
from avdmanager.utils import ensure_app_timezone


class ContactRepository:
    """Provide CRUD operations for contacts."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        business_unit_id: int | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[list[Contact], int]:
        query = self.session.query(ContactModel)
        if business_unit_id is not None:
            query = query.filter(ContactModel.business_unit_id == business_unit_id)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    ContactModel.name.ilike(pattern),
                    ContactModel.email.ilike(pattern),
                    ContactModel.department.ilike(pattern),
                )
            )
        total = query.count()
        models = (
            query.order_by(ContactModel.is_primary.desc(), ContactModel.name.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        counts = self._template_counts([model.id for model in models])
        return [self._to_entity(model, counts.get(model.id, 0)) for model in models], total

    def get(self, contact_id: int) -> Contact | None:
        model = self.session.get(ContactModel, contact_id)
        if model is None:
            return None
        return self._to_entity(model, self.count_templates(contact_id))

    def get_by_email(self, email: str, *, business_unit_id: int) -> Contact | None:
        model = (
            self.session.query(ContactModel)
            .filter(func.lower(ContactModel.email) == email.strip().lower())
            .filter(ContactModel.business_unit_id == business_unit_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def count_templates(self, contact_id: int) -> int:
        return (
            self.session.query(func.count(TemplateModel.id))
            .filter(TemplateModel.contact_id == contact_id)
            .scalar()
            or 0
        )

    def create(self, contact: Contact) -> Contact:
        model = ContactModel()
        self._apply_entity_to_model(model, contact)
        if contact.is_primary:
            self._unset_primary(contact.business_unit_id)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, contact: Contact) -> Contact:
        model = self.session.get(ContactModel, contact.id)
        if not model:
            msg = f"Contact with id {contact.id} not found"
            raise ValueError(msg)
        if contact.is_primary and not model.is_primary:
            self._unset_primary(model.business_unit_id, exclude_id=model.id)
        self._apply_entity_to_model(model, contact)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model, self.count_templates(model.id))

    def delete(self, contact_id: int) -> None:
        model = self.session.get(ContactModel, contact_id)
        if not model:
            msg = f"Contact with id {contact_id} not found"
            raise ValueError(msg)
        self.session.delete(model)
        self.session.commit()

    def _unset_primary(self, business_unit_id: int, *, exclude_id: int | None = None) -> None:
        query = (
            self.session.query(ContactModel)
            .filter(ContactModel.business_unit_id == business_unit_id)
            .filter(ContactModel.is_primary.is_(True))
        )
        if exclude_id is not None:
            query = query.filter(ContactModel.id != exclude_id)
        query.update({ContactModel.is_primary: False}, synchronize_session="fetch")

    def _template_counts(self, ids: Sequence[int]) -> dict[int, int]:
        if not ids:
            return {}
        rows = (
            self.session.query(TemplateModel.contact_id, func.count(TemplateModel.id))
            .filter(TemplateModel.contact_id.in_(ids))
            .group_by(TemplateModel.contact_id)
            .all()
        )
        return {contact_id: count for contact_id, count in rows}

    @staticmethod
    def _to_entity(model: ContactModel, template_count: int = 0) -> Contact:
        return Contact(
            id=model.id,
            name=model.name,
            email=model.email,
            title=model.title,
            department=model.department,
            phone=model.phone,
            is_primary=model.is_primary,
            business_unit_id=model.business_unit_id,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            template_count=template_count,
        )

    @staticmethod
    def _apply_entity_to_model(model: ContactModel, contact: Contact) -> None:
        model.name = contact.name
        model.email = contact.email
        model.title = contact.title
        model.department = contact.department
        model.phone = contact.phone
        model.is_primary = contact.is_primary
        model.business_unit_id = contact.business_unit_id


__all__ = ["ContactRepository"]
