"""Persistence layer for administrator accounts."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from avdmanager.domain.entities import AdminUser
from avdmanager.infrastructure.models import AdminUserModel
from avdmanager.utils import ensure_app_timezone


class AdminUserRepository:
    """Provide CRUD operations for :class:`AdminUser` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_email(self, email: str) -> AdminUser | None:
        model = (
            self.session.query(AdminUserModel)
            .filter(func.lower(AdminUserModel.email) == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, user: AdminUser) -> AdminUser:
        model = AdminUserModel()
        self._apply_entity_to_model(model, user)
        if user.created_at is not None:
            model.created_at = user.created_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: AdminUser) -> AdminUser:
        model = self.session.get(AdminUserModel, user.id)
        if not model:
            msg = f"Admin user with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: AdminUserModel) -> AdminUser:
        return AdminUser(
            id=model.id,
            email=model.email,
            name=model.name,
            password=model.password,
            is_active=model.is_active,
            last_login=ensure_app_timezone(model.last_login),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )

    @staticmethod
    def _apply_entity_to_model(model: AdminUserModel, user: AdminUser) -> None:
        model.email = user.email
        model.name = user.name
        model.password = user.password
        model.is_active = user.is_active
        model.last_login = user.last_login


__all__ = ["AdminUserRepository"]
