"""Persistence layer for base images."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from avdmanager.domain.entities import BaseImage
from avdmanager.infrastructure.models import BaseImageModel
from avdmanager.utils import ensure_app_timezone


class BaseImageRepository:
    """Provide read and create operations for base images."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, *, include_inactive: bool = False) -> Sequence[BaseImage]:
        query = self.session.query(BaseImageModel)
        if not include_inactive:
            query = query.filter(BaseImageModel.is_active.is_(True))
        return [
            self._to_entity(model)
            for model in query.order_by(BaseImageModel.name.asc()).all()
        ]

    def get(self, base_image_id: int) -> BaseImage | None:
        model = self.session.get(BaseImageModel, base_image_id)
        return self._to_entity(model) if model else None

    def get_by_name(self, name: str) -> BaseImage | None:
        model = self.session.query(BaseImageModel).filter_by(name=name).first()
        return self._to_entity(model) if model else None

    def create(self, base_image: BaseImage) -> BaseImage:
        model = BaseImageModel(
            name=base_image.name,
            display_name=base_image.display_name,
            description=base_image.description,
            os_type=base_image.os_type,
            version=base_image.version,
            patch_level=base_image.patch_level,
            compute_gallery_id=base_image.compute_gallery_id,
            image_definition=base_image.image_definition,
            is_active=base_image.is_active,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: BaseImageModel) -> BaseImage:
        return BaseImage(
            id=model.id,
            name=model.name,
            display_name=model.display_name,
            description=model.description,
            os_type=model.os_type,
            version=model.version,
            patch_level=model.patch_level,
            compute_gallery_id=model.compute_gallery_id,
            image_definition=model.image_definition,
            is_active=model.is_active,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["BaseImageRepository"]
