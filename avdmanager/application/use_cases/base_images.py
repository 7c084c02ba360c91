"""Use cases for base images."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from avdmanager.application.errors import ConflictError, NotFoundError
from avdmanager.application.use_cases.audit_logs import record_audit_event
from avdmanager.domain.entities import Actor, BaseImage, RequestMetadata
from avdmanager.domain.payload import snapshot
from avdmanager.infrastructure.repositories import BaseImageRepository
from avdmanager.utils import now_in_app_timezone


def list_base_images(
    session: Session, *, include_inactive: bool = False
) -> Sequence[BaseImage]:
    return BaseImageRepository(session).list(include_inactive=include_inactive)


def get_base_image(session: Session, base_image_id: int) -> BaseImage:
    base_image = BaseImageRepository(session).get(base_image_id)
    if base_image is None:
        raise NotFoundError("Base image not found")
    return base_image


def create_base_image(
    session: Session,
    *,
    name: str,
    display_name: str,
    os_type: str,
    version: str,
    description: str | None = None,
    patch_level: str | None = None,
    compute_gallery_id: str | None = None,
    image_definition: str | None = None,
    actor: Actor,
    request: RequestMetadata | None = None,
) -> BaseImage:
    repository = BaseImageRepository(session)
    if repository.get_by_name(name) is not None:
        raise ConflictError(f"Base image '{name}' already exists")

    now = now_in_app_timezone()
    base_image = repository.create(
        BaseImage(
            id=None,
            name=name,
            display_name=display_name,
            description=description,
            os_type=os_type,
            version=version,
            patch_level=patch_level,
            compute_gallery_id=compute_gallery_id,
            image_definition=image_definition,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
    )
    record_audit_event(
        session,
        actor=actor,
        action="BASE_IMAGE_CREATED",
        entity_type="BaseImage",
        entity_id=base_image.id,
        entity_name=base_image.display_name,
        new_value=snapshot(base_image, exclude=("created_at", "updated_at")),
        request=request,
    )
    return base_image


__all__ = ["create_base_image", "get_base_image", "list_base_images"]
