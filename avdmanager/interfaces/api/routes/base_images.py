"""Routes for base images."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from avdmanager.application.use_cases.base_images import (
    create_base_image as create_base_image_uc,
    get_base_image as get_base_image_uc,
    list_base_images as list_base_images_uc,
)
from avdmanager.domain.entities import Actor, AdminUser, RequestMetadata
from avdmanager.infrastructure.database import get_db
from avdmanager.interfaces.api.dependencies import (
    get_actor,
    get_current_admin,
    get_request_metadata,
)
from avdmanager.interfaces.api.schemas import BaseImageCreate, BaseImageRead

from ._errors import to_http_exception

router = APIRouter(prefix="/base-images", tags=["base_images"])


@router.get("/", response_model=list[BaseImageRead])
def list_base_images(
    include_inactive: bool = False,
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> list[BaseImageRead]:
    images = list_base_images_uc(db, include_inactive=include_inactive)
    return [BaseImageRead.model_validate(image) for image in images]


@router.post("/", response_model=BaseImageRead, status_code=status.HTTP_201_CREATED)
def create_base_image(
    payload: BaseImageCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> BaseImageRead:
    try:
        image = create_base_image_uc(
            db, **payload.model_dump(), actor=actor, request=request_metadata
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return BaseImageRead.model_validate(image)


@router.get("/{base_image_id}", response_model=BaseImageRead)
def read_base_image(
    base_image_id: int,
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> BaseImageRead:
    try:
        image = get_base_image_uc(db, base_image_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return BaseImageRead.model_validate(image)


__all__ = ["router"]
