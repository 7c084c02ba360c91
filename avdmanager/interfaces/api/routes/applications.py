"""Routes for the application catalogue."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from avdmanager.application.use_cases.applications import (
    create_application as create_application_uc,
    delete_application as delete_application_uc,
    get_application as get_application_uc,
    list_application_categories as list_application_categories_uc,
    list_application_templates as list_application_templates_uc,
    list_applications as list_applications_uc,
    update_application as update_application_uc,
)
from avdmanager.domain.entities import Actor, AdminUser, RequestMetadata
from avdmanager.infrastructure.database import get_db
from avdmanager.interfaces.api.dependencies import (
    get_actor,
    get_current_admin,
    get_request_metadata,
)
from avdmanager.interfaces.api.schemas import (
    ApplicationCreate,
    ApplicationRead,
    ApplicationUpdate,
    PageRead,
    TemplateRead,
    ValueCountRead,
)

from ._errors import to_http_exception

router = APIRouter(prefix="/applications", tags=["applications"])


@router.get("/", response_model=PageRead[ApplicationRead])
def list_applications(
    search: str | None = None,
    category: str | None = None,
    is_msix_app_attach: bool | None = None,
    license_required: bool | None = None,
    is_active: bool | None = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> PageRead[ApplicationRead]:
    result = list_applications_uc(
        db,
        search=search,
        category=category,
        is_msix_app_attach=is_msix_app_attach,
        license_required=license_required,
        is_active=is_active,
        page=page,
        page_size=page_size,
    )
    return PageRead[ApplicationRead].model_validate(result)


@router.get("/meta/categories", response_model=list[ValueCountRead])
def list_application_categories(
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> list[ValueCountRead]:
    return [
        ValueCountRead.model_validate(item) for item in list_application_categories_uc(db)
    ]


@router.post("/", response_model=ApplicationRead, status_code=status.HTTP_201_CREATED)
def create_application(
    payload: ApplicationCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> ApplicationRead:
    try:
        application = create_application_uc(
            db, data=payload.model_dump(), actor=actor, request=request_metadata
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return ApplicationRead.model_validate(application)


@router.get("/{application_id}", response_model=ApplicationRead)
def read_application(
    application_id: int,
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> ApplicationRead:
    try:
        application = get_application_uc(db, application_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return ApplicationRead.model_validate(application)


@router.get("/{application_id}/templates", response_model=list[TemplateRead])
def list_application_templates(
    application_id: int,
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> list[TemplateRead]:
    try:
        templates = list_application_templates_uc(db, application_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return [TemplateRead.model_validate(template) for template in templates]


@router.put("/{application_id}", response_model=ApplicationRead)
def update_application(
    application_id: int,
    payload: ApplicationUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> ApplicationRead:
    try:
        application = update_application_uc(
            db,
            application_id=application_id,
            changes=payload.model_dump(exclude_unset=True),
            actor=actor,
            request=request_metadata,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return ApplicationRead.model_validate(application)


@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_application(
    application_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> Response:
    try:
        delete_application_uc(
            db, application_id=application_id, actor=actor, request=request_metadata
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
