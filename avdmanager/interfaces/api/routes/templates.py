"""Routes for templates, their lifecycle and their applications."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from avdmanager.application.use_cases.template_history import (
    list_template_history as list_template_history_uc,
)
from avdmanager.application.use_cases.templates import (
    InstallOrderChange,
    NewTemplateData,
    add_template_application as add_template_application_uc,
    create_template as create_template_uc,
    delete_template as delete_template_uc,
    duplicate_template as duplicate_template_uc,
    get_template as get_template_uc,
    list_template_applications as list_template_applications_uc,
    list_templates as list_templates_uc,
    remove_template_application as remove_template_application_uc,
    reorder_template_applications as reorder_template_applications_uc,
    update_template as update_template_uc,
    update_template_application as update_template_application_uc,
    update_template_status as update_template_status_uc,
)
from avdmanager.domain.entities import (
    Actor,
    AdminUser,
    Environment,
    RequestMetadata,
    Template,
    TemplateStatus,
)
from avdmanager.infrastructure.database import get_db
from avdmanager.interfaces.api.dependencies import (
    get_actor,
    get_current_admin,
    get_request_metadata,
)
from avdmanager.interfaces.api.schemas import (
    PageRead,
    TemplateApplicationCreate,
    TemplateApplicationRead,
    TemplateApplicationsReorder,
    TemplateApplicationUpdate,
    TemplateCreate,
    TemplateDetailRead,
    TemplateHistoryRead,
    TemplateRead,
    TemplateStatusUpdate,
    TemplateUpdate,
)

from ._errors import to_http_exception

router = APIRouter(prefix="/templates", tags=["templates"])


def _template_to_detail_model(template: Template) -> TemplateDetailRead:
    return TemplateDetailRead.model_validate(template)


@router.get("/", response_model=PageRead[TemplateRead])
def list_templates(
    search: str | None = None,
    status_filter: TemplateStatus | None = Query(None, alias="status"),
    environment: Environment | None = None,
    business_unit_id: int | None = None,
    region: str | None = None,
    sort_by: str = "last_modified_date",
    sort_order: str = "desc",
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> PageRead[TemplateRead]:
    try:
        result = list_templates_uc(
            db,
            search=search,
            status=status_filter,
            environment=environment,
            business_unit_id=business_unit_id,
            region=region,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            page_size=page_size,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return PageRead[TemplateRead].model_validate(result)


@router.post("/", response_model=TemplateDetailRead, status_code=status.HTTP_201_CREATED)
def create_template(
    payload: TemplateCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> TemplateDetailRead:
    try:
        template = create_template_uc(
            db,
            data=NewTemplateData(**payload.model_dump()),
            actor=actor,
            request=request_metadata,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return _template_to_detail_model(template)


@router.get("/{template_id}", response_model=TemplateDetailRead)
def read_template(
    template_id: int,
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> TemplateDetailRead:
    try:
        template = get_template_uc(db, template_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return _template_to_detail_model(template)


@router.put("/{template_id}", response_model=TemplateDetailRead)
def update_template(
    template_id: int,
    payload: TemplateUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> TemplateDetailRead:
    try:
        template = update_template_uc(
            db,
            template_id=template_id,
            changes=payload.model_dump(exclude_unset=True),
            actor=actor,
            request=request_metadata,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return _template_to_detail_model(template)


@router.patch("/{template_id}/status", response_model=TemplateDetailRead)
def update_template_status(
    template_id: int,
    payload: TemplateStatusUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> TemplateDetailRead:
    """Move the template to another status if the workflow allows it."""

    try:
        template = update_template_status_uc(
            db,
            template_id=template_id,
            status=payload.status,
            comment=payload.comment,
            actor=actor,
            request=request_metadata,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return _template_to_detail_model(template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(
    template_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> Response:
    try:
        delete_template_uc(db, template_id=template_id, actor=actor, request=request_metadata)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{template_id}/duplicate",
    response_model=TemplateDetailRead,
    status_code=status.HTTP_201_CREATED,
)
def duplicate_template(
    template_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> TemplateDetailRead:
    try:
        template = duplicate_template_uc(
            db, template_id=template_id, actor=actor, request=request_metadata
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return _template_to_detail_model(template)


@router.get("/{template_id}/history", response_model=list[TemplateHistoryRead])
def list_template_history(
    template_id: int,
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> list[TemplateHistoryRead]:
    """Return the change ledger of a template, newest first."""

    try:
        entries = list_template_history_uc(db, template_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return [TemplateHistoryRead.model_validate(entry) for entry in entries]


@router.get(
    "/{template_id}/applications", response_model=list[TemplateApplicationRead]
)
def list_template_applications(
    template_id: int,
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> list[TemplateApplicationRead]:
    try:
        entries = list_template_applications_uc(db, template_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return [TemplateApplicationRead.model_validate(entry) for entry in entries]


@router.post(
    "/{template_id}/applications",
    response_model=TemplateApplicationRead,
    status_code=status.HTTP_201_CREATED,
)
def add_template_application(
    template_id: int,
    payload: TemplateApplicationCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> TemplateApplicationRead:
    try:
        entry = add_template_application_uc(
            db,
            template_id=template_id,
            **payload.model_dump(),
            actor=actor,
            request=request_metadata,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return TemplateApplicationRead.model_validate(entry)


@router.patch(
    "/{template_id}/applications/reorder",
    response_model=list[TemplateApplicationRead],
)
def reorder_template_applications(
    template_id: int,
    payload: TemplateApplicationsReorder,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> list[TemplateApplicationRead]:
    """Apply new install orders to several applications in one batch."""

    try:
        entries = reorder_template_applications_uc(
            db,
            template_id=template_id,
            changes=[
                InstallOrderChange(
                    application_id=item.application_id,
                    install_order=item.install_order,
                )
                for item in payload.applications
            ],
            actor=actor,
            request=request_metadata,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return [TemplateApplicationRead.model_validate(entry) for entry in entries]


@router.put(
    "/{template_id}/applications/{application_id}",
    response_model=TemplateApplicationRead,
)
def update_template_application(
    template_id: int,
    application_id: int,
    payload: TemplateApplicationUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> TemplateApplicationRead:
    try:
        entry = update_template_application_uc(
            db,
            template_id=template_id,
            application_id=application_id,
            changes=payload.model_dump(exclude_unset=True),
            actor=actor,
            request=request_metadata,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return TemplateApplicationRead.model_validate(entry)


@router.delete(
    "/{template_id}/applications/{application_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def remove_template_application(
    template_id: int,
    application_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> Response:
    try:
        remove_template_application_uc(
            db,
            template_id=template_id,
            application_id=application_id,
            actor=actor,
            request=request_metadata,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
