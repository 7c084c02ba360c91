"""Routes for managing contacts."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from avdmanager.application.use_cases.contacts import (
    create_contact as create_contact_uc,
    delete_contact as delete_contact_uc,
    get_contact as get_contact_uc,
    list_contacts as list_contacts_uc,
    update_contact as update_contact_uc,
)
from avdmanager.domain.entities import Actor, AdminUser, RequestMetadata
from avdmanager.infrastructure.database import get_db
from avdmanager.interfaces.api.dependencies import (
    get_actor,
    get_current_admin,
    get_request_metadata,
)
from avdmanager.interfaces.api.schemas import (
    ContactCreate,
    ContactRead,
    ContactUpdate,
    PageRead,
)

from ._errors import to_http_exception

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("/", response_model=PageRead[ContactRead])
def list_contacts(
    business_unit_id: int | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> PageRead[ContactRead]:
    result = list_contacts_uc(
        db,
        business_unit_id=business_unit_id,
        search=search,
        page=page,
        page_size=page_size,
    )
    return PageRead[ContactRead].model_validate(result)


@router.post("/", response_model=ContactRead, status_code=status.HTTP_201_CREATED)
def create_contact(
    payload: ContactCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> ContactRead:
    try:
        contact = create_contact_uc(
            db, **payload.model_dump(), actor=actor, request=request_metadata
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return ContactRead.model_validate(contact)


@router.get("/{contact_id}", response_model=ContactRead)
def read_contact(
    contact_id: int,
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> ContactRead:
    try:
        contact = get_contact_uc(db, contact_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return ContactRead.model_validate(contact)


@router.put("/{contact_id}", response_model=ContactRead)
def update_contact(
    contact_id: int,
    payload: ContactUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> ContactRead:
    try:
        contact = update_contact_uc(
            db,
            contact_id=contact_id,
            changes=payload.model_dump(exclude_unset=True),
            actor=actor,
            request=request_metadata,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return ContactRead.model_validate(contact)


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_contact(
    contact_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> Response:
    try:
        delete_contact_uc(db, contact_id=contact_id, actor=actor, request=request_metadata)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
