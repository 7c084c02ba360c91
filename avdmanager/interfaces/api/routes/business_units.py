"""Routes for managing business units."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from avdmanager.application.use_cases.business_units import (
    create_business_unit as create_business_unit_uc,
    delete_business_unit as delete_business_unit_uc,
    get_business_unit as get_business_unit_uc,
    list_business_unit_contacts as list_business_unit_contacts_uc,
    list_business_units as list_business_units_uc,
    update_business_unit as update_business_unit_uc,
)
from avdmanager.domain.entities import Actor, AdminUser, RequestMetadata
from avdmanager.infrastructure.database import get_db
from avdmanager.interfaces.api.dependencies import (
    get_actor,
    get_current_admin,
    get_request_metadata,
)
from avdmanager.interfaces.api.schemas import (
    BusinessUnitCreate,
    BusinessUnitRead,
    BusinessUnitUpdate,
    ContactRead,
)

from ._errors import to_http_exception

router = APIRouter(prefix="/business-units", tags=["business_units"])


@router.get("/", response_model=list[BusinessUnitRead])
def list_business_units(
    include_inactive: bool = False,
    is_vendor: bool | None = None,
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> list[BusinessUnitRead]:
    units = list_business_units_uc(
        db, include_inactive=include_inactive, is_vendor=is_vendor
    )
    return [BusinessUnitRead.model_validate(unit) for unit in units]


@router.post("/", response_model=BusinessUnitRead, status_code=status.HTTP_201_CREATED)
def create_business_unit(
    payload: BusinessUnitCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> BusinessUnitRead:
    try:
        unit = create_business_unit_uc(
            db, **payload.model_dump(), actor=actor, request=request_metadata
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return BusinessUnitRead.model_validate(unit)


@router.get("/{business_unit_id}", response_model=BusinessUnitRead)
def read_business_unit(
    business_unit_id: int,
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> BusinessUnitRead:
    try:
        unit = get_business_unit_uc(db, business_unit_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return BusinessUnitRead.model_validate(unit)


@router.get("/{business_unit_id}/contacts", response_model=list[ContactRead])
def list_business_unit_contacts(
    business_unit_id: int,
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> list[ContactRead]:
    try:
        contacts = list_business_unit_contacts_uc(db, business_unit_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return [ContactRead.model_validate(contact) for contact in contacts]


@router.put("/{business_unit_id}", response_model=BusinessUnitRead)
def update_business_unit(
    business_unit_id: int,
    payload: BusinessUnitUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> BusinessUnitRead:
    try:
        unit = update_business_unit_uc(
            db,
            business_unit_id=business_unit_id,
            changes=payload.model_dump(exclude_unset=True),
            actor=actor,
            request=request_metadata,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return BusinessUnitRead.model_validate(unit)


@router.delete("/{business_unit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_business_unit(
    business_unit_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
    request_metadata: RequestMetadata = Depends(get_request_metadata),
) -> Response:
    try:
        delete_business_unit_uc(
            db, business_unit_id=business_unit_id, actor=actor, request=request_metadata
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
