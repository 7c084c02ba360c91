"""Validation helpers shared by template use cases."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from avdmanager.application.errors import NotFoundError
from avdmanager.domain.entities import Template
from avdmanager.infrastructure.repositories import (
    BaseImageRepository,
    BusinessUnitRepository,
    ContactRepository,
    TemplateRepository,
)


def ensure_regions(regions: Sequence[str], primary_region: str) -> None:
    """Require a non-empty region list that contains the primary region."""

    if not regions:
        raise ValueError("At least one region is required")
    if len(set(regions)) != len(regions):
        raise ValueError("Regions must not contain duplicates")
    if primary_region not in regions:
        raise ValueError(
            f"Primary region '{primary_region}' must be one of the template regions"
        )


def ensure_references(
    session: Session,
    *,
    business_unit_id: int | None = None,
    contact_id: int | None = None,
    base_image_id: int | None = None,
) -> None:
    """Raise :class:`NotFoundError` for any referenced entity that is missing."""

    if business_unit_id is not None:
        if BusinessUnitRepository(session).get(business_unit_id) is None:
            raise NotFoundError("Business unit not found")
    if contact_id is not None:
        if ContactRepository(session).get(contact_id) is None:
            raise NotFoundError("Contact not found")
    if base_image_id is not None:
        if BaseImageRepository(session).get(base_image_id) is None:
            raise NotFoundError("Base image not found")


def get_existing_template(session: Session, template_id: int) -> Template:
    template = TemplateRepository(session).get(template_id)
    if template is None:
        raise NotFoundError("Template not found")
    return template


__all__ = ["ensure_references", "ensure_regions", "get_existing_template"]
