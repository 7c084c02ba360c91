"""Use cases for reading templates."""

from sqlalchemy.orm import Session

from avdmanager.domain.entities import Environment, Page, Template, TemplateStatus
from avdmanager.infrastructure.repositories import TemplateRepository
from avdmanager.infrastructure.repositories.template_repository import SORTABLE_COLUMNS

from .validators import get_existing_template

MAX_PAGE_SIZE = 100


def get_template(session: Session, template_id: int) -> Template:
    """Return a template with its applications in install order."""

    return get_existing_template(session, template_id)


def list_templates(
    session: Session,
    *,
    search: str | None = None,
    status: TemplateStatus | None = None,
    environment: Environment | None = None,
    business_unit_id: int | None = None,
    region: str | None = None,
    sort_by: str = "last_modified_date",
    sort_order: str = "desc",
    page: int = 1,
    page_size: int = 20,
) -> Page:
    if sort_by not in SORTABLE_COLUMNS:
        raise ValueError(
            f"Cannot sort by '{sort_by}' (allowed: {', '.join(sorted(SORTABLE_COLUMNS))})"
        )
    if sort_order not in ("asc", "desc"):
        raise ValueError("sort_order must be 'asc' or 'desc'")
    if page < 1 or not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValueError(f"page must be >= 1 and page_size between 1 and {MAX_PAGE_SIZE}")

    items, total = TemplateRepository(session).list(
        search=search,
        status=status,
        environment=environment,
        business_unit_id=business_unit_id,
        region=region,
        sort_by=sort_by,
        sort_order=sort_order,
        skip=(page - 1) * page_size,
        limit=page_size,
    )
    return Page(items=items, total=total, page=page, page_size=page_size)


__all__ = ["MAX_PAGE_SIZE", "get_template", "list_templates"]
