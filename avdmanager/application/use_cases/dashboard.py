"""Use cases computing the aggregates shown on the admin dashboard."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from avdmanager.domain.entities import (
    AuditLog,
    BusinessUnit,
    Template,
    TemplateHistoryEntry,
    TemplateStatus,
    ValueCount,
)
from avdmanager.infrastructure.repositories import (
    ApplicationRepository,
    AuditLogRepository,
    BusinessUnitRepository,
    TemplateHistoryRepository,
    TemplateRepository,
)


@dataclass
class DashboardStats:
    """Template totals per status plus active catalogue sizes."""

    total: int
    draft: int
    in_review: int
    approved: int
    deployed: int
    deprecated: int
    total_applications: int
    total_business_units: int


@dataclass
class StatusCount:
    status: TemplateStatus
    count: int


@dataclass
class BusinessUnitCount:
    business_unit: BusinessUnit | None
    count: int


@dataclass
class RecentActivity:
    """Latest templates and ledger entries."""

    recent_templates: list[Template]
    recent_history: list[TemplateHistoryEntry]


def get_dashboard_stats(session: Session) -> DashboardStats:
    template_repository = TemplateRepository(session)
    by_status = template_repository.count_by_status()
    return DashboardStats(
        total=sum(by_status.values()),
        draft=by_status[TemplateStatus.DRAFT],
        in_review=by_status[TemplateStatus.IN_REVIEW],
        approved=by_status[TemplateStatus.APPROVED],
        deployed=by_status[TemplateStatus.DEPLOYED],
        deprecated=by_status[TemplateStatus.DEPRECATED],
        total_applications=ApplicationRepository(session).count_active(),
        total_business_units=BusinessUnitRepository(session).count_active(),
    )


def count_templates_by_status(session: Session) -> list[StatusCount]:
    counts = TemplateRepository(session).count_by_status()
    return [StatusCount(status=status, count=counts[status]) for status in TemplateStatus]


def count_templates_by_region(session: Session) -> list[ValueCount]:
    """Count templates per primary region."""

    return TemplateRepository(session).count_by_primary_region()


def count_templates_by_business_unit(session: Session) -> list[BusinessUnitCount]:
    counts = TemplateRepository(session).count_by_business_unit()
    business_units = BusinessUnitRepository(session).get_map_by_ids(list(counts))
    return [
        BusinessUnitCount(business_unit=business_units.get(unit_id), count=count)
        for unit_id, count in sorted(counts.items(), key=lambda item: -item[1])
    ]


def get_recent_activity(session: Session, *, limit: int = 10) -> RecentActivity:
    return RecentActivity(
        recent_templates=TemplateRepository(session).list_recent(limit),
        recent_history=TemplateHistoryRepository(session).list_recent(limit),
    )


def list_recent_audit_activity(session: Session, *, limit: int = 20) -> list[AuditLog]:
    return AuditLogRepository(session).list_recent(limit)


__all__ = [
    "BusinessUnitCount",
    "DashboardStats",
    "RecentActivity",
    "StatusCount",
    "count_templates_by_business_unit",
    "count_templates_by_region",
    "count_templates_by_status",
    "get_dashboard_stats",
    "get_recent_activity",
    "list_recent_audit_activity",
]
