"""Read-only aggregates for the admin dashboard."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from avdmanager.application.use_cases.dashboard import (
    count_templates_by_business_unit,
    count_templates_by_region,
    count_templates_by_status,
    get_dashboard_stats,
    get_recent_activity,
    list_recent_audit_activity,
)
from avdmanager.domain.entities import AdminUser
from avdmanager.infrastructure.database import get_db
from avdmanager.interfaces.api.dependencies import get_current_admin
from avdmanager.interfaces.api.schemas import (
    AuditLogRead,
    BusinessUnitCountRead,
    DashboardStatsRead,
    RecentActivityRead,
    RegionCountRead,
    StatusCountRead,
)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsRead)
def read_dashboard_stats(
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> DashboardStatsRead:
    return DashboardStatsRead.model_validate(get_dashboard_stats(db))


@router.get("/by-status", response_model=list[StatusCountRead])
def read_templates_by_status(
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> list[StatusCountRead]:
    return [StatusCountRead.model_validate(item) for item in count_templates_by_status(db)]


@router.get("/by-region", response_model=list[RegionCountRead])
def read_templates_by_region(
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> list[RegionCountRead]:
    return [
        RegionCountRead(region=item.value, count=item.count)
        for item in count_templates_by_region(db)
    ]


@router.get("/by-business-unit", response_model=list[BusinessUnitCountRead])
def read_templates_by_business_unit(
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> list[BusinessUnitCountRead]:
    return [
        BusinessUnitCountRead.model_validate(item)
        for item in count_templates_by_business_unit(db)
    ]


@router.get("/recent", response_model=RecentActivityRead)
def read_recent_activity(
    limit: int = Query(10, ge=1, le=50),
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> RecentActivityRead:
    """Return the latest modified templates and ledger entries."""

    return RecentActivityRead.model_validate(get_recent_activity(db, limit=limit))


@router.get("/recent-activity", response_model=list[AuditLogRead])
def read_recent_audit_activity(
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    _: AdminUser = Depends(get_current_admin),
) -> list[AuditLogRead]:
    return [
        AuditLogRead.model_validate(entry)
        for entry in list_recent_audit_activity(db, limit=limit)
    ]


__all__ = ["router"]
