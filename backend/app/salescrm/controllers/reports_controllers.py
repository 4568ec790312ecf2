"""Reporting endpoints."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from salescrm.models.report_models import CloserStats, NoShowReport, RevenueReport
from salescrm.repositories.crm.dependencies import get_db
from salescrm.repositories.crm.schemas.daily_stats_schema import (
    DailyStatsResponse,
    DateRangeFilter,
)
from salescrm.services.daily_stats_services import (
    DailyStatsService,
    get_daily_stats_service,
)
from salescrm.services.reports_services import ReportService, get_report_service

reports_router = APIRouter(prefix="/api/reports", tags=["Reports"])


@reports_router.get("/closer-stats", response_model=List[CloserStats])
def get_closer_stats(
    period: DateRangeFilter = Depends(),
    db: Session = Depends(get_db),
    service: ReportService = Depends(get_report_service),
) -> List[CloserStats]:
    """Deal outcomes and recognized revenue per closer, filtered on closing date."""
    return service.closer_stats(db, period)


@reports_router.get("/revenue", response_model=RevenueReport)
def get_revenue(
    period: DateRangeFilter = Depends(),
    db: Session = Depends(get_db),
    service: ReportService = Depends(get_report_service),
) -> RevenueReport:
    return service.revenue(db, period)


@reports_router.get("/no-shows", response_model=NoShowReport)
def get_no_shows(
    period: DateRangeFilter = Depends(),
    db: Session = Depends(get_db),
    service: ReportService = Depends(get_report_service),
) -> NoShowReport:
    return service.no_shows(db, period)


@reports_router.get("/daily-stats", response_model=List[DailyStatsResponse])
def list_daily_stats(
    period: DateRangeFilter = Depends(),
    db: Session = Depends(get_db),
    service: DailyStatsService = Depends(get_daily_stats_service),
) -> List[DailyStatsResponse]:
    return [
        DailyStatsResponse.model_validate(stats)
        for stats in service.list(db, period.start_date, period.end_date)
    ]
