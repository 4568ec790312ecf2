"""Service layer for the sales reports.

Revenue figures use ``revenue_recognized``: won full payment deals count at
their product price, won installment deals only count the cash received.
"""

from typing import List

from fastapi import Depends
from sqlalchemy.orm import Session

from salescrm.models.report_models import CloserStats, NoShowReport, RevenueReport
from salescrm.repositories.crm.crud.appointment_crud import CRUDAppointment
from salescrm.repositories.crm.crud.deal_crud import CRUDDeal
from salescrm.repositories.crm.crud.user_crud import CRUDUser
from salescrm.repositories.crm.models.enums import DealStatus, UserRole
from salescrm.repositories.crm.schemas.appointment_schema import (
    AppointmentWithRelations,
)
from salescrm.repositories.crm.schemas.daily_stats_schema import DateRangeFilter
from salescrm.services.clock import range_bounds
from salescrm.services.metrics import (
    conversion_rate,
    group_no_shows_by_reason,
    is_lost,
    revenue_recognized,
)


def _average(total: float, count: int) -> float:
    return round(total / count, 2) if count else 0.0


class ReportService:
    """Build the closer, revenue and no-show reports."""

    def __init__(
        self,
        users: CRUDUser,
        deals: CRUDDeal,
        appointments: CRUDAppointment,
    ) -> None:
        self.users = users
        self.deals = deals
        self.appointments = appointments

    def closer_stats(self, db: Session, period: DateRangeFilter) -> List[CloserStats]:
        """Per-closer deal outcomes; the range applies to ``closed_at``."""
        start, end = range_bounds(period.start_date, period.end_date)
        stats = []
        for closer in self.users.list(db, role=UserRole.CLOSER):
            deals = self.deals.list_closed(db, start=start, end=end, closer_id=closer.id)
            won = [deal for deal in deals if deal.status == DealStatus.WON]
            revenue = round(sum(revenue_recognized(deal) for deal in won), 2)
            stats.append(
                CloserStats(
                    id=closer.id,
                    name=closer.name,
                    total_deals=len(deals),
                    won=len(won),
                    lost=sum(1 for deal in deals if is_lost(deal.status)),
                    follow_up=sum(
                        1 for deal in deals if deal.status == DealStatus.FOLLOW_UP
                    ),
                    conversion_rate=round(conversion_rate(len(won), len(deals)), 1),
                    revenue=revenue,
                    avg_deal_value=_average(revenue, len(won)),
                )
            )
        return stats

    def revenue(self, db: Session, period: DateRangeFilter) -> RevenueReport:
        start, end = range_bounds(period.start_date, period.end_date)
        won = self.deals.list_closed(db, start=start, end=end, status=DealStatus.WON)
        total = round(sum(revenue_recognized(deal) for deal in won), 2)
        return RevenueReport(
            total_revenue=total,
            total_deals=len(won),
            avg_deal_value=_average(total, len(won)),
        )

    def no_shows(self, db: Session, period: DateRangeFilter) -> NoShowReport:
        """No-shows grouped by reason; the range applies to ``scheduled_at``."""
        start, end = range_bounds(period.start_date, period.end_date)
        no_shows = self.appointments.list_no_shows(db, start=start, end=end)
        return NoShowReport(
            total=len(no_shows),
            by_reason=group_no_shows_by_reason(no_shows),
            details=[
                AppointmentWithRelations.model_validate(appointment)
                for appointment in no_shows
            ],
        )


def get_report_service(
    users: CRUDUser = Depends(),
    deals: CRUDDeal = Depends(),
    appointments: CRUDAppointment = Depends(),
) -> ReportService:
    return ReportService(users, deals, appointments)
