"""Data behind the admin and closer dashboards."""

from datetime import timedelta

from fastapi import Depends
from sqlalchemy.orm import Session

from configs import settings
from salescrm.models.dashboard_models import (
    AdminDashboard,
    AppointmentWithLead,
    CloserDashboard,
    CloserDetails,
    DashboardAppointment,
    DashboardLead,
    FollowUp,
    LeadCallSheet,
    RankedCloser,
    TodayDeal,
)
from salescrm.repositories.crm.crud.appointment_crud import CRUDAppointment
from salescrm.repositories.crm.crud.daily_stats_crud import CRUDDailyStats
from salescrm.repositories.crm.crud.deal_crud import CRUDDeal
from salescrm.repositories.crm.crud.lead_crud import CRUDLead
from salescrm.repositories.crm.crud.user_crud import CRUDUser
from salescrm.repositories.crm.models.enums import (
    AppointmentStatus,
    DealStatus,
    UserRole,
)
from salescrm.repositories.crm.models.user_model import User
from salescrm.repositories.crm.schemas.daily_stats_schema import DailyStatsValues
from salescrm.repositories.crm.schemas.deal_schema import DealResponse
from salescrm.repositories.crm.schemas.user_schema import (
    CloserCounters,
    UserResponse,
)
from salescrm.services.clock import day_bounds, local_today
from salescrm.services.exceptions import NotFoundError
from salescrm.services.metrics import conversion_rate, is_no_show, show_up_rate

UNKNOWN_CAMPAIGN = "Unknown"
RECENT_ACTIVITY_LIMIT = 10


class DashboardService:
    """Assemble the dashboard payloads from several repositories."""

    def __init__(
        self,
        users: CRUDUser,
        leads: CRUDLead,
        appointments: CRUDAppointment,
        deals: CRUDDeal,
        daily_stats: CRUDDailyStats,
    ) -> None:
        self.users = users
        self.leads = leads
        self.appointments = appointments
        self.deals = deals
        self.daily_stats = daily_stats

    def admin_dashboard(self, db: Session) -> AdminDashboard:
        today = local_today()
        start, end = day_bounds(today)

        ranking = [
            RankedCloser(
                **UserResponse.model_validate(closer).model_dump(),
                conversion_rate=conversion_rate(closer.total_wins, closer.total_calls),
            )
            for closer in self.users.ranking(db)
        ]

        stored = self.daily_stats.get(db, today)
        today_stats = (
            DailyStatsValues.model_validate(stored) if stored else DailyStatsValues()
        )

        won_today = self.deals.list_closed(
            db, start=start, end=end, status=DealStatus.WON
        )
        cashflow = round(sum(float(deal.total_value or 0) for deal in won_today), 2)

        window_start = start - timedelta(days=settings.SHOW_UP_WINDOW_DAYS)
        recent = self.appointments.list(db, start=window_start)
        completed = sum(1 for a in recent if a.status == AppointmentStatus.COMPLETED)
        no_shows = sum(1 for a in recent if is_no_show(a.status))

        return AdminDashboard(
            closer_ranking=ranking,
            today_stats=today_stats,
            today_cashflow=cashflow,
            show_up_rate=show_up_rate(completed, no_shows),
            today_deals=[
                TodayDeal(
                    id=deal.id,
                    value=deal.total_value,
                    closer=deal.closer_name,
                    closed_at=deal.closed_at,
                )
                for deal in won_today
            ],
        )

    def closer_details(self, db: Session, closer_id: int) -> CloserDetails:
        closer = self._get_closer(db, closer_id)
        appointments = self.appointments.list_recent_for_closer(
            db, closer.id, limit=RECENT_ACTIVITY_LIMIT
        )
        deals = self.deals.list_recent_for_closer(
            db, closer.id, limit=RECENT_ACTIVITY_LIMIT
        )
        return CloserDetails(
            **UserResponse.model_validate(closer).model_dump(),
            appointments=[AppointmentWithLead.model_validate(a) for a in appointments],
            deals=[DealResponse.model_validate(d) for d in deals],
        )

    def closer_dashboard(self, db: Session, closer_id: int) -> CloserDashboard:
        """Today's calls and upcoming follow-ups of one closer."""
        closer = self._get_closer(db, closer_id)

        start, end = day_bounds(local_today())
        todays = self.appointments.list(db, start=start, end=end, closer_id=closer.id)
        follow_ups = self.deals.list_follow_ups(db, closer.id, since=start)

        return CloserDashboard(
            todays_appointments=[
                DashboardAppointment(
                    id=appointment.id,
                    time=appointment.scheduled_at,
                    lead=DashboardLead(
                        name=appointment.lead.name,
                        phone=appointment.lead.phone,
                        campaign=(
                            appointment.lead.campaign.name
                            if appointment.lead.campaign
                            else UNKNOWN_CAMPAIGN
                        ),
                    ),
                    status=appointment.status,
                )
                for appointment in todays
            ],
            follow_ups=[
                FollowUp(
                    id=deal.id,
                    follow_up_date=deal.follow_up_date,
                    lead_name=deal.lead_name,
                    product_price=deal.product_price,
                )
                for deal in follow_ups
            ],
            stats=CloserCounters.model_validate(closer),
        )

    def lead_call_sheet(self, db: Session, lead_id: int) -> LeadCallSheet:
        lead = self.leads.get(db, lead_id)
        if lead is None:
            raise NotFoundError("Lead", lead_id)
        return LeadCallSheet(
            id=lead.id,
            name=lead.name,
            phone=lead.phone,
            email=lead.email,
            campaign=lead.campaign.name if lead.campaign else None,
            source=lead.source,
            notes=(lead.appointment.notes if lead.appointment else None) or "",
        )

    def _get_closer(self, db: Session, closer_id: int) -> User:
        closer = self.users.get(db, closer_id)
        if closer is None or closer.role != UserRole.CLOSER:
            raise NotFoundError("Closer", closer_id)
        return closer


def get_dashboard_service(
    users: CRUDUser = Depends(),
    leads: CRUDLead = Depends(),
    appointments: CRUDAppointment = Depends(),
    deals: CRUDDeal = Depends(),
    daily_stats: CRUDDailyStats = Depends(),
) -> DashboardService:
    return DashboardService(users, leads, appointments, deals, daily_stats)
