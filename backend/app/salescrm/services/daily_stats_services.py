"""Daily stats aggregation: one idempotent row per local calendar day."""

import logging
from datetime import date
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from salescrm.repositories.crm.crud.appointment_crud import CRUDAppointment
from salescrm.repositories.crm.crud.daily_stats_crud import CRUDDailyStats
from salescrm.repositories.crm.crud.deal_crud import CRUDDeal
from salescrm.repositories.crm.crud.lead_crud import CRUDLead
from salescrm.repositories.crm.models.daily_stats_model import DailyStats
from salescrm.repositories.crm.models.enums import DealStatus
from salescrm.services.clock import day_bounds, local_today
from salescrm.services.metrics import summarize_day

logger = logging.getLogger(__name__)


class DailyStatsService:
    """Compute, store and list the per-day aggregates."""

    def __init__(
        self,
        repository: CRUDDailyStats,
        leads: CRUDLead,
        appointments: CRUDAppointment,
        deals: CRUDDeal,
    ) -> None:
        self.repository = repository
        self.leads = leads
        self.appointments = appointments
        self.deals = deals

    def get(self, db: Session, day: date) -> Optional[DailyStats]:
        return self.repository.get(db, day)

    def list(
        self,
        db: Session,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[DailyStats]:
        return self.repository.list(db, start, end)

    def refresh(self, db: Session, day: Optional[date] = None) -> DailyStats:
        """
        Recompute the figures of ``day`` (today by default) and upsert them.

        Only rows created, scheduled or closed inside the day are counted, so
        running it twice over unchanged data stores the same values.
        """
        day = day or local_today()
        start, end = day_bounds(day)

        values = summarize_day(
            lead_count=self.leads.count_created_between(db, start, end),
            appointments=self.appointments.list(db, start=start, end=end),
            won_deals=self.deals.list_closed(
                db, start=start, end=end, status=DealStatus.WON
            ),
        )
        stats = self.repository.upsert(db, day, values)
        logger.info(
            "Daily stats for %s: %d leads, %d calls, %d wins, %.2f revenue",
            day.isoformat(),
            stats.total_leads,
            stats.total_calls,
            stats.total_wins,
            stats.total_revenue,
        )
        return stats


def get_daily_stats_service(
    repository: CRUDDailyStats = Depends(),
    leads: CRUDLead = Depends(),
    appointments: CRUDAppointment = Depends(),
    deals: CRUDDeal = Depends(),
) -> DailyStatsService:
    return DailyStatsService(repository, leads, appointments, deals)
