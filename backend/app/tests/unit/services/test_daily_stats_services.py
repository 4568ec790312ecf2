from datetime import timedelta

import pytest

from salescrm.repositories.crm.crud.appointment_crud import CRUDAppointment
from salescrm.repositories.crm.crud.daily_stats_crud import CRUDDailyStats
from salescrm.repositories.crm.crud.deal_crud import CRUDDeal
from salescrm.repositories.crm.crud.lead_crud import CRUDLead
from salescrm.repositories.crm.crud.user_crud import CRUDUser
from salescrm.repositories.crm.models import DailyStats
from salescrm.repositories.crm.models.enums import AppointmentStatus, PaymentType
from salescrm.repositories.crm.schemas.deal_schema import DealCreate
from salescrm.services.clock import local_now, local_today
from salescrm.services.daily_stats_services import DailyStatsService
from salescrm.services.deals_services import DealService


@pytest.fixture()
def service() -> DailyStatsService:
    return DailyStatsService(CRUDDailyStats(), CRUDLead(), CRUDAppointment(), CRUDDeal())


STAT_FIELDS = (
    "total_leads",
    "total_calls",
    "total_wins",
    "total_revenue",
    "show_up_rate",
    "conversion_rate",
)


def _snapshot(stats: DailyStats) -> dict:
    return {field: getattr(stats, field) for field in STAT_FIELDS}


def test_empty_day_stores_zeros(service, db_session):
    stats = service.refresh(db_session)

    assert stats.date == local_today()
    assert _snapshot(stats) == dict.fromkeys(STAT_FIELDS, 0)


def test_refresh_counts_todays_activity(service, db_session, make_appointment):
    completed = make_appointment(status=AppointmentStatus.COMPLETED)
    make_appointment(
        status=AppointmentStatus.NO_SHOW_GHOSTING, no_show_reason="Ghosting"
    )
    make_appointment(scheduled_at=local_now() - timedelta(days=3))
    DealService(CRUDDeal(), CRUDAppointment(), CRUDUser()).create(
        db_session,
        DealCreate(
            appointment_id=completed.id,
            product_price=1200,
            payment_type=PaymentType.FULL,
        ),
    )

    stats = service.refresh(db_session)

    assert stats.total_leads == 3
    assert stats.total_calls == 2
    assert stats.total_wins == 1
    assert stats.total_revenue == 1200
    assert stats.show_up_rate == 50.0
    assert stats.conversion_rate == 100.0


def test_refresh_is_idempotent(service, db_session, make_appointment):
    make_appointment(status=AppointmentStatus.COMPLETED)

    first = _snapshot(service.refresh(db_session))
    second = _snapshot(service.refresh(db_session))

    assert first == second
    assert db_session.query(DailyStats).count() == 1


def test_refresh_past_day(service, db_session):
    yesterday = local_today() - timedelta(days=1)

    stats = service.refresh(db_session, yesterday)

    assert stats.date == yesterday
    assert [row.date for row in service.list(db_session)] == [yesterday]
