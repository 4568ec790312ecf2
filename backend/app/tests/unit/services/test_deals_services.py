import logging
from unittest.mock import patch

import pytest

from salescrm.repositories.crm.crud.appointment_crud import CRUDAppointment
from salescrm.repositories.crm.crud.deal_crud import CRUDDeal
from salescrm.repositories.crm.crud.user_crud import CRUDUser
from salescrm.repositories.crm.models import Deal, Payment
from salescrm.repositories.crm.models.enums import DealStatus, PaymentType, UserRole
from salescrm.repositories.crm.schemas.deal_schema import (
    DealCreate,
    DealUpdate,
    PaymentCreate,
)
from salescrm.services.deals_services import (
    DOWN_PAYMENT_NOTE,
    FULL_PAYMENT_NOTE,
    DealService,
)
from salescrm.services.exceptions import InvalidTransitionError, NotFoundError


@pytest.fixture()
def service() -> DealService:
    return DealService(CRUDDeal(), CRUDAppointment(), CRUDUser())


def _full_deal(appointment_id: int, **overrides) -> DealCreate:
    payload = {
        "appointment_id": appointment_id,
        "product_price": 1000,
        "payment_type": PaymentType.FULL,
    }
    payload.update(overrides)
    return DealCreate(**payload)


def _installment_deal(appointment_id: int, **overrides) -> DealCreate:
    payload = {
        "appointment_id": appointment_id,
        "product_price": 1500,
        "payment_type": PaymentType.INSTALLMENTS,
        "down_payment": 500,
        "monthly_rate": 250,
        "number_of_rates": 4,
    }
    payload.update(overrides)
    return DealCreate(**payload)


def test_won_full_deal_records_payment_and_credits_closer(
    service, db_session, make_appointment
):
    appointment = make_appointment()

    deal = service.create(db_session, _full_deal(appointment.id))

    assert deal.status == DealStatus.WON
    assert deal.closer_id == appointment.closer_id
    assert deal.total_value == 1000
    assert deal.closed_at is not None
    assert [(p.amount, p.note) for p in deal.payments] == [(1000, FULL_PAYMENT_NOTE)]

    closer = CRUDUser().get(db_session, appointment.closer_id)
    assert closer.total_wins == 1
    assert closer.total_revenue == 1000


def test_installment_deal_has_no_payment_by_default(
    service, db_session, make_appointment
):
    appointment = make_appointment()

    deal = service.create(db_session, _installment_deal(appointment.id))

    assert deal.total_value == 1500
    assert deal.payments == []


def test_installment_down_payment_recorded_on_request(
    service, db_session, make_appointment
):
    appointment = make_appointment()

    deal = service.create(
        db_session, _installment_deal(appointment.id, record_down_payment=True)
    )

    assert [(p.amount, p.note) for p in deal.payments] == [(500, DOWN_PAYMENT_NOTE)]


def test_pending_deal_is_not_closed(service, db_session, make_appointment):
    appointment = make_appointment()

    deal = service.create(
        db_session, _full_deal(appointment.id, status=DealStatus.PENDING)
    )

    assert deal.closed_at is None
    assert deal.payments == []
    closer = CRUDUser().get(db_session, appointment.closer_id)
    assert closer.total_wins == 0


def test_create_rolls_back_when_counters_fail(service, db_session, make_appointment):
    appointment = make_appointment()

    with patch.object(
        CRUDUser, "increment_counters", side_effect=RuntimeError("boom")
    ):
        with pytest.raises(RuntimeError):
            service.create(db_session, _full_deal(appointment.id))

    assert db_session.query(Deal).count() == 0
    assert db_session.query(Payment).count() == 0


def test_second_deal_for_appointment_is_rejected(
    service, db_session, make_appointment
):
    appointment = make_appointment()
    service.create(db_session, _full_deal(appointment.id))

    with pytest.raises(ValueError, match="already has a deal"):
        service.create(db_session, _full_deal(appointment.id))


def test_unknown_appointment(service, db_session):
    with pytest.raises(NotFoundError):
        service.create(db_session, _full_deal(999))


def test_follow_up_then_won_credits_closer_once(
    service, db_session, make_appointment
):
    appointment = make_appointment()
    deal = service.create(
        db_session, _installment_deal(appointment.id, status=DealStatus.FOLLOW_UP)
    )

    deal = service.update_status(db_session, deal.id, DealUpdate(status=DealStatus.WON))

    assert deal.status == DealStatus.WON
    assert deal.closed_at is not None
    closer = CRUDUser().get(db_session, appointment.closer_id)
    assert closer.total_wins == 1
    assert closer.total_revenue == 1500


def test_lost_reason_only_kept_for_lost_statuses(
    service, db_session, make_appointment
):
    appointment = make_appointment()
    deal = service.create(
        db_session, _full_deal(appointment.id, status=DealStatus.PENDING)
    )

    deal = service.update_status(
        db_session,
        deal.id,
        DealUpdate(status=DealStatus.LOST_TOO_EXPENSIVE, lost_reason="Budget"),
    )

    assert deal.lost_reason == "Budget"
    assert deal.closed_at is None


def test_won_deal_cannot_change_status(service, db_session, make_appointment):
    appointment = make_appointment()
    deal = service.create(db_session, _full_deal(appointment.id))

    with pytest.raises(InvalidTransitionError):
        service.update_status(db_session, deal.id, DealUpdate(status=DealStatus.LOST))


def test_overpayment_is_accepted_with_warning(
    service, db_session, make_appointment, caplog
):
    appointment = make_appointment()
    deal = service.create(db_session, _installment_deal(appointment.id))

    with caplog.at_level(logging.WARNING, logger="salescrm.services.deals_services"):
        service.add_payment(db_session, deal.id, PaymentCreate(amount=2000))

    assert "exceed its total value" in caplog.text
    assert db_session.query(Payment).count() == 1


def test_deal_cannot_be_credited_to_admin(
    service, db_session, make_user, make_appointment
):
    appointment = make_appointment()
    admin = make_user("Anna Admin", role=UserRole.ADMIN)

    with pytest.raises(ValueError, match="only be assigned to closers"):
        service.create(db_session, _full_deal(appointment.id, closer_id=admin.id))

    assert db_session.query(Deal).count() == 0
    assert CRUDUser().get(db_session, admin.id).total_wins == 0
