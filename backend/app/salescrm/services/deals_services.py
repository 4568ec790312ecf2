"""
Service layer for deals and payments.

Every operation that writes more than one row (deal plus initial payment plus
closer counters) runs in a single transaction and is rolled back as a whole
when any step fails.
"""

import logging
from typing import List

from fastapi import Depends
from sqlalchemy.orm import Session

from salescrm.repositories.crm.crud.appointment_crud import CRUDAppointment
from salescrm.repositories.crm.crud.deal_crud import CRUDDeal
from salescrm.repositories.crm.crud.user_crud import CRUDUser
from salescrm.repositories.crm.models.deal_model import Deal, Payment
from salescrm.repositories.crm.models.enums import (
    DealStatus,
    PaymentType,
    UserRole,
)
from salescrm.repositories.crm.schemas.deal_schema import (
    DealCreate,
    DealFilter,
    DealUpdate,
    PaymentCreate,
)
from salescrm.services.clock import local_now
from salescrm.services.exceptions import InvalidTransitionError, NotFoundError
from salescrm.services.metrics import (
    can_transition_deal,
    deal_total_value,
    is_lost,
    payments_total,
)

logger = logging.getLogger(__name__)

FULL_PAYMENT_NOTE = "Full payment"
DOWN_PAYMENT_NOTE = "Down payment"


class DealService:
    """Provide higher-level operations for deals and their payments."""

    def __init__(
        self,
        repository: CRUDDeal,
        appointments: CRUDAppointment,
        users: CRUDUser,
    ) -> None:
        self.repository = repository
        self.appointments = appointments
        self.users = users

    def list(self, db: Session, filters: DealFilter) -> List[Deal]:
        return self.repository.list(
            db, status=filters.status, closer_id=filters.closer_id
        )

    def get(self, db: Session, deal_id: int) -> Deal:
        deal = self.repository.get(db, deal_id)
        if deal is None:
            raise NotFoundError("Deal", deal_id)
        return deal

    def create(self, db: Session, deal_in: DealCreate) -> Deal:
        """
        Register the outcome of an appointment.

        The closer defaults to the one holding the appointment. A WON deal
        closes immediately and credits the closer with one win and its total
        value. A won full payment is recorded as a payment right away; an
        installment down payment only when ``record_down_payment`` is set.

        Raises:
            NotFoundError: If the appointment or the closer does not exist.
            ValueError: If the appointment already has a deal or the user is
                not a closer.
        """
        appointment = self.appointments.get(db, deal_in.appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment", deal_in.appointment_id)
        if self.repository.get_by_appointment(db, appointment.id) is not None:
            raise ValueError("Appointment already has a deal")

        closer_id = deal_in.closer_id or appointment.closer_id
        closer = self.users.get(db, closer_id)
        if closer is None:
            raise NotFoundError("Closer", closer_id)
        if closer.role != UserRole.CLOSER:
            raise ValueError("Deals can only be assigned to closers")

        now = local_now()
        total_value = round(
            deal_total_value(
                deal_in.payment_type,
                full_amount=deal_in.full_amount,
                down_payment=deal_in.down_payment,
                monthly_rate=deal_in.monthly_rate,
                number_of_rates=deal_in.number_of_rates,
            ),
            2,
        )
        won = deal_in.status == DealStatus.WON
        deal = Deal(
            appointment_id=appointment.id,
            closer_id=closer.id,
            status=deal_in.status,
            payment_type=deal_in.payment_type,
            product_price=deal_in.product_price,
            total_value=total_value,
            full_amount=deal_in.full_amount,
            down_payment=deal_in.down_payment,
            monthly_rate=deal_in.monthly_rate,
            number_of_rates=deal_in.number_of_rates,
            lost_reason=deal_in.lost_reason if is_lost(deal_in.status) else None,
            follow_up_date=deal_in.follow_up_date,
            closed_at=now if won else None,
        )

        try:
            self.repository.create(db, deal, commit=False)
            for amount, note in self._initial_payments(deal_in):
                self.repository.add_payment(
                    db,
                    Payment(deal_id=deal.id, amount=amount, paid_at=now, note=note),
                    commit=False,
                )
            if won:
                self.users.increment_counters(db, closer, wins=1, revenue=total_value)
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(deal)
        logger.info(
            "Deal %s created with status %s (total value %.2f) by closer %s",
            deal.id,
            deal.status.value,
            total_value,
            closer.id,
        )
        return deal

    def update_status(self, db: Session, deal_id: int, deal_update: DealUpdate) -> Deal:
        """Move a deal along its pipeline; winning it credits the closer."""
        deal = self.get(db, deal_id)
        if not can_transition_deal(deal.status, deal_update.status):
            raise InvalidTransitionError("Deal", deal.status, deal_update.status)

        won = deal_update.status == DealStatus.WON
        deal.status = deal_update.status
        deal.lost_reason = (
            deal_update.lost_reason if is_lost(deal_update.status) else None
        )
        deal.follow_up_date = deal_update.follow_up_date
        deal.closed_at = local_now() if won else None

        try:
            self.repository.save(db, deal, commit=False)
            if won:
                self.users.increment_counters(
                    db, deal.closer, wins=1, revenue=float(deal.total_value or 0)
                )
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(deal)
        if won:
            logger.info("Deal %s won by closer %s", deal.id, deal.closer_id)
        return deal

    def add_payment(self, db: Session, deal_id: int, payment_in: PaymentCreate) -> Payment:
        """Record a payment. Sums above the deal's total value are allowed."""
        deal = self.get(db, deal_id)
        payment = Payment(
            deal_id=deal.id,
            amount=payment_in.amount,
            note=payment_in.note,
            paid_at=payment_in.paid_at or local_now(),
        )
        payment = self.repository.add_payment(db, payment)

        db.refresh(deal)
        paid = payments_total(deal.payments)
        if paid > float(deal.total_value or 0):
            logger.warning(
                "Payments for deal %s (%.2f) exceed its total value (%.2f)",
                deal.id,
                paid,
                float(deal.total_value or 0),
            )
        return payment

    @staticmethod
    def _initial_payments(deal_in: DealCreate) -> List[tuple]:
        payments = []
        if (
            deal_in.payment_type == PaymentType.FULL
            and deal_in.status == DealStatus.WON
            and deal_in.full_amount
        ):
            payments.append((deal_in.full_amount, FULL_PAYMENT_NOTE))
        if (
            deal_in.payment_type == PaymentType.INSTALLMENTS
            and deal_in.record_down_payment
            and deal_in.down_payment
        ):
            payments.append((deal_in.down_payment, DOWN_PAYMENT_NOTE))
        return payments


def get_deal_service(
    repository: CRUDDeal = Depends(),
    appointments: CRUDAppointment = Depends(),
    users: CRUDUser = Depends(),
) -> DealService:
    return DealService(repository, appointments, users)
