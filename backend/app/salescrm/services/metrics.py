"""Sales metrics and status rules.

Pure functions over already-fetched rows. Nothing in here touches the
database session, so the same rules back the reports, the dashboards and the
daily stats upsert.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional

from salescrm.repositories.crm.models.enums import (
    AppointmentStatus,
    DealStatus,
    PaymentType,
)

NO_REASON_LABEL = "No reason given"

NO_SHOW_STATUSES: FrozenSet[AppointmentStatus] = frozenset(
    status for status in AppointmentStatus if status.value.startswith("NO_SHOW")
)
LOST_STATUSES: FrozenSet[DealStatus] = frozenset(
    status for status in DealStatus if status.value.startswith("LOST")
)

APPOINTMENT_TRANSITIONS: Mapping[AppointmentStatus, FrozenSet[AppointmentStatus]] = {
    AppointmentStatus.SCHEDULED: frozenset(
        {AppointmentStatus.SCHEDULED, AppointmentStatus.COMPLETED} | NO_SHOW_STATUSES
    ),
}

_OPEN_DEAL_TARGETS = frozenset(
    {DealStatus.PENDING, DealStatus.WON, DealStatus.FOLLOW_UP} | LOST_STATUSES
)
DEAL_TRANSITIONS: Mapping[DealStatus, FrozenSet[DealStatus]] = {
    DealStatus.PENDING: _OPEN_DEAL_TARGETS,
    DealStatus.FOLLOW_UP: _OPEN_DEAL_TARGETS,
}


def conversion_rate(wins: int, calls: int) -> float:
    """Return ``wins / calls`` as a percentage, 0 when there were no calls."""

    if calls <= 0:
        return 0.0
    return wins / calls * 100


def show_up_rate(completed: int, no_shows: int) -> float:
    """Return the share of attended appointments as a percentage."""

    attended_or_missed = completed + no_shows
    if attended_or_missed <= 0:
        return 0.0
    return completed / attended_or_missed * 100


def deal_total_value(
    payment_type: Optional[PaymentType],
    full_amount: Optional[float] = None,
    down_payment: Optional[float] = None,
    monthly_rate: Optional[float] = None,
    number_of_rates: Optional[int] = None,
) -> float:
    """Contracted value of a deal given its payment plan."""

    if payment_type == PaymentType.FULL:
        return float(full_amount or 0)
    if payment_type == PaymentType.INSTALLMENTS:
        return float(down_payment or 0) + float(monthly_rate or 0) * (
            number_of_rates or 0
        )
    return 0.0


def payments_total(payments: Iterable[Any]) -> float:
    return float(sum(float(payment.amount) for payment in payments))


def revenue_recognized(deal: Any) -> float:
    """
    Revenue a deal contributes to the reports.

    Only WON deals count. Full payment deals are recognized at their product
    price as soon as they are won; installment deals only count the cash
    actually received so far.
    """

    if deal.status != DealStatus.WON:
        return 0.0
    if deal.payment_type == PaymentType.FULL:
        return float(deal.product_price or 0)
    return payments_total(deal.payments)


def is_no_show(status: AppointmentStatus) -> bool:
    return status in NO_SHOW_STATUSES


def is_lost(status: DealStatus) -> bool:
    return status in LOST_STATUSES


def can_transition_appointment(
    current: AppointmentStatus, target: AppointmentStatus
) -> bool:
    return target in APPOINTMENT_TRANSITIONS.get(current, frozenset())


def can_transition_deal(current: DealStatus, target: DealStatus) -> bool:
    return target in DEAL_TRANSITIONS.get(current, frozenset())


def group_no_shows_by_reason(appointments: Iterable[Any]) -> Dict[str, int]:
    """Count no-show appointments per reason, unlabeled ones under one bucket."""

    counter: Counter[str] = Counter(
        appointment.no_show_reason or NO_REASON_LABEL for appointment in appointments
    )
    return dict(counter)


def summarize_day(
    lead_count: int,
    appointments: Iterable[Any],
    won_deals: Iterable[Any],
) -> Dict[str, Any]:
    """
    Compute the daily stats figures.

    Args:
        lead_count (int): Leads created during the day.
        appointments (Iterable): Appointments scheduled during the day.
        won_deals (Iterable): WON deals closed during the day.

    Returns:
        Dict[str, Any]: Values for every ``DailyStats`` column except the date.
    """
    appointments = list(appointments)
    won_deals = list(won_deals)

    completed = sum(
        1 for a in appointments if a.status == AppointmentStatus.COMPLETED
    )
    no_shows = sum(1 for a in appointments if is_no_show(a.status))
    revenue = round(sum(float(d.total_value or 0) for d in won_deals), 2)

    return {
        "total_leads": lead_count,
        "total_calls": len(appointments),
        "total_wins": len(won_deals),
        "total_revenue": revenue,
        "show_up_rate": show_up_rate(completed, no_shows),
        "conversion_rate": conversion_rate(len(won_deals), completed),
    }
